"""Implements utilities for reading ribo files."""

from __future__ import annotations

import glob
import logging
import os
import string
from collections.abc import Sequence
from pathlib import Path

import h5py
import numpy as np

from .exceptions import StoreIOError

log = logging.getLogger(__name__)


def read_block(
    h5f: h5py.File,
    name: str,
    rows: slice,
    cols: Sequence[int] | None = None,
) -> np.ndarray:
    """Read a two-dimensional block from a dataset with a single HDF5 read.

    Only the rows in `rows` and the columns in `cols` are requested from
    disk. HDF5 selections must be increasing, so the columns are read in
    sorted, de-duplicated order and rearranged afterwards.

    Parameters
    ----------
    h5f
        open file.
    name
        path of the dataset in the file.
    rows
        contiguous row range to read.
    cols
        column indices, in the order they should appear in the output. If
        ``None``, read all columns.

    Returns
    -------
    block
        array of shape ``(n_rows, len(cols))``.
    """
    try:
        dset = h5f[name]
    except KeyError as e:
        msg = "not found"
        raise StoreIOError(msg, h5f, name) from e

    if not isinstance(dset, h5py.Dataset) or dset.ndim != 2:
        msg = "expected a two-dimensional dataset"
        raise StoreIOError(msg, h5f, name)

    start, stop, step = rows.indices(dset.shape[0])
    if step != 1 or (rows.stop is not None and rows.stop > dset.shape[0]):
        msg = f"cannot read rows {rows.start}:{rows.stop} from {dset.shape[0]} rows"
        raise StoreIOError(msg, h5f, name)

    log.debug(f"reading rows {start}:{stop} of {name}")

    if cols is None:
        wanted, inverse = slice(None), slice(None)
    else:
        cols = np.asarray(cols, dtype=int)
        if cols.size == 0 or cols.min() < 0 or cols.max() >= dset.shape[1]:
            msg = f"invalid column selection {cols.tolist()} for {dset.shape[1]} columns"
            raise StoreIOError(msg, h5f, name)
        wanted, inverse = np.unique(cols, return_inverse=True)
        wanted, inverse = wanted.tolist(), inverse.reshape(-1)

    try:
        block = dset[start:stop, wanted]
    except (OSError, TypeError) as e:
        raise StoreIOError(str(e), h5f, name) from e

    return block[:, inverse]


def expand_vars(expr: str, substitute: dict[str, str] | None = None) -> str:
    """Expand (environment) variables.

    Note
    ----
    Malformed variable names and references to non-existing variables are left
    unchanged.

    Parameters
    ----------
    expr
        string expression, which may include (environment) variables prefixed by
        ``$``.
    substitute
        use this dictionary to substitute variables. Takes precedence over
        environment variables.
    """
    if substitute is None:
        substitute = {}

    return os.path.expandvars(string.Template(expr).safe_substitute(substitute))


def expand_path(path: str | Path, substitute: dict[str, str] | None = None) -> str:
    """Expand (environment) variables, ``~`` and wildcards into a unique path.

    Raises
    ------
    FileNotFoundError
        if no file or more than one file matches `path`.
    """
    _path = expand_vars(str(path), substitute)
    paths = sorted(glob.glob(os.path.expanduser(_path)))

    if len(paths) == 0:
        msg = f"could not find path matching {path}"
        raise FileNotFoundError(msg)
    if len(paths) > 1:
        msg = f"found multiple paths matching {path}"
        raise FileNotFoundError(msg)

    return paths[0]


def decode_strings(values: np.ndarray) -> list[str]:
    """Convert an HDF5 string dataset (bytes or str) into Python strings."""
    return [v.decode() if isinstance(v, bytes) else str(v) for v in values]
