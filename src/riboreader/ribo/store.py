"""
This module implements the handle used to read ribosome profiling data from
ribo (HDF5) files.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import h5py
import numpy as np
import pandas as pd

from . import datatype, settings, utils
from .alias import AliasMapping
from .exceptions import StoreIOError

log = logging.getLogger(__name__)

# root attributes exposed through Ribo.attrs
ROOT_ATTRIBUTES = (
    "format_version",
    "ribopy_version",
    "time",
    "reference",
    "length_min",
    "length_max",
    "left_span",
    "right_span",
    "metagene_radius",
)


def _as_python(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.decode()
    if isinstance(value, np.generic):
        return value.item()
    return value


@dataclass(frozen=True)
class ExperimentInfo:
    """Capabilities of one experiment, read once when the file is opened."""

    name: str
    total_reads: int | None
    coverage: bool
    rnaseq: bool
    metadata: bool


class Ribo:
    """
    Read-only handle to a ribo file. The file is opened on construction and
    the top-level metadata (experiments, their capabilities, reference names
    and lengths, aliases) is cached; datasets are read on request only.

    Examples
    --------
    >>> from riboreader import Ribo, get_rnaseq
    >>> with Ribo("sample.ribo") as ribo:
    ...     ribo.experiments
    ...     df = get_rnaseq(ribo, experiments=["Hela_1"], regions=["CDS"])
    ['Hela_1', 'Hela_2', 'WT_1']
    """

    def __init__(
        self,
        path: str | Path,
        alias: Callable[[str], str] | Mapping[str, str] | None = None,
        **file_kwargs,
    ) -> None:
        """
        Parameters
        ----------
        path
            ribo file name. Environment variables and ``~`` are expanded.
        alias
            function or mapping that renames reference names to aliases.
            Enables ``alias=True`` in the dataset accessors.
        file_kwargs
            keyword arguments for :class:`h5py.File`, taking precedence over
            :data:`.settings.DEFAULT_READ_SETTINGS`.
        """
        kwargs = dict(settings.DEFAULT_READ_SETTINGS)
        kwargs.update(file_kwargs)

        try:
            self.path = utils.expand_path(path)
            log.debug(f"opening ribo file {self.path}")
            self.h5file = h5py.File(self.path, "r", **kwargs)
        except OSError as e:
            raise StoreIOError(str(e), str(path)) from e

        try:
            self._load_metadata()
            self.alias = (
                AliasMapping(self.reference_names, alias) if alias is not None else None
            )
        except Exception:
            self.h5file.close()
            raise

    def _load_metadata(self) -> None:
        h5f = self.h5file

        self.attrs = {
            key: _as_python(h5f.attrs[key]) if key in h5f.attrs else None
            for key in ROOT_ATTRIBUTES
        }
        for key in ("length_min", "length_max"):
            if self.attrs[key] is None:
                msg = f"missing root attribute '{key}'"
                raise StoreIOError(msg, h5f)
        if self.attrs["length_min"] > self.attrs["length_max"]:
            msg = "'length_min' is larger than 'length_max'"
            raise StoreIOError(msg, h5f)

        try:
            self.reference_names = utils.decode_strings(h5f[datatype.REFERENCE_NAMES][()])
            self.reference_lengths = [
                int(x) for x in h5f[datatype.REFERENCE_LENGTHS][()]
            ]
        except KeyError as e:
            msg = "missing reference tables"
            raise StoreIOError(msg, h5f) from e

        if len(self.reference_names) != len(self.reference_lengths):
            msg = (
                f"{len(self.reference_names)} reference names but "
                f"{len(self.reference_lengths)} reference lengths"
            )
            raise StoreIOError(msg, h5f)

        self.experiment_info = OrderedDict()
        experiments = h5f.get(datatype.EXPERIMENTS_GROUP)
        if experiments is None:
            log.warning(f"{self.path} does not contain any experiment")
            return

        for name, group in experiments.items():
            total_reads = group.attrs.get("total_reads")
            flags = {
                flag: member in group for flag, member in datatype.CAPABILITIES.items()
            }
            self.experiment_info[name] = ExperimentInfo(
                name=name,
                total_reads=None if total_reads is None else int(total_reads),
                metadata="metadata" in group.attrs,
                **flags,
            )

        log.debug(
            f"found {len(self.experiment_info)} experiments and "
            f"{len(self.reference_names)} transcripts in {self.path}"
        )

    @property
    def experiments(self) -> list[str]:
        """Names of the experiments in the file, in file order."""
        return list(self.experiment_info)

    @property
    def length_min(self) -> int:
        return self.attrs["length_min"]

    @property
    def length_max(self) -> int:
        return self.attrs["length_max"]

    @property
    def lengths(self) -> list[int]:
        """Read lengths stored in the file."""
        return list(range(self.length_min, self.length_max + 1))

    @property
    def metagene_radius(self) -> int | None:
        return self.attrs["metagene_radius"]

    @property
    def n_references(self) -> int:
        return len(self.reference_names)

    def has(self, experiment: str, capability: str) -> bool:
        """Whether `experiment` carries the dataset named by `capability`."""
        return getattr(self.experiment_info[experiment], capability)

    def metadata(self, experiment: str | None = None) -> str | None:
        """Return the metadata string of the file or of an experiment."""
        if experiment is None:
            node = self.h5file
        else:
            node = self.h5file[datatype.experiment_path(experiment)]
        value = node.attrs.get("metadata")
        return None if value is None else _as_python(value)

    def read_block(
        self, name: str, rows: slice, cols: Sequence[int] | None = None
    ) -> np.ndarray:
        """Read a block of the dataset `name`.

        See Also
        --------
        .utils.read_block
        """
        return utils.read_block(self.h5file, name, rows, cols)

    def info(self) -> pd.DataFrame:
        """Table of experiments with their total reads and capabilities."""
        return pd.DataFrame(
            [
                {
                    "experiment": e.name,
                    "total_reads": e.total_reads,
                    "coverage": e.coverage,
                    "rnaseq": e.rnaseq,
                    "metadata": e.metadata,
                }
                for e in self.experiment_info.values()
            ],
            columns=["experiment", "total_reads", "coverage", "rnaseq", "metadata"],
        )

    def close(self) -> None:
        """Release the underlying HDF5 file."""
        if self.h5file.id.valid:
            log.debug(f"closing ribo file {self.path}")
            self.h5file.close()

    def __enter__(self) -> Ribo:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}('{self.path}', "
            f"experiments={len(self.experiment_info)}, "
            f"references={self.n_references})"
        )
