"""Assemble per-experiment blocks into tables and switch between wide and
tidy (long) layouts.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np
import pandas as pd

log = logging.getLogger(__name__)

# string label columns turned into categoricals by compact()
CATEGORICAL_COLUMNS = ("experiment", "transcript", "region")


def label_columns(
    experiments: Sequence[str], block_size: int, inner: dict[str, np.ndarray] | None = None
) -> dict[str, np.ndarray]:
    """Build the label columns of a table made of one block per experiment.

    The experiment name is repeated over its block, and each column of
    `inner` (of length `block_size`) is tiled once per experiment.
    """
    labels = {"experiment": np.repeat(np.asarray(experiments, dtype=object), block_size)}
    for key, values in (inner or {}).items():
        values = np.asarray(values, dtype=object if key == "transcript" else None)
        if len(values) != block_size:
            msg = f"'{key}' labels have length {len(values)}, expected {block_size}"
            raise ValueError(msg)
        labels[key] = np.tile(values, len(experiments))
    return labels


def assemble(
    blocks: Sequence[np.ndarray],
    labels: dict[str, np.ndarray],
    columns: Sequence[Any],
) -> pd.DataFrame:
    """Stack per-experiment blocks (in order) into a wide table.

    Parameters
    ----------
    blocks
        one two-dimensional array per experiment, all with ``len(columns)``
        columns.
    labels
        label columns, see :func:`label_columns`. They come first in the
        table.
    columns
        names of the value columns.
    """
    data = np.concatenate(blocks, axis=0)
    n_rows = data.shape[0]
    for key, values in labels.items():
        if len(values) != n_rows:
            msg = f"label column '{key}' has {len(values)} rows, table has {n_rows}"
            raise ValueError(msg)

    table = pd.DataFrame(labels)
    values = pd.DataFrame(data, columns=list(columns))
    return pd.concat([table, values], axis=1)


def to_tidy(wide: pd.DataFrame, var_name: str, value_name: str = "count") -> pd.DataFrame:
    """Pivot a wide table into the long format.

    All non-label columns are stacked; the rows of the first value column
    come first (in original row order), followed by those of the second and
    so on.
    """
    id_vars = [c for c in wide.columns if _is_label(c)]
    value_vars = [c for c in wide.columns if not _is_label(c)]
    return pd.melt(
        wide,
        id_vars=id_vars,
        value_vars=value_vars,
        var_name=var_name,
        value_name=value_name,
    )


def to_wide(tidy: pd.DataFrame, var_name: str, value_name: str = "count") -> pd.DataFrame:
    """Pivot a tidy table back to the wide format.

    Rows are sorted by the remaining label columns; value columns keep the
    order in which `var_name` values first appear.
    """
    tidy = tidy.astype(
        {c: object for c in tidy.columns if isinstance(tidy[c].dtype, pd.CategoricalDtype)}
    )
    index = [c for c in tidy.columns if c not in (var_name, value_name)]
    order = list(pd.unique(tidy[var_name]))
    wide = tidy.pivot(index=index, columns=var_name, values=value_name)
    wide = wide[order].reset_index()
    wide.columns.name = None
    return wide


def compact(table: pd.DataFrame) -> pd.DataFrame:
    """Store repetitive string label columns as :class:`pandas.Categorical`.

    Categories keep the order of first appearance.
    """
    for col in CATEGORICAL_COLUMNS:
        if col in table.columns:
            table[col] = pd.Categorical(table[col], categories=pd.unique(table[col]))
    return table


def finalize(
    wide: pd.DataFrame,
    tidy: bool,
    compact_table: bool,
    var_name: str,
    value_name: str = "count",
) -> pd.DataFrame:
    """Apply the tidy and compact options of the accessors to a wide table."""
    table = to_tidy(wide, var_name, value_name) if tidy else wide
    if compact_table:
        table = compact(table)
    log.debug(f"returning table with {len(table)} rows and columns {list(table.columns)}")
    return table


def _is_label(col: Any) -> bool:
    return col in ("experiment", "transcript", "length")


def fold(
    block: np.ndarray,
    n_lengths: int,
    n_references: int,
    sum_lengths: bool,
    sum_references: bool,
) -> np.ndarray:
    """Sum a length-major block over read lengths and/or transcripts.

    `block` has ``n_lengths * n_references`` rows, row ``l * n_references +
    t`` holding length ``l`` of transcript ``t``. When nothing is summed the
    rows are reordered transcript-major, lengths varying fastest.
    """
    cube = block.reshape(n_lengths, n_references, block.shape[1])
    if sum_lengths and sum_references:
        return cube.sum(axis=(0, 1)).reshape(1, -1)
    if sum_lengths:
        return cube.sum(axis=0)
    if sum_references:
        return cube.sum(axis=1)
    return cube.transpose(1, 0, 2).reshape(n_references * n_lengths, -1)


def fold_labels(
    names: Sequence[str],
    lengths: Sequence[int],
    sum_lengths: bool,
    sum_references: bool,
) -> tuple[int, dict[str, np.ndarray]]:
    """Block size and inner label columns matching :func:`fold`."""
    names = np.asarray(names, dtype=object)
    lengths = np.asarray(lengths, dtype=int)
    if sum_lengths and sum_references:
        return 1, {}
    if sum_lengths:
        return len(names), {"transcript": names}
    if sum_references:
        return len(lengths), {"length": lengths}
    return len(names) * len(lengths), {
        "transcript": np.repeat(names, len(lengths)),
        "length": np.tile(lengths, len(names)),
    }
