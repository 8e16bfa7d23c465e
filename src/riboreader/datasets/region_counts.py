from __future__ import annotations

import logging
from collections.abc import Sequence

import pandas as pd

from ..ribo import Ribo, datatype
from ..ribo.exceptions import ValidationError
from . import reshape
from .names import change_reference_names
from .validation import check_alias, check_experiments, check_lengths, check_regions

log = logging.getLogger(__name__)


def length_rows(ribo: Ribo, range_lower: int, range_upper: int) -> slice:
    """Rows of a length-major dataset holding lengths in ``[lower, upper]``."""
    n = ribo.n_references
    return slice(
        (range_lower - ribo.length_min) * n, (range_upper - ribo.length_min + 1) * n
    )


def check_total_reads(ribo: Ribo, experiments: Sequence[str]) -> None:
    """Normalization needs the ``total_reads`` attribute of each experiment."""
    missing = [
        e
        for e in experiments
        if ribo.experiment_info[e].total_reads is None
        or ribo.experiment_info[e].total_reads <= 0
    ]
    if missing:
        msg = f"cannot normalize, experiments {missing} have no positive total reads"
        raise ValidationError(msg, ribo.path)


def get_region_counts(
    ribo: Ribo,
    experiments: str | Sequence[str] | None = None,
    regions: str | Sequence[str] | None = None,
    range_lower: int | None = None,
    range_upper: int | None = None,
    sum_lengths: bool = True,
    sum_references: bool = True,
    alias: bool = False,
    tidy: bool = True,
    normalize: bool = False,
    compact: bool = True,
) -> pd.DataFrame:
    """Read counts of transcript regions.

    Counts can be summed over the read lengths in ``[range_lower,
    range_upper]`` and/or over all transcripts.

    Parameters
    ----------
    ribo
        the ribo file.
    experiments
        experiment names. Defaults to all experiments in the file.
    regions
        regions to report. Defaults to all of them.
    range_lower, range_upper
        read length range (inclusive). Defaults to all lengths in the file.
    sum_lengths
        sum counts over read lengths. Otherwise the table has a ``length``
        column.
    sum_references
        sum counts over transcripts. Otherwise the table has a
        ``transcript`` column.
    alias
        report transcripts by their alias.
    tidy
        return one row per region with ``region`` and ``count`` columns.
        Otherwise return one column per region.
    normalize
        report counts per million reads of each experiment.
    compact
        store the label columns as categoricals.
    """
    regions = check_regions(regions)
    check_alias(ribo, alias)
    range_lower, range_upper = check_lengths(ribo, range_lower, range_upper)
    experiments = check_experiments(ribo, experiments)
    if normalize:
        check_total_reads(ribo, experiments)

    names = change_reference_names(ribo, alias)
    lengths = [x for x in ribo.lengths if range_lower <= x <= range_upper]
    rows = length_rows(ribo, range_lower, range_upper)
    cols = datatype.region_columns(regions)

    blocks = []
    for experiment in experiments:
        block = ribo.read_block(datatype.region_counts_path(experiment), rows, cols)
        block = reshape.fold(
            block, len(lengths), len(names), sum_lengths, sum_references
        )
        if normalize:
            total_reads = ribo.experiment_info[experiment].total_reads
            block = block * (1e6 / total_reads)
        blocks.append(block)

    block_size, inner = reshape.fold_labels(names, lengths, sum_lengths, sum_references)
    labels = reshape.label_columns(experiments, block_size, inner)
    wide = reshape.assemble(blocks, labels, regions)

    return reshape.finalize(wide, tidy, compact, var_name="region")


def get_length_distribution(
    ribo: Ribo,
    region: str | Sequence[str] = "CDS",
    experiments: str | Sequence[str] | None = None,
    range_lower: int | None = None,
    range_upper: int | None = None,
    tidy: bool = True,
    normalize: bool = False,
    compact: bool = True,
) -> pd.DataFrame:
    """Read counts of a region per read length, summed over transcripts.

    Returns a table with columns ``experiment``, ``length`` and ``count`` if
    `tidy`, otherwise one row per experiment and one column per read length.
    """
    regions = check_regions(region)
    if len(regions) != 1:
        msg = f"expected a single region, got {regions}"
        raise ValidationError(msg)
    (region,) = regions

    table = get_region_counts(
        ribo,
        experiments=experiments,
        regions=region,
        range_lower=range_lower,
        range_upper=range_upper,
        sum_lengths=False,
        sum_references=True,
        tidy=False,
        normalize=normalize,
        compact=False,
    )

    if tidy:
        table = table.rename(columns={region: "count"})
        table = table[["experiment", "length", "count"]].copy()
    else:
        experiments = pd.unique(table["experiment"])
        lengths = [int(x) for x in pd.unique(table["length"])]
        counts = table[region].to_numpy().reshape(len(experiments), len(lengths))
        table = pd.DataFrame(counts, columns=lengths)
        table.insert(0, "experiment", experiments)

    return reshape.compact(table) if compact else table
