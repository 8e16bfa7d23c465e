from __future__ import annotations

import logging
from collections.abc import Sequence

import pandas as pd

from ..ribo import Ribo, datatype
from ..ribo.exceptions import StoreIOError
from . import reshape
from .names import change_reference_names
from .region_counts import length_rows
from .validation import check_alias, check_experiments, check_lengths, check_site

log = logging.getLogger(__name__)


def get_metagene(
    ribo: Ribo,
    site: str = "start",
    experiments: str | Sequence[str] | None = None,
    range_lower: int | None = None,
    range_upper: int | None = None,
    sum_lengths: bool = True,
    sum_references: bool = True,
    alias: bool = False,
    tidy: bool = False,
    compact: bool = True,
) -> pd.DataFrame:
    """Metagene coverage around the start or stop site.

    The wide table has one column per position relative to the site, from
    ``-metagene_radius`` to ``+metagene_radius``. The tidy table has
    ``position`` and ``count`` columns instead.

    Parameters
    ----------
    ribo
        the ribo file.
    site
        ``start`` or ``stop``.
    experiments
        experiment names. Defaults to all experiments in the file.
    range_lower, range_upper
        read length range (inclusive). Defaults to all lengths in the file.
    sum_lengths
        sum coverage over read lengths, otherwise add a ``length`` column.
    sum_references
        sum coverage over transcripts, otherwise add a ``transcript`` column.
    alias
        report transcripts by their alias.
    tidy
        return the long format.
    compact
        store the label columns as categoricals.
    """
    site = check_site(site)
    check_alias(ribo, alias)
    range_lower, range_upper = check_lengths(ribo, range_lower, range_upper)
    experiments = check_experiments(ribo, experiments)

    radius = ribo.metagene_radius
    if radius is None:
        msg = "missing root attribute 'metagene_radius'"
        raise StoreIOError(msg, ribo.path)

    names = change_reference_names(ribo, alias)
    lengths = [x for x in ribo.lengths if range_lower <= x <= range_upper]
    rows = length_rows(ribo, range_lower, range_upper)
    positions = list(range(-radius, radius + 1))

    blocks = []
    for experiment in experiments:
        block = ribo.read_block(datatype.metagene_path(experiment, site), rows)
        if block.shape[1] != len(positions):
            msg = f"expected {len(positions)} positions, found {block.shape[1]}"
            raise StoreIOError(msg, ribo.path, datatype.metagene_path(experiment, site))
        blocks.append(
            reshape.fold(block, len(lengths), len(names), sum_lengths, sum_references)
        )

    block_size, inner = reshape.fold_labels(names, lengths, sum_lengths, sum_references)
    labels = reshape.label_columns(experiments, block_size, inner)
    wide = reshape.assemble(blocks, labels, positions)

    return reshape.finalize(wide, tidy, compact, var_name="position")
