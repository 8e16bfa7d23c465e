from __future__ import annotations

import logging
from collections.abc import Sequence

import pandas as pd

from ..ribo import Ribo, datatype
from . import reshape
from .names import change_reference_names
from .validation import check_alias, check_regions, check_rnaseq

log = logging.getLogger(__name__)


def get_rnaseq(
    ribo: Ribo,
    experiments: str | Sequence[str] | None = None,
    regions: str | Sequence[str] | None = None,
    alias: bool = False,
    tidy: bool = True,
    compact: bool = True,
) -> pd.DataFrame:
    """RNA-Seq abundance of each transcript region in each experiment.

    RNA-Seq data is optional in a ribo file. Requested experiments without
    it are dropped with a :class:`.CapabilityWarning`.

    Parameters
    ----------
    ribo
        the ribo file.
    experiments
        experiment names. Defaults to all experiments in the file.
    regions
        regions to report, among ``UTR5``, ``UTR5J``, ``CDS``, ``UTR3J`` and
        ``UTR3``. Defaults to all of them.
    alias
        report transcripts by their alias instead of their reference name.
    tidy
        return one row per experiment, transcript and region (columns
        ``experiment``, ``transcript``, ``region``, ``count``). Otherwise
        return one column per region.
    compact
        store the label columns as categoricals.

    Returns
    -------
    table
        rows are grouped by experiment (in request order), then ordered by
        transcript (in file order).

    Raises
    ------
    ValidationError
        for unknown experiments or regions, or if `alias` is requested but
        the file has no aliases.
    NoValidInputError
        if no requested experiment has RNA-Seq data.
    StoreIOError
        if reading the data fails.

    Examples
    --------
    >>> from riboreader import Ribo, get_rnaseq
    >>> ribo = Ribo("sample.ribo")
    >>> get_rnaseq(ribo, experiments=["Hela_1", "WT_1"], regions=["UTR5", "CDS", "UTR3"])
       experiment  transcript region  count
    0      Hela_1  GAPDH-201   UTR5     ...
    """
    regions = check_regions(regions)
    check_alias(ribo, alias)
    experiments = check_rnaseq(ribo, experiments, stacklevel=3)

    names = change_reference_names(ribo, alias)
    cols = datatype.region_columns(regions)
    rows = slice(0, ribo.n_references)

    blocks = [
        ribo.read_block(datatype.rnaseq_path(experiment), rows, cols)
        for experiment in experiments
    ]

    labels = reshape.label_columns(experiments, len(names), {"transcript": names})
    wide = reshape.assemble(blocks, labels, regions)

    return reshape.finalize(wide, tidy, compact, var_name="region")
