"""Accessors for the metadata of a ribo file."""

from __future__ import annotations

from typing import Any

import pandas as pd

from ..ribo import Ribo
from .names import change_reference_names
from .validation import check_alias


def get_info(ribo: Ribo) -> dict[str, Any]:
    """Root attributes of the file plus its experiment table.

    Examples
    --------
    >>> info = get_info(ribo)
    >>> info["attributes"]["length_min"]
    28
    >>> info["experiments"]
      experiment  total_reads  coverage  rnaseq  metadata
    0     Hela_1       336715      True    True      True
    """
    return {
        "format_version": ribo.attrs["format_version"],
        "reference": ribo.attrs["reference"],
        "attributes": dict(ribo.attrs),
        "experiments": ribo.info(),
    }


def get_experiments(ribo: Ribo) -> list[str]:
    return ribo.experiments


def get_reference_names(ribo: Ribo, alias: bool = False) -> list[str]:
    """Transcript names of the file, in file order, optionally aliased."""
    check_alias(ribo, alias)
    return change_reference_names(ribo, alias)


def get_reference_lengths(ribo: Ribo, alias: bool = False) -> pd.DataFrame:
    """Table of transcripts (``transcript``) and their lengths (``length``)."""
    return pd.DataFrame(
        {
            "transcript": get_reference_names(ribo, alias),
            "length": ribo.reference_lengths,
        }
    )
