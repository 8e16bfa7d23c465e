"""Dataset accessors returning :class:`pandas.DataFrame` tables.

Every accessor validates its parameters against the metadata cached by
:class:`.Ribo` before reading anything, reads only the rows and columns it
needs, and returns the result either in the tidy (long) format or with one
column per region, read length or metagene position.
"""

from __future__ import annotations

from .info import get_experiments, get_info, get_reference_lengths, get_reference_names
from .metagene import get_metagene
from .region_counts import get_length_distribution, get_region_counts
from .reshape import to_tidy, to_wide
from .rnaseq import get_rnaseq

__all__ = [
    "get_experiments",
    "get_info",
    "get_length_distribution",
    "get_metagene",
    "get_reference_lengths",
    "get_reference_names",
    "get_region_counts",
    "get_rnaseq",
    "to_tidy",
    "to_wide",
]
