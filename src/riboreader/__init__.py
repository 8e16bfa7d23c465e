"""
Read ribosome profiling data stored in ribo files.

A ribo file is an HDF5 file holding, for one reference transcriptome and
any number of experiments:

* region counts: reads per transcript, read length and region (``UTR5``,
  ``UTR5J``, ``CDS``, ``UTR3J``, ``UTR3``)
* metagene coverage around start and stop sites, per transcript and read
  length
* optionally, RNA-Seq abundance per transcript and region, and
  per-nucleotide coverage

Files are opened with :class:`.Ribo`, which caches the file metadata. The
dataset accessors (:func:`.get_region_counts`, :func:`.get_length_distribution`,
:func:`.get_metagene`, :func:`.get_rnaseq`) validate their parameters against
that metadata, read only the requested slices and return
:class:`pandas.DataFrame` tables in tidy (long) or wide format.
"""

from __future__ import annotations

from ._version import version as __version__
from .datasets import (
    get_experiments,
    get_info,
    get_length_distribution,
    get_metagene,
    get_reference_lengths,
    get_reference_names,
    get_region_counts,
    get_rnaseq,
    to_tidy,
    to_wide,
)
from .ribo import (
    REGIONS,
    CapabilityWarning,
    InternalConsistencyError,
    NoValidInputError,
    Ribo,
    RiboError,
    StoreIOError,
    ValidationError,
    apris_human_alias,
    show,
)

__all__ = [
    "REGIONS",
    "CapabilityWarning",
    "InternalConsistencyError",
    "NoValidInputError",
    "Ribo",
    "RiboError",
    "StoreIOError",
    "ValidationError",
    "__version__",
    "apris_human_alias",
    "get_experiments",
    "get_info",
    "get_length_distribution",
    "get_metagene",
    "get_reference_lengths",
    "get_reference_names",
    "get_region_counts",
    "get_rnaseq",
    "show",
    "to_tidy",
    "to_wide",
]
