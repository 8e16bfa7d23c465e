"""Routines for opening and reading ribo files.

A ribo file is an HDF5 file holding the output of a ribosome profiling
pipeline for one reference transcriptome and any number of experiments. IO
is done via the class :class:`.store.Ribo`. Ribo files can also be browsed
easily in python like any `HDF5 <https://www.hdfgroup.org>`_ file using
`h5py <https://www.h5py.org>`_.
"""

from __future__ import annotations

from .alias import AliasMapping, apris_human_alias
from .datatype import METAGENE_SITES, REGIONS
from .exceptions import (
    CapabilityWarning,
    InternalConsistencyError,
    NoValidInputError,
    RiboError,
    StoreIOError,
    ValidationError,
)
from .settings import DEFAULT_READ_SETTINGS, default_read_settings
from .store import ExperimentInfo, Ribo
from .tools import show

__all__ = [
    "DEFAULT_READ_SETTINGS",
    "METAGENE_SITES",
    "REGIONS",
    "AliasMapping",
    "CapabilityWarning",
    "ExperimentInfo",
    "InternalConsistencyError",
    "NoValidInputError",
    "Ribo",
    "RiboError",
    "StoreIOError",
    "ValidationError",
    "apris_human_alias",
    "default_read_settings",
    "show",
]
