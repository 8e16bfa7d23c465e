from __future__ import annotations

from typing import Any

from ..utils import getenv_bool


def default_read_settings() -> dict[str, Any]:
    """Returns the keyword arguments passed to :class:`h5py.File` when opening
    ribo files.

    File locking is disabled unless the ``RIBO_LOCKING`` environment variable
    is set to a true value.

    Examples
    --------
    >>> from riboreader import ribo
    >>> ribo.DEFAULT_READ_SETTINGS["rdcc_nbytes"] = 64 * 1024**2
    >>> r = ribo.Ribo("sample.ribo")  # opened with a larger chunk cache
    >>> ribo.DEFAULT_READ_SETTINGS.clear()
    >>> ribo.DEFAULT_READ_SETTINGS.update(ribo.default_read_settings())
    """

    return {
        "locking": getenv_bool("RIBO_LOCKING", default=False),
    }


DEFAULT_READ_SETTINGS: dict[str, ...] = default_read_settings()
"""Global dictionary storing the default settings for opening ribo files.

Modify this global variable before opening files with :class:`.Ribo`.
"""
