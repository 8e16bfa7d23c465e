from __future__ import annotations

import h5py


class RiboError(Exception):
    """Base class for errors raised while querying a ribo file."""

    def __init__(
        self, message: str, file: str | h5py.File | None = None, oname: str | None = None
    ) -> None:
        super().__init__(message)

        self.file = file.filename if isinstance(file, h5py.File) else file
        self.obj = oname

    def __str__(self) -> str:
        if self.file is None:
            return super().__str__()

        if self.obj is None:
            msg = f"while querying file {self.file}: "
        else:
            msg = f"while reading '{self.obj}' in file {self.file}: "

        return msg + super().__str__()

    def __reduce__(self) -> tuple:  # for pickling.
        return self.__class__, (*self.args, self.file, self.obj)


class ValidationError(RiboError, ValueError):
    """Requested experiments, regions or options are not valid for the file."""


class NoValidInputError(RiboError, ValueError):
    """None of the requested experiments carries the queried dataset."""


class StoreIOError(RiboError, OSError):
    """The underlying HDF5 read failed."""


class InternalConsistencyError(RiboError, RuntimeError):
    """Cached file metadata is inconsistent with itself."""


class CapabilityWarning(UserWarning):
    """A requested experiment lacks the queried dataset and is ignored."""
