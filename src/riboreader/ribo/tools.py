from __future__ import annotations

import logging
from pathlib import Path

from . import datatype
from .store import Ribo

log = logging.getLogger(__name__)


def show(ribo: str | Path | Ribo, detail: bool = False) -> None:
    """Print a summary of a ribo file: root attributes and experiments.

    Parameters
    ----------
    ribo
        the ribo file or an open handle.
    detail
        also print the shape of the datasets of every experiment.

    Examples
    --------
    >>> from riboreader import show
    >>> show("sample.ribo")
    sample.ribo
    ├── reference · appris-v1
    ├── length_min · 28
    ...
    experiment  total_reads  coverage  rnaseq  metadata
        Hela_1       336715      True    True      True
    """
    if isinstance(ribo, (str, Path)):
        with Ribo(ribo) as handle:
            show(handle, detail=detail)
        return

    print(f"\033[1m{ribo.path}\033[0m")  # noqa: T201

    items = [(k, v) for k, v in ribo.attrs.items() if v is not None]
    items.append(("transcripts", ribo.n_references))
    for i, (key, value) in enumerate(items):
        char = "└──" if i == len(items) - 1 else "├──"
        print(f"{char} \033[1m{key}\033[0m · {value}")  # noqa: T201

    info = ribo.info()
    if info.empty:
        print("no experiments")  # noqa: T201
        return

    print()  # noqa: T201
    print(info.to_string(index=False))  # noqa: T201

    if not detail:
        return

    for experiment in ribo.experiments:
        print(f"\n\033[1m{experiment}\033[0m")  # noqa: T201
        ribo.h5file[datatype.experiment_path(experiment)].visititems(_print_dataset)


def _print_dataset(name, obj) -> None:
    if hasattr(obj, "shape"):
        print(  # noqa: T201
            f"    {name} \033[3mdtype\033[0m={obj.dtype}, \033[3mshape\033[0m={obj.shape}"
        )
