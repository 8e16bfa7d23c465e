"""Checks run on the parameters of the dataset accessors.

All checks work on metadata cached by :class:`.Ribo` and never read
datasets from disk, so invalid requests fail before any I/O.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Sequence

from ..ribo import Ribo
from ..ribo.datatype import METAGENE_SITES, REGIONS
from ..ribo.exceptions import CapabilityWarning, NoValidInputError, ValidationError

log = logging.getLogger(__name__)


def _as_list(values: str | Sequence[str]) -> list[str]:
    if isinstance(values, str):
        return [values]
    # drop duplicates, keep the order of first appearance
    return list(dict.fromkeys(values))


def check_experiments(
    ribo: Ribo, experiments: str | Sequence[str] | None = None
) -> list[str]:
    """Check that all `experiments` exist in the file.

    Parameters
    ----------
    ribo
        the ribo file.
    experiments
        experiment names. If ``None``, all experiments of the file.

    Returns
    -------
    experiments
        the requested experiments as a list, in request order.

    Raises
    ------
    ValidationError
        if an experiment is not in the file or if no experiment is requested.
    """
    if experiments is None:
        experiments = ribo.experiments
    experiments = _as_list(experiments)

    if len(experiments) == 0:
        msg = "no experiments requested"
        raise ValidationError(msg, ribo.path)

    unknown = [e for e in experiments if e not in ribo.experiment_info]
    if unknown:
        msg = f"experiments {unknown} are not in the file"
        raise ValidationError(msg, ribo.path)

    return experiments


def check_capability(
    ribo: Ribo,
    experiments: str | Sequence[str] | None,
    capability: str,
    label: str,
    stacklevel: int = 2,
) -> list[str]:
    """Filter `experiments` down to those carrying an optional dataset.

    A :class:`.CapabilityWarning` is emitted for each experiment lacking the
    dataset, and that experiment is dropped.

    Parameters
    ----------
    capability
        flag of :class:`.ExperimentInfo` to test, e.g. ``rnaseq``.
    label
        human readable dataset name used in messages.
    stacklevel
        :func:`warnings.warn` stack level, counted from this function.
        Wrappers add their own frames so that warnings point at user code.

    Raises
    ------
    NoValidInputError
        if none of the experiments has the dataset.
    """
    experiments = check_experiments(ribo, experiments)

    missing = [e for e in experiments if not ribo.has(e, capability)]
    for experiment in missing:
        warnings.warn(
            f"'{experiment}' did not have {label} data.",
            CapabilityWarning,
            stacklevel=stacklevel,
        )

    if missing:
        if len(missing) == len(experiments):
            msg = f"No valid experiments with {label}."
            raise NoValidInputError(msg, ribo.path)

        log.warning(
            f"requested experiments {missing} do not have {label} data, "
            "the returned table ignores them"
        )

    return [e for e in experiments if e not in missing]


def check_rnaseq(
    ribo: Ribo, experiments: str | Sequence[str] | None = None, stacklevel: int = 2
) -> list[str]:
    """Return the requested experiments that have RNA-Seq data.

    See Also
    --------
    check_capability
    """
    return check_capability(
        ribo, experiments, "rnaseq", "RNA-Seq", stacklevel=stacklevel + 1
    )


def check_regions(regions: str | Sequence[str] | None = None) -> list[str]:
    """Check region names (case-insensitive) and return them upper-cased.

    If `regions` is ``None``, all regions are returned in file column order.
    """
    if regions is None:
        return list(REGIONS)

    regions = _as_list(regions)
    invalid = [r for r in regions if not isinstance(r, str)]
    if invalid:
        msg = f"region names must be strings, got {invalid}"
        raise ValidationError(msg)

    regions = _as_list([r.upper() for r in regions])
    if len(regions) == 0:
        msg = "no regions requested"
        raise ValidationError(msg)

    unknown = [r for r in regions if r not in REGIONS]
    if unknown:
        msg = f"unknown regions {unknown}, valid regions are {list(REGIONS)}"
        raise ValidationError(msg)

    return regions


def check_alias(ribo: Ribo, alias: bool) -> None:
    """Alias mode needs the file to have been opened with an alias mapping."""
    if alias and not ribo.alias:
        msg = (
            "alias=True but no aliases are set, "
            "open the file with Ribo(path, alias=...)"
        )
        raise ValidationError(msg, ribo.path)


def check_lengths(
    ribo: Ribo, range_lower: int | None = None, range_upper: int | None = None
) -> tuple[int, int]:
    """Check a read length range against the lengths stored in the file.

    Missing bounds default to the file's ``length_min`` and ``length_max``.
    """
    lower = ribo.length_min if range_lower is None else int(range_lower)
    upper = ribo.length_max if range_upper is None else int(range_upper)

    if not ribo.length_min <= lower <= upper <= ribo.length_max:
        msg = (
            f"invalid length range [{lower}, {upper}], the file stores lengths "
            f"[{ribo.length_min}, {ribo.length_max}]"
        )
        raise ValidationError(msg, ribo.path)

    return lower, upper


def check_site(site: str) -> str:
    """Check the metagene site name."""
    site = site.lower()
    if site not in METAGENE_SITES:
        msg = f"unknown metagene site '{site}', expected one of {METAGENE_SITES}"
        raise ValidationError(msg)
    return site
