from __future__ import annotations

import logging

from ..ribo import Ribo
from ..ribo.exceptions import InternalConsistencyError

log = logging.getLogger(__name__)


def change_reference_names(ribo: Ribo, alias: bool = False) -> list[str]:
    """Return the transcript names to report, in file order.

    Parameters
    ----------
    ribo
        the ribo file.
    alias
        if ``True``, report the alias of each reference name instead of the
        reference name itself. Call :func:`.check_alias` first.
    """
    if not alias:
        return list(ribo.reference_names)

    names = []
    for name in ribo.reference_names:
        try:
            names.append(ribo.alias[name])
        except (KeyError, TypeError) as e:
            msg = f"reference name '{name}' has no alias"
            raise InternalConsistencyError(msg, ribo.path) from e

    return names
