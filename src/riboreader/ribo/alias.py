"""Transcript aliases (nicknames) for the reference names of a ribo file."""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable, Iterator, Mapping, Sequence

from .exceptions import ValidationError

log = logging.getLogger(__name__)


def apris_human_alias(name: str) -> str:
    """Shorten an APPRIS/GENCODE human transcript name to its transcript
    alias (the fifth ``|``-separated field).

    Examples
    --------
    >>> apris_human_alias("ENST00000335137.4|ENSG00000186092.6|-|-|OR4F5-201|OR4F5|918|CDS:1-918|")
    'OR4F5-201'
    """
    fields = name.split("|")
    if len(fields) < 5:
        msg = f"'{name}' is not an APPRIS transcript name"
        raise ValueError(msg)
    return fields[4]


class AliasMapping(Mapping):
    """Ordered, one-to-one mapping from reference names to aliases.

    The mapping is validated once, when it is built: every reference name
    must have an alias and no two reference names may share one.

    Parameters
    ----------
    reference_names
        reference names of the file, in file order.
    alias
        either a function computing the alias of a reference name, or a
        mapping from reference names to aliases.
    """

    def __init__(
        self,
        reference_names: Sequence[str],
        alias: Callable[[str], str] | Mapping[str, str],
    ) -> None:
        if callable(alias):
            pairs = []
            for name in reference_names:
                try:
                    pairs.append((name, alias(name)))
                except (ValueError, KeyError) as e:
                    msg = f"could not compute the alias of '{name}': {e}"
                    raise ValidationError(msg) from e
        else:
            missing = [name for name in reference_names if name not in alias]
            if missing:
                msg = f"no alias provided for reference names {missing}"
                raise ValidationError(msg)
            pairs = [(name, alias[name]) for name in reference_names]

        self._forward = OrderedDict(pairs)
        self._backward = {}
        for name, nick in self._forward.items():
            if not isinstance(nick, str) or nick == "":
                msg = f"alias of '{name}' must be a non-empty string, got {nick!r}"
                raise ValidationError(msg)
            if nick in self._backward:
                msg = f"alias '{nick}' is shared by '{self._backward[nick]}' and '{name}'"
                raise ValidationError(msg)
            self._backward[nick] = name

        log.debug(f"loaded {len(self._forward)} transcript aliases")

    def __getitem__(self, name: str) -> str:
        return self._forward[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._forward)

    def __len__(self) -> int:
        return len(self._forward)

    def original(self, nick: str) -> str:
        """Return the reference name of an alias."""
        return self._backward[nick]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self)} aliases)"
