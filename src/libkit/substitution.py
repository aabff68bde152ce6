"""Safe find-and-replace used when customizing a project.

A plain ``str.replace`` is fine for most inputs, but the customization
workflow hands us operator supplied values where the replacement may contain
the search target (``"foo"`` -> ``"foofoo"``). Replacing one occurrence at a
time in that situation never terminates, so occurrences are first staged
behind a random placeholder and only then swapped for the replacement.
"""

from __future__ import annotations

from typing import Iterable
from uuid import uuid4

from .errors import EmptySearchTargetError

__all__ = ["new_placeholder", "substitute", "substitute_many"]


_HEX_DIGITS = "0123456789abcdef"
_PRIVATE_USE_START = 0xE000


def _placeholder_alphabet(excluded: set[str]) -> str:
    """Return 17 private-use characters, none of which appear in ``excluded``."""

    alphabet: list[str] = []
    codepoint = _PRIVATE_USE_START
    while len(alphabet) < len(_HEX_DIGITS) + 1:
        char = chr(codepoint)
        if char not in excluded:
            alphabet.append(char)
        codepoint += 1
    return "".join(alphabet)


def new_placeholder(source: str, *values: str) -> str:
    """Return a marker that does not occur in ``source``.

    The marker is spelled with characters absent from every string in
    ``values``, so it can neither contain, overlap nor be rebuilt from them.
    """

    excluded: set[str] = set()
    for value in values:
        excluded.update(value)
    alphabet = _placeholder_alphabet(excluded)
    delimiter, digits = alphabet[0], alphabet[1:]
    table = str.maketrans(_HEX_DIGITS, digits)

    while True:
        placeholder = f"{delimiter}{uuid4().hex.translate(table)}{delimiter}"
        if placeholder not in source:
            return placeholder


def substitute(source: str, from_: str, to: str) -> str:
    """Replace every occurrence of ``from_`` in ``source`` with ``to``.

    Only occurrences present in the original ``source`` are replaced. Copies
    of ``from_`` introduced by ``to`` are left alone and the intermediate
    placeholder never appears in the result.

    Raises
    ------
    EmptySearchTargetError
        If ``from_`` is empty.
    """

    if not from_:
        raise EmptySearchTargetError("cannot substitute an empty search target")

    placeholder = new_placeholder(source, from_, to)
    updated = source
    while from_ in updated:
        updated = updated.replace(from_, placeholder, 1)
    while placeholder in updated:
        updated = updated.replace(placeholder, to, 1)
    return updated


def substitute_many(source: str, pairs: Iterable[tuple[str, str]]) -> str:
    """Apply :func:`substitute` once per ``(from_, to)`` pair, in order."""

    updated = source
    for from_, to in pairs:
        if from_ == to:
            continue
        updated = substitute(updated, from_, to)
    return updated
