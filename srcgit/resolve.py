"""Parsing of short revision patterns such as ``HEAD``, ``@`` and ``main~2``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_WORD = 2**64

_NAME_END = re.compile(r"[@^~]")
_SIGNED_INT = re.compile(r"[+-]?[0-9]+")


class PatternError(ValueError):
    """Error for revision patterns that cannot be used."""


@dataclass(frozen=True)
class Head:
    """The commit that ``HEAD`` points at."""


@dataclass(frozen=True)
class Branch:
    """A local branch by name."""

    name: str


@dataclass(frozen=True)
class Parent:
    """The ``n``-th first-parent ancestor of another pattern."""

    n: int
    base: Pattern


Pattern = Union[Head, Branch, Parent]


def _prefix(pattern: str) -> tuple[str, Pattern]:
    if pattern.startswith("HEAD"):
        return pattern[4:], Head()
    if pattern.startswith("@"):
        return pattern[1:], Head()
    match = _NAME_END.search(pattern)
    end = match.start() if match else len(pattern)
    return pattern[end:], Branch(pattern[:end])


def _parent(pattern: str) -> tuple[str, Parent] | None:
    rest, base = _prefix(pattern)
    if not rest.startswith("~"):
        return None
    number = _SIGNED_INT.match(rest, 1)
    if number is None:
        return None
    n = int(number.group())
    if not _I32_MIN <= n <= _I32_MAX:
        return None
    if n < 0:
        # A negative count wraps around like an unsigned machine word.
        n += _WORD
    return rest[number.end():], Parent(n, base)


def parse_pattern(pattern: str) -> tuple[str, Pattern]:
    """Parse the leading revision pattern, returning the unparsed rest and the pattern."""
    parsed = _parent(pattern)
    if parsed is not None:
        return parsed
    return _prefix(pattern)