"""Progress reporting and bookkeeping for fetches and pushes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Union

_SIDEBAND = re.compile(
    r"(Counting|Compressing|Resolving) [A-Za-z]+:[ ]+[0-9]+% \(([0-9]+)/([0-9]+)\)"
)


class SidebandOp(Enum):
    COUNTING = "Counting"
    COMPRESSING = "Compressing"
    RESOLVING = "Resolving"


@dataclass(frozen=True)
class Packing:
    current: int
    total: int


@dataclass(frozen=True)
class Transfer:
    current: int
    total: int


@dataclass(frozen=True)
class PushTransfer:
    bytes: int
    current: int
    total: int


@dataclass(frozen=True)
class Sideband:
    op: SidebandOp
    current: int
    total: int


ProgressEvent = Union[Packing, Transfer, PushTransfer, Sideband]


@dataclass(frozen=True)
class Update:
    """A reference moved by a fetch or push."""

    src: str
    dst: str
    refname: str


@dataclass
class Reply:
    """What a remote operation left behind."""

    stdout: bytes = b""
    updates: list[Update] = field(default_factory=list)


class PushRejected(Exception):
    """The remote holds commits the local side has not seen."""


def _is_zero(oid: str) -> bool:
    return not oid.strip("0")


def parse_sideband_progress(line: bytes) -> tuple[str, int, int] | None:
    """Extract ``(operation, current, total)`` from a remote progress line."""
    try:
        text = line.decode("utf-8")
    except UnicodeDecodeError:
        return None
    match = _SIDEBAND.search(text)
    if match is None:
        return None
    kind, current, total = match.groups()
    return kind, int(current), int(total)


class RemoteOpts:
    """Options and callbacks for one fetch, push or connect."""

    def __init__(self) -> None:
        self.compare: str | None = None
        self._sink: Callable[[ProgressEvent], object] | None = None
        self._stdout = bytearray()
        self._updates: list[Update] = []

    @property
    def sink(self) -> Callable[[ProgressEvent], object] | None:
        return self._sink

    def with_progress(self, sink: Callable[[ProgressEvent], object]) -> RemoteOpts:
        """Send progress events to ``sink`` and collect remote messages."""
        self._sink = sink
        return self

    def with_compare(self, compare: str) -> RemoteOpts:
        """Reject pushes unless the remote reference is at ``compare``."""
        self.compare = compare
        return self

    def check_push_negotiation(self, updates: Iterable[Update]) -> None:
        """Raise PushRejected when the remote moved past the expected commit."""
        if self.compare is None:
            return
        updates = list(updates)
        if not any(update.src == self.compare for update in updates) and not all(
            _is_zero(update.src) for update in updates
        ):
            raise PushRejected("update rejected (outdated)")

    def update_tips(self, refname: str, src: str, dst: str) -> bool:
        """Record a reference update."""
        self._updates.append(Update(src, dst, refname))
        return True

    def handle_sideband(self, line: bytes) -> bool:
        """Turn a remote message into a progress event or keep it as output."""
        if self._sink is None:
            return True
        parsed = parse_sideband_progress(line)
        if parsed is None:
            self._stdout.extend(line)
            return True
        kind, current, total = parsed
        self._sink(Sideband(SidebandOp(kind), current, total))
        return True

    def into_reply(self) -> Reply:
        """The collected remote output and reference updates."""
        return Reply(bytes(self._stdout), list(self._updates))