"""Multi-line progress bars redrawn in place on a terminal."""

from __future__ import annotations

import math
import re
import sys
from dataclasses import dataclass
from typing import Iterable, TextIO

from .render import Color, paint

MOVE_BEGIN = "\r"
MOVE_UP = "\x1b[1A"
MOVE_DOWN = "\x1b[1B"
MOVE_RIGHT = "\x1b[1C"
DELETE_CHAR = "\x08"
CLEAR_LINE = "\x1b[2K"
ERASE_TO_END = "\x1b[0K"

_ESCAPES = re.compile(
    r"\x1b(?:\[[0-?]*[ -/]*[@-~]|\][^\x07\x1b]*(?:\x07|\x1b\\)|[@-Z\\-_])"
)


def decode_chars(s: str) -> list[str]:
    """The visible characters of ``s`` with escape sequences removed."""
    return list(_ESCAPES.sub("", s))


@dataclass
class Bar:
    """A single named progress bar."""

    name: str
    current: int = 0
    total: int = 100
    message: str | None = None

    def render(self, prefix: int, width: int) -> str:
        """The bar as one line, its name padded to ``prefix`` characters."""
        padding = " " * (prefix - len(self.name))

        if self.current >= self.total:
            return f"{self.name}{padding} {paint('✔', Color.GREEN, bold=True)}"

        left = math.floor(width * (self.current / self.total))
        filled = "=" * (left - 1) if left > 0 else ""
        head = "❯" if left > 0 else ""
        rest = (" " if left > 0 else "-") * (width - left)

        return (
            f"{self.name}{padding} "
            f"{paint('[', Color.BLUE, bold=True)}"
            f"{paint(filled, bold=True)}"
            f"{paint(head, bold=True)}"
            f"{rest}"
            f"{paint(']', Color.BLUE, bold=True)} "
            f"{self.message or ''}"
        )


class ProgressBar:
    """A stack of progress bars that only redraws characters that changed."""

    def __init__(self, names: Iterable[object], out: TextIO | None = None):
        self.width = 24
        self.bars = [Bar(str(name)) for name in names]
        self._out = out
        self._previous: list[str] | None = None

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def set_message(self, idx: int, message: object) -> None:
        """Set the message of bar ``idx``; unknown indices are ignored."""
        if 0 <= idx < len(self.bars):
            self.bars[idx].message = str(message)

    def set_progress(self, idx: int, current: int, total: int) -> None:
        """Set the progress of bar ``idx``; unknown indices are ignored."""
        if 0 <= idx < len(self.bars):
            bar = self.bars[idx]
            bar.current = current
            bar.total = total

    def clear(self) -> None:
        """Erase the drawn bars, if any were drawn."""
        if self._previous is None:
            return
        self._previous = None
        self.out.write((MOVE_BEGIN + MOVE_UP + CLEAR_LINE) * len(self.bars))

    def draw(self) -> None:
        """Draw the bars, or update the ones already on screen."""
        out = self.out
        prefix = max((len(bar.name) for bar in self.bars), default=0)
        lines = [bar.render(prefix, self.width) for bar in self.bars]

        if self._previous is None:
            for line in lines:
                out.write(line + "\n")
        else:
            for new_line, old_line in zip(reversed(lines), reversed(self._previous)):
                out.write(MOVE_UP)
                if new_line != old_line:
                    self._redraw_line(old_line, new_line)
            out.write(MOVE_DOWN * len(self.bars) + MOVE_BEGIN)

        out.flush()
        self._previous = lines

    def _redraw_line(self, old_line: str, new_line: str) -> None:
        out = self.out
        new = decode_chars(new_line)
        old = decode_chars(old_line)

        if len(new) < len(old):
            out.write(MOVE_BEGIN + new_line + ERASE_TO_END)
            return

        for position, char in enumerate(new):
            old_char = old[position] if position < len(old) else " "
            if old_char == char:
                continue
            out.write(MOVE_BEGIN + MOVE_RIGHT * (position + 1))
            if position <= len(old):
                out.write(DELETE_CHAR)
            out.write(char)