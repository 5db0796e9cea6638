"""Rendering of display nodes as coloured terminal text."""

from __future__ import annotations

import sys
from enum import Enum
from typing import TextIO

from .node import (
    AttributeKind,
    AttributeNode,
    Block,
    Breadcrumb,
    Column,
    Continued,
    Dimmed,
    Empty,
    Group,
    Icon,
    IconNode,
    Indicator,
    IndicatorNode,
    Label,
    MultiLine,
    Node,
    Status,
    StatusNode,
    Text,
)

RESET = "\x1b[0m"


class Color(Enum):
    """Foreground colours, valued by their SGR parameters."""

    RED = "31"
    GREEN = "32"
    YELLOW = "33"
    BLUE = "34"
    CYAN = "36"
    BRIGHT_BLACK = "90"
    HEADER = "38;2;225;190;120"


def paint(
    text: str, color: Color | None = None, *, bold: bool = False, dimmed: bool = False
) -> str:
    """Wrap ``text`` in ANSI styling; inner resets re-apply the style."""
    codes = []
    if bold:
        codes.append("1")
    if dimmed:
        codes.append("2")
    if color is not None:
        codes.append(color.value)
    if not codes:
        return text
    prefix = f"\x1b[{';'.join(codes)}m"
    return prefix + text.replace(RESET, RESET + prefix) + RESET


_STATUS_COLORS = {
    Status.ERROR: Color.RED,
    Status.WARNING: Color.YELLOW,
    Status.SUCCESS: Color.GREEN,
}

_ICONS = {
    Icon.ARROW_DOWN: "↓",
    Icon.LOCK: "⚿",
    Icon.CHECK: "✓",
}

_INDICATORS = {
    Indicator.UNKNOWN: ("?", Color.BRIGHT_BLACK),
    Indicator.CONFLICT: ("⚠", Color.YELLOW),
    Indicator.NEW: ("✚", Color.GREEN),
    Indicator.MODIFIED: ("~", Color.YELLOW),
    Indicator.RENAMED: ("➜", Color.YELLOW),
    Indicator.DELETED: ("✖", Color.RED),
}

_ATTRIBUTE_STYLES = {
    AttributeKind.TAG: ("#", Color.BLUE),
    AttributeKind.BRANCH: (" ", Color.BLUE),
    AttributeKind.REMOTE: ("⬡ ", Color.CYAN),
    AttributeKind.OPERATION: ("↻ ", Color.CYAN),
}


class TermRenderer:
    """Writes display nodes to a text stream."""

    def __init__(self, writer: TextIO | None = None):
        self._writer = writer
        self._color: Color | None = None

    @property
    def writer(self) -> TextIO:
        return self._writer if self._writer is not None else sys.stdout

    def _write(self, text: str) -> None:
        if self._color is not None:
            text = paint(text, self._color)
        self.writer.write(text)

    def render_with(self, node: Node, color: Color) -> None:
        """Render ``node`` in ``color``, restoring the previous colour after."""
        saved, self._color = self._color, color
        try:
            self.render(node)
        finally:
            self._color = saved

    def renderln(self, node: Node) -> None:
        """Render ``node`` followed by a newline."""
        self.render(node)
        self.render(Text("\n"))

    def render(self, node: Node) -> None:
        """Render a single node and its children."""
        match node:
            case Dimmed(child=child):
                self.render_with(child, Color.BRIGHT_BLACK)
            case Text(text=text):
                self._write(text)
            case Block(children=children):
                for child in children:
                    self.render(child)
            case Continued(child=child):
                self._write("↪ ")
                self.render(child)
            case Breadcrumb(children=children):
                for position, child in enumerate(children):
                    if position:
                        self._write(" › ")
                    self.render(child)
            case AttributeNode(attribute=attribute):
                self._render_attribute(attribute.kind, attribute.value)
            case Group(heading=heading, count=count, child=child):
                self._write("\n" + paint(heading, Color.HEADER, bold=True))
                if count is not None:
                    self._write(" " + paint(f"({count})", dimmed=True))
                self._write("\n")
                self.render(child)
            case MultiLine(children=children):
                for position, child in enumerate(children):
                    if position:
                        self._write("\n")
                    self.render(child)
            case IconNode(icon=Icon.ARROW_UP):
                # The up arrow bypasses the active colour.
                self.writer.write("↑")
            case IconNode(icon=icon):
                self._write(_ICONS[icon])
            case IndicatorNode(indicator=indicator):
                glyph, color = _INDICATORS[indicator]
                self._write(paint(glyph, color))
            case StatusNode(status=status, child=child):
                self.render_with(child, _STATUS_COLORS[status])
            case Label(child=child):
                self._write(paint("(", dimmed=True))
                self.render(child)
                self._write(paint(")", dimmed=True))
            case Column(left=left, right=right):
                self.render(left)
                self._write(": ")
                self.render(right)
            case Empty():
                pass
            case _:
                raise TypeError(f"cannot render {node!r}")

    def _render_attribute(self, kind: AttributeKind, value: str) -> None:
        if kind is AttributeKind.COMMIT:
            # Full commit ids are written without the active colour.
            self.writer.write(paint(value, Color.YELLOW))
        elif kind is AttributeKind.COMMIT_SHORT:
            self._write(paint(value[:7], Color.YELLOW))
        else:
            prefix, color = _ATTRIBUTE_STYLES[kind]
            self._write(paint(f"{prefix}{value}", color))