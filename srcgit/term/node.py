"""Display nodes that describe what gets written to the terminal."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class Status(Enum):
    """Outcome colouring applied to a node."""

    ERROR = auto()
    WARNING = auto()
    SUCCESS = auto()


class Icon(Enum):
    """Small symbols shown next to text."""

    ARROW_UP = auto()
    ARROW_DOWN = auto()
    LOCK = auto()
    CHECK = auto()


class Indicator(Enum):
    """Kind of change a file went through."""

    UNKNOWN = auto()
    NEW = auto()
    CONFLICT = auto()
    MODIFIED = auto()
    RENAMED = auto()
    DELETED = auto()


class AttributeKind(Enum):
    """What an attribute value refers to."""

    COMMIT = auto()
    COMMIT_SHORT = auto()
    TAG = auto()
    BRANCH = auto()
    REMOTE = auto()
    OPERATION = auto()


@dataclass(frozen=True)
class Attribute:
    """A named repository item such as a branch, tag or commit id."""

    kind: AttributeKind
    value: str


class Node:
    """Base class of every display node."""

    def with_status(self, status: Status) -> StatusNode:
        """Wrap this node so that it renders in the colour of ``status``."""
        return StatusNode(status, self)


@dataclass
class Empty(Node):
    """Renders nothing."""


@dataclass
class Text(Node):
    text: str


@dataclass
class IconNode(Node):
    icon: Icon


@dataclass
class Label(Node):
    child: Node


@dataclass
class Block(Node):
    children: list[Node] = field(default_factory=list)


@dataclass
class Dimmed(Node):
    child: Node


@dataclass
class MultiLine(Node):
    children: list[Node] = field(default_factory=list)


@dataclass
class IndicatorNode(Node):
    indicator: Indicator


@dataclass
class Continued(Node):
    child: Node


@dataclass
class Breadcrumb(Node):
    children: list[Node] = field(default_factory=list)


@dataclass
class AttributeNode(Node):
    attribute: Attribute


@dataclass
class StatusNode(Node):
    status: Status
    child: Node


@dataclass
class Column(Node):
    left: Node
    right: Node


@dataclass
class Group(Node):
    heading: str
    count: int | None
    child: Node


def spacer() -> Text:
    """A single space."""
    return Text(" ")


def text_head_1(text: object) -> Text:
    """Text holding only the first line of ``text``."""
    return Text(str(text).split("\n", 1)[0])


def text_capped(text: object, cap: int) -> Text:
    """Text cut to ``cap`` characters, ending in an ellipsis when cut."""
    value = str(text)
    if len(value) > cap:
        return Text(f"{value[:cap - 3]}...")
    return Text(value)


def message_with_icon(icon: Icon, message: str) -> Block:
    """An icon followed by a space and a message."""
    return Block([IconNode(icon), spacer(), Text(message)])