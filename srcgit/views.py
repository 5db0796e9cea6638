"""Display pieces and naming rules shared by the commands."""

from __future__ import annotations

from datetime import datetime
from pathlib import PurePath

from .term.node import (
    Block,
    Column,
    Continued,
    Indicator,
    IndicatorNode,
    Label,
    MultiLine,
    Node,
    Status,
    Text,
    spacer,
)

_SHORTHAND_HOST = "[email]"


class MissingRemote(Exception):
    """A branch name carries no remote part."""

    def __init__(self) -> None:
        super().__init__("missing remote")


def remote_name(name: str) -> str:
    """The remote part of a remote branch name such as ``origin/main``."""
    if name.startswith("refs/"):
        if not name.startswith("refs/remotes/"):
            raise MissingRemote()
        return name[len("refs/remotes/"):].split("/", 1)[0]
    head, sep, _ = name.partition("/")
    if not sep:
        raise MissingRemote()
    return head


def _lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def message_formatted(message: str) -> str:
    """A commit message with every line indented by two spaces."""
    return "\n".join(f"  {line}" for line in _lines(message))


def headers_ui(time: datetime, author: str) -> MultiLine:
    """The date and author lines shown above a commit message."""
    return MultiLine(
        [
            Column(Text("Date"), Text(time.strftime("%Y-%m-%d %H:%M"))),
            Column(Text("Author"), Text(author)),
        ]
    )


def _slug(text: str) -> str:
    return text.strip().replace(" ", "-").replace("/", "-")


def branch_name(message: str) -> str:
    """A branch name derived from a commit message like ``feat: add thing``."""
    prefix, sep, name = message.partition(":")
    if sep:
        return f"{_slug(prefix)}/{_slug(name)}"
    return message.strip().replace(" ", "-")


def convert_uri(uri: str) -> str | None:
    """Expand an ``owner/repo`` shorthand into a full clone URI, if it is one."""
    if "@" not in uri and ":" not in uri and "://" not in uri:
        return f"{_SHORTHAND_HOST}:{uri}.git"
    return None


def clone_dir_name(uri: str) -> str:
    """The directory a clone of ``uri`` goes into."""
    name = uri.split("/")[-1]
    while name.endswith(".git"):
        name = name[: -len(".git")]
    return name


def file_added(path: str | PurePath) -> Node:
    """The line reported for a file added to the index."""
    return Block([IndicatorNode(Indicator.NEW), spacer(), Text(str(path))]).with_status(
        Status.SUCCESS
    )


def diff_stats_node(insertions: int, deletions: int) -> Continued:
    """The ``Created`` line reported after a commit, with its change counts."""
    children: list[Node] = []

    if insertions > 0:
        children.append(
            Block([IndicatorNode(Indicator.NEW), Text(str(insertions))]).with_status(
                Status.SUCCESS
            )
        )

    if deletions > 0:
        if children:
            children.append(spacer())
        children.append(
            Block([IndicatorNode(Indicator.DELETED), Text(str(deletions))]).with_status(
                Status.ERROR
            )
        )

    if children:
        children = [Label(Block(children)), spacer()]

    return Continued(Block([Text("Created"), spacer(), Block(children)]))