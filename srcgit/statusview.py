"""Display nodes for the repository status overview."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Sequence

from .rebase import Rebase
from .term.node import (
    Attribute,
    AttributeKind,
    AttributeNode,
    Block,
    Continued,
    Dimmed,
    Group,
    Icon,
    IconNode,
    Indicator,
    IndicatorNode,
    Label,
    MultiLine,
    Node,
    Status,
    Text,
    spacer,
    text_capped,
    text_head_1,
)

TITLE_CAP = 75
SHORT_ID_LENGTH = 6


class RepoState(Enum):
    """An operation left in progress in the repository."""

    APPLY_MAILBOX = auto()
    APPLY_MAILBOX_REBASE = auto()
    BISECT = auto()
    CHERRY_PICK = auto()
    CHERRY_PICK_SEQUENCE = auto()
    MERGE = auto()
    REBASE = auto()
    REBASE_INTERACTIVE = auto()
    REVERT = auto()
    REVERT_SEQUENCE = auto()


@dataclass(frozen=True)
class CommitLine:
    """A commit listed as ahead of or behind its upstream."""

    oid: str
    title: str
    signed: bool = False


@dataclass(frozen=True)
class ChangeEntry:
    """A changed path and the kind of change."""

    path: str
    indicator: Indicator


_STATE_MESSAGES = {
    RepoState.BISECT: "Bisect in progress",
    RepoState.CHERRY_PICK: "Cherry-pick in progress",
    RepoState.CHERRY_PICK_SEQUENCE: "Cherry-pick in progress",
    RepoState.MERGE: "Merge in progress",
    RepoState.REVERT: "Revert in progress",
    RepoState.REVERT_SEQUENCE: "Revert in progress",
}


def remote_state_indicators(ahead: int, behind: int) -> Node | None:
    """Arrows and counts for commits ahead of and behind the upstream."""
    if ahead == 0 and behind == 0:
        return None
    up = IconNode(Icon.ARROW_UP).with_status(Status.SUCCESS)
    down = IconNode(Icon.ARROW_DOWN).with_status(Status.ERROR)
    if ahead == 0:
        return Block([down, spacer(), Text(str(behind))])
    if behind == 0:
        return Block([up, spacer(), Text(str(ahead))])
    return Block(
        [up, spacer(), Text(str(ahead)), spacer(), down, Text(str(behind))]
    )


def branch_line_node(
    branch: str | Attribute, indicators: Node | None, title: str
) -> Block:
    """The first status line: branch, upstream indicators and commit title."""
    attribute = (
        branch
        if isinstance(branch, Attribute)
        else Attribute(AttributeKind.BRANCH, branch)
    )
    group: list[Node] = [AttributeNode(attribute), spacer()]
    if indicators is not None:
        group.extend([Label(indicators), spacer()])
    lines = title.splitlines()
    group.append(text_capped(lines[0] if lines else "", TITLE_CAP))
    return Block(group)


def rebase_node(rebase: Rebase) -> Group:
    """The list of operations of a rebase in progress."""
    children: list[Node] = [
        Block(
            [
                spacer(),
                spacer(),
                AttributeNode(Attribute(AttributeKind.OPERATION, op.type.value)),
                spacer(),
                Dimmed(Text(op.oid[:SHORT_ID_LENGTH])),
                spacer(),
                text_head_1(op.message),
            ]
        )
        for op in rebase.operations
    ]
    children.append(
        Block(
            [
                spacer(),
                spacer(),
                Continued(Text("Fix conflicts and run 'git rebase --continue'")),
            ]
        )
    )
    return Group("Rebase", len(rebase.operations), MultiLine(children))


def state_node(state: RepoState | None, rebase: Rebase | None = None) -> Node | None:
    """The line describing an operation in progress, if there is one."""
    if state is None:
        return None
    if state in (RepoState.APPLY_MAILBOX, RepoState.APPLY_MAILBOX_REBASE):
        raise ValueError("applying a mailbox is not supported")
    if state in (RepoState.REBASE, RepoState.REBASE_INTERACTIVE):
        if rebase is None:
            raise ValueError("a rebase in progress needs its todo list")
        return rebase_node(rebase)
    return Text(_STATE_MESSAGES[state])


def _commit_line(commit: CommitLine) -> Block:
    marker = (
        IconNode(Icon.LOCK).with_status(Status.SUCCESS) if commit.signed else spacer()
    )
    return Block(
        [
            marker,
            spacer(),
            Dimmed(Text(commit.oid[:SHORT_ID_LENGTH])),
            spacer(),
            text_head_1(commit.title),
        ]
    )


def _groups(sections: Iterable[tuple[str, Sequence[Node]]]) -> MultiLine | None:
    children: list[Node] = [
        Group(name, len(lines), MultiLine(list(lines)))
        for name, lines in sections
        if lines
    ]
    return MultiLine(children) if children else None


def commits_node(
    ahead: Sequence[CommitLine], behind: Sequence[CommitLine]
) -> MultiLine | None:
    """Groups of commits not yet pushed and not yet pulled."""
    return _groups(
        [
            ("Unmerged into remote", [_commit_line(c) for c in ahead]),
            ("Unpulled from remote", [_commit_line(c) for c in behind]),
        ]
    )


def _change_line(entry: ChangeEntry) -> Block:
    return Block(
        [
            spacer(),
            spacer(),
            IndicatorNode(entry.indicator),
            spacer(),
            Text(entry.path),
        ]
    )


def changes_node(
    staged: Sequence[ChangeEntry], unstaged: Sequence[ChangeEntry]
) -> MultiLine | None:
    """Groups of staged and unstaged changes."""
    return _groups(
        [
            ("Staged Changes", [_change_line(e) for e in staged]),
            ("Unstaged Changes", [_change_line(e) for e in unstaged]),
        ]
    )