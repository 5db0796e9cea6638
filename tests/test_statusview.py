import io

import pytest

from srcgit.rebase import Rebase, RebaseOp
from srcgit.statusview import (
    ChangeEntry,
    CommitLine,
    RepoState,
    branch_line_node,
    changes_node,
    commits_node,
    rebase_node,
    remote_state_indicators,
    state_node,
)
from srcgit.term.node import (
    Group,
    Icon,
    IconNode,
    Indicator,
    Label,
    Status,
    StatusNode,
    Text,
)
from srcgit.term.progress import decode_chars
from srcgit.term.render import TermRenderer

OID = "0123456789abcdef0123456789abcdef01234567"


def plain(node):
    out = io.StringIO()
    TermRenderer(out).render(node)
    return "".join(decode_chars(out.getvalue()))


def test_no_indicators_when_in_sync():
    assert remote_state_indicators(0, 0) is None


def test_behind_only():
    node = remote_state_indicators(0, 3)
    first = node.children[0]
    assert isinstance(first, StatusNode)
    assert first.status is Status.ERROR
    assert first.child == IconNode(Icon.ARROW_DOWN)
    assert node.children[-1] == Text("3")


def test_ahead_only():
    node = remote_state_indicators(2, 0)
    assert node.children[0].status is Status.SUCCESS
    assert node.children[0].child == IconNode(Icon.ARROW_UP)
    assert node.children[-1] == Text("2")


def test_ahead_and_behind():
    text = plain(remote_state_indicators(2, 3))
    assert "↑" in text and "↓" in text
    assert text.index("2") < text.index("3")


def test_branch_line_first_line_of_title():
    text = plain(branch_line_node("main", None, "feat: x\nbody"))
    assert "main" in text
    assert "feat: x" in text
    assert "body" not in text


def test_branch_line_with_indicators_has_label():
    node = branch_line_node("main", remote_state_indicators(1, 0), "t")
    labels = [child for child in node.children if isinstance(child, Label)]
    assert len(labels) == 1
    text = plain(node)
    assert "(↑ 1)" in text
    assert text.endswith("t")


def test_branch_line_without_indicators_has_no_label():
    node = branch_line_node("main", None, "t")
    assert [child for child in node.children if isinstance(child, Label)] == []
    assert "(" not in plain(node)


def test_branch_line_caps_title():
    node = branch_line_node("main", None, "a" * 100)
    last = node.children[-1]
    assert last.text.endswith("...")
    assert len(last.text) == 75


def test_rebase_node():
    rebase = Rebase([RebaseOp.parse(f"pick {OID} feat: x\nmore")])
    node = rebase_node(rebase)
    assert isinstance(node, Group)
    assert node.heading == "Rebase"
    assert node.count == 1
    assert len(node.child.children) == 2
    text = plain(node)
    assert "pick" in text
    assert OID[:6] in text
    assert OID[:7] not in text
    assert "git rebase --continue" in text


def test_state_none():
    assert state_node(None) is None


@pytest.mark.parametrize(
    "state, message",
    [
        (RepoState.BISECT, "Bisect in progress"),
        (RepoState.CHERRY_PICK_SEQUENCE, "Cherry-pick in progress"),
        (RepoState.MERGE, "Merge in progress"),
        (RepoState.REVERT, "Revert in progress"),
    ],
)
def test_state_messages(state, message):
    assert state_node(state) == Text(message)


def test_state_rebase_uses_todo():
    rebase = Rebase([RebaseOp.parse(f"fixup {OID} fix")])
    node = state_node(RepoState.REBASE_INTERACTIVE, rebase)
    assert node.heading == "Rebase"


def test_state_rebase_without_todo_fails():
    with pytest.raises(ValueError):
        state_node(RepoState.REBASE)


def test_state_mailbox_unsupported():
    with pytest.raises(ValueError):
        state_node(RepoState.APPLY_MAILBOX)


def test_commits_empty():
    assert commits_node([], []) is None


def test_commits_groups():
    node = commits_node(
        [CommitLine(OID, "one", signed=True), CommitLine(OID, "two")], []
    )
    assert len(node.children) == 1
    group = node.children[0]
    assert group.heading == "Unmerged into remote"
    assert group.count == 2
    first = group.child.children[0].children[0]
    assert isinstance(first, StatusNode) and first.child == IconNode(Icon.LOCK)
    assert group.child.children[1].children[0] == Text(" ")


def test_commits_both_directions_order():
    node = commits_node([CommitLine(OID, "a")], [CommitLine(OID, "b")])
    assert [g.heading for g in node.children] == [
        "Unmerged into remote",
        "Unpulled from remote",
    ]


def test_changes_empty():
    assert changes_node([], []) is None


def test_changes_groups():
    node = changes_node(
        [ChangeEntry("a.txt", Indicator.NEW)],
        [ChangeEntry("b.txt", Indicator.MODIFIED), ChangeEntry("c", Indicator.DELETED)],
    )
    assert [(g.heading, g.count) for g in node.children] == [
        ("Staged Changes", 1),
        ("Unstaged Changes", 2),
    ]
    text = plain(node)
    assert "a.txt" in text and "b.txt" in text
    assert "✚" in text and "✖" in text