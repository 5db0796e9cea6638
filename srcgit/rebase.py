"""Reading the todo list of an interactive rebase."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class RebaseError(Exception):
    """The rebase todo list could not be understood."""


class RebaseOperationType(Enum):
    PICK = "pick"
    REWORD = "reword"
    EDIT = "edit"
    SQUASH = "squash"
    FIXUP = "fixup"
    EXEC = "exec"


_KEYWORDS = {
    **{op.value: op for op in RebaseOperationType},
    "p": RebaseOperationType.PICK,
    "r": RebaseOperationType.REWORD,
    "e": RebaseOperationType.EDIT,
    "s": RebaseOperationType.SQUASH,
    "f": RebaseOperationType.FIXUP,
    "x": RebaseOperationType.EXEC,
}

_OID = re.compile(r"[0-9a-fA-F]{40}")


@dataclass(frozen=True)
class RebaseOp:
    """One line of the todo list."""

    oid: str
    type: RebaseOperationType
    message: str

    @classmethod
    def parse(cls, line: str) -> RebaseOp:
        """Parse ``<operation> <object id> <message>``."""
        components = line.split(" ", 2)
        if len(components) != 3:
            raise RebaseError("invalid rebase todo: expected 3 components")

        keyword, oid, message = components
        try:
            op_type = _KEYWORDS[keyword]
        except KeyError:
            raise RebaseError("invalid rebase operation type") from None

        if not _OID.fullmatch(oid):
            raise RebaseError(f"invalid object id: {oid}")

        return cls(oid.lower(), op_type, message)


@dataclass
class Rebase:
    """The operations of a rebase in progress."""

    operations: list[RebaseOp] = field(default_factory=list)

    @classmethod
    def from_path(cls, path: str | Path) -> Rebase:
        """Read a todo file, skipping blank, comment and indented lines."""
        text = Path(path).read_text(encoding="utf-8")
        lines = (line.removesuffix("\r") for line in text.split("\n"))
        return cls(
            [
                RebaseOp.parse(line)
                for line in lines
                if line and not line.startswith(("#", " "))
            ]
        )

    @classmethod
    def from_git_dir(cls, git_dir: str | Path) -> Rebase:
        """Read the todo backup kept in a repository's git directory."""
        return cls.from_path(Path(git_dir) / "rebase-merge" / "git-rebase-todo.backup")