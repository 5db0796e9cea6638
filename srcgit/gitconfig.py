"""Reading the git settings this tool relies on."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator

SYSTEM_CONFIG = Path("/etc/gitconfig")

_MAX_INCLUDE_DEPTH = 10
_SECTION_NAME = re.compile(r"[A-Za-z0-9.-]+")
_KEY_NAME = re.compile(r"[A-Za-z][A-Za-z0-9-]*")
_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "t": "\t", "b": "\b"}
_TRUE = {"true", "yes", "on"}
_FALSE = {"false", "no", "off", ""}

Entry = tuple[str, "str | None"]


class ConfigError(Exception):
    """A configuration file or value is invalid or missing."""


class GpgFormat(Enum):
    SSH = "ssh"


@dataclass
class GpgConfig:
    """Settings of one ``gpg.<format>`` subsection."""

    program: str | None = None


@dataclass
class User:
    email: str
    name: str | None = None
    signing_key: str | None = None


@dataclass
class Config:
    """The subset of git configuration used for committing, signing and pushing."""

    user: User
    gpg_sign: bool = False
    gpg_format: GpgFormat | None = None
    gpg: dict[str, GpgConfig] = field(default_factory=dict)
    auto_setup_remote: bool = False

    @classmethod
    def from_entries(cls, entries: Iterable[Entry]) -> Config:
        """Build from ``(name, value)`` pairs; later values override earlier ones."""
        normalized = [(_normalize(name), value) for name, value in entries]
        values: dict[str, list[str | None]] = {}
        for name, value in normalized:
            values.setdefault(name, []).append(value)

        def string(name: str) -> str | None:
            found = values.get(_normalize(name))
            if not found:
                return None
            last = found[-1]
            return "" if last is None else last

        def boolean(name: str) -> bool:
            found = values.get(_normalize(name))
            if not found:
                return False
            return _parse_bool(name, found[-1])

        gpg_format = None
        format_name = string("gpg.format")
        if format_name is not None:
            if format_name != GpgFormat.SSH.value:
                raise ConfigError(f"invalid gpg format: {format_name}")
            gpg_format = GpgFormat.SSH

        gpg: dict[str, GpgConfig] = {}
        for name, _ in normalized:
            if not name.startswith("gpg."):
                continue
            components = name.split(".")
            if len(components) != 3:
                continue
            entry = gpg.setdefault(components[1], GpgConfig())
            if components[2] == "program":
                entry.program = string(name)

        gpg_sign = boolean("commit.gpgsign")

        email = string("user.email")
        if email is None:
            raise ConfigError("config value 'user.email' was not found")

        return cls(
            user=User(
                email=email,
                name=string("user.name"),
                signing_key=string("user.signingkey"),
            ),
            gpg_sign=gpg_sign,
            gpg_format=gpg_format,
            gpg=gpg,
            auto_setup_remote=boolean("push.autoSetupRemote"),
        )

    @classmethod
    def open_default(cls) -> Config:
        """Read the system, XDG and global configuration files, in that order."""
        xdg_home = os.environ.get("XDG_CONFIG_HOME")
        xdg = (
            Path(xdg_home) / "git" / "config"
            if xdg_home
            else Path.home() / ".config" / "git" / "config"
        )
        paths = [SYSTEM_CONFIG, xdg, Path.home() / ".gitconfig"]
        return cls.from_entries(
            entry for path in paths if path.is_file() for entry in read_config_file(path)
        )


def parse_local_time(seconds: int) -> datetime:
    """Seconds since the epoch as an aware datetime in the local time zone."""
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc).astimezone()
    except (OverflowError, OSError, ValueError):
        return datetime.fromtimestamp(0, tz=timezone.utc).astimezone()


def read_config_file(path: str | Path) -> list[Entry]:
    """Parse a git configuration file into ``(name, value)`` pairs.

    Names are ``section.key`` or ``section.subsection.key`` with the section
    and key lower-cased; a key written without ``=`` has the value ``None``.
    Files named by ``include.path`` are read in place.
    """
    return list(_read(Path(path), 0))


def _normalize(name: str) -> str:
    first = name.find(".")
    last = name.rfind(".")
    if first < 0:
        raise ConfigError(f"invalid config key: {name}")
    return name[:first].lower() + name[first:last + 1] + name[last + 1:].lower()


def _parse_bool(name: str, value: str | None) -> bool:
    if value is None:
        return True
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    try:
        return int(lowered) != 0
    except ValueError:
        raise ConfigError(f"invalid boolean value for {name}: {value}") from None


def _error(text: str, pos: int, path: Path, message: str) -> ConfigError:
    line = text.count("\n", 0, pos) + 1
    return ConfigError(f"{path}:{line}: {message}")


def _read(path: Path, depth: int) -> Iterator[Entry]:
    if depth > _MAX_INCLUDE_DEPTH:
        raise ConfigError(f"{path}: includes nested too deeply")
    text = path.read_text(encoding="utf-8")
    for name, value in _parse(text, path):
        yield name, value
        if name == "include.path" and value:
            target = Path(value).expanduser()
            if not target.is_absolute():
                target = path.parent / target
            if target.is_file():
                yield from _read(target, depth + 1)


def _skip_line(text: str, pos: int) -> int:
    end = text.find("\n", pos)
    return len(text) if end < 0 else end


def _parse(text: str, path: Path) -> Iterator[Entry]:
    section: str | None = None
    pos = 0
    size = len(text)
    while pos < size:
        char = text[pos]
        if char in " \t\r\n":
            pos += 1
        elif char in "#;":
            pos = _skip_line(text, pos)
        elif char == "[":
            section, pos = _parse_header(text, pos, path)
        else:
            key = _KEY_NAME.match(text, pos)
            if key is None:
                raise _error(text, pos, path, "invalid key")
            if section is None:
                raise _error(text, pos, path, "key outside of a section")
            pos = key.end()
            while pos < size and text[pos] in " \t":
                pos += 1
            value: str | None
            if pos < size and text[pos] == "=":
                value, pos = _parse_value(text, pos + 1, path)
            elif pos >= size or text[pos] in "\r\n#;":
                value = None
            else:
                raise _error(text, pos, path, "expected '=' after key")
            yield f"{section}.{key.group().lower()}", value


def _parse_header(text: str, pos: int, path: Path) -> tuple[str, int]:
    size = len(text)
    name = _SECTION_NAME.match(text, pos + 1)
    if name is None:
        raise _error(text, pos, path, "invalid section name")
    section = name.group()
    pos = name.end()
    while pos < size and text[pos] in " \t":
        pos += 1

    subsection: str | None = None
    if pos < size and text[pos] == '"':
        pos += 1
        chars = []
        while True:
            if pos >= size or text[pos] == "\n":
                raise _error(text, pos, path, "unterminated subsection name")
            char = text[pos]
            if char == '"':
                pos += 1
                break
            if char == "\\" and pos + 1 < size and text[pos + 1] != "\n":
                chars.append(text[pos + 1])
                pos += 2
                continue
            chars.append(char)
            pos += 1
        subsection = "".join(chars)

    if pos >= size or text[pos] != "]":
        raise _error(text, pos, path, "expected ']' after section name")
    pos += 1

    if subsection is not None:
        return f"{section.lower()}.{subsection}", pos
    if "." in section:
        head, _, rest = section.partition(".")
        return f"{head.lower()}.{rest.lower()}", pos
    return section.lower(), pos


def _parse_value(text: str, pos: int, path: Path) -> tuple[str, int]:
    size = len(text)
    while pos < size and text[pos] in " \t":
        pos += 1

    chars: list[str] = []
    trailing = 0
    quoted = False
    while pos < size:
        char = text[pos]
        if char == "\n":
            if quoted:
                raise _error(text, pos, path, "unterminated quoted value")
            break
        if char == "\\":
            following = text[pos + 1:pos + 2]
            if following == "\n":
                pos += 2
                continue
            if following == "\r" and text[pos + 2:pos + 3] == "\n":
                pos += 3
                continue
            if following not in _ESCAPES or not following:
                raise _error(text, pos, path, "invalid escape sequence")
            chars.append(_ESCAPES[following])
            trailing = 0
            pos += 2
            continue
        if char == '"':
            quoted = not quoted
            pos += 1
            continue
        if not quoted and char in "#;":
            pos = _skip_line(text, pos)
            break
        chars.append(char)
        trailing = trailing + 1 if not quoted and char in " \t\r" else 0
        pos += 1

    if quoted:
        raise _error(text, pos, path, "unterminated quoted value")
    if trailing:
        del chars[-trailing:]
    return "".join(chars), pos