# SPDX-License-Identifier: MIT
"""Commit message parser: structured representation of a raw commit message."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_BREAKING_TOKENS = frozenset({"BREAKING CHANGE", "BREAKING-CHANGE"})

# Token: "BREAKING CHANGE" or a word/kebab token. Separator: ": " or " #".
_FOOTER_RE = re.compile(
    r"^(?P<token>BREAKING CHANGE|[A-Za-z][A-Za-z0-9]*(?:-[A-Za-z0-9]+)*)(?P<sep>: | #)(?P<value>.*)$"
)


@dataclass(frozen=True)
class Footer:
    """A trailing ``Token: value`` or ``Token #value`` line."""

    token: str
    separator: str  # ": " | " #"
    value: str

    @property
    def is_breaking(self) -> bool:
        return self.token in _BREAKING_TOKENS

    def render(self) -> str:
        """Return the footer as it appeared in the message."""
        return f"{self.token}{self.separator}{self.value}"


@dataclass(frozen=True)
class _HeaderParts:
    type: str | None = None
    scope: str | None = None
    subject: str | None = None
    breaking: bool = False


_UNPARSED = _HeaderParts()


@dataclass(frozen=True)
class CommitMessage:
    """A parsed commit message.

    Only ``raw`` is supplied; every other field is derived from it during
    construction, so two messages built from the same text compare equal.
    """

    raw: str
    header: str = field(init=False)
    type: str | None = field(init=False)
    scope: str | None = field(init=False)  # "" for "feat(): ..."
    subject: str | None = field(init=False)
    breaking: bool = field(init=False)
    body: tuple[str, ...] = field(init=False)
    footers: tuple[Footer, ...] = field(init=False)
    has_blank_after_header: bool = field(init=False)
    has_blank_before_footer: bool = field(init=False)
    is_empty: bool = field(init=False)

    def __post_init__(self) -> None:
        lines = self.raw.replace("\r\n", "\n").split("\n")
        header = lines[0]
        parts = _parse_header(header)
        rest = lines[1:]
        footer_start = _find_footer_start(rest)
        body_lines = rest if footer_start is None else rest[:footer_start]
        footers = () if footer_start is None else _parse_footers(rest[footer_start:])

        values = {
            "header": header,
            "type": parts.type,
            "scope": parts.scope,
            "subject": parts.subject,
            "breaking": parts.breaking or any(f.is_breaking for f in footers),
            "body": _paragraphs(body_lines),
            "footers": footers,
            "has_blank_after_header": bool(rest) and not rest[0].strip(),
            "has_blank_before_footer": (
                footer_start is not None and footer_start > 0 and not rest[footer_start - 1].strip()
            ),
            "is_empty": not self.raw.strip(),
        }
        for name, value in values.items():
            object.__setattr__(self, name, value)

    @property
    def body_text(self) -> str | None:
        """Body paragraphs joined by blank lines, or None when there is no body."""
        return "\n\n".join(self.body) if self.body else None

    @property
    def is_conventional(self) -> bool:
        """True when the header matched ``type(scope)?: subject``."""
        return self.type is not None


def parse_message(raw: str) -> CommitMessage:
    """Parse raw commit text into a CommitMessage. Never raises."""
    return CommitMessage(raw)


def _parse_header(header: str) -> _HeaderParts:
    """Apply ``type(scope)?!?: subject`` in a single left-to-right scan.

    Any deviation (no colon-space, whitespace in type, unbalanced scope
    parentheses) leaves every field absent.
    """
    n = len(header)
    i = 0
    while i < n and header[i] not in "(:":
        i += 1
    if i == n:
        return _UNPARSED

    type_ = header[:i]
    scope: str | None = None
    breaking = False

    if header[i] == "(":
        depth = 0
        j = i
        while j < n:
            if header[j] == "(":
                depth += 1
            elif header[j] == ")":
                depth -= 1
                if depth == 0:
                    break
            j += 1
        if j == n:
            return _UNPARSED
        scope = header[i + 1 : j]
        i = j + 1
        if header.startswith("!", i):
            breaking = True
            i += 1
    elif type_.endswith("!"):
        type_ = type_[:-1]
        breaking = True

    if not header.startswith(": ", i):
        return _UNPARSED
    if not type_ or any(c.isspace() for c in type_):
        return _UNPARSED
    return _HeaderParts(type=type_, scope=scope, subject=header[i + 2 :], breaking=breaking)


def _find_footer_start(lines: list[str]) -> int | None:
    for idx, line in enumerate(lines):
        if _FOOTER_RE.match(line):
            return idx
    return None


def _parse_footers(lines: list[str]) -> tuple[Footer, ...]:
    """Every non-blank line from the first footer on belongs to the footer section.

    Lines that are not footer-shaped continue the previous footer's value.
    """
    footers: list[Footer] = []
    for line in lines:
        if not line.strip():
            continue
        match = _FOOTER_RE.match(line)
        if match:
            footers.append(Footer(match.group("token"), match.group("sep"), match.group("value")))
        else:
            prev = footers[-1]
            footers[-1] = Footer(prev.token, prev.separator, f"{prev.value}\n{line}")
    return tuple(footers)


def _paragraphs(lines: list[str]) -> tuple[str, ...]:
    paragraphs: list[str] = []
    current: list[str] = []
    for line in lines:
        if line.strip():
            current.append(line)
        elif current:
            paragraphs.append("\n".join(current))
            current = []
    if current:
        paragraphs.append("\n".join(current))
    return tuple(paragraphs)
