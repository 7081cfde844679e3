# Rona Git Status
# Parsing of `git status --porcelain` into StatusEntry objects

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from rona.errors import GitError
from rona.git.operations import git_status


class FileState(str, Enum):
    """State of a file as reported by git status."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    COPIED = "copied"
    TYPE_CHANGED = "type_changed"
    UNMERGED = "unmerged"
    UNTRACKED = "untracked"
    IGNORED = "ignored"


_CODE_STATES = {
    "M": FileState.MODIFIED,
    "A": FileState.ADDED,
    "D": FileState.DELETED,
    "R": FileState.RENAMED,
    "C": FileState.COPIED,
    "T": FileState.TYPE_CHANGED,
    "U": FileState.UNMERGED,
}

_UNMERGED_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}

_QUOTED = r'"(?:[^"\\]|\\.)*"'
_RENAME_RE = re.compile(rf"^({_QUOTED}|.+?) -> ({_QUOTED}|.+)$")

_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    '"': '"',
    "\\": "\\",
}


@dataclass(frozen=True)
class StatusEntry:
    """One file reported by git status."""

    path: str
    index: str = " "
    worktree: str = " "
    original_path: Optional[str] = None

    @property
    def code(self) -> str:
        return self.index + self.worktree

    @property
    def state(self) -> FileState:
        if self.code == "??":
            return FileState.UNTRACKED
        if self.code == "!!":
            return FileState.IGNORED
        if self.code in _UNMERGED_CODES:
            return FileState.UNMERGED
        primary = self.index if self.index != " " else self.worktree
        return _CODE_STATES.get(primary, FileState.MODIFIED)

    @property
    def is_staged(self) -> bool:
        """True if the index column holds a change (conflicts excluded)."""
        return self.index not in (" ", "?", "!") and self.code not in _UNMERGED_CODES

    @property
    def is_staged_deletion(self) -> bool:
        return self.index == "D" and self.code not in _UNMERGED_CODES

    @property
    def can_stage(self) -> bool:
        """False for entries git add cannot act on (staged deletions, ignored files)."""
        if self.code == "!!":
            return False
        return not (self.index == "D" and self.worktree == " ")


def unquote_path(path: str) -> str:
    """
    Decode a path quoted by git (core.quotePath).

    Octal escapes are UTF-8 bytes, so the result is decoded as UTF-8.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    inner = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(inner):
        char = inner[i]
        if char != "\\" or i + 1 >= len(inner):
            out.extend(char.encode("utf-8"))
            i += 1
            continue

        nxt = inner[i + 1]
        if nxt in "01234567":
            digits = re.match(r"[0-7]{1,3}", inner[i + 1 :]).group(0)
            out.append(int(digits, 8) & 0xFF)
            i += 1 + len(digits)
        else:
            out.extend(_ESCAPES.get(nxt, nxt).encode("utf-8"))
            i += 2

    return out.decode("utf-8", errors="replace")


def parse_status_line(line: str) -> StatusEntry:
    """
    Parse one porcelain v1 line.

    Args:
        line: ``XY path`` or ``XY orig -> path``.

    Returns:
        StatusEntry for the line.

    Raises:
        GitError: If the line does not follow the porcelain format.
    """
    if len(line) < 4 or line[2] != " ":
        raise GitError(f"Invalid git status output format: {line}")

    index, worktree = line[0], line[1]
    rest = line[3:]
    original: Optional[str] = None

    if "R" in (index, worktree) or "C" in (index, worktree):
        match = _RENAME_RE.match(rest)
        if match:
            original = unquote_path(match.group(1))
            rest = match.group(2)

    return StatusEntry(path=unquote_path(rest), index=index, worktree=worktree, original_path=original)


def parse_status(output: str) -> list[StatusEntry]:
    """
    Parse full porcelain output.

    Args:
        output: Raw ``git status --porcelain`` text.

    Returns:
        Entries in git's output order.
    """
    return [parse_status_line(line) for line in output.splitlines() if line.strip()]


def read_status(path: Optional[Path] = None) -> list[StatusEntry]:
    """
    Query and parse repository status.

    Raises:
        NotARepository: Outside a repository.
    """
    return parse_status(git_status(path))


def stageable_entries(entries: Iterable[StatusEntry]) -> list[StatusEntry]:
    """Entries git add can act on, first occurrence of each path kept."""
    seen: set[str] = set()
    result: list[StatusEntry] = []
    for entry in entries:
        if not entry.can_stage or entry.path in seen:
            continue
        seen.add(entry.path)
        result.append(entry)
    return result


def staged_files(entries: Iterable[StatusEntry]) -> list[str]:
    """Paths with a staged change other than a deletion."""
    return [e.path for e in entries if e.is_staged and not e.is_staged_deletion]


def staged_deletions(entries: Iterable[StatusEntry]) -> list[str]:
    """Paths whose deletion is staged."""
    return [e.path for e in entries if e.is_staged_deletion]
