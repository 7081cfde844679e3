# Rona Commit Message
# Templating of commit_message.md from the repository status

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rona.errors import CommitMessageNotFound, GitError
from rona.git.files import COMMIT_MESSAGE_FILE, load_ignore_patterns
from rona.git.operations import get_commit_count, get_current_branch
from rona.git.status import read_status, staged_deletions, staged_files
from rona.utils.patterns import ExclusionPattern

COMMIT_TYPES = ("chore", "feat", "fix", "test")


@dataclass
class GeneratedMessage:
    """Result of writing commit_message.md."""

    path: Path
    header: str
    files: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    invalid_ignore_lines: list[str] = field(default_factory=list)


def format_branch_name(branch: str, commit_types: Sequence[str] = COMMIT_TYPES) -> str:
    """
    Strip commit type prefixes from a branch name.

    ``feat/login`` becomes ``login``.
    """
    formatted = branch
    for commit_type in commit_types:
        formatted = formatted.replace(f"{commit_type}/", "")
    return formatted


def build_header(commit_type: str, branch: str, commit_number: Optional[int] = None) -> str:
    """
    Build the first line of a commit message.

    Args:
        commit_type: One of COMMIT_TYPES.
        branch: Current branch name.
        commit_number: Number of the upcoming commit, None to omit it.

    Returns:
        ``[n] (type on branch)`` or ``(type on branch)``.
    """
    header = f"({commit_type} on {format_branch_name(branch)})"
    if commit_number is not None:
        header = f"[{commit_number}] {header}"
    return header


def render_commit_message(header: str, files: Iterable[str], deleted: Iterable[str]) -> str:
    """Render the editable message body with one bullet per file."""
    parts = [f"{header}\n\n\n"]
    for file in files:
        parts.append(f"- `{file}`:\n\n\t\n\n")
    for file in deleted:
        parts.append(f"- `{file}`: deleted\n\n")
    return "".join(parts)


def should_ignore_file(path: str, patterns: Iterable[ExclusionPattern]) -> bool:
    """Check a path, or any directory above it, against ignore patterns."""
    return any(p.matches_path_or_parent(path) for p in patterns)


def generate_commit_message(
    repo_root: Path,
    commit_type: str,
    *,
    no_commit_number: bool = False,
    summary: Optional[str] = None,
) -> GeneratedMessage:
    """
    Write commit_message.md for the staged changes.

    Args:
        repo_root: Repository root.
        commit_type: One of COMMIT_TYPES.
        no_commit_number: Leave the ``[n]`` prefix out.
        summary: One-line message; when given, the file holds only the
            header followed by it.

    Returns:
        GeneratedMessage describing what was written.

    Raises:
        NotARepository: Outside a repository.
        GitError: If the branch cannot be determined.
    """
    entries = read_status(repo_root)

    branch = get_current_branch(repo_root)
    if not branch:
        raise GitError("No branch found - cannot generate a commit message on a detached HEAD")

    commit_number = None if no_commit_number else get_commit_count(repo_root) + 1
    header = build_header(commit_type, branch, commit_number)
    message_path = repo_root / COMMIT_MESSAGE_FILE

    if summary is not None:
        message_path.write_text(f"{header} {summary.strip()}\n", encoding="utf-8")
        return GeneratedMessage(path=message_path, header=header)

    patterns, invalid = load_ignore_patterns(repo_root)
    files = [f for f in staged_files(entries) if not should_ignore_file(f, patterns)]
    deleted = staged_deletions(entries)

    message_path.write_text(render_commit_message(header, files, deleted), encoding="utf-8")

    return GeneratedMessage(
        path=message_path,
        header=header,
        files=files,
        deleted=deleted,
        invalid_ignore_lines=invalid,
    )


def read_commit_message(repo_root: Path) -> str:
    """
    Read commit_message.md from the project root.

    Raises:
        CommitMessageNotFound: If the file does not exist.
    """
    message_path = repo_root / COMMIT_MESSAGE_FILE
    if not message_path.exists():
        raise CommitMessageNotFound(str(message_path))
    return message_path.read_text(encoding="utf-8")


def filter_commit_args(args: Iterable[str]) -> list[str]:
    """Drop arguments that re-select rona's own commit command."""
    return [a for a in args if not a.startswith("-c") and not a.startswith("--commit")]
