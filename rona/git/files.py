# Rona Project Files
# commit_message.md / .commitignore creation and ignore-file parsing

from collections.abc import Sequence
from pathlib import Path

from rona.errors import InvalidPattern
from rona.git.operations import get_git_path
from rona.utils.patterns import ExclusionPattern

COMMIT_MESSAGE_FILE = "commit_message.md"
COMMITIGNORE_FILE = ".commitignore"
GITIGNORE_FILE = ".gitignore"

EXCLUDE_MARKER = "# Added by rona"


def add_to_git_exclude(paths: Sequence[str], repo_root: Path) -> list[str]:
    """
    Append paths to .git/info/exclude unless already listed.

    Args:
        paths: Entries to add.
        repo_root: Repository root.

    Returns:
        Entries that were actually written.
    """
    exclude_file = get_git_path("info/exclude", repo_root)
    exclude_file.parent.mkdir(parents=True, exist_ok=True)

    content = exclude_file.read_text(encoding="utf-8") if exclude_file.exists() else ""
    existing = {
        line.strip() for line in content.splitlines() if line.strip() and not line.startswith("#")
    }

    to_add = [p for p in paths if p not in existing]
    if not to_add:
        return []

    block = [] if EXCLUDE_MARKER in content else [EXCLUDE_MARKER]
    block.extend(to_add)

    prefix = ""
    if content and not content.endswith("\n"):
        prefix += "\n"
    if content and EXCLUDE_MARKER not in content:
        prefix += "\n"

    with open(exclude_file, "a", encoding="utf-8") as f:
        f.write(prefix + "\n".join(block) + "\n")

    return to_add


def create_needed_files(repo_root: Path) -> list[Path]:
    """
    Create commit_message.md and .commitignore at the project root.

    Both are also hidden from git through .git/info/exclude.

    Args:
        repo_root: Repository root.

    Returns:
        Files that were created.
    """
    created: list[Path] = []
    for name in (COMMIT_MESSAGE_FILE, COMMITIGNORE_FILE):
        file_path = repo_root / name
        if not file_path.exists():
            file_path.touch()
            created.append(file_path)

    add_to_git_exclude([COMMIT_MESSAGE_FILE, COMMITIGNORE_FILE], repo_root)
    return created


def read_ignore_lines(file_path: Path) -> list[str]:
    """
    Read pattern lines from an ignore file.

    Blank lines, comments and negations are skipped.
    """
    if not file_path.exists():
        return []

    lines = []
    for raw in file_path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or line.startswith("!"):
            continue
        lines.append(line)
    return lines


def load_ignore_patterns(repo_root: Path) -> tuple[list[ExclusionPattern], list[str]]:
    """
    Compile the .commitignore and .gitignore entries of a project.

    Args:
        repo_root: Repository root.

    Returns:
        Tuple of (compiled patterns, lines that are not valid globs).
    """
    patterns: list[ExclusionPattern] = []
    invalid: list[str] = []

    for name in (COMMITIGNORE_FILE, GITIGNORE_FILE):
        for line in read_ignore_lines(repo_root / name):
            try:
                patterns.append(ExclusionPattern.compile(line))
            except InvalidPattern:
                invalid.append(line)

    return patterns, invalid
