# Rona Git Operations
# Git command execution and repository queries

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from rona.errors import GitError, NotARepository

_NOT_A_REPO_MARKER = "not a git repository"


def _run_git(
    *args: str,
    cwd: Optional[Path] = None,
    check: bool = True,
    capture_output: bool = True,
) -> subprocess.CompletedProcess[str]:
    """
    Run a git command.

    Args:
        *args: Git command arguments.
        cwd: Working directory.
        check: Whether to raise on non-zero exit.
        capture_output: Whether to capture stdout/stderr.

    Returns:
        CompletedProcess with result.

    Raises:
        NotARepository: If git reports that cwd is outside a repository.
        GitError: If command fails and check is True.
    """
    cmd = ["git", *args]
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            check=False,
            capture_output=capture_output,
            text=True,
        )
    except FileNotFoundError:
        raise GitError("git command not found. Is git installed?")

    if check and result.returncode != 0:
        stderr = result.stderr.strip() if result.stderr else ""
        if _NOT_A_REPO_MARKER in stderr.lower():
            raise NotARepository(stderr=stderr)
        raise GitError(
            f"Git command failed: {' '.join(cmd)}",
            returncode=result.returncode,
            stderr=stderr,
        )
    return result


def get_repo_root(path: Optional[Path] = None) -> Optional[Path]:
    """
    Get the root directory of a git repository.

    Args:
        path: Starting path (defaults to current directory).

    Returns:
        Path to repo root, or None if not in a repo.
    """
    try:
        return require_repo_root(path)
    except GitError:
        return None


def require_repo_root(path: Optional[Path] = None) -> Path:
    """
    Get the repository root or fail.

    Raises:
        NotARepository: If path is not inside a work tree.
    """
    try:
        result = _run_git("rev-parse", "--show-toplevel", cwd=path)
    except NotARepository:
        raise
    except GitError as e:
        raise NotARepository(stderr=e.stderr) from e

    root = result.stdout.strip()
    if not root:
        raise NotARepository()
    return Path(root)


def is_git_repo(path: Optional[Path] = None) -> bool:
    """Check if path is within a git repository."""
    return get_repo_root(path) is not None


def git_status(path: Optional[Path] = None) -> str:
    """
    Get porcelain status output, untracked files listed individually.

    Args:
        path: Repository path.

    Returns:
        Raw ``git status --porcelain -u`` output.

    Raises:
        NotARepository: Outside a repository.
    """
    result = _run_git("status", "--porcelain", "-u", cwd=path)
    return result.stdout


def get_current_branch(path: Optional[Path] = None) -> Optional[str]:
    """
    Get current branch name.

    Args:
        path: Repository path.

    Returns:
        Branch name or None if detached.
    """
    try:
        result = _run_git("branch", "--show-current", cwd=path)
    except GitError:
        return None
    branch = result.stdout.strip()
    return branch or None


def get_commit_count(path: Optional[Path] = None) -> int:
    """
    Count commits reachable from HEAD.

    Falls back to counting all refs, which also works in a repository
    without any commit yet.

    Args:
        path: Repository path.

    Returns:
        Number of commits.

    Raises:
        GitError: If neither count can be obtained.
    """
    result = _run_git("rev-list", "--count", "HEAD", cwd=path, check=False)
    if result.returncode != 0:
        result = _run_git("rev-list", "--count", "--all", cwd=path)

    output = result.stdout.strip()
    try:
        return int(output)
    except ValueError:
        raise GitError(f"Invalid commit count: {output}")


def get_git_path(name: str, path: Optional[Path] = None) -> Path:
    """
    Resolve a path inside the git directory (handles worktrees and submodules).

    Args:
        name: Path relative to the git dir, e.g. ``info/exclude``.
        path: Repository path.

    Returns:
        Absolute path.
    """
    result = _run_git("rev-parse", "--git-path", name, cwd=path)
    git_path = Path(result.stdout.strip())
    if not git_path.is_absolute():
        git_path = (path or Path.cwd()) / git_path
    return git_path


def stage_file(file: str, path: Optional[Path] = None) -> None:
    """
    Add a single path to the index.

    Args:
        file: Repository-relative path.
        path: Repository root.

    Raises:
        GitError: If git refuses the path.
    """
    _run_git("add", "--", file, cwd=path)


def is_gpg_signing_available(path: Optional[Path] = None) -> bool:
    """
    Check whether commits can be signed.

    Looks for a configured signing key known to gpg, then for a
    configured gpg program, then for a plain ``gpg`` on PATH.

    Returns:
        True if signing should work.
    """
    key = _run_git("config", "--get", "user.signingkey", cwd=path, check=False)
    if key.returncode == 0 and key.stdout.strip():
        return _command_succeeds(["gpg", "--list-secret-keys", key.stdout.strip()])

    program = _run_git("config", "--get", "gpg.program", cwd=path, check=False)
    if program.returncode == 0 and program.stdout.strip():
        return _command_succeeds([program.stdout.strip(), "--version"])

    return _command_succeeds(["gpg", "--version"])


def _command_succeeds(cmd: list[str]) -> bool:
    try:
        result = subprocess.run(cmd, check=False, capture_output=True, text=True)
    except (FileNotFoundError, PermissionError):
        return False
    return result.returncode == 0


def commit(
    message: str,
    args: Sequence[str] = (),
    path: Optional[Path] = None,
    *,
    sign: bool = False,
) -> str:
    """
    Create a commit.

    Args:
        message: Commit message.
        args: Extra arguments passed through to ``git commit``.
        path: Repository path.
        sign: Add ``-S``.

    Returns:
        Git's output.

    Raises:
        GitError: If the commit fails.
    """
    cmd = ["commit"]
    if sign:
        cmd.append("-S")
    cmd.extend(["-m", message])
    cmd.extend(args)

    result = _run_git(*cmd, cwd=path)
    return result.stdout.strip()


def push(args: Sequence[str] = (), path: Optional[Path] = None) -> str:
    """
    Push commits to remote.

    Args:
        args: Extra arguments passed through to ``git push``.
        path: Repository path.

    Returns:
        Git's output (push reports progress on stderr).

    Raises:
        GitError: If the push fails.
    """
    result = _run_git("push", *args, cwd=path)
    output = "\n".join(part.strip() for part in (result.stdout, result.stderr) if part and part.strip())
    return output
