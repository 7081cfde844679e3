# Rona Test Fixtures
# Pytest fixtures for rona tests

import shutil
import subprocess
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from rona.git.status import StatusEntry


@pytest.fixture
def require_git() -> None:
    """Skip when no git executable is available."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("RONA_CONFIG", raising=False)
    return home


@pytest.fixture
def config_path(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point RONA_CONFIG at a file that does not exist yet."""
    path = temp_dir / "config" / "config.yaml"
    monkeypatch.setenv("RONA_CONFIG", str(path))
    return path


@pytest.fixture
def sample_entries() -> list[StatusEntry]:
    """Status entries of a small Rust project."""
    return [
        StatusEntry("src/main.rs", " ", "M"),
        StatusEntry("README.md", "M", " "),
        StatusEntry("target/debug/build", "?", "?"),
        StatusEntry("target_notes.txt", "?", "?"),
        StatusEntry("scratch.tmp", "?", "?"),
        StatusEntry("old.txt", " ", "D"),
    ]


@pytest.fixture
def git_repo(temp_dir: Path, require_git: None) -> Path:
    """Create a real git repository with one commit on branch main."""
    repo = temp_dir / "repo"
    repo.mkdir()

    def git(*args: str) -> None:
        subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True, text=True)

    git("init", "-q")
    git("symbolic-ref", "HEAD", "refs/heads/main")
    git("config", "user.email", "dev@example.com")
    git("config", "user.name", "Dev")
    git("config", "commit.gpgsign", "false")

    (repo / "README.md").write_text("# repo\n", encoding="utf-8")
    git("add", "README.md")
    git("commit", "-q", "-m", "initial")

    return repo
