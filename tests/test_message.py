# Tests for rona.git.message
# Commit message templating

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from rona.errors import CommitMessageNotFound, GitError
from rona.git.message import (
    build_header,
    filter_commit_args,
    format_branch_name,
    generate_commit_message,
    read_commit_message,
    render_commit_message,
    should_ignore_file,
)
from rona.git.status import parse_status
from rona.utils.patterns import compile_patterns

STATUS = "M  src/main.rs\nA  Cargo.lock\nR  old.rs -> new.rs\nD  removed.rs\n M unstaged.rs\n?? new.txt\n"


class TestHeader:
    """Tests for branch formatting and header building."""

    def test_strips_type_prefix(self):
        assert format_branch_name("feat/login") == "login"
        assert format_branch_name("fix/chore/x") == "x"
        assert format_branch_name("main") == "main"

    def test_with_number(self):
        assert build_header("feat", "feat/login", 42) == "[42] (feat on login)"

    def test_without_number(self):
        assert build_header("chore", "main") == "(chore on main)"


class TestRender:
    """Tests for render_commit_message."""

    def test_layout(self):
        text = render_commit_message("[1] (fix on main)", ["a.rs"], ["b.rs"])
        assert text == "[1] (fix on main)\n\n\n- `a.rs`:\n\n\t\n\n- `b.rs`: deleted\n\n"

    def test_header_only(self):
        assert render_commit_message("(chore on main)", [], []) == "(chore on main)\n\n\n"


class TestShouldIgnoreFile:
    """Tests for should_ignore_file."""

    def test_file_and_directory(self):
        patterns = compile_patterns(["*.lock", "vendor"])
        assert should_ignore_file("Cargo.lock", patterns)
        assert should_ignore_file("vendor/lib/a.c", patterns)
        assert not should_ignore_file("src/main.rs", patterns)


class TestGenerateCommitMessage:
    """Tests for generate_commit_message with git mocked out."""

    @pytest.fixture
    def mocked_git(self):
        with patch("rona.git.message.read_status", return_value=parse_status(STATUS)), patch(
            "rona.git.message.get_current_branch", return_value="feat/parser"
        ), patch("rona.git.message.get_commit_count", return_value=6) as count:
            yield count

    def test_writes_template(self, temp_dir: Path, mocked_git):
        (temp_dir / ".commitignore").write_text("*.lock\n", encoding="utf-8")

        generated = generate_commit_message(temp_dir, "feat")

        content = (temp_dir / "commit_message.md").read_text(encoding="utf-8")
        assert generated.header == "[7] (feat on parser)"
        assert generated.files == ["src/main.rs", "new.rs"]
        assert generated.deleted == ["removed.rs"]
        assert content.startswith("[7] (feat on parser)\n\n\n")
        assert "- `src/main.rs`:\n\n\t\n\n" in content
        assert "- `removed.rs`: deleted\n\n" in content
        assert "Cargo.lock" not in content
        assert "unstaged.rs" not in content

    def test_no_commit_number(self, temp_dir: Path, mocked_git):
        generated = generate_commit_message(temp_dir, "fix", no_commit_number=True)
        assert generated.header == "(fix on parser)"
        mocked_git.assert_not_called()

    def test_summary(self, temp_dir: Path, mocked_git):
        generated = generate_commit_message(temp_dir, "chore", summary="  bump deps  ")
        assert (temp_dir / "commit_message.md").read_text(encoding="utf-8") == "[7] (chore on parser) bump deps\n"
        assert generated.files == []

    def test_reports_invalid_ignore_lines(self, temp_dir: Path, mocked_git):
        (temp_dir / ".gitignore").write_text("[oops\n", encoding="utf-8")
        generated = generate_commit_message(temp_dir, "feat")
        assert generated.invalid_ignore_lines == ["[oops"]

    def test_detached_head(self, temp_dir: Path):
        with patch("rona.git.message.read_status", return_value=[]), patch(
            "rona.git.message.get_current_branch", return_value=None
        ):
            with pytest.raises(GitError, match="No branch found"):
                generate_commit_message(temp_dir, "feat")


class TestReadCommitMessage:
    """Tests for read_commit_message."""

    def test_missing(self, temp_dir: Path):
        with pytest.raises(CommitMessageNotFound):
            read_commit_message(temp_dir)

    def test_reads(self, temp_dir: Path):
        (temp_dir / "commit_message.md").write_text("hello\n", encoding="utf-8")
        assert read_commit_message(temp_dir) == "hello\n"


class TestFilterCommitArgs:
    """Tests for filter_commit_args."""

    def test_drops_commit_selectors(self):
        assert filter_commit_args(["-c", "--commit", "--amend", "--no-verify"]) == ["--amend", "--no-verify"]


@pytest.mark.usefixtures("require_git")
class TestGenerateInRepository:
    """generate_commit_message against a real repository."""

    def test_header_counts_next_commit(self, git_repo: Path):
        (git_repo / "README.md").write_text("# changed\n", encoding="utf-8")

        subprocess.run(["git", "add", "README.md"], cwd=git_repo, check=True, capture_output=True)

        generated = generate_commit_message(git_repo, "fix")

        assert generated.header == "[2] (fix on main)"
        assert generated.files == ["README.md"]
