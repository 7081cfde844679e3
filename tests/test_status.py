# Tests for rona.git.status
# Porcelain parsing and status entry classification

from unittest.mock import patch

import pytest

from rona.errors import GitError, NotARepository
from rona.git.status import (
    FileState,
    StatusEntry,
    parse_status,
    parse_status_line,
    read_status,
    stageable_entries,
    staged_deletions,
    staged_files,
    unquote_path,
)

SAMPLE_STATUS = "\n".join(
    [
        " M src/git_related.rs",
        "M  src/main.rs",
        "AM src/utils.rs",
        "?? src/README.md",
        "UU src/bla.rs",
        "DD src/blo.rs",
        "R  src/old_file.rs -> src/new_file.rs",
        "C  src/bly.rs -> src/bly_copy.rs",
        "D  src/removed.rs",
        " D src/gone.rs",
        "T  src/link.rs",
    ]
)


class TestParseStatusLine:
    """Tests for parse_status_line."""

    def test_modified_in_worktree(self):
        entry = parse_status_line(" M src/main.rs")
        assert entry.path == "src/main.rs"
        assert entry.index == " "
        assert entry.worktree == "M"
        assert entry.state == FileState.MODIFIED
        assert not entry.is_staged

    def test_staged_addition(self):
        entry = parse_status_line("A  new.rs")
        assert entry.state == FileState.ADDED
        assert entry.is_staged

    def test_untracked(self):
        entry = parse_status_line("?? notes.txt")
        assert entry.state == FileState.UNTRACKED
        assert not entry.is_staged
        assert entry.can_stage

    def test_rename(self):
        entry = parse_status_line("R  src/old.rs -> src/new.rs")
        assert entry.path == "src/new.rs"
        assert entry.original_path == "src/old.rs"
        assert entry.state == FileState.RENAMED

    def test_arrow_without_rename_code(self):
        entry = parse_status_line("?? a -> b.txt")
        assert entry.path == "a -> b.txt"
        assert entry.original_path is None

    def test_quoted_path(self):
        entry = parse_status_line('?? "with space.txt"')
        assert entry.path == "with space.txt"

    def test_quoted_rename(self):
        entry = parse_status_line('R  "old name.rs" -> "new name.rs"')
        assert entry.original_path == "old name.rs"
        assert entry.path == "new name.rs"

    def test_unmerged(self):
        assert parse_status_line("UU conflict.rs").state == FileState.UNMERGED
        assert parse_status_line("AA both.rs").state == FileState.UNMERGED

    def test_type_changed(self):
        assert parse_status_line("T  link").state == FileState.TYPE_CHANGED

    @pytest.mark.parametrize("line", ["M", "MM", "MMfile", "XYZ path"])
    def test_malformed_line(self, line):
        with pytest.raises(GitError, match="Invalid git status output"):
            parse_status_line(line)


class TestUnquotePath:
    """Tests for unquote_path."""

    def test_plain(self):
        assert unquote_path("src/main.rs") == "src/main.rs"

    def test_escaped_quote(self):
        assert unquote_path('"a\\"b.txt"') == 'a"b.txt'

    def test_tab(self):
        assert unquote_path('"a\\tb"') == "a\tb"

    def test_octal_utf8(self):
        assert unquote_path('"caf\\303\\251.txt"') == "café.txt"


class TestParseStatus:
    """Tests for parse_status."""

    def test_keeps_order(self):
        entries = parse_status(SAMPLE_STATUS)
        assert [e.path for e in entries][:3] == ["src/git_related.rs", "src/main.rs", "src/utils.rs"]
        assert len(entries) == 11

    def test_skips_blank_lines(self):
        assert parse_status("\n M a.rs\n\n") == [StatusEntry("a.rs", " ", "M")]

    def test_empty_output(self):
        assert parse_status("") == []


class TestStagedSelections:
    """Tests for staged_files and staged_deletions."""

    def test_staged_files(self):
        entries = parse_status(SAMPLE_STATUS)
        assert staged_files(entries) == [
            "src/main.rs",
            "src/utils.rs",
            "src/new_file.rs",
            "src/bly_copy.rs",
            "src/link.rs",
        ]

    def test_staged_deletions(self):
        entries = parse_status(SAMPLE_STATUS)
        assert staged_deletions(entries) == ["src/removed.rs"]


class TestStageableEntries:
    """Tests for stageable_entries."""

    def test_drops_staged_deletions(self):
        entries = parse_status(SAMPLE_STATUS)
        paths = [e.path for e in stageable_entries(entries)]
        assert "src/removed.rs" not in paths
        assert "src/gone.rs" in paths

    def test_deduplicates(self):
        entries = [StatusEntry("a.rs", " ", "M"), StatusEntry("a.rs", "M", " ")]
        assert stageable_entries(entries) == [StatusEntry("a.rs", " ", "M")]

    def test_drops_ignored(self):
        assert stageable_entries([StatusEntry("x.log", "!", "!")]) == []


class TestReadStatus:
    """Tests for read_status."""

    @patch("rona.git.status.git_status", return_value="?? a.txt\n M b.txt\n")
    def test_parses_git_output(self, mock_status):
        entries = read_status()
        assert [e.path for e in entries] == ["a.txt", "b.txt"]

    @patch("rona.git.status.git_status", side_effect=NotARepository())
    def test_propagates_not_a_repository(self, mock_status):
        with pytest.raises(NotARepository):
            read_status()
