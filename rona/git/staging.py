# Rona Staging
# Exclusion-aware staging of the files reported by git status

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rona.errors import GitError, StagingFailed
from rona.git.operations import require_repo_root, stage_file
from rona.git.status import StatusEntry, read_status, stageable_entries
from rona.utils.patterns import ExclusionPattern, compile_patterns


@dataclass
class PartitionResult:
    """Entries split by exclusion patterns."""

    to_stage: list[StatusEntry] = field(default_factory=list)
    excluded: list[StatusEntry] = field(default_factory=list)
    unmatched_patterns: list[ExclusionPattern] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.to_stage) + len(self.excluded)

    def __iter__(self) -> Iterator[list[StatusEntry]]:
        """Unpack as ``to_stage, excluded``."""
        return iter((self.to_stage, self.excluded))


@dataclass
class StagingResult:
    """Outcome of an add-with-exclude run."""

    partition: PartitionResult
    staged: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def excluded_count(self) -> int:
        return len(self.partition.excluded)

    @property
    def deleted_count(self) -> int:
        return sum(1 for e in self.partition.to_stage if e.worktree == "D")


def partition(entries: Sequence[StatusEntry], patterns: Sequence[ExclusionPattern]) -> PartitionResult:
    """
    Split entries into those to stage and those excluded.

    An entry is excluded when its repository-relative path matches any
    pattern. Both lists keep the order of ``entries``.

    Args:
        entries: Status entries.
        patterns: Compiled exclusion patterns.

    Returns:
        PartitionResult covering every entry exactly once; unpacks as
        ``to_stage, excluded``.
    """
    result = PartitionResult()
    matched: set[int] = set()

    for entry in entries:
        hits = [i for i, pattern in enumerate(patterns) if pattern.matches(entry.path)]
        if hits:
            matched.update(hits)
            result.excluded.append(entry)
        else:
            result.to_stage.append(entry)

    result.unmatched_patterns = [p for i, p in enumerate(patterns) if i not in matched]
    return result


class Stager:
    """
    Stages every changed file except the ones matching exclusion patterns.

    Collaborators are injectable so the partition and abort policy can be
    exercised without a repository.
    """

    def __init__(
        self,
        repo_root: Optional[Path] = None,
        *,
        query_status: Optional[Callable[[], list[StatusEntry]]] = None,
        stage: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize stager.

        Args:
            repo_root: Repository root, git runs there. Resolved from the
                current directory on first use when not given.
            query_status: Returns current status entries.
            stage: Adds one path to the index.
        """
        self.repo_root = repo_root
        self._query_status = query_status or self._read_stageable
        self._stage = stage or self._stage_file

    def _read_stageable(self) -> list[StatusEntry]:
        if self.repo_root is None:
            self.repo_root = require_repo_root()
        return stageable_entries(read_status(self.repo_root))

    def _stage_file(self, file: str) -> None:
        stage_file(file, self.repo_root)

    def add_with_exclude(self, patterns: Sequence[str], *, dry_run: bool = False) -> StagingResult:
        """
        Stage all changes except excluded ones.

        Patterns are compiled before git is queried, so an invalid
        pattern leaves the index untouched.

        Args:
            patterns: Raw exclusion globs.
            dry_run: Only compute the partition.

        Returns:
            StagingResult with the partition and staged paths.

        Raises:
            InvalidPattern: For a malformed glob.
            NotARepository: Outside a repository.
            StagingFailed: When git add fails; later paths are not tried.
        """
        compiled = compile_patterns(patterns)
        entries = self._query_status()
        split = partition(entries, compiled)
        result = StagingResult(partition=split, dry_run=dry_run)

        if dry_run:
            return result

        for entry in split.to_stage:
            try:
                self._stage(entry.path)
            except GitError as e:
                raise StagingFailed(entry.path, e) from e
            result.staged.append(entry.path)

        return result
