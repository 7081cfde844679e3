# Rona Git Module
# Git command execution, status parsing and exclusion-aware staging

from rona.git.operations import (
    commit,
    get_commit_count,
    get_current_branch,
    get_repo_root,
    git_status,
    is_git_repo,
    is_gpg_signing_available,
    push,
    require_repo_root,
    stage_file,
)
from rona.git.staging import PartitionResult, Stager, StagingResult, partition
from rona.git.status import FileState, StatusEntry, parse_status, read_status, stageable_entries

__all__ = [
    # Operations
    "get_repo_root",
    "require_repo_root",
    "is_git_repo",
    "git_status",
    "stage_file",
    "commit",
    "push",
    "get_current_branch",
    "get_commit_count",
    "is_gpg_signing_available",
    # Status
    "FileState",
    "StatusEntry",
    "parse_status",
    "read_status",
    "stageable_entries",
    # Staging
    "PartitionResult",
    "StagingResult",
    "Stager",
    "partition",
]
