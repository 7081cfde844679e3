# Rona Errors
# Exception hierarchy shared by the CLI, config and git layers

from typing import Optional


class RonaError(Exception):
    """Base class for every error rona reports to the user."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigError(RonaError):
    """Exception raised for configuration file errors."""


class ConfigNotFound(ConfigError):
    """The configuration file does not exist."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        location = f" at {path}" if path else ""
        super().__init__(
            f"Configuration file not found{location}\nRun 'rona init [editor]' to create one."
        )


class ConfigAlreadyExists(ConfigError):
    """The configuration file already exists."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        location = f" at {path}" if path else ""
        super().__init__(
            f"Configuration file already exists{location}\nUse 'rona set-editor <editor>' to change it."
        )


class InvalidConfig(ConfigError):
    """The configuration file could not be parsed or validated."""


class GitError(RonaError):
    """Exception raised for git operation errors."""

    def __init__(self, message: str, returncode: int = 1, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class NotARepository(GitError):
    """Raised when a command runs outside of a git repository."""

    def __init__(self, stderr: str = ""):
        super().__init__(
            "Not in a git repository - please run this command from within a git repository",
            returncode=128,
            stderr=stderr,
        )


class StagingFailed(GitError):
    """Raised when a single path could not be added to the index.

    Attributes:
        path: Repository-relative path that failed.
        cause: Underlying git error.
    """

    def __init__(self, path: str, cause: GitError):
        self.path = path
        self.cause = cause
        super().__init__(
            f"Failed to stage '{path}': {cause.stderr or cause.message}",
            returncode=cause.returncode,
            stderr=cause.stderr,
        )


class CommitMessageNotFound(GitError):
    """commit_message.md is missing from the project root."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        super().__init__("Commit message file 'commit_message.md' not found - run 'rona generate' first")


class InvalidPattern(RonaError):
    """Raised for a malformed exclusion glob."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern '{pattern}': {reason}")
