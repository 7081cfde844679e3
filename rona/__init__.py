"""rona - Git workflow helper.

Stages changes while excluding glob patterns, templates commit messages
from the repository status, and wraps git commit and git push.
"""

__version__ = "2.8.2"

__all__ = [
    "__version__",
    "ExclusionPattern",
    "StatusEntry",
    "FileState",
    "Stager",
    "PartitionResult",
    "StagingResult",
    "partition",
    "RonaConfig",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name == "ExclusionPattern":
        from rona.utils.patterns import ExclusionPattern

        return ExclusionPattern
    if name in ("StatusEntry", "FileState"):
        from rona.git import status

        return getattr(status, name)
    if name in ("Stager", "PartitionResult", "StagingResult", "partition"):
        from rona.git import staging

        return getattr(staging, name)
    if name == "RonaConfig":
        from rona.config.schema import RonaConfig

        return RonaConfig
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
