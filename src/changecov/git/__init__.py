"""Git operations module."""

from changecov.git.errors import (
    GitError,
    NoMergeBaseError,
    NotARepositoryError,
    RefNotFoundError,
    RemoteError,
)
from changecov.git.ops import MEASURABLE_DELTAS, GitOps

__all__ = [
    # Main class
    "GitOps",
    "MEASURABLE_DELTAS",
    # Errors
    "GitError",
    "NoMergeBaseError",
    "NotARepositoryError",
    "RefNotFoundError",
    "RemoteError",
]
