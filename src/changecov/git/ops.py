"""Git read operations via pygit2 for changeset retrieval."""

from __future__ import annotations

from collections.abc import Collection
from pathlib import Path

import pygit2

from changecov.git.errors import (
    GitError,
    NoMergeBaseError,
    NotARepositoryError,
    RefNotFoundError,
    RemoteError,
)

# Deltas whose new side carries lines worth measuring (git diff --diff-filter=AM).
# Renames are detected first, so a moved file is RENAMED and left out.
MEASURABLE_DELTAS: frozenset[int] = frozenset(
    (
        pygit2.GIT_DELTA_ADDED,
        pygit2.GIT_DELTA_MODIFIED,
    )
)


class GitOps:
    """Thin wrapper around pygit2.Repository with cleaner error handling."""

    def __init__(self, repo_path: Path | str) -> None:
        self._path = Path(repo_path)
        try:
            discovered = pygit2.discover_repository(str(self._path))
        except (pygit2.GitError, KeyError) as e:
            raise NotARepositoryError(str(self._path)) from e
        if discovered is None:
            raise NotARepositoryError(str(self._path))
        try:
            self._repo = pygit2.Repository(discovered)
        except pygit2.GitError as e:
            raise NotARepositoryError(str(self._path)) from e

    @property
    def repo(self) -> pygit2.Repository:
        """Underlying pygit2 Repository."""
        return self._repo

    @property
    def path(self) -> Path:
        """Repository root path."""
        return Path(self._repo.workdir) if self._repo.workdir else self._path

    def resolve_commit(self, ref: str) -> pygit2.Commit:
        """Resolve a branch, tag, remote-tracking ref, or sha to a commit."""
        try:
            obj, _ = self._repo.resolve_refish(ref)
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise RefNotFoundError(ref) from e
        if isinstance(obj, pygit2.Tag):
            obj = obj.peel(pygit2.Commit)
        if not isinstance(obj, pygit2.Commit):
            raise RefNotFoundError(f"{ref} is not a commit")
        return obj

    def resolve_base(self, base_ref: str, remote: str = "origin") -> pygit2.Commit:
        """Prefer the remote-tracking copy of base_ref, then the local branch."""
        try:
            return self.resolve_commit(f"{remote}/{base_ref}")
        except RefNotFoundError:
            return self.resolve_commit(base_ref)

    def diff_against(
        self,
        base_ref: str,
        *,
        remote: str = "origin",
        target: str = "HEAD",
        statuses: Collection[int] = MEASURABLE_DELTAS,
    ) -> str:
        """Unified diff (zero context) from the merge base of base_ref and target.

        Equivalent to ``git diff <remote>/<base_ref>...<target> --unified=0
        --diff-filter=AM``. Returns an empty string when nothing changed.

        Raises:
            RefNotFoundError: base_ref or target cannot be resolved.
            NoMergeBaseError: the two commits share no history.
            GitError: pygit2 failed to produce the diff.
        """
        base = self.resolve_base(base_ref, remote)
        head = self.resolve_commit(target)

        merge_base = self._repo.merge_base(base.id, head.id)
        if merge_base is None:
            raise NoMergeBaseError(base_ref, target)

        try:
            diff = self._repo.diff(merge_base, head.id, context_lines=0)
            diff.find_similar()
        except pygit2.GitError as e:
            raise GitError(f"Failed to diff {base_ref}...{target}: {e}") from e

        parts = [
            patch.text
            for patch in diff
            if patch is not None and patch.delta.status in statuses and patch.text
        ]
        return "".join(parts)

    def remote_url(self, name: str = "origin") -> str:
        """URL of a configured remote."""
        if name not in [r.name for r in self._repo.remotes]:
            raise RemoteError(name, "Remote not found")
        url = self._repo.remotes[name].url
        if not url:
            raise RemoteError(name, "Remote has no URL")
        return url
