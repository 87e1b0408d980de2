"""Tests for GitOps changeset retrieval."""

from __future__ import annotations

from pathlib import Path

import pygit2
import pytest

from changecov.diff import changed_lines_from_text, parse_unified_diff
from changecov.git import GitOps, NotARepositoryError, RefNotFoundError, RemoteError


class TestGitOpsInit:
    def test_init_valid_repo(self, temp_repo: pygit2.Repository) -> None:
        ops = GitOps(temp_repo.workdir)
        assert ops.path == Path(temp_repo.workdir)

    def test_init_from_subdirectory(self, temp_repo: pygit2.Repository) -> None:
        ops = GitOps(Path(temp_repo.workdir) / "src")
        assert ops.path == Path(temp_repo.workdir)

    def test_init_not_a_repo(self, tmp_path: Path) -> None:
        with pytest.raises(NotARepositoryError):
            GitOps(tmp_path)

    def test_repo_property_exposes_pygit2(self, temp_repo: pygit2.Repository) -> None:
        assert isinstance(GitOps(temp_repo.workdir).repo, pygit2.Repository)


class TestResolve:
    def test_resolve_branch(self, temp_repo: pygit2.Repository) -> None:
        commit = GitOps(temp_repo.workdir).resolve_commit("main")
        assert commit.id == temp_repo.head.target

    def test_resolve_missing(self, temp_repo: pygit2.Repository) -> None:
        with pytest.raises(RefNotFoundError):
            GitOps(temp_repo.workdir).resolve_commit("no-such-branch")

    def test_resolve_base_falls_back_to_local(self, temp_repo: pygit2.Repository) -> None:
        """Given no origin remote, the local branch is used."""
        commit = GitOps(temp_repo.workdir).resolve_base("main", "origin")
        assert commit.id == temp_repo.head.target


class TestDiffAgainst:
    """Three-dot diff of HEAD against the base branch."""

    def test_changed_lines_since_base(self, feature_repo: pygit2.Repository) -> None:
        text = GitOps(feature_repo.workdir).diff_against("main")

        changed = changed_lines_from_text(text)

        assert changed.lines_for("src/math.ts") == frozenset({3, 4})
        assert changed.lines_for("src/new.ts") == frozenset({1})
        assert "src/new.test.ts" not in changed.paths

    def test_diff_has_zero_context(self, feature_repo: pygit2.Repository) -> None:
        text = GitOps(feature_repo.workdir).diff_against("main")
        hunks = {d.path: d.hunks for d in parse_unified_diff(text)}
        assert [h.new_count for h in hunks["src/math.ts"]] == [2]

    def test_no_changes(self, temp_repo: pygit2.Repository) -> None:
        assert GitOps(temp_repo.workdir).diff_against("main") == ""

    def test_base_commits_after_fork_are_ignored(self, feature_repo: pygit2.Repository) -> None:
        """Work landing on main after the fork point is not part of the changeset."""
        main = feature_repo.branches.local["main"]
        tree_builder = feature_repo.TreeBuilder(main.peel(pygit2.Commit).tree)
        blob = feature_repo.create_blob(b"export const other = 1;\n")
        tree_builder.insert("other.ts", blob, pygit2.GIT_FILEMODE_BLOB)
        sig = pygit2.Signature("Test User", "test@example.com")
        feature_repo.create_commit(
            "refs/heads/main", sig, sig, "Main moves on", tree_builder.write(), [main.target]
        )

        text = GitOps(feature_repo.workdir).diff_against("main")

        assert "other.ts" not in changed_lines_from_text(text).paths

    def test_deleted_files_excluded(self, feature_repo: pygit2.Repository) -> None:
        workdir = Path(feature_repo.workdir)
        (workdir / "src" / "math.ts").unlink()
        feature_repo.index.remove("src/math.ts")
        feature_repo.index.write()
        tree = feature_repo.index.write_tree()
        sig = pygit2.Signature("Test User", "test@example.com")
        feature_repo.create_commit(
            "HEAD", sig, sig, "Drop math", tree, [feature_repo.head.target]
        )

        text = GitOps(feature_repo.workdir).diff_against("main")

        assert [d.path for d in parse_unified_diff(text)] == ["src/new.test.ts", "src/new.ts"]

    def test_renamed_files_excluded(self, temp_repo: pygit2.Repository) -> None:
        """A pure move is a rename, not an added file full of changed lines."""
        head_commit = temp_repo.head.peel(pygit2.Commit)
        temp_repo.checkout(temp_repo.branches.local.create("move", head_commit))
        workdir = Path(temp_repo.workdir)
        content = (workdir / "src" / "math.ts").read_text()
        (workdir / "src" / "math.ts").unlink()
        temp_repo.index.remove("src/math.ts")
        (workdir / "src" / "calc.ts").write_text(content)
        temp_repo.index.add("src/calc.ts")
        temp_repo.index.write()
        sig = pygit2.Signature("Test User", "test@example.com")
        temp_repo.create_commit(
            "HEAD", sig, sig, "Move math", temp_repo.index.write_tree(), [temp_repo.head.target]
        )

        assert GitOps(temp_repo.workdir).diff_against("main") == ""

    def test_missing_base(self, temp_repo: pygit2.Repository) -> None:
        with pytest.raises(RefNotFoundError):
            GitOps(temp_repo.workdir).diff_against("develop")


class TestRemoteUrl:
    def test_configured_remote(self, temp_repo: pygit2.Repository) -> None:
        temp_repo.remotes.create("origin", "git@github.com:acme/widgets.git")
        assert GitOps(temp_repo.workdir).remote_url() == "git@github.com:acme/widgets.git"

    def test_missing_remote(self, temp_repo: pygit2.Repository) -> None:
        with pytest.raises(RemoteError):
            GitOps(temp_repo.workdir).remote_url("upstream")
