"""Test fixtures for git module."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pygit2
import pytest


def commit_files(
    repo: pygit2.Repository,
    files: dict[str, str],
    message: str,
    ref: str = "HEAD",
) -> pygit2.Oid:
    """Write files into the workdir and commit them on top of ref."""
    workdir = Path(repo.workdir)
    for rel, content in files.items():
        path = workdir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        repo.index.add(rel)
    repo.index.write()
    tree = repo.index.write_tree()
    sig = pygit2.Signature("Test User", "test@example.com")
    parents = [] if repo.head_is_unborn else [repo.head.target]
    return repo.create_commit(ref, sig, sig, message, tree, parents)


@pytest.fixture
def temp_repo(tmp_path: Path) -> Generator[pygit2.Repository, None, None]:
    """Create a temporary git repository with initial commit on main."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()

    repo = pygit2.init_repository(str(repo_path), initial_head="main")
    repo.config["user.name"] = "Test User"
    repo.config["user.email"] = "test@example.com"

    commit_files(
        repo,
        {
            "README.md": "# Test Repo\n",
            "src/math.ts": "export const one = 1;\nexport const two = 2;\n",
        },
        "Initial commit",
    )

    yield repo


@pytest.fixture
def feature_repo(temp_repo: pygit2.Repository) -> pygit2.Repository:
    """Repository checked out on a feature branch with one commit past main.

    The feature commit appends two lines to src/math.ts, adds src/new.ts and
    src/new.test.ts, and deletes nothing.
    """
    head_commit = temp_repo.head.peel(pygit2.Commit)
    branch = temp_repo.branches.local.create("feature", head_commit)
    temp_repo.checkout(branch)

    commit_files(
        temp_repo,
        {
            "src/math.ts": (
                "export const one = 1;\nexport const two = 2;\n"
                "export const three = 3;\nexport const four = 4;\n"
            ),
            "src/new.ts": "export const a = 1;\n",
            "src/new.test.ts": "test('a', () => {});\n",
        },
        "Feature work",
    )
    return temp_repo
