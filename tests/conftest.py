"""Test configuration and fixtures."""

from pathlib import Path
from typing import Callable, Generator

import pytest
from git import Actor, Repo

AUTHOR = Actor("Test User", "test@example.com")


def commit_file(repo: Repo, name: str, content: str, message: str) -> None:
    """Write a file in the working tree and commit it."""
    test_file = Path(repo.working_tree_dir) / name
    test_file.parent.mkdir(parents=True, exist_ok=True)
    test_file.write_text(content)
    repo.index.add([name])
    repo.index.commit(message, author=AUTHOR, committer=AUTHOR)


@pytest.fixture
def test_env(tmp_path: Path) -> Generator[tuple[Path, Path], None, None]:
    """Create a test environment with local and remote repositories.

    The local repository is on ``main``, which is pushed to a bare ``origin``.

    Returns:
        Tuple of (local_repo_path, remote_repo_path)
    """
    remote_path = tmp_path / "remote"
    local_path = tmp_path / "local"
    remote_path.mkdir()
    local_path.mkdir()

    Repo.init(remote_path, bare=True)
    local_repo = Repo.init(local_path)

    local_repo.config_writer().set_value("user", "name", AUTHOR.name).release()
    local_repo.config_writer().set_value("user", "email", AUTHOR.email).release()

    commit_file(local_repo, "README.md", "# Test Repository", "Initial commit")

    # Whatever init.defaultBranch is, the base branch is main
    local_repo.git.branch("-M", "main")

    origin = local_repo.create_remote("origin", url=str(remote_path))
    origin.push("main")
    local_repo.heads.main.set_tracking_branch(origin.refs.main)

    yield local_path, remote_path


@pytest.fixture
def local_repo(test_env: tuple[Path, Path]) -> Repo:
    """GitPython handle on the local repository."""
    local_path, _ = test_env
    return Repo(local_path)


@pytest.fixture
def create_branch(local_repo: Repo) -> Callable[..., None]:
    """Return a helper that creates a branch with one commit off main.

    The helper leaves ``main`` checked out.
    """

    def _create_branch(name: str, push: bool = False, merge: bool = False) -> None:
        local_repo.git.checkout("main")
        local_repo.git.checkout("-b", name)
        commit_file(local_repo, f"{name.replace('/', '_')}.txt", f"{name} content", f"Add {name}")

        if push:
            local_repo.git.push("origin", name)

        local_repo.git.checkout("main")

        if merge:
            local_repo.git.merge(name, "--no-ff", "-m", f"Merge {name}")
            local_repo.git.push("origin", "main")

    return _create_branch


@pytest.fixture
def commit() -> Callable[[Repo, str, str, str], None]:
    """Return the helper that writes and commits a file."""
    return commit_file
