"""Git repository operations."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Tuple

from git import Git, GitCommandError, GitCommandNotFound, InvalidGitRepositoryError, NoSuchPathError, Repo

CURRENT_BRANCH_MARKERS = ("* ", "+ ")


class GitError(Exception):
    """Git operation error."""


def validate_git_installation() -> None:
    """Make sure the git executable can be spawned.

    Raises:
        GitError: If git is not installed or not on the PATH
    """
    message = "Unable to execute 'git' on your machine, please make sure it's installed and on your PATH"
    try:
        found = Git.refresh()
    except GitCommandNotFound as err:
        raise GitError(message) from err
    if not found:
        raise GitError(message)


def parse_branches(output: str) -> list[str]:
    """Parse the line-oriented output of ``git branch``.

    Blank lines, the current branch marker and symbolic refs such as
    ``origin/HEAD -> origin/main`` are dropped.
    """
    branches = []
    for line in output.splitlines():
        name = line.strip()
        for marker in CURRENT_BRANCH_MARKERS:
            if name.startswith(marker):
                name = name[len(marker) :].strip()
        if not name or " -> " in name:
            continue
        branches.append(name)
    return branches


class GitRepo:
    """Git repository operations."""

    def __init__(self, path: Path) -> None:
        """Initialize repository."""
        try:
            self.repo: Repo = Repo(path)
        except (GitCommandError, ValueError, InvalidGitRepositoryError, NoSuchPathError) as err:
            raise GitError(f"Failed to open repository: {err}") from err
        if self.repo.bare:
            raise GitError("Cannot operate on bare repository")

    def get_current_branch_name(self) -> str:
        """Get current branch name."""
        try:
            try:
                return self.repo.active_branch.name
            except TypeError:
                # Detached HEAD never matches a base branch
                return ""
        except (GitCommandError, ValueError) as err:
            raise GitError(f"Failed to get current branch: {err}") from err

    def get_remote_names(self) -> list[str]:
        """Get the names of all configured remotes."""
        return [remote.name for remote in self.repo.remotes]

    def has_uncommitted_changes(self) -> bool:
        """Check if there are any uncommitted changes in the repository."""
        try:
            return bool(self.repo.git.diff("HEAD", "--name-only").strip())
        except GitCommandError:
            # If we can't check, assume there are changes to be safe
            return True

    def local_branches(self) -> list[str]:
        """List local branches."""
        return self._branch_listing()

    def remote_branches(self) -> list[str]:
        """List remote-tracking branches as ``<remote>/<branch>``."""
        return self._branch_listing("-r")

    def merged_branches(self, ref: str) -> list[str]:
        """List local branches whose tips are reachable from ``ref``."""
        return self._branch_listing("--merged", ref)

    def _branch_listing(self, *args: str) -> list[str]:
        try:
            return parse_branches(self.repo.git.branch(*args))
        except GitCommandError as err:
            raise GitError(f"Failed to list branches: {err}") from err

    def update_remote(self, remote: str) -> None:
        """Update remote-tracking branches and prune the ones deleted upstream."""
        try:
            self.repo.git.remote("update", remote, "--prune")
        except GitCommandError as err:
            raise GitError(f"Failed to update remote {remote}: {err}") from err

    @contextmanager
    def checked_out(self, branch: str, restore_to: str) -> Iterator[None]:
        """Check out ``branch`` for the duration of the block.

        The working tree is hard-reset and ``restore_to`` is checked out again on
        every exit path, including a failed checkout of ``branch``.

        Raises:
            GitCommandError: If ``branch`` cannot be checked out
            GitError: If the working tree cannot be restored
        """
        try:
            self.repo.git.checkout(branch)
            yield
        finally:
            try:
                self.repo.git.reset("--hard")
                self.repo.git.checkout(restore_to)
            except GitCommandError as err:
                raise GitError(f"Failed to restore {restore_to} after checking {branch}: {err}") from err

    def pull_fast_forward(self, remote: str, branch: str) -> bool:
        """Fast-forward the checked out branch to ``<remote> <branch>``.

        Returns:
            bool: True if the pull succeeded, False if git exited with an error

        Raises:
            GitCommandNotFound: If the git process cannot be spawned
        """
        status, _, _ = self.repo.git.pull(
            "--ff-only",
            remote,
            branch,
            with_extended_output=True,
            with_exceptions=False,
        )
        return status == 0

    def delete_local(self, branches: Iterable[str]) -> Tuple[str, str]:
        """Force delete local branches in one ``git branch -D`` call.

        Returns:
            A tuple of (stdout, stderr).
        """
        _, stdout, stderr = self.repo.git.branch(
            "-D",
            *branches,
            with_extended_output=True,
            with_exceptions=False,
        )
        return stdout, stderr

    def delete_remote(self, remote: str, branches: Iterable[str]) -> str:
        """Delete branches on ``remote`` in one ``git push --delete`` call.

        Git reports push results on stderr, so that is what gets returned.
        """
        _, _, stderr = self.repo.git.push(
            remote,
            "--delete",
            *branches,
            with_extended_output=True,
            with_exceptions=False,
        )
        return stderr
