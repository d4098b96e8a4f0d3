"""Run configuration for git-clean."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from git_clean.git import GitError, GitRepo


class DeleteMode(Enum):
    """Where merged branches get deleted."""

    LOCAL = "local"
    REMOTE = "remote"
    BOTH = "both"

    @classmethod
    def from_flags(cls, locals_only: bool, remotes_only: bool) -> "DeleteMode":
        """Pick the mode from the ``--locals``/``--remotes`` flags. ``--locals`` wins if both are set."""
        if locals_only:
            return cls.LOCAL
        if remotes_only:
            return cls.REMOTE
        return cls.BOTH

    def warning_message(self) -> str:
        """Header shown above the branches before asking for confirmation."""
        source = {
            DeleteMode.LOCAL: "locally:",
            DeleteMode.REMOTE: "remotely:",
            DeleteMode.BOTH: "locally and remotely:",
        }[self]
        return f"The following branches will be deleted {source}"


@dataclass(frozen=True)
class Options:
    """Configuration for a single git-clean run."""

    remote: str = "origin"
    base_branch: str = "main"
    ignored_branches: frozenset[str] = field(default_factory=frozenset)
    delete_mode: DeleteMode = DeleteMode.BOTH
    squashes: bool = False
    delete_unpushed: bool = False

    def __post_init__(self) -> None:
        """Validate and normalize values after initialization."""
        if not self.remote or not self.remote.strip():
            raise ValueError("remote cannot be empty")
        if not self.base_branch or not self.base_branch.strip():
            raise ValueError("base branch cannot be empty")
        # Frozen dataclass, so normalized values go through object.__setattr__
        object.__setattr__(self, "remote", self.remote.strip())
        object.__setattr__(self, "base_branch", self.base_branch.strip())
        object.__setattr__(
            self,
            "ignored_branches",
            frozenset(name.strip() for name in self.ignored_branches if name.strip()),
        )

    @classmethod
    def from_cli(
        cls,
        remote: str = "origin",
        base_branch: str = "main",
        ignore: Optional[Iterable[str]] = None,
        locals_only: bool = False,
        remotes_only: bool = False,
        squashes: bool = False,
        delete_unpushed: bool = False,
    ) -> "Options":
        """Build options from command line values."""
        return cls(
            remote=remote,
            base_branch=base_branch,
            ignored_branches=frozenset(ignore or ()),
            delete_mode=DeleteMode.from_flags(locals_only, remotes_only),
            squashes=squashes,
            delete_unpushed=delete_unpushed,
        )

    def validate(self, repo: GitRepo) -> None:
        """Check the options against the live repository.

        Raises:
            GitError: If the run cannot start from the current repository state
        """
        if repo.get_current_branch_name() != self.base_branch:
            raise GitError("Please make sure to run git-clean from your base branch (defaults to main).")

        if self.remote not in repo.get_remote_names():
            raise GitError("That remote doesn't exist, please make sure to use a valid remote (defaults to origin).")

        # The squash check hard-resets the working tree
        if self.squashes and repo.has_uncommitted_changes():
            raise GitError("Please commit or stash your changes before checking for squashed merges.")
