"""Delete classified branches and summarize what happened."""

import logging
from typing import Sequence

from git_clean.git import GitRepo
from git_clean.options import DeleteMode, Options

logger = logging.getLogger(__name__)

MISSING_REMOTE_PREFIX = "error: unable to delete '"
MISSING_REMOTE_SUFFIX = "': remote ref does not exist"
DELETED_REMOTE_MARKER = " - [deleted]"


def delete_local_branches(repo: GitRepo, branches: Sequence[str]) -> str:
    """Force delete ``branches`` locally in one batch.

    Failures reported by git (for example a branch that no longer exists) are
    kept in the report after the successful deletions.
    """
    if not branches:
        return ""

    logger.debug("Deleting %d local branch(es)", len(branches))
    stdout, stderr = repo.delete_local(branches)
    errors = [line.strip() for line in stderr.splitlines() if line.strip().startswith("error:")]
    return "\n".join(line for line in [stdout.strip(), *errors] if line)


def remote_deletion_targets(remote_listing: Sequence[str], branches: Sequence[str], options: Options) -> list[str]:
    """Branches that exist on the remote and were classified as deletable."""
    prefix = f"{options.remote}/"
    on_remote = {name[len(prefix) :] for name in remote_listing if name.startswith(prefix)}
    return [branch for branch in branches if branch in on_remote]


def interpret_remote_output(stderr: str) -> str:
    """Keep the per-branch lines of ``git push --delete`` output."""
    output = []
    for line in stderr.splitlines():
        if MISSING_REMOTE_PREFIX in line:
            branch = line.split(MISSING_REMOTE_PREFIX, 1)[1].strip()
            if branch.endswith(MISSING_REMOTE_SUFFIX):
                branch = branch[: -len(MISSING_REMOTE_SUFFIX)]
            output.append(f"{branch} was already deleted in the remote.")
        elif DELETED_REMOTE_MARKER in line:
            output.append(line)
    return "\n".join(output)


def delete_remote_branches(repo: GitRepo, branches: Sequence[str], options: Options) -> str:
    """Delete the classified branches that still exist on the remote, in one push."""
    if not branches:
        return ""

    targets = remote_deletion_targets(repo.remote_branches(), branches, options)
    if not targets:
        logger.debug("None of the branches exist on %s", options.remote)
        return ""

    logger.debug("Deleting %d branch(es) on %s", len(targets), options.remote)
    return interpret_remote_output(repo.delete_remote(options.remote, targets))


def delete_branches(repo: GitRepo, branches: Sequence[str], options: Options) -> str:
    """Delete ``branches`` according to the configured delete mode.

    Returns:
        A report of the deletions, empty if there was nothing to delete.
    """
    if not branches:
        return ""

    if options.delete_mode is DeleteMode.LOCAL:
        return delete_local_branches(repo, branches)
    if options.delete_mode is DeleteMode.REMOTE:
        return delete_remote_branches(repo, branches, options)

    remote_output = delete_remote_branches(repo, branches, options)
    local_output = delete_local_branches(repo, branches)
    return "\n".join(["Remote:", remote_output, "\nLocal:", local_output])
