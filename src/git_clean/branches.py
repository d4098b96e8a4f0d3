"""Decide which local branches are safe to delete."""

import logging
from typing import Callable, Iterable

from git import GitCommandError, GitCommandNotFound

from git_clean.git import GitRepo
from git_clean.options import Options

logger = logging.getLogger(__name__)


def candidate_branches(local: Iterable[str], options: Options) -> list[str]:
    """Local branches considered for deletion: everything but the base branch and ignored branches."""
    return [branch for branch in local if branch != options.base_branch and branch not in options.ignored_branches]


def tracked_remote_branches(remote: Iterable[str], options: Options) -> list[str]:
    """Remote branches with ``HEAD`` and the base branch filtered out."""
    return [
        branch
        for branch in remote
        if branch.rsplit("/", 1)[-1] != "HEAD" and branch.split("/", 1)[-1] != options.base_branch
    ]


def classify(
    local: Iterable[str],
    remote: Iterable[str],
    merged: Iterable[str],
    options: Options,
    squash_check: Callable[[str], bool],
) -> list[str]:
    """Classify local branches as deletable.

    For each candidate branch the first matching rule wins:

    1. With ``delete_unpushed``, a branch without ``<remote>/<branch>`` is deletable.
    2. A branch listed by ``git branch --merged`` is deletable.
    3. With ``squashes``, a branch is deletable when ``squash_check`` says so.

    Anything else is kept.

    Args:
        local: Local branch listing
        remote: Remote branch listing, namespaced as ``<remote>/<branch>``
        merged: Branches merged into the base branch
        options: Run configuration
        squash_check: Called with a branch name for rule 3 only

    Returns:
        Deletable branches in local listing order
    """
    remote_set = set(remote)
    merged_set = set(merged)
    deletable = []

    for branch in candidate_branches(local, options):
        if options.delete_unpushed and f"{options.remote}/{branch}" not in remote_set:
            logger.debug("%s: not pushed to %s", branch, options.remote)
            deletable.append(branch)
            continue

        if branch in merged_set:
            logger.debug("%s: merged into %s", branch, options.base_branch)
            deletable.append(branch)
            continue

        if options.squashes and squash_check(branch):
            logger.debug("%s: cannot fast-forward to %s, assuming squash merge", branch, options.base_branch)
            deletable.append(branch)
            continue

        logger.debug("%s: keeping", branch)

    return deletable


def is_squash_merged(repo: GitRepo, branch: str, options: Options) -> bool:
    """Check for a squash merge by fast-forwarding ``branch`` to ``<remote>/<base>``.

    A failed fast-forward is taken as a sign that the branch's changes landed on
    the base branch as a different commit. A branch that diverged without ever
    being merged fails the same way, so this is a heuristic.

    The base branch is checked out again with a clean working tree afterwards.
    Checkout or process failures are logged and the branch is kept.
    """
    try:
        with repo.checked_out(branch, options.base_branch):
            return not repo.pull_fast_forward(options.remote, options.base_branch)
    except (GitCommandNotFound, OSError) as err:
        logger.warning("Encountered error trying to update branch %s with branch %s: %s", branch, options.base_branch, err)
    except GitCommandError as err:
        logger.warning("Skipping squash check for %s, checkout failed: %s", branch, err)
    return False


def merged_branches(repo: GitRepo, options: Options) -> list[str]:
    """Collect branch listings from ``repo`` and classify them."""
    local = repo.local_branches()
    remote = tracked_remote_branches(repo.remote_branches(), options)
    merged = [branch for branch in repo.merged_branches(options.base_branch) if branch != options.base_branch]

    return classify(local, remote, merged, options, lambda branch: is_squash_merged(repo, branch, options))
