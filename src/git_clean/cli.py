"""Command line interface for git-clean."""

from pathlib import Path
from typing import Annotated, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_clean import __version__
from git_clean.branches import merged_branches
from git_clean.deletion import delete_branches
from git_clean.git import GitError, GitRepo, validate_git_installation
from git_clean.logging_config import setup_logging
from git_clean.options import Options

app = typer.Typer(help="A tool for cleaning old git branches.", add_completion=False)
console = Console()


def version_callback(value: bool) -> None:
    """Print the version and exit."""
    if value:
        console.print(f"git-clean {__version__}")
        raise typer.Exit()


def fail(err: Exception) -> NoReturn:
    """Print an error and exit with a non-zero code."""
    console.print(f"[red]Error:[/red] {escape(str(err))}")
    raise typer.Exit(code=1) from err


def create_branch_table(branches: List[str]) -> Table:
    """Create a table listing the branches about to be deleted."""
    table = Table(show_header=True, header_style="bold", show_edge=True)
    table.add_column("Branch", style="cyan", no_wrap=True)
    for branch in branches:
        table.add_row(escape(branch))
    return table


def confirm_deletion() -> bool:
    """Ask for confirmation. An empty answer means yes."""
    try:
        answer = input("Continue? (Y/n) ")
    except EOFError:
        return False
    return answer.strip().lower() in ("", "y", "yes")


@app.command()
def clean(
    path: Annotated[Path, typer.Option(help="Path to git repository")] = Path("."),
    locals_only: bool = typer.Option(False, "--locals", "-l", help="Only delete local branches"),
    remotes_only: bool = typer.Option(False, "--remotes", "-r", help="Only delete remote branches"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the check for deleting branches"),
    squashes: bool = typer.Option(
        False, "--squashes", "-s", help="Check for squashes by finding branches incompatible with the base branch"
    ),
    delete_unpushed: bool = typer.Option(
        False,
        "--delete-unpushed-branches",
        "-d",
        help="Delete any local branch that is not present on the remote",
    ),
    remote: str = typer.Option("origin", "--remote", "-R", help="Changes the git remote used"),
    branch: str = typer.Option("main", "--branch", "-b", help="Changes the base for merged branches"),
    ignore: Optional[List[str]] = typer.Option(
        None, "--ignore", "-i", help="Ignore given branch (repeat option for multiple branches)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log why each branch is kept or deleted"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show the version and exit"
    ),
) -> None:
    """Delete local and remote branches that are merged into the base branch."""
    setup_logging(verbose=verbose)

    try:
        validate_git_installation()
        repo = GitRepo(path)
        options = Options.from_cli(
            remote=remote,
            base_branch=branch,
            ignore=ignore,
            locals_only=locals_only,
            remotes_only=remotes_only,
            squashes=squashes,
            delete_unpushed=delete_unpushed,
        )
        options.validate(repo)

        console.print(f"Updating remote {escape(options.remote)}")
        repo.update_remote(options.remote)
        branches = merged_branches(repo, options)
    except (GitError, ValueError) as err:
        fail(err)

    if not branches:
        console.print("No branches to delete, you're clean!")
        return

    if not yes:
        console.print(f"[bold blue]{options.delete_mode.warning_message()}[/bold blue]")
        console.print(create_branch_table(branches))
        if not confirm_deletion():
            raise typer.Exit(code=1)

    try:
        report = delete_branches(repo, branches, options)
    except GitError as err:
        fail(err)

    console.print(f"\n{report}", markup=False, highlight=False, soft_wrap=True)


if __name__ == "__main__":
    app()
