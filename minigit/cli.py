"""Command line interface for minigit."""

import functools
import logging
import sys
from typing import Callable

import click

from . import __version__
from .diff import render_diff
from .errors import MinigitError
from .repository import Repository
from .store import DEFAULT_REPO_DIR, repository

PROMPT = "minigit> "


def _error(message: str) -> None:
    click.secho(f"ERROR: {message}", err=True, fg="red")


# -- Operations shared by one-shot commands and the shell --


def do_init(repo: Repository) -> None:
    if repo.init():
        click.echo(f"Initialized empty minigit repository in {repo.location}")
    else:
        click.echo("minigit repository already exists.")


def do_add(repo: Repository, path: str) -> None:
    repo.stage(path)
    click.echo(f"Added '{path}' to staging area.")


def do_commit(repo: Repository, message: str) -> None:
    commit_hash = repo.commit(message)
    click.echo(f"Committed successfully. Hash: {commit_hash}")


def do_log(repo: Repository) -> None:
    if repo.head is None:
        click.echo("No commits yet. Repository is empty.")
        return
    for commit_hash, record in repo.log():
        click.echo(f"Commit {commit_hash}:")
        first, *rest = record.message.split("\n")
        click.echo(f"message: {first}")
        for line in rest:
            click.echo(f"  {line}")
        click.echo(f"timestamp: {record.timestamp}")
        click.echo("files:")
        for entry in record.files:
            click.echo(entry.to_line())
        click.echo()


def do_branch(repo: Repository, name: str) -> None:
    commit_hash = repo.branch(name)
    click.echo(f"Branch '{name}' created at commit {commit_hash}.")


def do_branches(repo: Repository) -> None:
    head = repo.head
    for name in repo.list_branches():
        marker = "*" if head is not None and repo.branch_commit(name) == head else " "
        click.echo(f"{marker} {name}")


def do_checkout(repo: Repository, name: str) -> None:
    result = repo.checkout(name)
    for path in result.skipped:
        _error(f"File '{path}' was not restored.")
    click.echo(f"Checked out branch '{name}'.")


def do_merge(repo: Repository, name: str) -> None:
    click.echo(f"Merging branch '{name}'...")
    result = repo.merge(name)
    for path in result.skipped:
        _error(f"File '{path}' was not restored.")
    click.echo(f"Committed successfully. Hash: {result.commit}")


def do_diff(repo: Repository, commit_a: str, commit_b: str) -> None:
    click.echo(render_diff(repo.diff(commit_a, commit_b)), nl=False)


# -- Shell --


class UsageError(Exception):
    """A malformed shell command. The core is never invoked."""


def _one_arg(rest: str, usage: str) -> str:
    arg = rest.strip()
    if not arg:
        raise UsageError(usage)
    return arg


def run_line(repo: Repository, line: str) -> bool:
    """Run one shell command line. Returns False when the shell should exit.

    Usage errors and ``MinigitError``s are reported and never end the
    session.
    """
    line = line.rstrip("\r\n")
    command, _, rest = line.lstrip().partition(" ")
    try:
        if command == "":
            pass
        elif command == "exit":
            return False
        elif command == "init":
            do_init(repo)
        elif command == "add":
            do_add(repo, _one_arg(rest, "add <path>"))
        elif command == "commit":
            if not rest.startswith("-m "):
                raise UsageError("commit -m <message>")
            do_commit(repo, rest[len("-m "):])
        elif command == "log":
            do_log(repo)
        elif command == "branch":
            do_branch(repo, _one_arg(rest, "branch <name>"))
        elif command == "branches":
            do_branches(repo)
        elif command == "checkout":
            do_checkout(repo, _one_arg(rest, "checkout <name>"))
        elif command == "merge":
            do_merge(repo, _one_arg(rest, "merge <name>"))
        elif command == "diff":
            args = rest.split()
            if len(args) != 2:
                raise UsageError("diff <commitA> <commitB>")
            do_diff(repo, args[0], args[1])
        else:
            click.echo("Unknown command.")
    except UsageError as e:
        _error(f"Usage: {e}")
    except MinigitError as e:
        _error(str(e))
    return True


# -- Click commands --


def _open(ctx: click.Context, *, create: bool = False) -> Repository:
    return repository(
        "disk",
        root=ctx.obj["root"],
        repo_dir=ctx.obj["repo_dir"],
        create=create,
    )


def with_repository(func: Callable) -> Callable:
    """Open the repository for a one-shot command and report failures."""

    @click.pass_context
    @functools.wraps(func)
    def wrapper(ctx: click.Context, *args, **kwargs):
        try:
            repo = _open(ctx)
        except MinigitError as e:
            _error(str(e))
            ctx.exit(1)
        try:
            func(repo, *args, **kwargs)
        except MinigitError as e:
            _error(str(e))
            ctx.exit(1)
        finally:
            repo.close()

    return wrapper


@click.group()
@click.option(
    "--root",
    envvar="MINIGIT_ROOT",
    default=".",
    type=click.Path(file_okay=False),
    help="Working-set directory (default: current directory)",
)
@click.option(
    "--repo-dir",
    envvar="MINIGIT_DIR",
    default=DEFAULT_REPO_DIR,
    help=f"State directory name under the root (default: {DEFAULT_REPO_DIR})",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(version=__version__, prog_name="minigit")
@click.pass_context
def cli(ctx: click.Context, root: str, repo_dir: str, verbose: bool) -> None:
    """A minimal local version-control engine."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    ctx.obj["root"] = root
    ctx.obj["repo_dir"] = repo_dir


@cli.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create an empty repository."""
    repo = _open(ctx, create=True)
    try:
        do_init(repo)
    finally:
        repo.close()


@cli.command()
@click.argument("path")
@with_repository
def add(repo: Repository, path: str) -> None:
    """Stage the current content of PATH."""
    do_add(repo, path)


@cli.command()
@click.option("--message", "-m", required=True, help="Commit message")
@with_repository
def commit(repo: Repository, message: str) -> None:
    """Commit the staged files."""
    do_commit(repo, message)


@cli.command()
@with_repository
def log(repo: Repository) -> None:
    """Show history from HEAD, newest first."""
    do_log(repo)


@cli.command()
@click.argument("name")
@with_repository
def branch(repo: Repository, name: str) -> None:
    """Create branch NAME at HEAD."""
    do_branch(repo, name)


@cli.command()
@with_repository
def branches(repo: Repository) -> None:
    """List branches."""
    do_branches(repo)


@cli.command()
@click.argument("name")
@with_repository
def checkout(repo: Repository, name: str) -> None:
    """Restore the files of branch NAME and move HEAD to it."""
    do_checkout(repo, name)


@cli.command()
@click.argument("name")
@with_repository
def merge(repo: Repository, name: str) -> None:
    """Overwrite working files with branch NAME's and commit them."""
    do_merge(repo, name)


@cli.command()
@click.argument("commit_a")
@click.argument("commit_b")
@with_repository
def diff(repo: Repository, commit_a: str, commit_b: str) -> None:
    """Compare the files of two commits line by line."""
    do_diff(repo, commit_a, commit_b)


@cli.command()
@click.pass_context
def shell(ctx: click.Context) -> None:
    """Interactive command loop. Type 'exit' to leave."""
    repo = _open(ctx, create=True)
    click.echo("MiniGit started.")
    try:
        while True:
            try:
                line = input(PROMPT)
            except EOFError:
                break
            if not run_line(repo, line):
                break
    finally:
        repo.close()


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
