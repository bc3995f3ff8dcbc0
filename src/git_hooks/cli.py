"""Command-line shell: install dispatcher scripts, run hooks for an event."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .engine import HookEngine, make_engine
from .errors import AggregateFailure, ExecutionFailure, GitHooksError
from .models.hook import HOOK_EVENTS
from .validation import validate_config_file, validate_resolved

console = Console()
err_console = Console(stderr=True)

LOG_ENV_VAR = "GIT_HOOKS_LOG"


def configure_logging(verbosity: int = 0) -> None:
    """Send library logs to stderr through rich.

    ``GIT_HOOKS_LOG`` (a level name) wins over the -v count.
    """
    level_name = os.environ.get(LOG_ENV_VAR)
    if level_name:
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    else:
        level = max(logging.DEBUG, logging.WARNING - 10 * verbosity)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
    )


@dataclass
class CliState:
    engine: HookEngine
    config_path: Path | None


pass_state = click.make_pass_decorator(CliState)


@click.group()
@click.option("--verbose", "-v", count=True, help="More logging (-vv for debug)")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="GIT_HOOKS_CONFIG",
    default=None,
    help="Hooks file (default: .hooks.yml at the repository root)",
)
@click.option(
    "-C",
    "cwd",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Run as if started in this directory",
)
@click.version_option(package_name="git-hooks", prog_name="git-hooks")
@click.pass_context
def cli(ctx: click.Context, verbose: int, config_path: Path | None, cwd: Path | None) -> None:
    """A git hooks manager."""
    configure_logging(verbose)
    ctx.obj = CliState(engine=make_engine(cwd), config_path=config_path)


@cli.command()
@click.argument("event", type=click.Choice(HOOK_EVENTS))
@click.argument("git_args", nargs=-1, type=click.UNPROCESSED)
@pass_state
def run(state: CliState, event: str, git_args: tuple[str, ...]) -> None:
    """Run the configured hooks for EVENT, e.g. "pre-commit"."""
    logging.getLogger(__name__).debug("git passed %s", list(git_args))
    try:
        config = state.engine.load(state.config_path)
        result = state.engine.dispatch(event, config)
    except AggregateFailure as e:
        for failure in e.failures:
            _report_failure(failure)
        raise click.ClickException(str(e)) from e
    except GitHooksError as e:
        raise click.ClickException(str(e)) from e

    if result.nothing_to_do:
        console.print("Nothing to do.")
        return
    for hook_run in result.runs:
        line = f"[green]✓[/green] {escape(hook_run.hook)}"
        if hook_run.restaged:
            line += f" (re-staged {len(hook_run.restaged)} file(s))"
        console.print(line)


@cli.command()
@click.option(
    "--event",
    "-e",
    "events",
    multiple=True,
    type=click.Choice(HOOK_EVENTS),
    help="Event to install (repeatable; default: every event the config uses)",
)
@click.option("--force", is_flag=True, help="Replace hook files not installed by git-hooks")
@pass_state
def init(state: CliState, events: tuple[str, ...], force: bool) -> None:
    """Install the git hooks dispatcher scripts."""
    try:
        if events:
            written = state.engine.install(events=events, force=force)
        else:
            config = state.engine.load(state.config_path)
            written = state.engine.install(config=config, force=force)
    except GitHooksError as e:
        raise click.ClickException(str(e)) from e
    if not written:
        console.print("No hook uses any event; nothing installed.")
    for path in written:
        console.print(f"installed: {escape(str(path))}")


@cli.command()
@click.option("--event", "-e", "events", multiple=True, type=click.Choice(HOOK_EVENTS))
@pass_state
def uninstall(state: CliState, events: tuple[str, ...]) -> None:
    """Remove the dispatcher scripts installed by init."""
    try:
        removed = state.engine.uninstall(events or None)
    except GitHooksError as e:
        raise click.ClickException(str(e)) from e
    for path in removed:
        console.print(f"removed: {escape(str(path))}")


@cli.command()
@pass_state
def validate(state: CliState) -> None:
    """Check the hooks file and the hooks its sources provide."""
    try:
        path = state.engine.config_path(state.config_path)
        result = validate_config_file(path)
        if result.valid:
            result = result.extend(validate_resolved(state.engine.load(path)))
    except GitHooksError as e:
        raise click.ClickException(str(e)) from e
    for issue in result.issues:
        style = "red" if issue.level == "error" else "yellow"
        console.print(f"[{style}]{issue.level}[/{style}] {escape(issue.path)}: {escape(issue.message)}")
    if not result.valid:
        raise click.ClickException(f"{len(result.errors)} error(s) in {path}")
    console.print("ok")


@cli.command(name="list")
@click.argument("event", required=False, type=click.Choice(HOOK_EVENTS))
@pass_state
def list_hooks(state: CliState, event: str | None) -> None:
    """Show active hooks, optionally only those bound to EVENT."""
    try:
        config = state.engine.load(state.config_path)
    except GitHooksError as e:
        raise click.ClickException(str(e)) from e
    for source, hook in config.active_hooks():
        if event is not None and not hook.fires_on(event):
            continue
        events = ",".join(e for e in HOOK_EVENTS if e in hook.events)
        console.print(
            f"{escape(hook.name)}\t{escape(source.name)}\t{events}\t{escape(hook.action or '')}",
            highlight=False,
        )


def _report_failure(failure: GitHooksError) -> None:
    err_console.print(f"[red]✗[/red] {escape(str(failure))}")
    if isinstance(failure, ExecutionFailure):
        for stream in (failure.stdout, failure.stderr):
            if stream.strip():
                err_console.print(escape(stream.rstrip()), highlight=False)


def main() -> None:
    cli(prog_name="git-hooks")
