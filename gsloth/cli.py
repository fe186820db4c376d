"""CLI entry point for gsloth."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Coroutine
from typing import Annotated, Any, NoReturn

import typer
from rich import print as rprint
from rich.markup import escape

from gsloth import __version__
from gsloth.config import CommandLineConfigOverrides, GthConfig, create_project_config, init_config
from gsloth.console import display
from gsloth.errors import GslothError
from gsloth.llm.models import LLMError
from gsloth.log import configure_logging
from gsloth.presets import AVAILABLE_DEFAULT_CONFIGS
from gsloth.providers import CONTENT_PROVIDERS, REQUIREMENTS_PROVIDERS
from gsloth.session import (
    CHAT_SESSION,
    CODE_SESSION,
    InteractiveSession,
    SessionConfig,
    run_ask_command,
    run_pr_command,
    run_review_command,
)
from gsloth.utils import coerce_boolean_or_string

app = typer.Typer(
    name="gsloth",
    help="Gaunt Sloth Assistant: reviews diffs and PRs, answers questions, chats about code.",
)


def _fail(error: BaseException) -> NoReturn:
    rprint(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(1)


def _overrides(ctx: typer.Context) -> CommandLineConfigOverrides:
    obj = ctx.find_root().obj
    return obj if isinstance(obj, CommandLineConfigOverrides) else CommandLineConfigOverrides()


def _load_config(ctx: typer.Context) -> GthConfig:
    try:
        return init_config(_overrides(ctx))
    except GslothError as e:
        _fail(e)


def _run(coro: Coroutine[Any, Any, Any]) -> Any:
    try:
        return asyncio.run(coro)
    except (GslothError, LLMError) as e:
        _fail(e)


def _read_stdin(ctx: typer.Context) -> str | None:
    """Piped input, if any. Never blocks on a terminal or with ``--nopipe``."""
    stream = sys.stdin
    if _overrides(ctx).no_pipe or stream is None or stream.isatty():
        return None
    data = stream.read()
    return data or None


def _check_choice(value: str | None, choices: dict, option: str) -> None:
    if value is not None and value not in choices:
        raise typer.BadParameter(
            f"{value!r} is not one of {', '.join(choices)}", param_hint=option
        )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _start_session(ctx: typer.Context, session_config: SessionConfig, message: str | None) -> None:
    config = _load_config(ctx)
    session = InteractiveSession(session_config, config)
    try:
        _run(session.start(message))
    except KeyboardInterrupt:
        display("\nExiting...")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool, typer.Option("--verbose", help="Log model traffic and debug output to stderr")
    ] = False,
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to a gsloth config file")
    ] = None,
    write_output_to_file: Annotated[
        str | None,
        typer.Option(
            "--write-output-to-file",
            "-w",
            help="true/false, or a file name to write the response to",
        ),
    ] = None,
    nopipe: Annotated[
        bool,
        typer.Option("--nopipe", hidden=True, help="Do not read piped stdin"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    """Global options. Without a command, starts a chat session."""
    configure_logging(verbose)
    ctx.obj = CommandLineConfigOverrides(
        custom_config_path=config,
        verbose=verbose or None,
        write_output_to_file=coerce_boolean_or_string(write_output_to_file),
        no_pipe=nopipe,
    )
    if ctx.invoked_subcommand is None:
        _start_session(ctx, CHAT_SESSION, None)


@app.command()
def init(
    vendor: str = typer.Argument(
        ..., help=f"LLM vendor: {', '.join(AVAILABLE_DEFAULT_CONFIGS)}"
    ),
) -> None:
    """Set up guidelines, review instructions and a config for a vendor."""
    try:
        create_project_config(vendor)
    except GslothError as e:
        _fail(e)


@app.command()
def review(
    ctx: typer.Context,
    content_id: str | None = typer.Argument(
        None, help="Content ID for the content provider (file name, text, PR number)"
    ),
    file: list[str] | None = typer.Option(
        None, "--file", "-f", help="Input files, added after requirements and content"
    ),
    requirements: str | None = typer.Option(
        None, "--requirements", "-r", help="Requirements ID for the requirements provider"
    ),
    requirements_provider: str | None = typer.Option(
        None, "--requirements-provider", "-p", help="Requirements provider"
    ),
    content_provider: str | None = typer.Option(
        None, "--content-provider", help="Content provider"
    ),
    message: str | None = typer.Option(
        None, "--message", "-m", help="Extra message added after the content"
    ),
) -> None:
    """Review provided diff or other content."""
    _check_choice(requirements_provider, REQUIREMENTS_PROVIDERS, "--requirements-provider")
    _check_choice(content_provider, CONTENT_PROVIDERS, "--content-provider")
    config = _load_config(ctx)
    _run(
        run_review_command(
            config,
            content_id,
            files=file or [],
            requirements_id=requirements,
            requirements_provider=requirements_provider,
            content_provider=content_provider,
            message=message,
            stdin=_read_stdin(ctx),
        )
    )


app.command("r", hidden=True, help="Alias for review.")(review)


@app.command()
def pr(
    ctx: typer.Context,
    pr_id: str = typer.Argument(..., help="Pull request number"),
    requirements_id: str | None = typer.Argument(
        None, help="Requirements ID for the requirements provider"
    ),
    requirements_provider: str | None = typer.Option(
        None, "--requirements-provider", "-p", help="Requirements provider"
    ),
    file: list[str] | None = typer.Option(
        None, "--file", "-f", help="Input files, added after requirements and before the diff"
    ),
) -> None:
    """Review a GitHub pull request (needs an authenticated gh CLI)."""
    _check_choice(requirements_provider, REQUIREMENTS_PROVIDERS, "--requirements-provider")
    config = _load_config(ctx)
    _run(
        run_pr_command(
            config,
            pr_id,
            requirements_id,
            files=file or [],
            requirements_provider=requirements_provider,
        )
    )


@app.command()
def ask(
    ctx: typer.Context,
    message: str = typer.Argument(..., help="The question"),
    file: list[str] | None = typer.Option(None, "--file", "-f", help="Input files"),
) -> None:
    """Ask a question about the project."""
    config = _load_config(ctx)
    _run(run_ask_command(config, message, files=file or [], stdin=_read_stdin(ctx)))


@app.command()
def chat(
    ctx: typer.Context,
    message: str | None = typer.Argument(None, help="Initial message to start the chat"),
) -> None:
    """Start an interactive chat session."""
    _start_session(ctx, CHAT_SESSION, message)


@app.command()
def code(
    ctx: typer.Context,
    message: str | None = typer.Argument(None, help="Initial message to start the session"),
) -> None:
    """Start an interactive coding session."""
    _start_session(ctx, CODE_SESSION, message)


if __name__ == "__main__":
    app()
