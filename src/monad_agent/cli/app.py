"""CLI for Monad Agent - run the server or chat with the wallet agent from the terminal."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.markdown import Markdown
from rich.table import Table

app = typer.Typer(
    name="monad-agent",
    help="A conversational agent that manages a wallet on Monad Testnet.",
    no_args_is_help=True,
)
console = Console()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _version_callback(value: bool):
    if value:
        from importlib.metadata import version
        console.print(f"monad-agent {version('monad-agent')}")
        raise typer.Exit()


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        "-l",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
        envvar="MONAD_AGENT_LOG_LEVEL",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """A conversational agent that manages a wallet on Monad Testnet."""
    configure_logging(log_level)


def _run(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


def _load_config(path: Optional[Path]):
    from monad_agent.config import resolve_config

    try:
        return resolve_config(path)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Could not load config: {escape(str(exc))}[/red]")
        raise typer.Exit(1)


# ------------------------------------------------------------------
# serve
# ------------------------------------------------------------------


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Host to bind to"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to serve on"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML config file", envvar="MONAD_AGENT_CONFIG",
    ),
):
    """Start the HTTP API and chat UI."""
    from monad_agent.server.app import run_server

    config = _load_config(config_path)
    host = host or config.server.host
    port = port or config.server.port
    console.print(f"[bold green]Starting Monad Agent at http://{host}:{port}[/bold green]")
    console.print(f"[dim]Chat UI: http://{host}:{port}/chat[/dim]")
    run_server(config, host=host, port=port)


# ------------------------------------------------------------------
# chat
# ------------------------------------------------------------------


@app.command()
def chat(
    private_key: Optional[str] = typer.Option(
        None,
        "--private-key",
        help="Wallet private key to connect on the first message",
        envvar="MONAD_PRIVATE_KEY",
    ),
    provider: Optional[str] = typer.Option(
        None, "--provider", help="Model provider (openai or anthropic)",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML config file", envvar="MONAD_AGENT_CONFIG",
    ),
):
    """Start an interactive chat with the wallet agent."""
    from monad_agent.core.factory import create_agent, create_planner, create_session_store

    config = _load_config(config_path)
    try:
        agent = create_agent(config, planner=create_planner(config, provider))
    except ValueError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)
    session = create_session_store(config).get()

    async def _chat():
        pending_key = private_key
        console.print(f"[bold]Monad Agent on {config.network.name}[/bold]")
        console.print("[dim]Type 'help' for commands, 'exit' to quit.[/dim]\n")

        while True:
            try:
                user_input = console.input("[bold blue]You>[/bold blue] ")
            except (EOFError, KeyboardInterrupt):
                break

            if user_input.strip().lower() in ("exit", "quit", "bye"):
                break
            if not user_input.strip():
                continue

            try:
                with console.status("Thinking..."):
                    result = await agent.run(user_input, session, private_key=pending_key)
            except Exception as exc:
                console.print(f"[red]Error: {escape(str(exc))}[/red]\n")
                continue
            pending_key = None

            console.print("[bold green]Agent>[/bold green]")
            console.print(Markdown(result.response))
            console.print()

        console.print("[dim]Chat ended.[/dim]")

    _run(_chat())


# ------------------------------------------------------------------
# tools
# ------------------------------------------------------------------


@app.command()
def tools():
    """List the commands the agent can run."""
    from monad_agent.tools import ToolRegistry

    table = Table(title="Agent Tools")
    table.add_column("Name", style="bold cyan", no_wrap=True)
    table.add_column("Description")
    for t in ToolRegistry.get().get_tools():
        table.add_row(t.name, escape(t.description))
    console.print(table)


if __name__ == "__main__":
    app()
