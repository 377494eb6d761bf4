"""Main CLI interface using Typer."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from decodedesk import __version__
from decodedesk.core.exceptions import DecodeDeskError, QuotaExceededError
from decodedesk.core.models import CrossTranslationResult, GenerationResult, TranslationResult
from decodedesk.service import DecodeDesk
from decodedesk.translation.modes import TranslationMode
from decodedesk.utils.config_loader import get_default_config, load_config, save_config
from decodedesk.utils.logger import get_logger, setup_logger

app = typer.Typer(
    name="decodedesk",
    help="DecodeDesk: corporate jargon and GenZ slang, in plain English",
    add_completion=False
)

console = Console()
logger = get_logger("decodedesk.cli")

EXIT_ERROR = 1
EXIT_QUOTA = 2

ConfigOption = typer.Option(None, "--config", "-c", help="Path to a YAML config file")
UserOption = typer.Option(False, "--user", "-u", help="Act as a logged-in user instead of a guest")
JsonOption = typer.Option(False, "--json", help="Print the result as JSON")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable debug logging")


def _build_desk(config_path: Optional[Path], verbose: bool = False) -> DecodeDesk:
    try:
        config = load_config(str(config_path) if config_path else None)
        logging_config = config.get("logging", {}) or {}
        setup_logger(
            level="DEBUG" if verbose else str(logging_config.get("level", "WARNING")),
            log_file=logging_config.get("file")
        )
        return DecodeDesk.from_config(config)
    except (FileNotFoundError, ValueError, DecodeDeskError) as e:
        message = e.message if isinstance(e, DecodeDeskError) else str(e)
        console.print(f"Error: {message}", style="red", markup=False)
        raise typer.Exit(EXIT_ERROR)


def _run(desk: DecodeDesk, text: str, mode: TranslationMode, user: bool, as_json: bool) -> None:
    try:
        result = desk.run(text, mode, is_authenticated=user)
    except QuotaExceededError as e:
        logger.debug(f"Rejected {mode.value}: {e.to_dict()}")
        console.print(f"[yellow]{escape(e.message)}[/yellow]")
        if e.suggestion:
            console.print(f"[dim]{escape(e.suggestion)}[/dim]")
        raise typer.Exit(EXIT_QUOTA)
    except DecodeDeskError as e:
        logger.debug(f"{mode.value} failed: {e.to_dict()}")
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        if e.suggestion:
            console.print(f"[dim]{escape(e.suggestion)}[/dim]")
        raise typer.Exit(EXIT_ERROR)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _display_result(result)
        status = desk.status(user)
        console.print(f"[dim]{max(status.remaining, 0)} of {status.total} translations left[/dim]")


def _display_result(result) -> None:
    if isinstance(result, TranslationResult):
        console.print(Panel(escape(result.translation), title="Plain English", border_style="green"))
    elif isinstance(result, GenerationResult):
        body = (
            f"[bold]{escape(result.word)}[/bold]\n\n{escape(result.meaning)}\n\n"
            f"[italic]{escape(result.example)}[/italic]"
        )
        console.print(Panel(body, title="New word", border_style="magenta"))
    elif isinstance(result, CrossTranslationResult):
        body = f"{escape(result.translated)}\n\n[dim]{escape(result.meaning)}[/dim]"
        console.print(Panel(body, title=escape(result.original), border_style="cyan"))
    if result.used_fallback:
        console.print("[yellow]The model did not follow the expected format; some fields are placeholders.[/yellow]")


@app.command()
def decode(
    text: str = typer.Argument(..., help="Corporate jargon or GenZ slang to decode"),
    genz: bool = typer.Option(False, "--genz", help="Decode GenZ slang instead of corporate jargon"),
    user: bool = UserOption,
    as_json: bool = JsonOption,
    config: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
):
    """Translate jargon or slang into plain English."""
    if not text.strip():
        console.print("[red]Error: Nothing to decode[/red]")
        raise typer.Exit(EXIT_ERROR)

    mode = TranslationMode.DECODE_GENZ if genz else TranslationMode.DECODE
    with _build_desk(config, verbose) as desk:
        _run(desk, text, mode, user, as_json)


@app.command()
def generate(
    seed: Optional[str] = typer.Argument(None, help="Optional description of what the word should mean"),
    style: str = typer.Option("corporate", "--style", "-s", help="corporate or genz"),
    user: bool = UserOption,
    as_json: bool = JsonOption,
    config: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
):
    """Invent a new corporate buzzword or GenZ slang word."""
    modes = {"corporate": TranslationMode.GENERATE_CORPORATE, "genz": TranslationMode.GENERATE_GENZ}
    mode = modes.get(style.strip().lower())
    if mode is None:
        console.print(f"[red]Unknown style: {escape(style)} (use corporate or genz)[/red]")
        raise typer.Exit(EXIT_ERROR)

    with _build_desk(config, verbose) as desk:
        _run(desk, seed or "", mode, user, as_json)


@app.command()
def convert(
    text: str = typer.Argument(..., help="Phrase to rewrite"),
    to: str = typer.Option(..., "--to", "-t", help="Target style: corporate or genz"),
    user: bool = UserOption,
    as_json: bool = JsonOption,
    config: Optional[Path] = ConfigOption,
    verbose: bool = VerboseOption,
):
    """Rewrite a phrase from one communication style into the other."""
    modes = {"corporate": TranslationMode.GENZ_TO_CORPORATE, "genz": TranslationMode.CORPORATE_TO_GENZ}
    mode = modes.get(to.strip().lower())
    if mode is None:
        console.print(f"[red]Unknown target style: {escape(to)} (use corporate or genz)[/red]")
        raise typer.Exit(EXIT_ERROR)
    if not text.strip():
        console.print("[red]Error: Nothing to convert[/red]")
        raise typer.Exit(EXIT_ERROR)

    with _build_desk(config, verbose) as desk:
        _run(desk, text, mode, user, as_json)


@app.command()
def quota(
    user: bool = UserOption,
    as_json: bool = JsonOption,
    config: Optional[Path] = ConfigOption,
):
    """Show translation usage and when it resets."""
    with _build_desk(config) as desk:
        summary = desk.summary(user)
        status = desk.status(user)

    if as_json:
        typer.echo(json.dumps({"summary": summary.to_dict(), "status": status.to_dict()}, indent=2))
        return

    table = Table(title=f"{summary.identity.title()} quota")
    table.add_column("Used", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("Resets in", justify="right")
    table.add_row(
        str(summary.used),
        str(summary.total),
        str(max(summary.remaining, 0)),
        f"{summary.reset_in} day{'s' if summary.reset_in != 1 else ''}"
    )
    console.print(table)
    if not status.allowed:
        hint = "Upgrade or wait for the weekly reset." if user else "Log in to keep translating."
        console.print(f"[yellow]Limit reached. {hint}[/yellow]")


@app.command()
def login(config: Optional[Path] = ConfigOption):
    """Switch to the logged-in quota, carrying guest usage over."""
    with _build_desk(config) as desk:
        status = desk.login()
    console.print(f"[green]Logged in.[/green] {max(status.remaining, 0)} of {status.total} weekly translations left.")


@app.command()
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    config: Optional[Path] = ConfigOption,
):
    """Clear all quota data and the guest session identifier."""
    if not yes and not typer.confirm("Clear all quota data and the session identifier?"):
        raise typer.Exit(0)
    with _build_desk(config) as desk:
        desk.quota.reset()
    console.print("[green]All quota data and session identifiers have been reset.[/green]")


@app.command()
def session(config: Optional[Path] = ConfigOption):
    """Print the anonymous guest session identifier."""
    with _build_desk(config) as desk:
        typer.echo(desk.quota.get_session_id())


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(Path("decodedesk.yaml"), help="Where to write the config file"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """Write a config file with the default settings."""
    if path.exists() and not force:
        console.print(f"Error: {path} already exists (use --force to overwrite)", style="red", markup=False)
        raise typer.Exit(EXIT_ERROR)

    config = get_default_config()
    # Keys belong in OPENROUTER_API_KEY or .env, not in a file that may be committed
    config.pop("api_keys", None)
    save_config(config, str(path))
    console.print(f"Config written to {path}", style="green", markup=False)


@app.command()
def modes():
    """List the available translation modes."""
    table = Table(title="Translation modes")
    table.add_column("Mode")
    table.add_column("Kind")
    for mode in TranslationMode:
        table.add_row(mode.value, mode.kind.value)
    console.print(table)


def cli():
    """Main CLI entry point."""
    import sys
    if len(sys.argv) == 1:
        console.print(f"[bold blue]DecodeDesk[/bold blue] {__version__}")
        console.print("\n[dim]Type 'decodedesk --help' for usage information[/dim]\n")
        return

    app()


if __name__ == "__main__":
    cli()
