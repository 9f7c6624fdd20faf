"""
tubescribe.cli - Typer CLI entry point.

Provides the run, check, parse and init subcommands.
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from tubescribe import __version__
from tubescribe.config import (
    CONFIG_FILENAME,
    TubescribeConfig,
    create_default_config,
    load_config,
    write_config,
)
from tubescribe.credentials import EnvCredentialProvider
from tubescribe.exceptions import ConfigError, ParseError, StageError
from tubescribe.logging import configure_logging
from tubescribe.parsing import parse_destination, parse_identifier
from tubescribe.pipeline import create_pipeline_from_config
from tubescribe.system import System
from tubescribe.utils import is_valid_url

DEFAULT_VIDEO_URL = "https://www.youtube.com/watch?v=rdWZo5PD9Ek"

app = typer.Typer(
    name="tubescribe",
    help="Download a video's audio, transcribe it, and publish the transcript.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"tubescribe {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Tubescribe - video-to-transcript publishing pipeline."""
    pass


def _load(config_path: Path | None) -> TubescribeConfig:
    try:
        return load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error loading config: {e}[/red]")
        raise typer.Exit(1)


@app.command("run")
def run_pipeline(
    url_arg: str | None = typer.Argument(None, metavar="URL", help="Video URL"),
    url: str | None = typer.Option(None, "--url", "-u", help="Video URL (overrides URL argument)"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Directory to save downloaded audio"
    ),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config YAML file"),
    backend: str | None = typer.Option(
        None, "--backend", "-b", help="Transcriber: whisper-cpp, ollama or openai"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Transcribe a video and upload the transcript."""
    configure_logging(verbose)

    video_url = url or url_arg or DEFAULT_VIDEO_URL
    if not is_valid_url(video_url):
        console.print(f"[red]Error: Invalid video URL provided: {video_url}[/red]")
        raise typer.Exit(1)

    config = _load(config_path)
    updates = {}
    if output is not None:
        updates["output_dir"] = output
    if backend is not None:
        updates["transcriber_backend"] = backend
    if updates:
        try:
            config = TubescribeConfig(**{**config.model_dump(), **updates})
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

    console.print(f"Transcribing video from URL: [cyan]{video_url}[/cyan]")
    console.print(f"[dim]Output directory: {config.output_dir}[/dim]")

    try:
        config.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        console.print(f"[red]Error creating output directory {config.output_dir}: {e}[/red]")
        raise typer.Exit(1)

    try:
        pipeline = create_pipeline_from_config(config)
        result = pipeline.run(video_url, config.output_dir, console=console)
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except StageError as e:
        console.print(f"[red]Error in {e.stage} stage: {e.cause}[/red]")
        raise typer.Exit(1)

    console.print("\n[green]✓[/green] Transcription upload complete")
    console.print(f"[dim]  {result.target}[/dim]")
    console.print(result.response, markup=False)


@app.command("check")
def check_environment(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Config YAML file"),
) -> None:
    """Check that tools and settings needed for a run are available."""
    config = _load(config_path)
    system = System()

    table = Table(title="Preflight")
    table.add_column("Requirement", style="cyan")
    table.add_column("Value")
    table.add_column("Status", style="yellow")

    passed = True

    binaries = [config.media_helper_binary, config.downloader_binary]
    if config.transcriber_backend == "whisper-cpp":
        binaries.append(config.whisper_binary)
    for name in binaries:
        path = system.which(name)
        if path:
            table.add_row(name, path, "[green]found[/green]")
        else:
            table.add_row(name, "-", "[red]missing[/red]")
            passed = False

    settings = [("VERCEL_BLOB_API_URL", config.blob_api_url)]
    credentials = [EnvCredentialProvider(config.blob_token_env)]
    if config.transcriber_backend == "openai":
        credentials.append(EnvCredentialProvider(config.openai_api_key_env))
    for provider in credentials:
        settings.append((provider.name, "set" if provider.get_key() else None))

    for name, value in settings:
        if value:
            table.add_row(name, value, "[green]ok[/green]")
        else:
            table.add_row(name, "-", "[red]not set[/red]")
            passed = False

    if config.transcriber_backend == "whisper-cpp" and not config.whisper_model_path:
        table.add_row("WHISPER_MODEL_PATH", "-", "[yellow]default model[/yellow]")

    console.print(table)
    if not passed:
        raise typer.Exit(1)


@app.command("parse")
def parse_output(
    mode: str = typer.Argument(..., help="identifier or destination"),
    file: Path | None = typer.Argument(None, help="Saved tool output (stdin if omitted)"),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", "-d", help="Directory to resolve relative destinations against"
    ),
) -> None:
    """Extract an identifier or destination path from saved tool output."""
    if mode not in ("identifier", "destination"):
        console.print(f"[red]Error: unknown mode '{mode}'[/red]")
        raise typer.Exit(2)

    if file is not None:
        if not file.exists():
            console.print(f"[red]Error: File not found: {file}[/red]")
            raise typer.Exit(1)
        raw = file.read_text(encoding="utf-8", errors="replace")
    else:
        raw = sys.stdin.read()

    try:
        if mode == "identifier":
            value = parse_identifier(raw)
        else:
            value = str(parse_destination(raw, output_dir))
    except ParseError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(value, markup=False, highlight=False)


@app.command("init")
def init_config(
    path: Path = typer.Option(Path(CONFIG_FILENAME), "--path", "-p", help="Where to write the config"),
) -> None:
    """Write a default tubescribe.yaml."""
    if path.exists():
        console.print(f"[red]Error: '{path}' already exists[/red]")
        raise typer.Exit(1)
    write_config(create_default_config(), path)
    console.print(f"[green]✓[/green] Wrote default config to {path}")
