"""CLI interface for lottie-frame."""

import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from .constants import DEFAULT_FRAME, TIMEOUT_ENV_VAR
from .errors import RenderError
from .output import MarkupInjectOutputProvider, resolve_output_provider, supported_output_formats
from .output.base import OutputProvider
from .playback.base import PlaybackEngine
from .playback.rlottie_engine import RlottieEngine
from .render_pipeline import encode_snapshot

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)
SUPPORTED_OUTPUT_FORMATS_TEXT = ", ".join(supported_output_formats()).upper()


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


def create_engine() -> PlaybackEngine:
    return RlottieEngine()


def main(
    input_path: str = typer.Argument(None, help="Lottie JSON file to render"),
    frame: int = typer.Option(
        DEFAULT_FRAME,
        "--frame",
        "-f",
        help="Frame index to render",
    ),
    options_path: str = typer.Option(
        None,
        "--options",
        help="JSON file with renderer settings (width, height, className, ...)",
    ),
    out: str = typer.Option(
        None,
        "--output",
        "-o",
        help=f"Write the snapshot to a file ({SUPPORTED_OUTPUT_FORMATS_TEXT})",
    ),
    inject_into: str = typer.Option(
        None,
        "--inject-into",
        help="Inject the snapshot markup into a text file at the marker line",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help=f"Seconds to wait for the render (defaults to ${TIMEOUT_ENV_VAR})",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show engine lifecycle logging",
    ),
) -> None:
    """
    Render a single frame of a Lottie animation to static markup.

    Examples:
      # Render the first frame to animation-frame0.svg
      lottie-frame animation.json

      # Render frame 30 at 256px wide into a README
      lottie-frame animation.json -f 30 --options opts.json --inject-into README.md
    """
    try:
        if not input_path:
            raise CLIError("Input file is required")

        if out and inject_into:
            raise CLIError("Cannot specify both --output and --inject-into. Choose one.")
        if frame < 0:
            raise CLIError("Frame must be non-negative")
        if not out and not inject_into:
            out = f"{Path(input_path).stem}-frame{frame}.svg"

        _configure_logging(verbose)

        data = _load_json_file(input_path)
        options = _load_options(options_path) if options_path else {}
        provider = _resolve_provider(out, inject_into)
        render_timeout = timeout if timeout is not None else _timeout_from_env()

        _generate_output(data, provider, frame, options, render_timeout)

    except CLIError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    except Exception as e:
        err_console.print(f"[bold red]Unexpected error:[/bold red] {e}")
        sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _timeout_from_env() -> float | None:
    raw = os.getenv(TIMEOUT_ENV_VAR)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise CLIError(f"{TIMEOUT_ENV_VAR} must be a number of seconds, got '{raw}'")


def _load_json_file(file_path: str) -> Any:
    """Load a JSON document from a file."""
    console.print(f"[bold blue]Loading {file_path}...[/bold blue]")
    try:
        with open(file_path, "r") as f:
            return json.load(f)
    except FileNotFoundError:
        raise CLIError(f"File '{file_path}' not found")
    except json.JSONDecodeError as e:
        raise CLIError(f"Invalid JSON in '{file_path}': {e}")


def _load_options(file_path: str) -> dict[str, Any]:
    options = _load_json_file(file_path)
    if not isinstance(options, dict):
        raise CLIError(f"Renderer options in '{file_path}' must be a JSON object")
    return options


def _resolve_provider(out: str | None, inject_into: str | None) -> OutputProvider:
    if inject_into:
        return MarkupInjectOutputProvider(inject_into)
    try:
        return resolve_output_provider(out or "")
    except ValueError as exc:
        raise CLIError(str(exc))


def _generate_output(
    data: Any,
    provider: OutputProvider,
    frame: int,
    options: dict[str, Any],
    timeout: float | None,
) -> None:
    """Render the frame and write it through the provider."""
    console.print(f"\n[bold blue]Rendering frame {frame}...[/bold blue]")
    try:
        encoded = asyncio.run(
            encode_snapshot(
                data,
                provider.path,
                frame_number=frame,
                options=options,
                timeout=timeout,
                provider=provider,
                engine=create_engine(),
            )
        )
    except asyncio.TimeoutError:
        raise CLIError(f"Render timed out after {timeout}s")
    except RenderError as e:
        raise CLIError(f"Failed to render frame {frame}: {e}")
    except ValueError as e:
        raise CLIError(f"Failed to encode output: {e}")

    if isinstance(provider, MarkupInjectOutputProvider):
        console.print(f"[bold blue]Injecting into {provider.path}...[/bold blue]")
    provider.write(encoded)
    console.print(f"[green]✓[/green] Frame {frame} saved to {provider.path}")


app = typer.Typer()
app.command()(main)

if __name__ == "__main__":
    app()
