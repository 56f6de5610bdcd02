"""
Root Typer application for the lambdakit CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from lambdakit.core.logging import configure_logging
from lambdakit.core.settings import get_settings

app = Typer(
    name="lambdakit",
    help="lambdakit — memoizing cache, bounded retry, and function adapters.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from lambdakit import __version__

        typer.echo(f"lambdakit {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Log level (defaults to LAMBDAKIT_LOG_LEVEL or INFO).",
    ),
) -> None:
    """lambdakit CLI — interactive walkthroughs of the core utilities."""
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json_format=settings.json_logs,
    )


# ── Sub-command registration ─────────────────────────────────────────────

from lambdakit.cli.demo import app as demo_app  # noqa: E402

app.add_typer(demo_app, name="demo", help="Walk through the cache and retry utilities.")
