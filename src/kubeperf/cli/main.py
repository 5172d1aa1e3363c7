# src/kubeperf/cli/main.py
"""
Typer application behind the ``kubeperf`` console script.
"""

import logging
from typing import Optional

import typer

from .. import __version__
from ..core.config import config
from . import analyze

logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)

app = typer.Typer(
    name="kubeperf",
    help="Sample Kubernetes resource usage and recommend requests and limits per deployment.",
    add_completion=False,
)


def _echo_version() -> None:
    typer.echo(f"kubeperf version: {__version__}")


def _exit_with_version(value: Optional[bool]):
    if value:
        _echo_version()
        raise typer.Exit()


@app.callback()
def main(
    show_version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_exit_with_version,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """Analyze deployment resource usage from metrics-server samples."""


@app.command()
def version():
    """Print the installed kubeperf version."""
    _echo_version()


app.command(name="analyze")(analyze.analyze)
