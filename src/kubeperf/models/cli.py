# src/kubeperf/models/cli.py
"""
Data models for kubeperf CLI command options using Typer.
"""

from datetime import timedelta
from pathlib import Path
from typing import Optional

import typer

from ..utils.date_utils import parse_duration

OUTPUT_FORMATS = ("text", "json")


class CollectionOptions:
    """Collection window and sampling interval, parsed from duration strings."""

    def __init__(self, period: str, interval: str):
        self.window = self._parse("--period", period)
        self.interval = self._parse("--interval", interval)
        self._validate()

    @staticmethod
    def _parse(flag: str, value: str) -> timedelta:
        try:
            return parse_duration(value)
        except ValueError as e:
            raise typer.BadParameter(f"{flag}: {e}")

    def _validate(self):
        if self.interval <= timedelta(0):
            raise typer.BadParameter("--interval must be greater than zero.")
        if self.window < timedelta(0):
            raise typer.BadParameter("--period must not be negative.")


class OutputOptions:
    """Output/export options."""

    def __init__(self, output_format: Optional[str] = None, output_dir: Optional[Path] = None):
        self.output_format = output_format
        self.output_dir = output_dir
        self._validate()

    def _validate(self):
        """Validates the output format."""
        if self.output_format and self.output_format.lower() not in OUTPUT_FORMATS:
            raise typer.BadParameter(f"Invalid output format '{self.output_format}'. Must be 'text' or 'json'.")

    @property
    def format(self) -> str:
        """Returns the validated, lower-cased format."""
        return self.output_format.lower() if self.output_format else "text"
