# src/kubeperf/cli/__init__.py
"""
kubeperf CLI Package

This package exposes the top-level Typer `app` used by the console
entrypoint.
"""

from ..reporters.console_reporter import ConsoleReporter
from .main import app

__all__ = ["app", "ConsoleReporter"]
