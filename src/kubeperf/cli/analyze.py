# src/kubeperf/cli/analyze.py
"""
Implements the `analyze` command: sample usage metrics, aggregate them per
deployment and write the optimization report.
"""

import asyncio
import logging
import signal
import sys
import traceback
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.config import config
from ..core.exceptions import ClusterError, ConfigurationError
from ..core.factory import get_analyzer
from ..core.k8s_client import ensure_k8s_config
from ..exporters.json_exporter import JSONExporter
from ..exporters.text_exporter import TextExporter
from ..models.cli import CollectionOptions, OutputOptions
from ..models.deployment import AnalysisResult
from ..reporters.console_reporter import ConsoleReporter

logger = logging.getLogger(__name__)


async def handle_export(result: AnalysisResult, output_options: OutputOptions) -> str:
    """Writes the report file and returns its path."""
    exporter = JSONExporter() if output_options.format == "json" else TextExporter()
    report_dir = str(output_options.output_dir or config.REPORT_DIR)
    path = exporter.default_path(result, report_dir)
    try:
        written_path = await exporter.export(result, path)
    except OSError as e:
        logger.error(f"Failed to write report to {path}: {e}")
        raise typer.Exit(code=1)

    logger.info(f"Successfully wrote report to {written_path}")
    return written_path


def _install_stop_handler(stop_event: asyncio.Event) -> None:
    """Let SIGTERM end sampling early; the report is still produced."""
    try:
        asyncio.get_running_loop().add_signal_handler(signal.SIGTERM, stop_event.set)
    except (NotImplementedError, RuntimeError):
        logger.debug("Signal handlers are not supported on this platform.")


def analyze(
    period: Annotated[
        Optional[str],
        typer.Option("--period", help="Metrics collection period (e.g. '30m', '1h'). Default: COLLECTION_WINDOW or 5m."),
    ] = None,
    interval: Annotated[
        Optional[str],
        typer.Option("--interval", help="Time between samples. Default: SAMPLING_INTERVAL or 30s."),
    ] = None,
    namespace: Annotated[Optional[str], typer.Option(help="Only analyze pods of this namespace.")] = None,
    kubeconfig: Annotated[
        Optional[str], typer.Option("--kubeconfig", help="Path to the kubeconfig file.")
    ] = None,
    context: Annotated[Optional[str], typer.Option("--context", help="Kubernetes context to use.")] = None,
    output_format: Annotated[
        Optional[str],
        typer.Option("--output", help="Report format (text/json).", case_sensitive=False),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", help="Directory for report files. Default: REPORT_DIR or ./performance-reports"),
    ] = None,
    quiet: Annotated[bool, typer.Option("--quiet", help="Do not print the report tables.")] = False,
):
    """
    Sample resource usage and generate per-deployment optimization recommendations.
    """
    try:
        config.validate_instance(window=period, interval=interval)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        raise typer.Exit(code=1)

    collection = CollectionOptions(
        period=period or config.COLLECTION_WINDOW,
        interval=interval or config.SAMPLING_INTERVAL,
    )
    output = OutputOptions(output_format=output_format, output_dir=output_dir)
    namespace = namespace or config.NAMESPACE
    kubeconfig = kubeconfig or config.KUBECONFIG
    context = context or config.KUBE_CONTEXT

    logger.info("Starting Kubernetes performance analysis...")

    async def _analyze_async() -> AnalysisResult:
        if not await ensure_k8s_config(kubeconfig=kubeconfig, context=context):
            logger.error("Could not load a Kubernetes configuration.")
            raise typer.Exit(code=1)

        stop_event = asyncio.Event()
        _install_stop_handler(stop_event)

        analyzer = get_analyzer(interval=collection.interval)
        try:
            result = await analyzer.run(collection.window, namespace=namespace, stop_event=stop_event)
        except ClusterError as e:
            logger.error(f"Failed to read cluster state: {e}")
            raise typer.Exit(code=1)
        finally:
            await analyzer.close()

        written_path = await handle_export(result, output)
        print(f"Report written to: {written_path}", file=sys.stderr)
        return result

    try:
        result = asyncio.run(_analyze_async())
    except typer.Exit:
        raise
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}")
        logger.debug(traceback.format_exc())
        raise typer.Exit(code=1)

    if not quiet:
        ConsoleReporter().report(result)
