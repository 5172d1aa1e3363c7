# src/kubeperf/core/config.py

import logging
import os
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv

from ..utils.date_utils import parse_duration
from .exceptions import ConfigurationError

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- Collection variables ---
    # Values are resolved at access time so tests and the CLI can change the
    # environment after import.
    @property
    def COLLECTION_WINDOW(self) -> str:
        return os.getenv("COLLECTION_WINDOW", "5m")

    @property
    def SAMPLING_INTERVAL(self) -> str:
        return os.getenv("SAMPLING_INTERVAL", "30s")

    @property
    def NAMESPACE(self) -> Optional[str]:
        return os.getenv("NAMESPACE") or None

    @property
    def REQUEST_TIMEOUT_SECONDS(self) -> float:
        return float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))

    # --- Kubernetes connection variables ---
    @property
    def KUBECONFIG(self) -> Optional[str]:
        return os.getenv("KUBECONFIG") or None

    @property
    def KUBE_CONTEXT(self) -> Optional[str]:
        return os.getenv("KUBE_CONTEXT") or None

    # --- Report variables ---
    @property
    def REPORT_DIR(self) -> str:
        return os.getenv("REPORT_DIR", "performance-reports")

    @property
    def collection_window(self) -> timedelta:
        return parse_duration(self.COLLECTION_WINDOW)

    @property
    def sampling_interval(self) -> timedelta:
        return parse_duration(self.SAMPLING_INTERVAL)

    def validate_instance(self, window: Optional[str] = None, interval: Optional[str] = None):
        """
        Checks the effective settings. ``window`` and ``interval`` override
        COLLECTION_WINDOW and SAMPLING_INTERVAL, so a bad environment value
        does not matter when the caller supplies its own.
        """
        window_text = window or self.COLLECTION_WINDOW
        interval_text = interval or self.SAMPLING_INTERVAL
        try:
            window_delta = parse_duration(window_text)
            interval_delta = parse_duration(interval_text)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        if interval_delta <= timedelta(0):
            raise ConfigurationError(
                f"Sampling interval (SAMPLING_INTERVAL) must be greater than zero, got {interval_text}."
            )
        if window_delta < interval_delta:
            logging.getLogger(__name__).warning(
                "Collection window (%s) is shorter than sampling interval (%s); no samples will be taken.",
                window_text,
                interval_text,
            )
        try:
            timeout = self.REQUEST_TIMEOUT_SECONDS
        except ValueError as e:
            raise ConfigurationError(f"REQUEST_TIMEOUT_SECONDS is not a number: {e}") from e
        if timeout <= 0:
            raise ConfigurationError("REQUEST_TIMEOUT_SECONDS must be greater than zero.")


# Instantiate the config to be imported by other modules
config = Config()
