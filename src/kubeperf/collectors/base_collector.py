# src/kubeperf/collectors/base_collector.py
"""
This module defines the base class shared by all Kubernetes-backed
collectors. Each collector lazily builds one API client through the
centralized loader in ``kubeperf.core.k8s_client`` and closes it when the
run is over.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

logger = logging.getLogger(__name__)


class BaseCollector(ABC):
    """
    Abstract Base Class for all collectors.
    """

    def __init__(self):
        self._api = None

    @abstractmethod
    async def _create_api(self) -> Optional[Any]:
        """Build the Kubernetes API object this collector talks to."""
        pass

    async def _ensure_client(self):
        """Lazily initialize the Kubernetes client."""
        if self._api:
            return self._api

        self._api = await self._create_api()
        if self._api:
            logger.debug("%s initialized with centralized config.", type(self).__name__)
        else:
            logger.warning("%s could not initialize Kubernetes client.", type(self).__name__)
        return self._api

    async def close(self):
        """Close the Kubernetes API client if it exists."""
        if self._api:
            await self._api.api_client.close()
            logger.debug("%s Kubernetes client closed.", type(self).__name__)
            self._api = None
