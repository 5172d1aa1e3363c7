import asyncio
import logging
import typing

from kubernetes_asyncio import client, config
from kubernetes_asyncio.client.rest import ApiException

from .exceptions import ClusterConnectionError, ClusterError, ResourceNotFoundError

logger = logging.getLogger(__name__)

IN_CLUSTER_CONTEXT = "in-cluster"

# Global lock to prevent concurrent config loading
_CONFIG_LOCK = asyncio.Lock()
_CONFIG_LOADED = False
_CURRENT_CONTEXT: typing.Optional[str] = None


async def ensure_k8s_config(
    kubeconfig: typing.Optional[str] = None,
    context: typing.Optional[str] = None,
) -> bool:
    """
    Ensures that the Kubernetes configuration is loaded exactly once.

    In-cluster configuration is tried first unless an explicit kubeconfig
    path or context was requested; the local kubeconfig is the fallback.

    Returns:
        bool: True if config was loaded successfully (or was already loaded), False otherwise.
    """
    global _CONFIG_LOADED, _CURRENT_CONTEXT

    if _CONFIG_LOADED:
        return True

    async with _CONFIG_LOCK:
        if _CONFIG_LOADED:
            return True

        if not kubeconfig and not context:
            try:
                logger.debug("Attempting to load in-cluster Kubernetes config...")
                config.load_incluster_config()
                logger.info("Loaded in-cluster Kubernetes configuration.")
                _CONFIG_LOADED = True
                _CURRENT_CONTEXT = IN_CLUSTER_CONTEXT
                return True
            except config.ConfigException:
                logger.debug("In-cluster config not found.")

        try:
            logger.debug("Attempting to load kubeconfig (file=%s, context=%s)...", kubeconfig, context)
            await config.load_kube_config(config_file=kubeconfig, context=context)
            _CURRENT_CONTEXT = context or _active_context(kubeconfig)
            logger.info("Loaded Kubernetes configuration from kubeconfig (context: %s).", _CURRENT_CONTEXT)
            _CONFIG_LOADED = True
            return True
        except config.ConfigException as e:
            logger.warning("Could not load kubeconfig: %s", e)
        except Exception as e:
            logger.warning(f"Unexpected error loading kubeconfig: {e}")

    logger.warning("Failed to load any Kubernetes configuration.")
    return False


def _active_context(kubeconfig: typing.Optional[str]) -> str:
    """Name of the kubeconfig's current context, or an empty string."""
    try:
        _, active = config.list_kube_config_contexts(config_file=kubeconfig)
    except Exception as e:
        logger.debug("Could not read current context from kubeconfig: %s", e)
        return ""
    return (active or {}).get("name", "")


def get_current_context() -> str:
    """The context the loaded configuration points at ('' before loading)."""
    return _CURRENT_CONTEXT or ""


def reset_k8s_config() -> None:
    """Forget the loaded configuration so the next call reloads it."""
    global _CONFIG_LOADED, _CURRENT_CONTEXT
    _CONFIG_LOADED = False
    _CURRENT_CONTEXT = None


async def get_core_v1_api() -> typing.Optional[client.CoreV1Api]:
    """
    Returns a configured CoreV1Api instance.
    """
    if await ensure_k8s_config():
        return client.CoreV1Api()
    return None


async def get_apps_v1_api() -> typing.Optional[client.AppsV1Api]:
    """
    Returns a configured AppsV1Api instance.
    """
    if await ensure_k8s_config():
        return client.AppsV1Api()
    return None


async def get_custom_objects_api() -> typing.Optional[client.CustomObjectsApi]:
    """
    Returns a configured CustomObjectsApi instance (used for metrics.k8s.io).
    """
    if await ensure_k8s_config():
        return client.CustomObjectsApi()
    return None


def translate_api_error(error: Exception, what: str) -> ClusterError:
    """
    Maps an exception raised by the Kubernetes client to the kubeperf hierarchy.

    HTTP 404 becomes ResourceNotFoundError; everything else (other HTTP
    statuses, timeouts, connection failures) becomes ClusterConnectionError.
    """
    if isinstance(error, ClusterError):
        return error
    if isinstance(error, ApiException) and error.status == 404:
        return ResourceNotFoundError(f"{what} not found")
    if isinstance(error, ApiException):
        return ClusterConnectionError(f"Kubernetes API error while fetching {what}: {error.status} {error.reason}")
    return ClusterConnectionError(f"Could not fetch {what}: {error}")
