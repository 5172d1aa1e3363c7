class KubePerfError(Exception):
    """Base exception for kubeperf."""

    pass


class ConfigurationError(KubePerfError):
    """Raised when a configuration value is missing or malformed."""

    pass


class MetricsUnavailableError(KubePerfError):
    """Raised when the metrics API cannot be reached before sampling starts."""

    pass


class ClusterError(KubePerfError):
    """Base exception for Kubernetes API related errors."""

    pass


class ResourceNotFoundError(ClusterError):
    """Raised when a requested Kubernetes object does not exist."""

    pass


class ClusterConnectionError(ClusterError):
    """Raised when the Kubernetes API cannot be reached or rejects a request."""

    pass
