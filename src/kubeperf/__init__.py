"""kubeperf: Kubernetes deployment resource usage analyzer."""

__version__ = "0.3.0"
