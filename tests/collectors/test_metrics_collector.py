# tests/collectors/test_metrics_collector.py

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from kubernetes_asyncio.client.rest import ApiException

from kubeperf.collectors.metrics_collector import METRICS_GROUP, METRICS_VERSION, MetricsServerCollector
from kubeperf.core.exceptions import ClusterConnectionError, MetricsUnavailableError

POD_METRICS = {
    "kind": "PodMetricsList",
    "items": [
        {
            "metadata": {"name": "web-abc-1", "namespace": "prod"},
            "timestamp": "2024-05-01T10:00:00Z",
            "window": "15s",
            "containers": [
                {"name": "app", "usage": {"cpu": "12345678n", "memory": "51200Ki"}},
                {"name": "sidecar", "usage": {"cpu": "0", "memory": "0"}},
            ],
        },
        {"metadata": {"name": "starting", "namespace": "prod"}, "containers": []},
    ],
}

NODE_METRICS = {
    "kind": "NodeMetricsList",
    "items": [
        {"metadata": {"name": "node-1"}, "usage": {"cpu": "1500m", "memory": "2Gi"}},
    ],
}


@pytest.fixture
def mock_custom_api():
    api = MagicMock()

    async def list_cluster_custom_object(group, version, plural, **kwargs):
        return POD_METRICS if plural == "pods" else NODE_METRICS

    api.list_cluster_custom_object = AsyncMock(side_effect=list_cluster_custom_object)
    return api


@patch("kubeperf.collectors.metrics_collector.get_custom_objects_api")
async def test_list_pod_metrics_parses_usage(mock_get_api, mock_custom_api):
    mock_get_api.return_value = mock_custom_api

    samples = await MetricsServerCollector(request_timeout=3).list_pod_metrics()

    mock_custom_api.list_cluster_custom_object.assert_awaited_with(
        METRICS_GROUP, METRICS_VERSION, "pods", _request_timeout=3
    )
    assert [s.name for s in samples] == ["web-abc-1", "starting"]
    app, sidecar = samples[0].containers
    assert app.name == "app"
    assert app.cpu == 13  # 12.345678m rounded up
    assert app.memory == 50 * 1024 * 1024
    assert (sidecar.cpu, sidecar.memory) == (0, 0)
    assert samples[1].containers == []


@patch("kubeperf.collectors.metrics_collector.get_custom_objects_api")
async def test_list_node_metrics_parses_usage(mock_get_api, mock_custom_api):
    mock_get_api.return_value = mock_custom_api

    samples = await MetricsServerCollector().list_node_metrics()

    assert len(samples) == 1
    assert samples[0].name == "node-1"
    assert samples[0].cpu == 1500
    assert samples[0].memory == 2 * 1024**3


@patch("kubeperf.collectors.metrics_collector.get_custom_objects_api")
async def test_probe_succeeds_when_api_answers(mock_get_api, mock_custom_api):
    mock_get_api.return_value = mock_custom_api

    await MetricsServerCollector().probe()

    mock_custom_api.list_cluster_custom_object.assert_awaited_once()


@patch("kubeperf.collectors.metrics_collector.get_custom_objects_api")
async def test_probe_failure_raises_metrics_unavailable(mock_get_api, mock_custom_api):
    mock_custom_api.list_cluster_custom_object.side_effect = ApiException(status=404, reason="Not Found")
    mock_get_api.return_value = mock_custom_api

    with pytest.raises(MetricsUnavailableError, match="metrics-server"):
        await MetricsServerCollector().probe()


@patch("kubeperf.collectors.metrics_collector.get_custom_objects_api")
async def test_fetch_failure_raises_cluster_error(mock_get_api, mock_custom_api):
    mock_custom_api.list_cluster_custom_object.side_effect = ApiException(status=503, reason="Unavailable")
    mock_get_api.return_value = mock_custom_api

    with pytest.raises(ClusterConnectionError):
        await MetricsServerCollector().list_pod_metrics()
