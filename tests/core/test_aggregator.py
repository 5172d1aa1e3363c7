# tests/core/test_aggregator.py

from conftest import MI, FakeOwnerLookup, make_pod, pod_sample

from kubeperf.core.aggregator import DeploymentAggregator, aggregate_deployments, sorted_aggregates
from kubeperf.models.metrics import MetricsSnapshot
from kubeperf.models.pod import OwnerReference

WEB_LOOKUP = FakeOwnerLookup({("ReplicaSet", "ns", "web-abc"): [OwnerReference(kind="Deployment", name="web")]})


def snapshot_with(*samples) -> MetricsSnapshot:
    snapshot = MetricsSnapshot()
    for sample in samples:
        snapshot.fold_pod_sample(sample)
    return snapshot


async def test_end_to_end_three_pods_one_deployment():
    """Three pods of 'web', one missing a memory limit."""
    pods = [
        make_pod("web-abc-1", replica_set="web-abc"),
        make_pod("web-abc-2", replica_set="web-abc", limits=((500, 0),)),
        make_pod("web-abc-3", replica_set="web-abc"),
    ]
    snapshot = snapshot_with(
        pod_sample("web-abc-1", app=(100, 50 * MI)),
        pod_sample("web-abc-2", app=(200, 60 * MI)),
        pod_sample("web-abc-3", app=(150, 40 * MI)),
    )

    result = await aggregate_deployments(pods, snapshot, WEB_LOOKUP)

    assert list(result) == ["ns/web"]
    web = result["ns/web"]
    assert web.name == "web"
    assert web.namespace == "ns"
    assert web.pods == ["web-abc-1", "web-abc-2", "web-abc-3"]
    assert web.total_pods == 3
    assert web.pods_without_limits == 1
    assert web.max_cpu == 200
    assert web.max_memory == 62914560
    assert web.avg_cpu == 150
    assert web.avg_memory == 50 * MI


async def test_bare_pod_produces_no_aggregate():
    snapshot = snapshot_with(pod_sample("bare", app=(100, 1 * MI)))

    result = await aggregate_deployments([make_pod("bare")], snapshot, FakeOwnerLookup({}))

    assert result == {}


async def test_pod_without_metrics_still_counts():
    pods = [make_pod("web-abc-1", replica_set="web-abc", limits=((0, 64 * MI),))]

    result = await aggregate_deployments(pods, MetricsSnapshot(), WEB_LOOKUP)

    web = result["ns/web"]
    assert web.total_pods == 1
    assert web.pods_without_limits == 1
    assert (web.max_cpu, web.max_memory, web.avg_cpu, web.avg_memory) == (0, 0, 0, 0)


def test_zero_cpu_limit_marks_pod_without_limits():
    aggregator = DeploymentAggregator()
    aggregate = aggregator.add_pod(make_pod("p", limits=((0, 128 * MI),)), "web")

    assert aggregate.pods_without_limits == 1


def test_any_container_without_limits_marks_pod():
    aggregator = DeploymentAggregator()
    aggregate = aggregator.add_pod(make_pod("p", limits=((100, 128 * MI), (100, 0))), "web")

    assert aggregate.pods_without_limits == 1


def test_pod_with_zero_containers_counts_as_having_limits():
    aggregator = DeploymentAggregator()
    aggregate = aggregator.add_pod(make_pod("p", limits=()), "web")

    assert aggregate.total_pods == 1
    assert aggregate.pods_without_limits == 0


def test_average_is_recomputed_over_all_observed_containers():
    snapshot = snapshot_with(
        pod_sample("p1", app=(100, 10), sidecar=(20, 2)),
        pod_sample("p2", app=(300, 30)),
    )
    aggregator = DeploymentAggregator(snapshot)

    first = aggregator.add_pod(make_pod("p1"), "web")
    assert (first.avg_cpu, first.avg_memory) == (60, 6)

    second = aggregator.add_pod(make_pod("p2"), "web")
    assert second is first
    assert second.observed_containers == 3
    assert second.avg_cpu == (100 + 20 + 300) // 3
    assert second.avg_memory == (10 + 2 + 30) // 3
    assert second.max_cpu == 300


def test_pod_with_no_observed_containers_leaves_averages_unchanged():
    snapshot = snapshot_with(pod_sample("p1", app=(100, 10)), pod_sample("p2"))
    aggregator = DeploymentAggregator(snapshot)

    aggregator.add_pod(make_pod("p1"), "web")
    aggregate = aggregator.add_pod(make_pod("p2"), "web")

    assert aggregate.observed_containers == 1
    assert (aggregate.avg_cpu, aggregate.avg_memory) == (100, 10)


def test_first_pod_with_no_observed_containers_does_not_divide_by_zero():
    aggregator = DeploymentAggregator(snapshot_with(pod_sample("p1")))

    aggregate = aggregator.add_pod(make_pod("p1"), "web")

    assert (aggregate.avg_cpu, aggregate.avg_memory) == (0, 0)


async def test_same_deployment_name_in_two_namespaces_stays_separate():
    lookup = FakeOwnerLookup(
        {
            ("ReplicaSet", "a", "api-1"): [OwnerReference(kind="Deployment", name="api")],
            ("ReplicaSet", "b", "api-2"): [OwnerReference(kind="Deployment", name="api")],
        }
    )
    pods = [
        make_pod("api-1-x", namespace="b", replica_set="api-2"),
        make_pod("api-1-y", namespace="a", replica_set="api-1"),
    ]
    snapshot = snapshot_with(pod_sample("api-1-x", namespace="b", app=(10, 1)))

    result = await aggregate_deployments(pods, snapshot, lookup)

    assert set(result) == {"a/api", "b/api"}
    assert result["b/api"].max_cpu == 10
    assert result["a/api"].max_cpu == 0
    assert [a.key for a in sorted_aggregates(result)] == ["a/api", "b/api"]
