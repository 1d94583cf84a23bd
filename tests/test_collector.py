"""
Tests for the pids and build info collectors.
"""

import platform
from pathlib import Path

import pytest
from prometheus_client import CollectorRegistry, generate_latest

from container_pids_exporter.collectors import pids as pids_module
from container_pids_exporter.collectors.base import Collector
from container_pids_exporter.collectors.build_info import BuildInfoCollector
from container_pids_exporter.collectors.pids import MetricEmitter, PidsCollector
from container_pids_exporter.const import APP_VERSION
from container_pids_exporter.models.container import ContainerEntry
from container_pids_exporter.models.metric import MetricDescriptor, PidsMetrics


def _registry(cgroup_root: Path) -> CollectorRegistry:
    registry = CollectorRegistry()
    registry.register(PidsCollector(cgroup_root))
    return registry


def _sample_count(registry: CollectorRegistry) -> int:
    return sum(len(family.samples) for family in registry.collect())


def test_empty_hierarchy_emits_only_up(cgroup_root: Path) -> None:
    registry = _registry(cgroup_root)

    assert registry.get_sample_value("container_pids_up") == 1.0
    assert _sample_count(registry) == 1


def test_missing_hierarchy_still_up(tmp_path: Path) -> None:
    registry = _registry(tmp_path / "no-cgroups")

    assert registry.get_sample_value("container_pids_up") == 1.0
    assert _sample_count(registry) == 1


def test_limited_container(make_cgroup, cgroup_root: Path) -> None:
    make_cgroup("container-A", max="100\n", current="3\n")
    registry = _registry(cgroup_root)

    assert registry.get_sample_value("container_pids_max", {"id": "/container-A"}) == 100.0
    assert registry.get_sample_value("container_pids_current", {"id": "/container-A"}) == 3.0


def test_unlimited_container(make_cgroup, cgroup_root: Path) -> None:
    make_cgroup("container-B", max="max\n", current="7")
    registry = _registry(cgroup_root)

    assert registry.get_sample_value("container_pids_max", {"id": "/container-B"}) == -1.0
    assert registry.get_sample_value("container_pids_current", {"id": "/container-B"}) == 7.0


def test_invalid_max_emits_nothing(make_cgroup, cgroup_root: Path) -> None:
    make_cgroup("container-C", max="notanumber", current="4")
    registry = _registry(cgroup_root)

    assert registry.get_sample_value("container_pids_max", {"id": "/container-C"}) is None
    assert registry.get_sample_value("container_pids_current", {"id": "/container-C"}) is None
    assert _sample_count(registry) == 1


def test_missing_current_keeps_max(make_cgroup, cgroup_root: Path) -> None:
    make_cgroup("half", max="20")
    registry = _registry(cgroup_root)

    assert registry.get_sample_value("container_pids_max", {"id": "/half"}) == 20.0
    assert registry.get_sample_value("container_pids_current", {"id": "/half"}) is None


def test_partial_failures_do_not_hide_other_containers(make_cgroup, cgroup_root: Path) -> None:
    make_cgroup("container-A", max="100\n", current="3\n")
    make_cgroup("container-B", max="max\n", current="7")
    make_cgroup("container-C", max="notanumber")
    make_cgroup("no-max", current="1")
    registry = _registry(cgroup_root)

    # up + 2 x (max, current)
    assert _sample_count(registry) == 5


def test_undecodable_file_does_not_abort_scrape(make_cgroup, cgroup_root: Path) -> None:
    (make_cgroup("a0bad", current="1") / "pids.max").write_bytes(b"\xff\xfe\n")
    for name in ("a1", "a2", "a3", "a4"):
        make_cgroup(name, max="10", current="1")
    registry = _registry(cgroup_root)

    assert registry.get_sample_value("container_pids_max", {"id": "/a0bad"}) is None
    for name in ("a1", "a2", "a3", "a4"):
        assert registry.get_sample_value("container_pids_max", {"id": f"/{name}"}) == 10.0
    # up + 4 x (max, current)
    assert _sample_count(registry) == 9


def test_exposition_format(make_cgroup, cgroup_root: Path) -> None:
    make_cgroup("container-A", max="100\n", current="3\n")

    output = generate_latest(_registry(cgroup_root)).decode()

    assert "# TYPE container_pids_up gauge" in output
    assert "container_pids_up 1.0" in output
    assert 'container_pids_max{id="/container-A"} 100.0' in output
    assert 'container_pids_current{id="/container-A"} 3.0' in output


def test_scrapes_are_independent(make_cgroup, cgroup_root: Path) -> None:
    registry = _registry(cgroup_root)
    assert _sample_count(registry) == 1

    make_cgroup("late", max="8", current="2")
    assert _sample_count(registry) == 3

    (cgroup_root / "pids" / "late" / "pids.max").unlink()
    assert _sample_count(registry) == 1


def test_walk_failure_keeps_up(cgroup_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_walk(*args, **kwargs):
        raise RuntimeError("walk exploded")

    monkeypatch.setattr(pids_module, "iter_container_entries", broken_walk)
    registry = _registry(cgroup_root)

    assert registry.get_sample_value("container_pids_up") == 1.0


def test_describe_does_not_scan(cgroup_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def unexpected_walk(*args, **kwargs):
        raise AssertionError("registration must not scan")

    monkeypatch.setattr(pids_module, "iter_container_entries", unexpected_walk)
    collector = PidsCollector(cgroup_root)

    names = [family.name for family in collector.describe()]
    CollectorRegistry().register(collector)

    assert names == ["container_pids_up", "container_pids_max", "container_pids_current"]


def test_duplicate_registration_rejected(cgroup_root: Path) -> None:
    registry = _registry(cgroup_root)

    with pytest.raises(ValueError):
        registry.register(PidsCollector(cgroup_root))


def test_custom_metric_descriptors(make_cgroup, cgroup_root: Path) -> None:
    make_cgroup("c1", max="9", current="1")
    metrics = PidsMetrics(
        up=MetricDescriptor("test_up", "up"),
        max=MetricDescriptor("test_max", "max", ("cgroup",)),
        current=MetricDescriptor("test_current", "current", ("cgroup",)),
    )
    registry = CollectorRegistry()
    registry.register(PidsCollector(cgroup_root, metrics))

    assert registry.get_sample_value("test_up") == 1.0
    assert registry.get_sample_value("test_max", {"cgroup": "/c1"}) == 9.0


def test_metric_emitter() -> None:
    emitter = MetricEmitter(PidsMetrics())
    emitter.emit_up()
    emitter.emit(ContainerEntry(id="/a", max_value=-1.0, current_value=2.0))
    emitter.emit(ContainerEntry(id="/b", max_value=5.0))

    up, max_family, current = emitter.families()

    assert [s.value for s in up.samples] == [1.0]
    assert up.samples[0].labels == {}
    assert [(s.labels["id"], s.value) for s in max_family.samples] == [("/a", -1.0), ("/b", 5.0)]
    assert [(s.labels["id"], s.value) for s in current.samples] == [("/a", 2.0)]


def test_base_collector_swallows_errors() -> None:
    class Broken(Collector):
        def describe(self):
            return []

        def collect_metrics(self):
            raise OSError("boom")

    assert Broken("broken").collect() == []


def test_build_info() -> None:
    registry = CollectorRegistry()
    registry.register(BuildInfoCollector())

    value = registry.get_sample_value(
        "container_pids_exporter_build_info",
        {"version": APP_VERSION, "pythonversion": platform.python_version()},
    )
    assert value == 1.0
