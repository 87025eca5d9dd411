"""
Tests for HealthService.

Collaborators are mocked the way the AWS adapters behave: the database
lookup raises NotFoundError for unknown names, compute lookups may fail
without failing a check.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from rds_health_core.service import HealthService
from rds_health_core.status import StatusCode
from rds_health_protocols import (
    CPU,
    Cluster,
    Compute,
    GHz,
    Node,
    NotFoundError,
    Sample,
    TransportError,
)

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)

CPU_METRICS = (
    "os.cpuUtilization.total.min",
    "os.cpuUtilization.total.avg",
    "os.cpuUtilization.total.max",
)


def make_source(hot_nodes: set[str] = frozenset()):
    """Telemetry where nodes in hot_nodes run at 95% cpu."""

    async def fetch(entity_id, duration, *metrics):
        if entity_id not in hot_nodes:
            return {}
        return {m: [Sample(T0, 95.0)] for m in CPU_METRICS}

    source = MagicMock()
    source.fetch = AsyncMock(side_effect=fetch)
    return source


@pytest.fixture
def node():
    return Node(id="db-ORDERS", name="orders", type="db.r5.large")


@pytest.fixture
def database(node):
    db = MagicMock()
    db.lookup = AsyncMock(return_value=node)
    return db


@pytest.fixture
def compute():
    catalog = MagicMock()
    catalog.lookup = AsyncMock(return_value=Compute(cpu=CPU(cores=2, clock=GHz(3.1))))
    return catalog


@pytest.fixture
def discovery():
    cluster = Cluster(
        id="shop",
        writer=[Node(id="db-W", name="shop-a")],
        reader=[Node(id="db-R", name="shop-b", read_only=True)],
    )
    d = MagicMock()
    d.lookup_all = AsyncMock(return_value=([cluster], [Node(id="db-S", name="solo")]))
    return d


class TestCheckHealthNode:
    """Tests for check_health_node()."""

    @pytest.mark.asyncio
    async def test_failing_node(self, database, compute, discovery):
        service = HealthService(make_source({"db-ORDERS"}), database, compute, discovery)

        status = await service.check_health_node("orders", timedelta(hours=24))

        assert status.code == StatusCode.FAILURE
        assert len(status.checks) == 12
        assert status.checks[0].rule.id == "C1"
        assert status.checks[0].code == StatusCode.FAILURE
        assert status.node.compute.cpu.cores == 2
        database.lookup.assert_awaited_once_with("orders")

    @pytest.mark.asyncio
    async def test_compute_failure_does_not_fail_check(self, database, discovery):
        compute = MagicMock()
        compute.lookup = AsyncMock(side_effect=TransportError("ec2", "denied"))
        service = HealthService(make_source(), database, compute, discovery)

        status = await service.check_health_node("orders", timedelta(hours=24))

        assert status.node.compute is None
        assert status.code == StatusCode.SUCCESS

    @pytest.mark.asyncio
    async def test_unknown_node(self, compute, discovery):
        database = MagicMock()
        database.lookup = AsyncMock(side_effect=NotFoundError("database", "nope"))
        service = HealthService(make_source(), database, compute, discovery)

        with pytest.raises(NotFoundError):
            await service.check_health_node("nope", timedelta(hours=1))

    @pytest.mark.asyncio
    async def test_progress_is_reported(self, database, compute, discovery):
        progress = MagicMock()
        service = HealthService(make_source(), database, compute, discovery, progress)

        await service.check_health_node("orders", timedelta(hours=1))

        progress.describe.assert_any_call("discovering orders")
        progress.describe.assert_any_call("checking orders")


class TestCheckHealthRegion:
    """Tests for check_health_region()."""

    @pytest.mark.asyncio
    async def test_rollup(self, database, compute, discovery):
        service = HealthService(make_source({"db-R"}), database, compute, discovery)

        region = await service.check_health_region(timedelta(hours=24))

        assert region.code == StatusCode.FAILURE
        assert region.clusters[0].code == StatusCode.FAILURE
        assert region.clusters[0].writer[0].code == StatusCode.SUCCESS
        assert region.clusters[0].reader[0].code == StatusCode.FAILURE
        assert region.nodes[0].code == StatusCode.SUCCESS

    @pytest.mark.asyncio
    async def test_nodes_checked_in_order(self, database, compute, discovery):
        source = make_source()
        service = HealthService(source, database, compute, discovery)

        await service.check_health_region(timedelta(hours=24))

        checked = [c.args[0] for c in source.fetch.await_args_list]
        assert checked == ["db-W", "db-R", "db-S"]

    @pytest.mark.asyncio
    async def test_first_error_aborts(self, database, compute, discovery):
        source = MagicMock()
        source.fetch = AsyncMock(side_effect=TransportError("pi", "throttled"))
        service = HealthService(source, database, compute, discovery)

        with pytest.raises(TransportError):
            await service.check_health_region(timedelta(hours=24))

        assert source.fetch.await_count == 1


class TestShow:
    """Tests for show_node() and show_region()."""

    @pytest.mark.asyncio
    async def test_show_node(self, database, compute, discovery):
        service = HealthService(make_source({"db-ORDERS"}), database, compute, discovery)

        status = await service.show_node("orders", timedelta(days=7))

        assert status.code == StatusCode.UNKNOWN
        assert len(status.checks) == 17
        assert all(s.code == StatusCode.UNKNOWN for s in status.checks)

    @pytest.mark.asyncio
    async def test_show_region(self, database, compute, discovery):
        service = HealthService(make_source(), database, compute, discovery)

        region = await service.show_region()

        assert [c.id for c in region.clusters] == ["shop"]
        assert [n.name for n in region.nodes] == ["solo"]
