"""
Health service.

Ties discovery, metadata lookups and the check orchestrator together:
- check_health_node / check_health_region: classify instances with the
  default health check and roll statuses up
- show_node: usage report of one instance
- show_region: topology of the region

Nodes are checked sequentially; the first error aborts the whole
operation. Compute metadata is best effort and never fails a check.
"""

import logging
from datetime import timedelta
from typing import Protocol

from rds_health_core.cache import Cache
from rds_health_core.check import Check
from rds_health_core.rules.checks import HEALTH_CHECKS, USAGE_REPORT
from rds_health_core.status import (
    StatusCluster,
    StatusCode,
    StatusNode,
    StatusRegion,
)
from rds_health_protocols import (
    ComputeCatalog,
    DatabaseLookup,
    Node,
    Region,
    RegionDiscovery,
    TelemetrySource,
)

logger = logging.getLogger(__name__)


class Progress(Protocol):
    """Receives short descriptions of the current activity."""

    def describe(self, text: str) -> None:
        ...


class NoProgress:
    def describe(self, text: str) -> None:
        pass


class HealthService:
    """
    Entry point of all health operations.

    Example:
        service = HealthService(source, database, compute, discovery)
        status = await service.check_health_node("orders-db", timedelta(hours=24))
    """

    def __init__(
        self,
        source: TelemetrySource,
        database: DatabaseLookup,
        compute: ComputeCatalog,
        discovery: RegionDiscovery,
        progress: Progress | None = None,
    ) -> None:
        self.source = source
        self.database = database
        self.compute = Cache(compute.lookup)
        self.discovery = discovery
        self.progress = progress or NoProgress()

    async def check_health_region(self, interval: timedelta) -> StatusRegion:
        self.progress.describe("discovering")
        clusters, nodes = await self.discovery.lookup_all()
        logger.info(f"Discovered {len(clusters)} clusters, {len(nodes)} standalone nodes")

        status_clusters = []
        for cluster in clusters:
            writer = [await self._check_node(n, interval) for n in cluster.writer]
            reader = [await self._check_node(n, interval) for n in cluster.reader]
            status_clusters.append(StatusCluster.from_nodes(cluster, writer, reader))

        status_nodes = [await self._check_node(n, interval) for n in nodes]
        return StatusRegion.from_parts(status_clusters, status_nodes)

    async def check_health_node(self, name: str, interval: timedelta) -> StatusNode:
        self.progress.describe(f"discovering {name}")
        node = await self._lookup(name)
        return await self._check_node(node, interval)

    async def show_node(self, name: str, interval: timedelta) -> StatusNode:
        self.progress.describe(f"checking {name}")
        node = await self._lookup(name)
        checks = await Check(self.source).should_all(USAGE_REPORT).run(node.id, interval)
        return StatusNode(node=node, checks=checks, code=StatusCode.UNKNOWN)

    async def show_region(self) -> Region:
        self.progress.describe("discovering")
        clusters, nodes = await self.discovery.lookup_all()
        return Region(clusters=clusters, nodes=nodes)

    async def _lookup(self, name: str) -> Node:
        node = await self.database.lookup(name)
        node.compute = await self.compute.lookup(node.type)
        return node

    async def _check_node(self, node: Node, interval: timedelta) -> StatusNode:
        self.progress.describe(f"checking {node.name}")
        checks = await Check(self.source).should_all(HEALTH_CHECKS).run(node.id, interval)
        return StatusNode.from_checks(node, checks)
