"""
Region discovery.

Reconciles the instance listing with cluster membership:
- every instance is described once and decorated with compute capacity
- cluster members are replaced with the described instances; readers are
  marked read-only
- instances that belong to no cluster are standalone nodes

Clusters are ordered by id and standalone nodes by name.
"""

import logging
from dataclasses import dataclass, field

from rds_health_core.cache import Cache
from rds_health_protocols import Cluster, ClusterLookup, ComputeCatalog, DatabaseLookup, Node

logger = logging.getLogger(__name__)


@dataclass
class Discovery:
    """RegionDiscovery over instance, cluster and compute lookups."""

    database: DatabaseLookup
    clusters: ClusterLookup
    compute: ComputeCatalog
    _cache: Cache = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._cache = Cache(self.compute.lookup)

    async def lookup_all(self) -> tuple[list[Cluster], list[Node]]:
        by_name: dict[str, Node] = {}
        for node in await self.database.lookup_all():
            node.compute = await self._cache.lookup(node.type)
            by_name[node.name] = node

        clusters = await self.clusters.lookup_all()
        for cluster in clusters:
            cluster.writer = [_claim(by_name, n, read_only=False) for n in cluster.writer]
            cluster.reader = [_claim(by_name, n, read_only=True) for n in cluster.reader]

        nodes = sorted(by_name.values(), key=lambda n: n.name)
        clusters = sorted(clusters, key=lambda c: c.id)
        logger.info(f"Discovered {len(clusters)} clusters and {len(nodes)} standalone instances")
        return clusters, nodes


def _claim(by_name: dict[str, Node], member: Node, read_only: bool) -> Node:
    node = by_name.pop(member.name, None)
    if node is None:
        logger.warning(f"Cluster member {member.name} is not listed as an instance")
        node = member
    node.read_only = read_only
    return node
