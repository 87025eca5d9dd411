"""RDS cluster lookups: membership of writer and reader instances."""

from dataclasses import dataclass
from typing import Any

from rds_health_aws._sdk import paginate
from rds_health_protocols import Cluster, Engine, Node


@dataclass
class ClusterApi:
    """
    ClusterLookup backed by DescribeDBClusters.

    Members are returned as name-only nodes; discovery replaces them with
    the fully described instances.
    """

    client: Any

    async def lookup_all(self) -> list[Cluster]:
        clusters = await paginate("rds", self.client, "describe_db_clusters", "DBClusters")
        return [to_cluster(c) for c in clusters]


def to_cluster(data: dict[str, Any]) -> Cluster:
    cluster = Cluster(id=data.get("DBClusterIdentifier", ""))
    if data.get("Engine"):
        cluster.engine = Engine(id=data["Engine"], version=data.get("EngineVersion", ""))

    for member in data.get("DBClusterMembers", []):
        node = Node(id="", name=member.get("DBInstanceIdentifier", ""))
        if member.get("IsClusterWriter"):
            cluster.writer.append(node)
        else:
            cluster.reader.append(node)
    return cluster
