"""
RDS instance lookups.

Maps DescribeDBInstances entries onto Node. The stable DbiResourceId is
the identifier Performance Insights expects.
"""

from dataclasses import dataclass
from typing import Any

from botocore.exceptions import ClientError

from rds_health_aws._sdk import call, error_code, paginate
from rds_health_protocols import BiB, Engine, GiB, Node, NotFoundError, Storage, TransportError


@dataclass
class Database:
    """DatabaseLookup backed by the RDS API."""

    client: Any

    async def lookup(self, name: str) -> Node:
        """
        Describe one instance.

        Raises:
            NotFoundError: If the instance does not exist
            TransportError: On any other API failure
        """
        try:
            response = await call(
                "rds", self.client.describe_db_instances, DBInstanceIdentifier=name
            )
        except TransportError as e:
            cause = e.__cause__
            if isinstance(cause, ClientError) and error_code(cause) == "DBInstanceNotFound":
                raise NotFoundError("database", name) from cause
            raise

        instances = response.get("DBInstances", [])
        if not instances:
            raise NotFoundError("database", name)
        return to_node(instances[0])

    async def lookup_all(self) -> list[Node]:
        instances = await paginate("rds", self.client, "describe_db_instances", "DBInstances")
        return [to_node(i) for i in instances]


def to_node(instance: dict[str, Any]) -> Node:
    zones = [
        instance[key]
        for key in ("AvailabilityZone", "SecondaryAvailabilityZone")
        if instance.get(key)
    ]
    return Node(
        id=instance.get("DbiResourceId", ""),
        name=instance.get("DBInstanceIdentifier", ""),
        type=instance.get("DBInstanceClass", ""),
        zones=zones,
        engine=Engine(
            id=instance.get("Engine", ""),
            version=instance.get("EngineVersion", ""),
        ),
        storage=Storage(
            type=instance.get("StorageType", ""),
            size=BiB(instance.get("AllocatedStorage", 0) * GiB),
        ),
    )
