"""Tests for RDS instance and cluster lookups."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from rds_health_aws.cluster import ClusterApi, to_cluster
from rds_health_aws.database import Database, to_node
from rds_health_protocols import GiB, NotFoundError, TransportError

INSTANCE = {
    "DBInstanceIdentifier": "orders",
    "DbiResourceId": "db-ORDERS",
    "DBInstanceClass": "db.r5.large",
    "AvailabilityZone": "eu-west-1a",
    "SecondaryAvailabilityZone": "eu-west-1b",
    "Engine": "postgres",
    "EngineVersion": "15.4",
    "StorageType": "gp3",
    "AllocatedStorage": 100,
}


def client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "DescribeDBInstances")


def paginated(client: MagicMock, *pages: dict) -> None:
    client.get_paginator.return_value.paginate.return_value = list(pages)


class TestToNode:
    def test_maps_instance_fields(self):
        node = to_node(INSTANCE)

        assert node.id == "db-ORDERS"
        assert node.name == "orders"
        assert node.type == "db.r5.large"
        assert node.zones == ["eu-west-1a", "eu-west-1b"]
        assert node.engine.id == "postgres"
        assert node.engine.version == "15.4"
        assert node.storage.type == "gp3"
        assert node.storage.size == 100 * GiB
        assert node.read_only is False

    def test_single_zone(self):
        instance = {**INSTANCE}
        del instance["SecondaryAvailabilityZone"]

        assert to_node(instance).zones == ["eu-west-1a"]


class TestDatabase:
    @pytest.mark.asyncio
    async def test_lookup_describes_instance(self):
        client = MagicMock()
        client.describe_db_instances.return_value = {"DBInstances": [INSTANCE]}

        node = await Database(client=client).lookup("orders")

        assert node.name == "orders"
        client.describe_db_instances.assert_called_once_with(DBInstanceIdentifier="orders")

    @pytest.mark.asyncio
    async def test_lookup_empty_result_is_not_found(self):
        client = MagicMock()
        client.describe_db_instances.return_value = {"DBInstances": []}

        with pytest.raises(NotFoundError) as exc_info:
            await Database(client=client).lookup("orders")

        assert str(exc_info.value) == "database orders is not found"

    @pytest.mark.asyncio
    async def test_lookup_unknown_instance_is_not_found(self):
        client = MagicMock()
        client.describe_db_instances.side_effect = client_error("DBInstanceNotFound")

        with pytest.raises(NotFoundError):
            await Database(client=client).lookup("orders")

    @pytest.mark.asyncio
    async def test_lookup_other_errors_are_transport_errors(self):
        client = MagicMock()
        client.describe_db_instances.side_effect = client_error("AccessDenied")

        with pytest.raises(TransportError) as exc_info:
            await Database(client=client).lookup("orders")

        assert exc_info.value.source == "rds"

    @pytest.mark.asyncio
    async def test_lookup_all_collects_pages(self):
        client = MagicMock()
        second = {**INSTANCE, "DBInstanceIdentifier": "billing"}
        paginated(client, {"DBInstances": [INSTANCE]}, {"DBInstances": [second]})

        nodes = await Database(client=client).lookup_all()

        assert [n.name for n in nodes] == ["orders", "billing"]
        client.get_paginator.assert_called_once_with("describe_db_instances")


class TestClusters:
    def test_splits_writer_and_reader(self):
        cluster = to_cluster(
            {
                "DBClusterIdentifier": "orders-cluster",
                "Engine": "aurora-postgresql",
                "EngineVersion": "15.4",
                "DBClusterMembers": [
                    {"DBInstanceIdentifier": "orders-1", "IsClusterWriter": True},
                    {"DBInstanceIdentifier": "orders-2", "IsClusterWriter": False},
                    {"DBInstanceIdentifier": "orders-3", "IsClusterWriter": False},
                ],
            }
        )

        assert cluster.id == "orders-cluster"
        assert cluster.engine.id == "aurora-postgresql"
        assert [n.name for n in cluster.writer] == ["orders-1"]
        assert [n.name for n in cluster.reader] == ["orders-2", "orders-3"]

    def test_cluster_without_engine(self):
        assert to_cluster({"DBClusterIdentifier": "c"}).engine is None

    @pytest.mark.asyncio
    async def test_lookup_all(self):
        client = MagicMock()
        paginated(client, {"DBClusters": [{"DBClusterIdentifier": "c1"}]})

        clusters = await ClusterApi(client=client).lookup_all()

        assert [c.id for c in clusters] == ["c1"]
        client.get_paginator.assert_called_once_with("describe_db_clusters")
