"""
Factory functions for the AWS adapters.

Lets the core CLI build AWS-backed collaborators without importing this
package directly.
"""

from typing import Any

import boto3
from botocore.exceptions import BotoCoreError

from rds_health_aws.cluster import ClusterApi
from rds_health_aws.database import Database
from rds_health_aws.discovery import Discovery
from rds_health_aws.insight import PerformanceInsightsProvider
from rds_health_aws.instance import InstanceCatalog
from rds_health_protocols import TransportError


def create_session(region: str | None = None, profile: str | None = None) -> boto3.Session:
    """
    Create a boto3 session; unset arguments fall back to the AWS defaults.

    Raises:
        TransportError: If the profile or configuration is invalid
    """
    try:
        return boto3.Session(region_name=region, profile_name=profile)
    except BotoCoreError as e:
        raise TransportError("aws", str(e)) from e


def create_aws_collaborators(
    session: boto3.Session | None = None,
    rds: Any = None,
    ec2: Any = None,
) -> tuple[Database, InstanceCatalog, Discovery]:
    """
    Create database lookup, compute catalog and region discovery.

    Args:
        session: boto3 session used to create missing clients
        rds: Optional pre-configured RDS client
        ec2: Optional pre-configured EC2 client

    Returns:
        Tuple of (Database, InstanceCatalog, Discovery)
    """
    if session is None:
        session = create_session()
    if rds is None:
        rds = session.client("rds")
    if ec2 is None:
        ec2 = session.client("ec2")

    database = Database(client=rds)
    catalog = InstanceCatalog(client=ec2)
    discovery = Discovery(database=database, clusters=ClusterApi(client=rds), compute=catalog)
    return database, catalog, discovery


def create_insight_provider(
    session: boto3.Session | None = None, pi: Any = None
) -> PerformanceInsightsProvider:
    if pi is None:
        pi = (session or create_session()).client("pi")
    return PerformanceInsightsProvider(client=pi)
