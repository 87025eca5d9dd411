"""
AWS adapters for the RDS health system.

- PerformanceInsightsProvider: MetricProvider over the "pi" API
- Database, ClusterApi: RDS instance and cluster lookups
- InstanceCatalog: EC2 instance type compute capacity
- Discovery: reconciled region topology
"""

from rds_health_aws.cluster import ClusterApi
from rds_health_aws.database import Database
from rds_health_aws.discovery import Discovery
from rds_health_aws.factory import create_aws_collaborators, create_insight_provider, create_session
from rds_health_aws.insight import PerformanceInsightsProvider
from rds_health_aws.instance import InstanceCatalog

__all__ = [
    "PerformanceInsightsProvider",
    "Database",
    "ClusterApi",
    "InstanceCatalog",
    "Discovery",
    "create_session",
    "create_aws_collaborators",
    "create_insight_provider",
]
