"""
Protocol definitions for the RDS health system.

This package provides the shared vocabulary used by the evaluation core
and by the backend adapters. It has zero dependencies on other
rds_health_* packages.

Key protocols:
- MetricProvider: One telemetry backend request for a batch of metrics
- TelemetrySource: Fetch raw metrics for an entity over a window
- DatabaseLookup, ClusterLookup, ComputeCatalog, RegionDiscovery:
  topology and metadata collaborators

Key types:
- Sample, Samples: Telemetry observations
- Node, Cluster, Region, Engine, Storage, CPU, Compute: Topology
- TransportError, NotFoundError: Error taxonomy
"""

from rds_health_protocols.discovery import (
    ClusterLookup,
    ComputeCatalog,
    DatabaseLookup,
    RegionDiscovery,
)
from rds_health_protocols.errors import NotFoundError, RdsHealthError, TransportError
from rds_health_protocols.source import MetricProvider, TelemetrySource
from rds_health_protocols.types import (
    CPU,
    BiB,
    Cluster,
    Compute,
    Engine,
    GHz,
    GiB,
    KiB,
    MiB,
    Node,
    NodeId,
    Region,
    Sample,
    Samples,
    Storage,
    TiB,
    values,
)

__all__ = [
    # Protocols
    "MetricProvider",
    "TelemetrySource",
    "DatabaseLookup",
    "ClusterLookup",
    "ComputeCatalog",
    "RegionDiscovery",
    # Errors
    "RdsHealthError",
    "TransportError",
    "NotFoundError",
    # Data types
    "Sample",
    "Samples",
    "values",
    "NodeId",
    "Node",
    "Cluster",
    "Region",
    "Engine",
    "Storage",
    "CPU",
    "Compute",
    "BiB",
    "GHz",
    "KiB",
    "MiB",
    "GiB",
    "TiB",
]
