"""
Prometheus telemetry adapter for the RDS health system.

- PrometheusClient: range query client over an injected httpx client
- PrometheusProvider: MetricProvider answering a batch with one query
"""

from rds_health_prometheus.factory import create_prometheus_provider
from rds_health_prometheus.prom_client import PrometheusClient, PrometheusProvider

__all__ = [
    "PrometheusClient",
    "PrometheusProvider",
    "create_prometheus_provider",
]
