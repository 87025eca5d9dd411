"""Factory function for the Prometheus metric provider."""

import httpx

from rds_health_prometheus.prom_client import PrometheusClient, PrometheusProvider


def create_prometheus_provider(
    prometheus_url: str,
    label: str = "instance",
    http: httpx.AsyncClient | None = None,
    timeout: float = 10.0,
) -> PrometheusProvider:
    """
    Create a Prometheus-backed MetricProvider.

    Args:
        prometheus_url: Prometheus API URL (e.g., "http://prometheus:9090")
        label: Label selecting the database instance
        http: Optional pre-configured httpx client. If None, a new client
            is created; the caller owns closing it via provider.client.http.
        timeout: Request timeout in seconds for a new client

    Example:
        provider = create_prometheus_provider("http://prometheus:9090")
        source = SamplingService(provider=provider)
    """
    if http is None:
        http = httpx.AsyncClient(base_url=prometheus_url, timeout=timeout)
    return PrometheusProvider(client=PrometheusClient(http=http), label=label)
