"""
Factory for the health service used by the CLI.

Uses lazy imports to avoid loading unused adapter packages. Topology
always comes from AWS; telemetry comes from the configured backend.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from rds_health_core.sampling import SamplingService
from rds_health_core.service import HealthService, Progress

AVAILABLE_TELEMETRY = ["pi", "prometheus"]


@asynccontextmanager
async def open_service(
    telemetry: str = "pi",
    region: str | None = None,
    profile: str | None = None,
    prometheus_url: str = "http://localhost:9090",
    prometheus_label: str = "instance",
    timeout: float = 10.0,
    progress: Progress | None = None,
) -> AsyncIterator[HealthService]:
    """
    Create a HealthService and release its clients on exit.

    Raises:
        ValueError: If telemetry is not recognized
        TransportError: If the AWS session cannot be created

    Example:
        async with open_service("pi", region="eu-central-1") as service:
            status = await service.check_health_node("orders-db", timedelta(hours=24))
    """
    if telemetry not in AVAILABLE_TELEMETRY:
        raise ValueError(
            f"Unknown telemetry '{telemetry}'. "
            f"Available telemetry: {', '.join(AVAILABLE_TELEMETRY)}"
        )

    # Lazy import to avoid loading boto3 unless needed
    from rds_health_aws.factory import (
        create_aws_collaborators,
        create_insight_provider,
        create_session,
    )

    session = create_session(region=region, profile=profile)
    database, catalog, discovery = create_aws_collaborators(session)

    if telemetry == "pi":
        provider = create_insight_provider(session)
        yield HealthService(
            SamplingService(provider=provider), database, catalog, discovery, progress
        )
        return

    # Lazy import to avoid loading httpx clients unless needed
    from rds_health_prometheus.factory import create_prometheus_provider

    provider = create_prometheus_provider(
        prometheus_url, label=prometheus_label, timeout=timeout
    )
    try:
        yield HealthService(
            SamplingService(provider=provider), database, catalog, discovery, progress
        )
    finally:
        await provider.client.http.aclose()
