"""Environment-based configuration for the RDS health checker."""

import re
from datetime import timedelta

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """RDS health configuration.

    All settings can be overridden via environment variables with
    RDS_HEALTH_ prefix. For example:
        RDS_HEALTH_AWS_REGION=eu-central-1
        RDS_HEALTH_TELEMETRY=prometheus
    """

    # AWS session; unset values fall back to the boto3 defaults
    aws_region: str | None = None
    aws_profile: str | None = None

    # Telemetry backend: "pi" (Performance Insights) or "prometheus"
    telemetry: str = "pi"
    prometheus_url: str = "http://localhost:9090"
    prometheus_label: str = "instance"
    http_timeout_seconds: float = 10.0

    # Look-back window of checks
    interval: str = "24h"

    log_level: str = "WARNING"

    model_config = {"env_prefix": "RDS_HEALTH_"}


settings = Settings()


_SCALES = {
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
    "w": timedelta(weeks=1),
}

_INTERVAL = re.compile(r"^(\d+)(\D)$")


def parse_interval(text: str) -> timedelta:
    """
    Parse a look-back window such as "30m", "24h", "7d" or "2w".

    Raises:
        ValueError: On unknown scale or malformed input
    """
    match = _INTERVAL.match(text.strip())
    if match is None:
        raise ValueError(f"invalid interval {text!r}")

    count, scale = match.groups()
    if scale not in _SCALES:
        raise ValueError(f"time scale {text} is not supported")
    return int(count) * _SCALES[scale]
