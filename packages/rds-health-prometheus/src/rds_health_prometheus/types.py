"""
Prometheus range query response types.

These are API response types for external data validation. Internal
types (Sample, Samples) are dataclasses in rds_health_protocols.

Prometheus returns sample values as strings, including "NaN" and "+Inf".
"""

from pydantic import BaseModel, ConfigDict


class PrometheusRangeResult(BaseModel):
    """
    Single series of a matrix result.

    Values is a list of [unix_timestamp, "string_value"] pairs.
    """

    metric: dict[str, str]
    values: list[tuple[float, str]]


class PrometheusMatrix(BaseModel):
    model_config = ConfigDict(extra="allow")

    resultType: str
    result: list[PrometheusRangeResult] = []


class PrometheusRangeResponse(BaseModel):
    """
    Response from GET /api/v1/query_range.

    Example response:
    {
        "status": "success",
        "data": {
            "resultType": "matrix",
            "result": [
                {"metric": {"metric": "os.swap.in.avg"},
                 "values": [[1700000000, "0.5"], [1700000060, "0.7"]]}
            ]
        }
    }
    """

    status: str
    data: PrometheusMatrix | None = None
    errorType: str | None = None
    error: str | None = None
