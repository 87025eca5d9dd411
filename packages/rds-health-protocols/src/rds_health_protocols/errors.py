"""
Exception classes shared by the telemetry and discovery layers.

- TransportError: a backend (telemetry, RDS, EC2, Prometheus) failed to answer
- NotFoundError: a named entity does not exist in the backend

Per project patterns:
- Inherit from a common base so callers can catch the whole family
- Store context data in attributes for error handling
- Include descriptive message with relevant details
"""


class RdsHealthError(Exception):
    """Base class for all errors raised by the RDS health system."""


class TransportError(RdsHealthError):
    """
    Raised when a backend call fails.

    Attributes:
        source: Name of the backend that failed (e.g. "pi", "rds", "prometheus")
        reason: Backend-specific failure description
    """

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"{source} request failed: {reason}")


class NotFoundError(RdsHealthError):
    """
    Raised when a named entity is absent.

    Attributes:
        kind: Entity kind (e.g. "database")
        name: The name that was looked up
    """

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} {name} is not found")
