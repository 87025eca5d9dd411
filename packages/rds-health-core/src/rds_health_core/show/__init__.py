"""Console and JSON renderers of statuses and topology."""

from rds_health_core.show.printer import JSON, MINIMAL, NONE, VERBOSE, Printer, select
from rds_health_core.show.schema import COLOR, PLAIN, Schema

__all__ = [
    "Printer",
    "select",
    "MINIMAL",
    "VERBOSE",
    "JSON",
    "NONE",
    "Schema",
    "PLAIN",
    "COLOR",
]
