"""
Discovery protocol definitions.

Interfaces for the collaborators that describe database topology and
instance metadata. The AWS package provides the production
implementations.
"""

from typing import Protocol, runtime_checkable

from rds_health_protocols.types import Cluster, Compute, Node


@runtime_checkable
class DatabaseLookup(Protocol):
    """Looks up database instances by name."""

    async def lookup(self, name: str) -> Node:
        """Return the named instance or raise NotFoundError."""
        ...

    async def lookup_all(self) -> list[Node]:
        ...


@runtime_checkable
class ClusterLookup(Protocol):
    async def lookup_all(self) -> list[Cluster]:
        ...


@runtime_checkable
class ComputeCatalog(Protocol):
    """Describes compute capacity of an instance class."""

    async def lookup(self, instance_type: str) -> Compute | None:
        """Return compute capacity, or None for an unknown class."""
        ...


@runtime_checkable
class RegionDiscovery(Protocol):
    """Enumerates clusters and standalone nodes of a region."""

    async def lookup_all(self) -> tuple[list[Cluster], list[Node]]:
        ...
