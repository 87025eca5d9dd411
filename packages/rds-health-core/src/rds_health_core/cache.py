"""
Memoizing lookup for optional metadata.

Used in front of the compute catalog: instance class descriptions never
change during a run, and a failed lookup only loses decoration of the
report. Failures are logged and answered with None, they are not cached
so a later call retries.
"""

import logging
from typing import Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


class Cache(Generic[K, V]):
    """
    Unbounded memoizing wrapper around an async getter.

    Example:
        compute = Cache(catalog.lookup)
        capacity = await compute.lookup("db.r5.large")
    """

    def __init__(self, getter: Callable[[K], Awaitable[V]]) -> None:
        self._getter = getter
        self._values: dict[K, V] = {}

    async def lookup(self, key: K) -> V | None:
        if key in self._values:
            return self._values[key]

        try:
            value = await self._getter(key)
        except Exception as e:
            logger.warning(f"Lookup of {key} failed: {e}")
            return None

        self._values[key] = value
        return value

    def __len__(self) -> int:
        return len(self._values)
