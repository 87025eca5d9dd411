"""
Check orchestrator.

A Check collects evaluations, fetches every raw series they need with a
single call to the telemetry source (names shared by several evaluations
are requested again) and evaluates them in registration order:

    statuses = await (
        Check(source)
        .should(OS_CPU_UTIL.below(40.0, 60.0))
        .should(DB_CACHE_HIT_RATIO.above(80.0, 90.0))
        .run(node.id, timedelta(hours=24))
    )
"""

import logging
from datetime import timedelta
from typing import Iterable

from rds_health_core.rules.rule import Evaluation
from rds_health_core.status import Status
from rds_health_protocols import TelemetrySource, TransportError

logger = logging.getLogger(__name__)


class Check:
    """Ordered set of evaluations run against one entity."""

    def __init__(self, source: TelemetrySource) -> None:
        self.source = source
        self._evaluations: list[Evaluation] = []

    def should(self, evaluation: Evaluation) -> "Check":
        """Register an evaluation; returns self for chaining."""
        self._evaluations.append(evaluation)
        return self

    def should_all(self, evaluations: Iterable[Evaluation]) -> "Check":
        for evaluation in evaluations:
            self.should(evaluation)
        return self

    @property
    def metrics(self) -> list[str]:
        """Raw series needed by all evaluations, duplicates included."""
        return [m for e in self._evaluations for m in e.metrics]

    async def run(self, entity_id: str, duration: timedelta) -> list[Status]:
        """
        Fetch the series and evaluate every registered rule.

        Raises:
            TransportError: If the telemetry source fails; no partial
                results are returned.
        """
        try:
            samples = await self.source.fetch(entity_id, duration, *self.metrics)
        except TransportError as e:
            e.add_note(f"failed to fetch samples for {entity_id}")
            raise

        statuses = []
        for evaluation in self._evaluations:
            series = [samples.get(name, []) for name in evaluation.metrics]
            statuses.append(evaluation(*series))

        logger.debug(f"Evaluated {len(statuses)} rules for {entity_id}")
        return statuses
