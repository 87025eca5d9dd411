"""
Default rule sets.

HEALTH_CHECKS classifies a node; thresholds are (t_avg, t_max) for
below() and (t_min, t_avg) for above(). USAGE_REPORT only reports
min/avg/max of workload and resource metrics.
"""

from rds_health_core.rules import catalog
from rds_health_core.rules.rule import Evaluation

HEALTH_CHECKS: tuple[Evaluation, ...] = (
    catalog.OS_CPU_UTIL.below(40.0, 60.0),
    catalog.OS_CPU_WAIT.below(8.0, 10.0),
    catalog.OS_SWAP_IN.below(1.0, 1.0),
    catalog.OS_SWAP_OUT.below(1.0, 1.0),
    catalog.DB_STORAGE_READ_IO.below(100.0, 300.0),
    catalog.DB_STORAGE_WRITE_IO.below(100.0, 300.0),
    catalog.DB_STORAGE_AWAIT.below(10.0, 20.0),
    catalog.DB_CACHE_HIT_RATIO.above(80.0, 90.0),
    catalog.DB_BLOCK_READ_TIME.below(10.0, 20.0),
    catalog.DB_DEADLOCKS.below(0.001, 0.01),
    catalog.DB_XACT_COMMIT.above(3.0, 5.0),
    catalog.SQL_EFFICIENCY.above(10.0, 20.0),
)

USAGE_REPORT: tuple[Evaluation, ...] = (
    catalog.DB_XACT_COMMIT.show_min_max(),
    catalog.SQL_TUPLES_FETCHED.show_min_max(),
    catalog.SQL_TUPLES_RETURNED.show_min_max(),
    catalog.SQL_TUPLES_INSERTED.show_min_max(),
    catalog.SQL_TUPLES_UPDATED.show_min_max(),
    catalog.SQL_TUPLES_DELETED.show_min_max(),
    catalog.OS_CPU_UTIL.show_min_max(),
    catalog.OS_CPU_WAIT.show_min_max(),
    catalog.DB_STORAGE_READ_IO.show_min_max(),
    catalog.DB_STORAGE_WRITE_IO.show_min_max(),
    catalog.DB_BLOCK_READ.show_min_max(),
    catalog.DB_CACHE_HIT.show_min_max(),
    catalog.DB_BUFFERS_CHECKPOINT.show_min_max(),
    catalog.DB_CHECKPOINT_SYNC_LATENCY.show_min_max(),
    catalog.OS_MEMORY_FREE.show_min_max(),
    catalog.OS_MEMORY_CACHED.show_min_max(),
    catalog.OS_FILESYS_USED.show_min_max(),
)

HEALTH_RULE_IDS: tuple[str, ...] = tuple(e.rule.id for e in HEALTH_CHECKS)
"""Rule ids of the health check in report column order."""
