"""
Catalog of metrics known to the health checks.

Rules with an id (C1, D3, P1, ...) carry thresholds in the default health
check. Rules without an id are informational and only appear in usage
reports. Metric names follow the Performance Insights counter naming.
"""

from rds_health_core.rules.metric import Metric
from rds_health_core.rules.rule import (
    Combinator,
    MetricRule,
    PairMetricRule,
    SingleMetricRule,
)

# =============================================================================
# Operating System
# =============================================================================

OS_CPU_UTIL = SingleMetricRule(
    id="C1",
    metric=Metric("os.cpuUtilization.total"),
    unit="%",
    about="cpu utilization",
    description=(
        "Worrying above 40%. Database workloads are usually bound to memory "
        "or storage, sustained high CPU is an anomaly."
    ),
)

OS_CPU_WAIT = SingleMetricRule(
    id="C2",
    metric=Metric("os.cpuUtilization.wait"),
    unit="%",
    about="cpu await for storage",
    description=(
        "Values above 5-10% point to a storage configuration that cannot keep "
        "up. The instance is bound by storage capacity."
    ),
)

OS_SWAP_IN = SingleMetricRule(
    id="M1",
    metric=Metric("os.swap.in"),
    unit="KB",
    about="swapped in from disk",
    description="Any sustained activity means the system swaps, a symptom of memory pressure.",
)

OS_SWAP_OUT = SingleMetricRule(
    id="M2",
    metric=Metric("os.swap.out"),
    unit="KB",
    about="swapped out to disk",
    description="Any sustained activity means the system swaps, a symptom of memory pressure.",
)

OS_MEMORY_TOTAL = SingleMetricRule(
    metric=Metric("os.memory.total"),
    unit="KB",
    about="total memory",
    description="Hard limit of memory available to the system.",
)

OS_MEMORY_FREE = SingleMetricRule(
    metric=Metric("os.memory.free"),
    unit="KB",
    about="free memory",
    description="Memory still available to the database. Higher is better.",
)

OS_MEMORY_CACHED = SingleMetricRule(
    metric=Metric("os.memory.cached"),
    unit="KB",
    about="filesys caching memory",
    description="Memory used to cache file system I/O. Higher is better.",
)

OS_FILESYS_TOTAL = SingleMetricRule(
    metric=Metric("os.fileSys.total"),
    unit="KB",
    about="total storage space",
    description="Storage space allocated to the instance.",
)

OS_FILESYS_USED = SingleMetricRule(
    metric=Metric("os.fileSys.used"),
    unit="KB",
    about="used storage space",
    description="Storage space used by the datasets.",
)

# =============================================================================
# Storage
# =============================================================================

DB_STORAGE_READ_IO = SingleMetricRule(
    id="D1",
    metric=Metric("os.diskIO.rdsdev.readIOsPS"),
    unit="iops",
    about="storage read i/o",
    description=(
        "Should match the IOPS provisioned for the instance. A very low value "
        "means the dataset is served from memory."
    ),
)

DB_STORAGE_WRITE_IO = SingleMetricRule(
    id="D2",
    metric=Metric("os.diskIO.rdsdev.writeIOsPS"),
    unit="iops",
    about="storage write i/o",
    description=(
        "Should match the IOPS provisioned for the instance. A high value "
        "means a write bound workload."
    ),
)

DB_STORAGE_AWAIT = SingleMetricRule(
    id="D3",
    metric=Metric("os.diskIO.rdsdev.await"),
    unit="ms",
    about="storage i/o latency",
    description=(
        "Time the storage takes to fulfil I/O. Above 10ms the storage needs "
        "improvement; around 4-5ms check that latency objectives still hold."
    ),
)

# =============================================================================
# Database
# =============================================================================

DB_CACHE_HIT = SingleMetricRule(
    metric=Metric("db.Cache.blks_hit"),
    unit="iops",
    about="blks_hit (cache hits)",
    description="Blocks found in cache without physical I/O. Higher is better.",
)

DB_BLOCK_READ = SingleMetricRule(
    metric=Metric("db.IO.blk_read"),
    unit="iops",
    about="blk_read",
    description="Blocks read from physical storage. Should match the provisioned IOPS.",
)

DB_CACHE_HIT_RATIO = PairMetricRule(
    id="P1",
    lhm=Metric("db.Cache.blks_hit"),
    rhm=Metric("db.IO.blk_read"),
    combinator=Combinator.SHARE,
    unit="%",
    about="db cache hit ratio",
    description=(
        "Below 80% the database lacks shared buffers or RAM: data needed by "
        "the most frequent queries does not fit in memory and is read from disk."
    ),
)

DB_BLOCK_READ_TIME = SingleMetricRule(
    id="P2",
    metric=Metric("db.IO.blk_read_time"),
    unit="ms",
    about="db blocks read latency",
    description="Time spent by the database reading blocks.",
)

DB_BUFFERS_CHECKPOINT = SingleMetricRule(
    metric=Metric("db.Checkpoint.buffers_checkpoint"),
    unit="iops",
    about="buffers_checkpoint",
    description="Blocks written by checkpoints. Should match the provisioned IOPS.",
)

DB_CHECKPOINT_SYNC_LATENCY = SingleMetricRule(
    metric=Metric("db.Checkpoint.checkpoint_sync_latency"),
    unit="ms",
    about="checkpoint_sync_latency",
    description="Time spent by the database syncing data to disk.",
)

DB_DEADLOCKS = SingleMetricRule(
    id="P3",
    metric=Metric("db.Concurrency.deadlocks"),
    unit="tps",
    about="db deadlocks",
    description="Deadlocks detected by the database. Should be zero; otherwise review application logic.",
)

DB_BLOCKED_TRANSACTIONS = SingleMetricRule(
    metric=Metric("db.Transactions.blocked_transactions"),
    unit="tps",
    about="blocked_transactions",
    description="Transactions waiting for a row lock.",
)

DB_ROLLBACKS = SingleMetricRule(
    metric=Metric("db.Transactions.xact_rollback"),
    unit="tps",
    about="xact_rollback",
    description="High values point to conflicting transaction logic in the application.",
)

DB_XACT_COMMIT = SingleMetricRule(
    id="P4",
    metric=Metric("db.Transactions.xact_commit"),
    unit="tps",
    about="db transactions (xact_commit)",
    description=(
        "Workload served by the database, reads and writes alike. Statements "
        "outside a transaction block commit on their own."
    ),
)

# =============================================================================
# SQL
# =============================================================================

SQL_TUPLES_FETCHED = SingleMetricRule(
    metric=Metric("db.SQL.tup_fetched"),
    unit="iops",
    about="tup_fetched (rows returned by query)",
    description="Rows returned by the engine to clients.",
)

SQL_TUPLES_RETURNED = SingleMetricRule(
    metric=Metric("db.SQL.tup_returned"),
    unit="iops",
    about="tup_returned (rows read from storage)",
    description="Rows read from storage for processing by the engine.",
)

SQL_EFFICIENCY = PairMetricRule(
    id="P5",
    lhm=Metric("db.SQL.tup_fetched"),
    rhm=Metric("db.SQL.tup_returned"),
    combinator=Combinator.PERCENT,
    unit="%",
    about="sql efficiency",
    description=(
        "Rows fetched by clients as a share of rows read from storage. A low "
        "share suggests reviewing queries, schema or indexes: counting a "
        "million rows reads them all but fetches one."
    ),
)

SQL_TUPLES_INSERTED = SingleMetricRule(
    metric=Metric("db.SQL.tup_inserted"),
    unit="iops",
    about="tup_inserted (rows inserted to db)",
    description="Rows inserted. Read-mostly workloads should keep this low.",
)

SQL_TUPLES_UPDATED = SingleMetricRule(
    metric=Metric("db.SQL.tup_updated"),
    unit="iops",
    about="tup_updated (rows updated at db)",
    description="Rows updated. Read-mostly workloads should keep this low.",
)

SQL_TUPLES_DELETED = SingleMetricRule(
    metric=Metric("db.SQL.tup_deleted"),
    unit="iops",
    about="tup_deleted (rows deleted from db)",
    description="Rows deleted. Read-mostly workloads should keep this low.",
)

DB_TEMP_BYTES = SingleMetricRule(
    metric=Metric("db.Temp.temp_bytes"),
    unit="B",
    about="size of temp tables",
    description="Data written to temporary files by queries.",
)


CATALOG: tuple[MetricRule, ...] = (
    OS_CPU_UTIL,
    OS_CPU_WAIT,
    OS_SWAP_IN,
    OS_SWAP_OUT,
    OS_MEMORY_TOTAL,
    OS_MEMORY_FREE,
    OS_MEMORY_CACHED,
    OS_FILESYS_TOTAL,
    OS_FILESYS_USED,
    DB_STORAGE_READ_IO,
    DB_STORAGE_WRITE_IO,
    DB_STORAGE_AWAIT,
    DB_CACHE_HIT,
    DB_BLOCK_READ,
    DB_CACHE_HIT_RATIO,
    DB_BLOCK_READ_TIME,
    DB_BUFFERS_CHECKPOINT,
    DB_CHECKPOINT_SYNC_LATENCY,
    DB_DEADLOCKS,
    DB_BLOCKED_TRANSACTIONS,
    DB_ROLLBACKS,
    DB_XACT_COMMIT,
    SQL_TUPLES_FETCHED,
    SQL_TUPLES_RETURNED,
    SQL_EFFICIENCY,
    SQL_TUPLES_INSERTED,
    SQL_TUPLES_UPDATED,
    SQL_TUPLES_DELETED,
    DB_TEMP_BYTES,
)


def by_id(rule_id: str) -> MetricRule:
    """Find a rule by its id; raises KeyError for unknown ids."""
    for rule in CATALOG:
        if rule.id and rule.id == rule_id:
            return rule
    raise KeyError(rule_id)
