"""
Minimal renderers: one line per node, only what needs attention.

Output examples (PLAIN schema):

    STATUS       % UNIT            MIN            AVG            MAX  ID CHECK
    FAILED   5.55%   ms           0.56          11.53          44.80  D3: storage i/o latency

    FAIL example-database

    FAIL ¦ -- -- -- -- -- -- D3 -- -- -- P4 P5 ¦ example-database
"""

from rich.markup import escape
from rich.table import Table

from rds_health_core.rules.checks import HEALTH_RULE_IDS
from rds_health_core.show.schema import Schema, superscript
from rds_health_core.stats import fmt
from rds_health_core.status import Status, StatusCode, StatusNode, StatusRegion
from rds_health_protocols import Node, Region

RULE_HEADER = (
    f"{'STATUS':>6} {'%':>7} {'UNIT':>4} {'MIN':>14} {'AVG':>14} {'MAX':>14}  {'ID':>3} CHECK"
)
VALUE_HEADER = f"{'UNIT':>4} {'MIN':>14} {'AVG':>14} {'MAX':>14}"


def rate_of(status: Status) -> float:
    """Success rate of a passing rule, failure rate otherwise."""
    rate = status.success_rate if status.success_rate is not None else float("nan")
    if status.code > StatusCode.SUCCESS:
        return 100.0 - rate
    return rate


def show_health_rule(status: Status, schema: Schema) -> str:
    """One line with the soft min/avg/max of a rule."""
    soft = status.soft_minmax
    mn, avg, mx = (soft.min, soft.avg, soft.max) if soft else (float("nan"),) * 3
    code = schema.styled(status.code, f"{status.code!s:>6}")
    rate = schema.styled(status.code, f"{fmt(rate_of(status), 6)}%")
    return (
        f"{code} {rate} {escape(status.rule.unit):>4} "
        f"{fmt(mn, 14)} {fmt(avg, 14)} {fmt(mx, 14)}  "
        f"{escape(status.rule.id):>3}: {escape(status.rule.about)}"
    )


def show_health_node(node: StatusNode, schema: Schema) -> str:
    """Rules that did not pass, followed by the node verdict."""
    lines = [RULE_HEADER]
    lines.extend(
        show_health_rule(s, schema) for s in node.checks if s.code > StatusCode.SUCCESS
    )
    lines.append("")
    lines.append(f"{schema.icon(node.code)}{schema.status(node.code)} {escape(node.node.name)}")
    return "\n".join(lines)


def _node_line(node: StatusNode, schema: Schema) -> str:
    return f"{schema.status(node.code)} {escape(node.node.name)}"


def _node_rules_line(node: StatusNode, schema: Schema) -> str:
    cells = []
    for status in node.checks:
        if status.code == StatusCode.FAILURE:
            cells.append(schema.styled(status.code, f"{status.rule.id:>2}"))
        elif status.code == StatusCode.WARNING:
            cells.append(schema.styled(status.code, f"{superscript(status.rule.id):>2}"))
        else:
            cells.append("--")
    return f"{schema.status(node.code)} {' '.join(cells)} {escape(node.node.name)}"


def _summary(region: StatusRegion, schema: Schema) -> str:
    codes = [c.code for c in region.clusters] + [n.code for n in region.nodes]
    passed = sum(1 for c in codes if c <= StatusCode.SUCCESS)
    head = f"{schema.icon(region.code)}{schema.status(region.code)}"
    if passed == len(codes):
        return f"{head} {len(codes)} health checks"
    return f"{head} {len(codes) - passed} health checks ({passed} passed)"


def show_health_region(region: StatusRegion, schema: Schema) -> str:
    """Clusters with their nodes, standalone nodes, then a summary line."""
    lines = []
    for cluster in region.clusters:
        lines.append(f"{schema.status(cluster.code)} {schema.cluster(cluster.cluster.id)}")
        for node in [*cluster.writer, *cluster.reader]:
            lines.append(f"     {_node_line(node, schema)}")
    if region.clusters and region.nodes:
        lines.append("")
    lines.extend(_node_line(node, schema) for node in region.nodes)
    lines.append("")
    lines.append(_summary(region, schema))
    return "\n".join(lines)


def show_health_region_with_rules(region: StatusRegion, schema: Schema) -> str:
    """Like show_health_region with an indicator column per health rule."""
    lines = [f"     {' '.join(HEALTH_RULE_IDS)}"]
    for cluster in region.clusters:
        lines.append(f"{schema.status(cluster.code)} {'':35} {schema.cluster(cluster.cluster.id)}")
        lines.extend(_node_rules_line(n, schema) for n in [*cluster.writer, *cluster.reader])
    if region.clusters and region.nodes:
        lines.append("")
    lines.extend(_node_rules_line(node, schema) for node in region.nodes)
    lines.append("")
    lines.append(_summary(region, schema))
    return "\n".join(lines)


def show_value_node(node: StatusNode, schema: Schema) -> str:
    """Soft min/avg/max of every reported metric."""
    lines = [VALUE_HEADER]
    for status in node.checks:
        soft = status.soft_minmax
        if soft is None:
            continue
        lines.append(
            f"{escape(status.rule.unit):>4} {fmt(soft.min, 14)} {fmt(soft.avg, 14)} "
            f"{fmt(soft.max, 14)} {escape(status.rule.about)}"
        )
    engine = node.node.engine or "-"
    lines.append("")
    lines.append(escape(f"{node.node.name} ({node.node.type}, {engine})"))
    return "\n".join(lines)


def _config_row(table: Table, node: Node) -> None:
    zone = node.zones[0][-2:] if node.zones else ""
    cpu, mem = "-", "-"
    if node.compute is not None:
        if node.compute.cpu is not None:
            cpu = f"{node.compute.cpu.cores}x"
        if node.compute.memory is not None:
            mem = str(node.compute.memory.size)
    table.add_row(
        zone,
        escape(node.engine.id) if node.engine else "-",
        escape(node.engine.version) if node.engine else "-",
        escape(node.type),
        cpu,
        mem,
        str(node.storage.size) if node.storage else "-",
        escape(node.storage.type) if node.storage else "-",
        "ro" if node.read_only else "",
        escape(node.name),
    )


def show_config_region(region: Region, schema: Schema) -> Table:
    """Table of every instance in the region, grouped by cluster."""
    table = Table(box=None, pad_edge=False)
    for name in ("AZ", "ENGINE", "VSN", "INSTANCE"):
        table.add_column(name)
    for name in ("CPU", "MEM", "STORAGE"):
        table.add_column(name, justify="right")
    for name in ("TYPE", "RO", "NAME"):
        table.add_column(name)

    for cluster in region.clusters:
        engine = cluster.engine
        table.add_row(
            "",
            escape(engine.id) if engine else "-",
            escape(engine.version) if engine else "-",
            *([""] * 6),
            schema.cluster(cluster.id),
        )
        for node in [*cluster.writer, *cluster.reader]:
            _config_row(table, node)

    if region.clusters and region.nodes:
        table.add_section()
    for node in region.nodes:
        _config_row(table, node)

    return table
