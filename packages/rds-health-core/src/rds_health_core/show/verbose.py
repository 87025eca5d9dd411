"""
Verbose renderers: every rule, node properties and both min/max flavours.
"""

from rich.markup import escape

from rds_health_core.show.minimal import RULE_HEADER, rate_of
from rds_health_core.show.schema import Schema
from rds_health_core.stats import MinMax, fmt
from rds_health_core.status import Status, StatusNode
from rds_health_protocols import Cluster, Node, Region


def show_min_max(mm: MinMax) -> str:
    return f"min: {fmt(mm.min, 6)}\tavg: {fmt(mm.avg, 6)}\tmax: {fmt(mm.max, 6)}"


def _properties(node: Node, width: int) -> list[str]:
    cpu, mem = "-", "-"
    if node.compute is not None:
        cpu = str(node.compute.cpu) if node.compute.cpu else "-"
        mem = str(node.compute.memory) if node.compute.memory else "-"
    rows = [
        ("Engine", node.engine or "-"),
        ("Instance", node.type),
        ("CPU", cpu),
        ("Memory", mem),
        ("Storage", node.storage or "-"),
        ("Zones", ", ".join(node.zones)),
    ]
    return [f"{name:>{width}} ¦ {escape(str(value))}" for name, value in rows]


def show_health_rule(status: Status, schema: Schema) -> str:
    soft = status.soft_minmax or MinMax()
    code = schema.styled(status.code, f"{status.code!s:>6}")
    rate = schema.styled(status.code, f"{fmt(rate_of(status), 6)}%")
    return (
        f"{code} {rate} {escape(status.rule.unit):>4} "
        f"{fmt(soft.min, 14)} {fmt(soft.avg, 14)} {fmt(soft.max, 14)}  "
        f"{escape(status.rule.id):>3}: {escape(status.rule.about)}"
    )


def show_health_node(node: StatusNode, schema: Schema) -> str:
    """All rules of a node, the verdict and the node properties."""
    lines = [RULE_HEADER]
    lines.extend(show_health_rule(s, schema) for s in node.checks)
    lines.append("")
    read_only = " (read-only)" if node.node.read_only else ""
    lines.append(
        f"{schema.icon(node.code)}{schema.status(node.code)} "
        f"{escape(node.node.name)}{read_only}"
    )
    lines.extend(_properties(node.node, 14))
    return "\n".join(lines)


def show_value_node(node: StatusNode, schema: Schema) -> str:
    """Soft and hard min/avg/max of every reported metric."""
    engine = node.node.engine or "-"
    lines = [escape(f"{node.node.name} ({node.node.type}, {engine})")]
    for status in node.checks:
        lines.append("")
        lines.append(escape(f"{status.rule.about} ({status.rule.unit})"))
        if status.soft_minmax is not None:
            lines.append(f"soft ¦ {show_min_max(status.soft_minmax)}")
        if status.hard_minmax is not None:
            lines.append(f"hard ¦ {show_min_max(status.hard_minmax)}")
    return "\n".join(lines)


def _show_config_node(node: Node) -> list[str]:
    read_only = " (read-only)" if node.read_only else ""
    return ["", f"{escape(node.name)}{read_only}", *("\t" + p for p in _properties(node, 9))]


def _show_config_cluster(cluster: Cluster, schema: Schema) -> list[str]:
    lines = [
        "",
        schema.cluster(cluster.id),
        f"\t{'Engine':>9} ¦ {escape(str(cluster.engine or '-'))}",
        f"\t{'Writers':>9} ¦ {escape(', '.join(n.name for n in cluster.writer))}",
        f"\t{'Readers':>9} ¦ {escape(', '.join(n.name for n in cluster.reader))}",
    ]
    for node in [*cluster.writer, *cluster.reader]:
        lines.extend(_show_config_node(node))
    return lines


def show_config_region(region: Region, schema: Schema) -> str:
    """Property blocks of every cluster and node in the region."""
    lines: list[str] = []
    for cluster in region.clusters:
        lines.extend(_show_config_cluster(cluster, schema))
    for node in region.nodes:
        lines.extend(_show_config_node(node))
    return "\n".join(lines).lstrip("\n")
