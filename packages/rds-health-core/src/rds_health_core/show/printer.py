"""
Printer selection.

A Printer bundles the renderers for every output of the CLI. Modes:
minimal (default), verbose, json and none (silent).
"""

import json
from dataclasses import dataclass
from typing import Any, Callable

from rich.console import RenderableType

from rds_health_core.show import minimal, verbose
from rds_health_core.show.schema import Schema
from rds_health_core.status import StatusNode, StatusRegion
from rds_health_protocols import Region

Render = Callable[[Any, Schema], RenderableType | None]


def show_json(value: Any, schema: Schema) -> str:
    """Indented JSON of any value with a to_dict() method."""
    return json.dumps(value.to_dict(), indent=2)


def show_none(value: Any, schema: Schema) -> None:
    return None


@dataclass(frozen=True)
class Printer:
    """Renderers of one output mode."""

    health_node: Callable[[StatusNode, Schema], RenderableType | None]
    health_region: Callable[[StatusRegion, Schema], RenderableType | None]
    value_node: Callable[[StatusNode, Schema], RenderableType | None]
    config_region: Callable[[Region, Schema], RenderableType | None]
    markup: bool = True


MINIMAL = Printer(
    health_node=minimal.show_health_node,
    health_region=minimal.show_health_region,
    value_node=minimal.show_value_node,
    config_region=minimal.show_config_region,
)

VERBOSE = Printer(
    health_node=verbose.show_health_node,
    health_region=minimal.show_health_region_with_rules,
    value_node=verbose.show_value_node,
    config_region=verbose.show_config_region,
)

JSON = Printer(
    health_node=show_json,
    health_region=show_json,
    value_node=show_json,
    config_region=show_json,
    markup=False,
)

NONE = Printer(
    health_node=show_none,
    health_region=show_none,
    value_node=show_none,
    config_region=show_none,
)


def select(verbose: bool = False, silent: bool = False, as_json: bool = False) -> Printer:
    """Printer for the CLI flags; silent wins over json, json over verbose."""
    if silent:
        return NONE
    if as_json:
        return JSON
    if verbose:
        return VERBOSE
    return MINIMAL
