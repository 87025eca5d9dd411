"""RDS health CLI - check health of AWS RDS instances from telemetry.

Commands:
- check: health status of one instance (-n) or of the whole region
- show: usage report of one instance
- list: instances and clusters of the region

Per project patterns:
- asyncio.run() to execute async service calls in sync CLI commands
- Settings supply option defaults, options override them
- rich Console for output, JSON for automation
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, TypeVar

import typer
from rich.logging import RichHandler

from rds_health_core.cli.service_factory import AVAILABLE_TELEMETRY, open_service
from rds_health_core.config import parse_interval, settings
from rds_health_core.service import HealthService, NoProgress, Progress
from rds_health_core.show import COLOR, PLAIN, Printer, Schema, select
from rds_health_core.status import StatusCode
from rds_health_protocols import RdsHealthError

T = TypeVar("T")

EXIT_UNHEALTHY = 128

app = typer.Typer(
    name="rds-health",
    help="Check health of AWS RDS instances and clusters using 12 simple rules",
    no_args_is_help=True,
)


@dataclass
class Options:
    """Global options shared by every command."""

    color: bool = False
    verbose: bool = False
    silent: bool = False
    as_json: bool = False
    database: str | None = None
    interval: str = "24h"
    telemetry: str = "pi"
    region: str | None = None
    profile: str | None = None

    @property
    def schema(self) -> Schema:
        return COLOR if self.color else PLAIN

    @property
    def printer(self) -> Printer:
        return select(verbose=self.verbose, silent=self.silent, as_json=self.as_json)


class SpinnerProgress:
    """Progress reported through a rich status spinner."""

    def __init__(self, status: Any) -> None:
        self.status = status

    def describe(self, text: str) -> None:
        self.status.update(text)


@app.callback()
def root(
    ctx: typer.Context,
    color: bool = typer.Option(False, "--color", "-C", help="Output colored"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Output detailed information"),
    silent: bool = typer.Option(False, "--silent", help="Output nothing"),
    as_json: bool = typer.Option(False, "--json", help="Output raw json"),
    database: str = typer.Option(None, "--database", "-n", help="AWS RDS database name"),
    interval: str = typer.Option(
        settings.interval,
        "--interval",
        "-t",
        help="Time interval in minutes (m), hours (h), days (d) or weeks (w)",
    ),
    telemetry: str = typer.Option(
        settings.telemetry,
        "--telemetry",
        help=f"Telemetry backend ({', '.join(AVAILABLE_TELEMETRY)})",
    ),
    region: str = typer.Option(settings.aws_region, "--region", help="AWS region"),
    profile: str = typer.Option(settings.aws_profile, "--profile", help="AWS profile"),
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level"),
) -> None:
    """
    Check "health" of AWS RDS instances and clusters.

    Time-series collected by AWS Performance Insights are evaluated against
    12 rules. Each rule reports its status, the share of time it held and
    the observed values, softened to remove outliers. Performance Insights
    must be enabled for the instances.

    Examples:

        rds-health check -t 7d

        rds-health check -t 7d -n my-example-database

        rds-health show -t 7d -n my-example-database

        rds-health list
    """
    ctx.obj = Options(
        color=color,
        verbose=verbose,
        silent=silent,
        as_json=as_json,
        database=database,
        interval=interval,
        telemetry=telemetry,
        region=region,
        profile=profile,
    )

    level = log_level.upper()
    if level not in logging.getLevelNamesMapping():
        _error(ctx.obj, f"log level {log_level} is not supported")
        raise typer.Exit(1)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=PLAIN.console(stderr=True), show_path=False)],
    )


def _stderr(opts: Options, text: str) -> None:
    if not opts.silent:
        opts.schema.console(stderr=True).print(text, markup=False)


def _error(opts: Options, message: str) -> None:
    opts.schema.console(stderr=True).print(message[:1].upper() + message[1:], markup=False)


def _output(opts: Options, renderable: Any) -> None:
    if renderable is None:
        return
    if not opts.printer.markup:
        print(renderable)
        return
    opts.schema.console().print(renderable)


def _run(opts: Options, action: Callable[[HealthService], Awaitable[T]]) -> T:
    """Run an async service action; backend errors end the command with exit code 1."""

    async def _with_service(progress: Progress) -> T:
        async with open_service(
            telemetry=opts.telemetry,
            region=opts.region,
            profile=opts.profile,
            prometheus_url=settings.prometheus_url,
            prometheus_label=settings.prometheus_label,
            timeout=settings.http_timeout_seconds,
            progress=progress,
        ) as service:
            return await action(service)

    try:
        if opts.silent:
            return asyncio.run(_with_service(NoProgress()))
        with opts.schema.console(stderr=True).status("") as spinner:
            return asyncio.run(_with_service(SpinnerProgress(spinner)))
    except (RdsHealthError, ValueError) as e:
        _error(opts, str(e))
        raise typer.Exit(1)


def _interval(opts: Options) -> timedelta:
    try:
        return parse_interval(opts.interval)
    except ValueError as e:
        _error(opts, str(e))
        raise typer.Exit(1)


@app.command("check")
def check(ctx: typer.Context) -> None:
    """Check health status of database instances using telemetry.

    Exits with code 128 when any rule is warned or failed.
    """
    opts: Options = ctx.obj
    interval = _interval(opts)
    printer = opts.printer

    if opts.database:
        status = _run(opts, lambda s: s.check_health_node(opts.database, interval))
        _output(opts, printer.health_node(status, opts.schema))
    else:
        status = _run(opts, lambda s: s.check_health_region(interval))
        _output(opts, printer.health_region(status, opts.schema))

    if not opts.as_json:
        if not opts.database and not opts.verbose:
            _stderr(opts, '\n(use "rds-health check -v" to see details)')
        elif not opts.database:
            _stderr(opts, '\n(use "rds-health check -n NAME" for the status of the instance)')
        elif not opts.verbose:
            _stderr(opts, f'\n(use "rds-health check -v -n {opts.database}" to see full report)')

    if status.code > StatusCode.SUCCESS:
        raise typer.Exit(EXIT_UNHEALTHY)


@app.command("show")
def show(ctx: typer.Context) -> None:
    """Show usage of a database instance: min, avg and max of key metrics."""
    opts: Options = ctx.obj
    if not opts.database:
        _error(opts, "database name is required, use -n NAME")
        raise typer.Exit(1)

    interval = _interval(opts)
    status = _run(opts, lambda s: s.show_node(opts.database, interval))
    _output(opts, opts.printer.value_node(status, opts.schema))


@app.command("list")
def list_instances(ctx: typer.Context) -> None:
    """List database instances and clusters of the region."""
    opts: Options = ctx.obj
    region = _run(opts, lambda s: s.show_region())
    if not region.clusters and not region.nodes:
        _error(opts, "no instances are found")
        raise typer.Exit(1)

    _output(opts, opts.printer.config_region(region, opts.schema))


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
