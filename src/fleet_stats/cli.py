import logging
from pathlib import Path
from typing import IO

import click
import yaml

from ._report_context import DecodeError, dump_view, load_servers, load_yaml
from .aggregation import FleetTables, aggregate, merge_tables
from .csv_export import export_csv
from .models.report_config import ReportConfig
from .rendering import PlainRenderer, StyledRenderer, render_text
from .view_models.report import build_fleet_report_view, iter_breakdown_rows

logger = logging.getLogger("fleet_stats")

_LOCAL_CONFIG = Path("fleet_stats.yaml")
_USER_CONFIG = Path.home() / ".config" / "fleet_stats" / "config.yaml"


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------


def _read_config(path: Path) -> ReportConfig:
    raw = load_yaml(path)
    if not isinstance(raw, dict):
        raise ValueError("expected YAML mapping")
    config = ReportConfig.model_validate(raw)
    logger.info("Loaded config from %s", path)
    return config


def _load_config(explicit_path: str | None) -> ReportConfig:
    """Load the report config. Falls back to built-in defaults.

    An explicit path must load cleanly; discovered candidates that fail are skipped.
    """
    if explicit_path:
        path = Path(explicit_path)
        if not path.is_file():
            raise click.ClickException(f"Config file not found: {path}")
        try:
            return _read_config(path)
        except (OSError, yaml.YAMLError, ValueError) as exc:
            raise click.ClickException(f"Invalid config file: {path} ({exc})") from exc

    for path in (_LOCAL_CONFIG, _USER_CONFIG):
        if not path.is_file():
            continue
        try:
            return _read_config(path)
        except (OSError, yaml.YAMLError, ValueError) as exc:
            logger.warning("Failed to load config %s: %s", path, exc)
    logger.debug("No config file found, using built-in defaults")
    return ReportConfig()


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug-level logging.")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    help="Path to a fleet_stats YAML config. Defaults to ./fleet_stats.yaml, then ~/.config/fleet_stats/config.yaml.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_file: str | None) -> None:
    """Fleet Stats: breakdown report of a fleet status snapshot.

    With no command, reads a JSON array of servers on stdin and prints the text report.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )
    ctx.obj = _load_config(config_file)
    if ctx.invoked_subcommand is None:
        ctx.invoke(report)


# ---------------------------------------------------------------------------
# report command
# ---------------------------------------------------------------------------


@main.command()
@click.option(
    "--input",
    "-i",
    "input_files",
    multiple=True,
    default=["-"],
    type=click.File("rb"),
    help="JSON array of server records ('-' for stdin). Repeat to combine snapshots.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "yaml", "json"]),
    default="text",
    show_default=True,
    help="Output format.",
)
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), help="Also write the ranked breakdown rows to CSV.")
@click.option("--color/--no-color", default=None, help="Force styled text output on or off (default: only on a terminal).")
@click.pass_obj
def report(
    config: ReportConfig,
    input_files: tuple[IO[bytes], ...],
    output_format: str,
    csv_path: str | None,
    color: bool | None,
) -> None:
    """Print the non-normal, non-income, freeze-env and maintenance breakdowns."""
    tables = FleetTables()
    record_count = 0
    for stream in input_files:
        try:
            servers = load_servers(stream)
        except DecodeError as exc:
            raise click.ClickException(str(exc)) from exc
        merge_tables(tables, aggregate(servers, config.modes))
        record_count += len(servers)

    view = build_fleet_report_view(tables, config.modes, record_count=record_count)

    if csv_path:
        path = export_csv(iter_breakdown_rows(view), csv_path)
        logger.info("Wrote breakdown CSV to %s", path)

    if output_format == "text":
        renderer = PlainRenderer() if color is False else StyledRenderer(config.styles)
        click.echo(render_text(view, renderer), nl=False, color=color)
    else:
        click.echo(dump_view(view, output_format), nl=False)


# ---------------------------------------------------------------------------
# config command
# ---------------------------------------------------------------------------


@main.command("config")
@click.pass_obj
def config_cmd(config: ReportConfig) -> None:
    """Print the effective configuration as YAML."""
    click.echo(yaml.dump(config.model_dump(), default_flow_style=False, sort_keys=False), nl=False)
