"""Command-line interface for Lifeline."""

import logging
import sys

import click

from .config import get_settings
from .output.formatter import format_snapshot, format_validation_result
from .scenario.errors import ScenarioLoadError, ScenarioValidationError
from .scenario.loader import parse_scenario
from .validators.runner import check_scenario


def _fail_on_load_error(e: Exception) -> None:
    """Report a scenario load/schema error and exit with status 2."""
    if isinstance(e, ScenarioLoadError):
        click.echo(f"Error loading file: {e}", err=True)
    else:
        click.echo(f"Scenario validation error: {e}", err=True)
        for err in getattr(e, "errors", []):
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
    sys.exit(2)


@click.group()
@click.version_option(package_name="lifeline")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging")
def main(verbose: bool):
    """Lifeline: a disaster-response logistics network simulator."""
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@main.command()
@click.argument("scenario_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def check(scenario_file: str, output_format: str, strict: bool):
    """Check a scenario file for broken references and idle sources.

    SCENARIO_FILE is the path to a YAML scenario file.

    Exit codes:
      0 - Check passed
      1 - Check failed (errors found)
      2 - File or schema error
    """
    try:
        scenario = parse_scenario(scenario_file)
        result, _ = check_scenario(scenario)
    except (ScenarioLoadError, ScenarioValidationError) as e:
        _fail_on_load_error(e)

    click.echo(format_validation_result(result, output_format))  # type: ignore

    if result.has_errors or (strict and result.has_warnings):
        sys.exit(1)
    sys.exit(0)


@main.command()
@click.argument("scenario_file", type=click.Path(exists=True))
@click.option(
    "--ticks",
    type=click.IntRange(min=0),
    default=1,
    show_default=True,
    help="Number of simulation ticks to run",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def simulate(scenario_file: str, ticks: int, output_format: str):
    """Run a scenario for a number of ticks and print the final network.

    SCENARIO_FILE is the path to a YAML scenario file.

    Exit codes:
      0 - Simulation ran
      1 - Scenario has errors and could not be built
      2 - File or schema error
    """
    try:
        scenario = parse_scenario(scenario_file)
        result, build = check_scenario(scenario)
    except (ScenarioLoadError, ScenarioValidationError) as e:
        _fail_on_load_error(e)

    if build is None:
        click.echo(format_validation_result(result, "text"), err=True)
        sys.exit(1)

    engine = build.engine
    report = None
    for _ in range(ticks):
        report = engine.tick()

    click.echo(format_snapshot(engine.snapshot(), output_format, report))  # type: ignore
    sys.exit(0)


if __name__ == "__main__":
    main()
