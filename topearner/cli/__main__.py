"""Top Earner CLI - Command-line interface for the prior-year top earner report."""

import json
import sys

import click

from topearner import __version__
from topearner.sdk import (
    InvalidPayloadError,
    ProfileNotFoundError,
    TopEarnerError,
    aggregate,
    build_client,
    parse_task,
    run_pipeline,
    target_year,
)
from topearner.sdk import config

from .profile_commands import profile as profile_group
from .settings_commands import settings as settings_group


@click.group()
@click.version_option(version=__version__, prog_name="top-earner")
def cli():
    """Top Earner - submit last year's top earner transactions.

    Fetches the task's transactions, finds the employee with the largest
    total for the prior calendar year, and submits that employee's
    transactions of the configured category.

    Configuration is loaded from (in order):

    \b
    1. TOP_EARNER_CONFIG_PATH environment variable
    2. settings.json 'profile' key
    3. ~/.config/top-earner/profile.yaml (XDG default)

    Set LOG_LEVEL=DEBUG for step-by-step logging.
    """
    pass


cli.add_command(profile_group)
cli.add_command(settings_group)


def _load_input(input_file):
    """Read a task payload from a JSON file ('-' for stdin)."""
    try:
        if input_file == "-":
            return json.load(sys.stdin)
        with open(input_file) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {input_file}: {e}")


def _resolve_rules(category, year_offset):
    try:
        if category is None:
            category = config.get_category()
        if year_offset is None:
            year_offset = config.get_year_offset()
    except (ValueError, ProfileNotFoundError) as e:
        raise click.ClickException(str(e))
    return category, year_offset


@cli.command("run")
@click.option("--input", "-i", "input_file", type=click.Path(allow_dash=True),
              help="Read the task payload from a JSON file instead of fetching it ('-' for stdin).")
@click.option("--category", "-c", help="Transaction type to submit (default: profile rules.category).")
@click.option("--year-offset", type=int, help="Years back from the current year (default: profile rules.year_offset).")
@click.option("--dry-run", is_flag=True, help="Show the submission without sending it.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format.")
def run_cmd(input_file, category, year_offset, dry_run, output_format):
    """Fetch, aggregate, filter and submit.

    \b
    Examples:
      top-earner run
      top-earner run --dry-run --format json
      top-earner run --input task.json --category beta
    """
    category, year_offset = _resolve_rules(category, year_offset)
    payload = _load_input(input_file) if input_file else None

    try:
        result = run_pipeline(
            payload=payload,
            category=category,
            year_offset=year_offset,
            dry_run=dry_run,
        )
    except ValueError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        _print_run_text(result, dry_run)

    if not result.ok:
        raise click.ClickException(f"Run failed at {result.stage}: {result.error}")
    if result.response is not None and not result.response.ok:
        raise click.ClickException(f"Submission rejected: {result.response}")


def _print_run_text(result, dry_run):
    click.echo(f"Target year: {result.target_year}")
    click.echo(f"Category:    {result.category}")

    if result.task is not None:
        click.echo(f"Dataset:     {result.task.id} ({len(result.task.transactions)} transactions)")

    selection = result.selection
    if selection is not None:
        if selection.has_winner:
            click.echo(f"Top earner:  {selection.employee_id} ({selection.amount:,.2f})")
        else:
            click.echo("Top earner:  none (no transactions in target year)")

    if result.submission is not None:
        ids = result.submission["result"]
        click.echo(f"Selected:    {len(ids)} transaction(s)")
        for tx_id in ids:
            click.echo(f"  {tx_id}")

    if dry_run and result.ok:
        click.echo()
        click.echo("Dry run - submission not sent:")
        click.echo(json.dumps(result.submission, indent=2))
    elif result.response is not None:
        click.echo()
        click.echo(str(result.response))


@cli.command("report")
@click.option("--input", "-i", "input_file", type=click.Path(allow_dash=True),
              help="Read the task payload from a JSON file instead of fetching it ('-' for stdin).")
@click.option("--year-offset", type=int, help="Years back from the current year (default: profile rules.year_offset).")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format.")
def report_cmd(input_file, year_offset, output_format):
    """Show per-employee totals for the target year. Nothing is submitted."""
    _, year_offset = _resolve_rules(None, year_offset)

    if input_file:
        payload = _load_input(input_file)
    else:
        try:
            with build_client() as client:
                payload = client.fetch_task()
        except (TopEarnerError, ValueError) as e:
            raise click.ClickException(str(e))

    try:
        task = parse_task(payload)
    except InvalidPayloadError as e:
        raise click.ClickException(str(e))

    selection = aggregate(task.transactions, target_year=target_year(offset=year_offset))

    if output_format == "json":
        click.echo(json.dumps({"id": task.id, **selection.to_dict()}, indent=2))
        return

    click.echo(f"Dataset {task.id}: totals for {selection.target_year}")
    if not selection.totals:
        click.echo("No transactions in target year.")
        return

    click.echo()
    click.echo(f"{'Employee':<40} {'Total':>14}")
    click.echo("-" * 55)
    for employee_id, amount in selection.ranking():
        marker = " *" if employee_id == selection.employee_id else ""
        click.echo(f"{str(employee_id):<40} {amount:>14,.2f}{marker}")
    click.echo()
    click.echo(f"Top earner: {selection.employee_id}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
