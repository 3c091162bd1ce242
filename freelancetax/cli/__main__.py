"""Freelance Tax CLI - Command-line interface for freelance tax estimates."""

import json
import logging

import click
from pydantic import ValidationError

from freelancetax import __version__
from freelancetax.sdk import (
    SettingsError,
    TaxRulesNotFoundError,
    estimate as sdk_estimate,
    get_available_years,
    get_defaults,
    load_tax_rules,
    parse_filing_status,
    result_rows,
)
from freelancetax.sdk.display import format_currency, format_percent
from freelancetax.sdk.taxes import FilingStatus, get_state

from .settings_commands import settings as settings_group

FILING_STATUS_CHOICES = [s.value for s in FilingStatus] + ["mfj", "mfs", "hoh"]


def _load_rules(year):
    """Load tax rules, converting reference-data errors to CLI errors."""
    try:
        return load_tax_rules(year)
    except TaxRulesNotFoundError as e:
        available = ", ".join(str(y) for y in get_available_years()) or "none"
        raise click.ClickException(f"{e}\nAvailable years: {available}")
    except ValidationError as e:
        raise click.ClickException(f"Invalid tax rules for {year}:\n{e}")


def _defaults():
    try:
        return get_defaults()
    except SettingsError as e:
        raise click.ClickException(str(e))


@click.group()
@click.version_option(version=__version__, prog_name="freelance-tax")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose):
    """Freelance Tax - Estimate US self-employment and income tax.

    Computes self-employment tax, federal income tax (progressive
    brackets), flat-rate state tax, quarterly estimated payments and
    effective rate from gross income and business expenses.

    Defaults for state, filing status and tax year are loaded from
    (in order):

    \b
    1. Command-line options
    2. settings.json in FREELANCE_TAX_CONFIG_PATH or ~/.config/freelance-tax/
    3. Built-in defaults (CA, single, 2025)
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(settings_group)


@cli.command("estimate")
@click.argument("gross")
@click.argument("expenses", default="0", required=False)
@click.option("--state", "-s", help="State code (default: settings or CA)")
@click.option("--filing-status", "-f", type=click.Choice(FILING_STATUS_CHOICES, case_sensitive=False),
              help="Filing status (default: settings or single)")
@click.option("--year", "-y", help="Tax year for brackets and rates (default: settings or 2025)")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format (default: text)")
def estimate(gross, expenses, state, filing_status, year, output_format):
    """Estimate annual and quarterly tax for GROSS income.

    GROSS and EXPENSES accept formatted amounts such as '$85,000'.
    EXPENSES defaults to 0. Amounts that are not numbers count as 0.

    Examples:

    \b
      freelance-tax estimate 100000 10000
      freelance-tax estimate '$120,000' --state NY --filing-status mfj
      freelance-tax estimate 75000 5000 --format json
    """
    defaults = _defaults()
    state = state if state is not None else defaults["state"]
    filing_status = filing_status if filing_status is not None else defaults["filing_status"]
    year = year if year is not None else defaults["tax_year"]

    rules = _load_rules(year)
    inputs, result = sdk_estimate(gross, expenses, state, filing_status, rules=rules)

    state_info = get_state(inputs.state_code, rules)
    if state_info is None:
        click.echo(f"Warning: no state tax data for '{inputs.state_code}'; state tax assumed 0.", err=True)

    if output_format == "json":
        click.echo(json.dumps({
            "year": rules.year,
            "inputs": inputs.model_dump(mode="json"),
            "result": result.model_dump(mode="json"),
        }, indent=2))
        return

    state_label = f"{state_info.name} ({state_info.rate * 100:.2f}%)" if state_info else f"{inputs.state_code or '-'} (no data)"

    click.echo("=" * 70)
    click.echo(f"{rules.year} FREELANCE TAX ESTIMATE")
    click.echo("=" * 70)

    click.echo("\nINPUTS")
    click.echo("-" * 50)
    click.echo(f"{'Gross income:':<32}{format_currency(inputs.gross_income):>18}")
    click.echo(f"{'Business expenses:':<32}{format_currency(inputs.business_expenses):>18}")
    click.echo(f"{'State:':<32}{state_label:>18}")
    click.echo(f"{'Filing status:':<32}{inputs.filing_status.label:>18}")

    click.echo("\nTAX BREAKDOWN")
    click.echo("-" * 50)
    for label, value in result_rows(result):
        click.echo(f"{label + ':':<32}{value:>18}")

    if result.total_tax > 0:
        click.echo(f"\nPay {format_currency(result.quarterly_payment)} in each of the four estimated payments.")
    else:
        click.echo("\nNo estimated tax due.")


@cli.command("states")
@click.option("--year", "-y", help="Tax year (default: settings or 2025)")
def states(year):
    """List states and their flat income tax rates.

    States not listed are estimated at 0% state tax.
    """
    if year is None:
        year = _defaults()["tax_year"]
    rules = _load_rules(year)

    click.echo(f"{rules.year} state income tax rates")
    click.echo("-" * 50)
    for state in sorted(rules.states, key=lambda s: s.name):
        click.echo(f"{state.code:<4}{state.name:<30}{format_percent(state.rate * 100):>10}")


@cli.command("brackets")
@click.option("--filing-status", "-f", type=click.Choice(FILING_STATUS_CHOICES, case_sensitive=False),
              help="Filing status (default: settings or single)")
@click.option("--year", "-y", help="Tax year (default: settings or 2025)")
def brackets(filing_status, year):
    """Show federal income tax brackets for a filing status."""
    defaults = _defaults()
    status = parse_filing_status(filing_status if filing_status is not None else defaults["filing_status"])
    rules = _load_rules(year if year is not None else defaults["tax_year"])

    click.echo(f"{rules.year} federal brackets - {status.label}")
    click.echo("-" * 50)
    for bracket in rules.brackets_for(status):
        low = format_currency(bracket.lower_bound)
        high = format_currency(bracket.upper_bound) if bracket.upper_bound is not None else "and up"
        click.echo(f"{bracket.rate * 100:>5.0f}%  {low:>16} - {high}")


def main():
    cli()


if __name__ == "__main__":
    main()
