"""Tax Shield CLI - Command-line interface for quarterly estimated taxes."""

import json
import logging
import os
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console

from taxshield import __version__
from taxshield.sdk import (
    FileInputStore,
    TaxInputs,
    TaxRulesNotFoundError,
    calculate_taxes,
    generate_estimate,
    get_default_tax_year,
    load_tax_rules,
    parse_amount,
    write_estimate_csv,
)

from .inputs_commands import inputs as inputs_group
from .rules_commands import rules as rules_group
from .settings_commands import settings as settings_group

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.WARNING),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)

# estimate option name -> saved input field
AMOUNT_FIELDS = {
    "prior_year_tax": "priorYearTax",
    "prior_year_agi": "priorYearAGI",
    "current_year_profit": "currentYearProfit",
}


@click.group()
@click.version_option(version=__version__, prog_name="tax-shield")
def cli():
    """Tax Shield - Safe Harbor quarterly estimated tax calculator.

    Compares 90% of your projected current-year tax (income tax plus
    self-employment tax) with the IRS Safe Harbor amount (100% or 110%
    of last year's tax) and tells you the smaller quarterly payment.

    Configuration is loaded from (in order):

    \b
    1. TAX_SHIELD_CONFIG_PATH environment variable
    2. ~/.config/tax-shield/settings.json (XDG default)
    """
    pass


cli.add_command(inputs_group)
cli.add_command(rules_group)
cli.add_command(settings_group)


def _parse_option_amount(option_value, param_hint):
    """Parse an explicit dollar option strictly (saved values are parsed leniently)."""
    parsed = parse_amount(option_value)
    if not parsed.valid:
        raise click.BadParameter(f"'{option_value}' is not a dollar amount.", param_hint=param_hint)
    return parsed.value


def _report_subscribe(email, first_name):
    """Subscribe after the estimate is shown; failures are warnings only."""
    from taxshield.sdk.newsletter import subscribe

    outcome = subscribe(email, first_name)
    if outcome.success:
        message = outcome.payload.get("message", "Subscribed")
        click.echo(f"{message}: {email}", err=True)
    else:
        click.echo(
            click.style(f"Warning: newsletter signup failed ({outcome.status_code}): "
                        f"{outcome.payload.get('error')}", fg="yellow"),
            err=True,
        )


@cli.command("estimate")
@click.option("--filing-status", "-s", type=click.Choice(["single", "married"]), default=None,
              help="Filing status (married = married filing jointly)")
@click.option("--prior-year-tax", "-t", default=None, help="Total tax on last year's return (e.g. '$25,000')")
@click.option("--prior-year-agi", "-a", default=None, help="Last year's adjusted gross income")
@click.option("--profit", "-p", "current_year_profit", default=None,
              help="Projected net self-employment profit this year")
@click.option("--year", "-y", default=None, help="Tax year (default: settings tax_year)")
@click.option("--format", "output_format", type=click.Choice(["text", "json", "csv"]), default="text",
              help="Output format (default: text)")
@click.option("--output", "-o", "output_path", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Also write the estimate as CSV to this file")
@click.option("--save", is_flag=True, help="Save the given inputs for next time")
@click.option("--subscribe", "email", default=None, help="Email address to sign up for the newsletter")
@click.option("--first-name", default=None, help="First name for the newsletter signup")
def estimate(filing_status, prior_year_tax, prior_year_agi, current_year_profit, year,
             output_format, output_path, save, email, first_name):
    """Calculate the required quarterly estimated tax payment.

    Omitted options fall back to saved inputs (see 'tax-shield inputs').
    Dollar amounts accept loose text like '$120,000'.

    \b
    Output formats:
      --format=text  Rich tables (default, for terminal viewing)
      --format=json  JSON object
      --format=csv   CSV (section, item, amount)

    \b
    Examples:
      tax-shield estimate -s single -t 25000 -a 150000 -p 200000
      tax-shield estimate --profit 90000 --save
      tax-shield estimate --format json -o estimate.csv
    """
    year = year or get_default_tax_year()
    if not year.isdigit() or len(year) != 4:
        raise click.BadParameter(f"Invalid year '{year}'. Must be 4 digits.", param_hint="--year")

    store = FileInputStore()
    raw_options = {
        "prior_year_tax": prior_year_tax,
        "prior_year_agi": prior_year_agi,
        "current_year_profit": current_year_profit,
    }
    param_hints = {
        "prior_year_tax": "--prior-year-tax",
        "prior_year_agi": "--prior-year-agi",
        "current_year_profit": "--profit",
    }
    try:
        saved = store.to_tax_inputs()
    except ValidationError as e:
        raise click.ClickException(f"Invalid saved inputs in {store.path}:\n{e}")

    amounts = {
        name: getattr(saved, name) if value is None else _parse_option_amount(value, param_hints[name])
        for name, value in raw_options.items()
    }
    tax_inputs = TaxInputs(filing_status=filing_status or saved.filing_status, **amounts)

    if save:
        if filing_status:
            store.set("filingStatus", filing_status)
        for name, value in raw_options.items():
            if value is not None:
                store.set(AMOUNT_FIELDS[name], value)
        logger.info(f"saved inputs to {store.path}")

    try:
        tax_rules = load_tax_rules(year)
    except TaxRulesNotFoundError as e:
        raise click.ClickException(str(e))
    except ValidationError as e:
        raise click.ClickException(f"Invalid tax rules for {year}:\n{e}")

    if output_format == "text":
        from .renderers.estimate_renderer import render_estimate

        result = calculate_taxes(tax_inputs, tax_rules)
        render_estimate(Console(), result, tax_rules, tax_inputs)
    elif output_format == "json":
        click.echo(json.dumps(generate_estimate(tax_inputs, rules=tax_rules), indent=2))
    else:  # csv
        click.echo(generate_estimate(tax_inputs, rules=tax_rules, output_format="csv"), nl=False)

    if output_path:
        written = write_estimate_csv(generate_estimate(tax_inputs, rules=tax_rules), output_path)
        click.echo(f"Estimate written to: {written}", err=True)

    if email:
        _report_subscribe(email, first_name)


@cli.command("subscribe")
@click.argument("email")
@click.option("--first-name", default=None, help="First name (optional)")
def subscribe_cmd(email, first_name):
    """Sign EMAIL up for the Tax Shield newsletter.

    Requires BEEHIIV_API_KEY and BEEHIIV_PUB_ID in the environment.
    """
    from taxshield.sdk.newsletter import subscribe

    outcome = subscribe(email, first_name)
    if not outcome.success:
        raise click.ClickException(
            f"Subscription failed ({outcome.status_code}): {outcome.payload.get('error')}"
        )
    click.echo(outcome.payload.get("message", "Subscribed") + f": {email}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
