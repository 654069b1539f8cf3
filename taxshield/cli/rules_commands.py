"""Tax rules CLI commands."""

import json

import click
from pydantic import ValidationError

from taxshield.sdk import list_tax_years, load_tax_rules, TaxRulesNotFoundError
from taxshield.sdk.formatting import format_currency, format_percentage


@click.group("rules")
def rules():
    """Inspect tax rule tables.

    Rules are loaded from tax_rules/<year>.yaml. Set a custom directory
    with 'tax-shield settings rules-dir PATH'.
    """
    pass


@rules.command("list")
def rules_list():
    """List tax years with rule tables."""
    years = list_tax_years()
    if not years:
        click.echo("No tax rules found.")
        return
    for year in years:
        click.echo(str(year))


@rules.command("show")
@click.argument("year")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format (default: text)")
def rules_show(year, output_format):
    """Show the rule table for YEAR."""
    try:
        tax_rules = load_tax_rules(year)
    except TaxRulesNotFoundError as e:
        raise click.ClickException(str(e))
    except ValidationError as e:
        raise click.ClickException(f"Invalid tax rules for {year}:\n{e}")

    if output_format == "json":
        click.echo(json.dumps(tax_rules.model_dump(mode="json"), indent=2))
        return

    ss = tax_rules.social_security
    medicare = tax_rules.medicare
    harbor = tax_rules.safe_harbor

    click.echo(f"TAX RULES FOR {tax_rules.year}")
    click.echo("=" * 50)
    click.echo(f"  SS wage base:              {format_currency(ss.wage_base):>12}")
    click.echo(f"  SS rate:                   {format_percentage(ss.tax_rate):>12}")
    click.echo(f"  Medicare rate:             {medicare.tax_rate:>12.1%}")
    click.echo(f"  Additional Medicare rate:  {medicare.additional_rate:>12.1%}")
    click.echo(f"  Safe Harbor AGI threshold: {format_currency(harbor.high_income_threshold):>12}")
    click.echo(f"  Safe Harbor multipliers:   {format_percentage(harbor.standard_multiplier):>5} / "
               f"{format_percentage(harbor.high_income_multiplier)}")
    click.echo(f"  Underpayment interest:     {format_percentage(harbor.underpayment_interest_rate):>12} "
               f"({harbor.months_underpaid} months)")

    for status in ("single", "married"):
        status_rules = tax_rules.for_status(status)
        click.echo()
        click.echo(status.upper())
        click.echo("-" * 50)
        click.echo(f"  Standard deduction:        {format_currency(status_rules.standard_deduction):>12}")
        click.echo(f"  Add'l Medicare threshold:  {format_currency(status_rules.additional_medicare_threshold):>12}")
        for bracket in status_rules.tax_brackets:
            if bracket.upper_bound is None:
                span = f"Over {format_currency(bracket.lower_bound - 1)}"
            else:
                span = f"{format_currency(bracket.lower_bound)} - {format_currency(bracket.upper_bound)}"
            click.echo(f"  {span:<26} {format_percentage(bracket.rate):>12}")

    if tax_rules.payment_due_dates:
        click.echo()
        click.echo("PAYMENT DUE DATES")
        click.echo("-" * 50)
        for due in tax_rules.payment_due_dates:
            click.echo(f"  {due.label:<26} {due.due_date.isoformat():>12}")
