"""Saved inputs CLI commands for Tax Shield.

Manages inputs.json - the raw values used when an estimate option is omitted.
"""

import click

from taxshield.sdk import FileInputStore, INPUT_DEFAULTS


@click.group()
def inputs():
    """Manage saved calculator inputs (inputs.json).

    \b
    Fields:
      filingStatus        single or married
      priorYearTax        last year's total tax
      priorYearAGI        last year's adjusted gross income
      currentYearProfit   projected net self-employment profit
    """
    pass


@inputs.command("show")
def inputs_show():
    """Show saved inputs (defaults shown for unsaved fields)."""
    store = FileInputStore()

    click.echo(f"Inputs file: {store.path}")
    click.echo()
    for key, value in store.items().items():
        marker = "" if store.is_saved(key) else " (default)"
        click.echo(f"  {key}: {value or '-'}{marker}")


@inputs.command("set")
@click.argument("field", type=click.Choice(list(INPUT_DEFAULTS)))
@click.argument("value")
def inputs_set(field, value):
    """Save one input FIELD as VALUE.

    Examples:
        tax-shield inputs set filingStatus married
        tax-shield inputs set currentYearProfit '$120,000'
    """
    store = FileInputStore()
    try:
        store.set(field, value)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="VALUE")
    click.echo(f"Saved {field}: {value}")


@inputs.command("clear")
def inputs_clear():
    """Remove all saved inputs."""
    store = FileInputStore()
    store.clear()
    click.echo("Cleared saved inputs.")
