"""Settings CLI commands for Tax Shield.

Manages settings.json - default tax year, rules and data directories.
"""

import click
from pathlib import Path

from taxshield.sdk import (
    load_settings,
    get_setting,
    set_setting,
    clear_setting,
    get_settings_path,
    get_data_path,
    get_default_tax_year,
    list_tax_years,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - tax_year: default tax year for estimates
    - rules_dir: directory of custom <year>.yaml rule tables
    - data_dir: custom data directory path
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
    else:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")

    click.echo()
    click.echo("Effective values:")
    click.echo(f"  tax_year: {get_default_tax_year()}")
    click.echo(f"  data_dir: {get_data_path()}")


@settings.command("tax-year")
@click.argument("year", required=False)
@click.option("--clear", is_flag=True, help="Clear tax_year, revert to default")
def settings_tax_year(year, clear):
    """Set or clear the default tax year.

    Examples:
        tax-shield settings tax-year 2026
        tax-shield settings tax-year --clear
    """
    if clear:
        if clear_setting("tax_year"):
            click.echo("Cleared tax_year setting.")
        else:
            click.echo("tax_year was not set.")
        click.echo(f"Default tax year is now: {get_default_tax_year()}")
        return

    if not year:
        click.echo(f"Default tax year: {get_default_tax_year()}")
        return

    if not year.isdigit() or len(year) != 4:
        raise click.BadParameter(f"Invalid year '{year}'. Must be 4 digits.")
    if int(year) not in list_tax_years():
        available = ", ".join(str(y) for y in list_tax_years())
        raise click.ClickException(f"No tax rules for {year} (available: {available})")

    set_setting("tax_year", year)
    click.echo(f"Set tax_year: {year}")
    click.echo(f"Saved to: {get_settings_path()}")


@settings.command("rules-dir")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Clear custom rules_dir, use bundled rules only")
def settings_rules_dir(path, clear):
    """Set or clear the custom tax rules directory.

    PATH is a directory of <year>.yaml rule tables. Tables found there
    take precedence over the bundled ones.
    """
    if clear:
        if clear_setting("rules_dir"):
            click.echo("Cleared rules_dir setting.")
        else:
            click.echo("rules_dir was not set.")
        return

    if not path:
        current = get_setting("rules_dir")
        if current:
            click.echo(f"Current rules_dir: {current}")
        else:
            click.echo("No custom rules_dir set. Using bundled rules.")
        return

    rules_path = Path(path).expanduser().resolve()
    if not rules_path.is_dir():
        raise click.ClickException(f"Not a directory: {rules_path}")

    set_setting("rules_dir", str(rules_path))
    click.echo(f"Set rules_dir: {rules_path}")
    click.echo(f"Saved to: {get_settings_path()}")


@settings.command("data-dir")
@click.argument("path", required=False, type=click.Path())
@click.option("--clear", is_flag=True, help="Clear custom data_dir, revert to default")
def settings_data_dir(path, clear):
    """Set or clear the custom data directory.

    PATH is the directory where tax-shield stores saved inputs.
    """
    if clear:
        if clear_setting("data_dir"):
            click.echo("Cleared data_dir setting.")
            click.echo(f"Data directory is now: {get_data_path()} (default)")
        else:
            click.echo("data_dir was not set.")
        return

    if not path:
        current_data_dir = get_setting("data_dir")
        if current_data_dir:
            click.echo(f"Current data_dir: {current_data_dir}")
        else:
            click.echo(f"No custom data_dir set. Using default: {get_data_path()}")
        return

    data_path = Path(path).expanduser().resolve()

    if data_path.exists():
        if not data_path.is_dir():
            raise click.ClickException(f"Path exists but is not a directory: {data_path}")
    else:
        try:
            data_path.mkdir(parents=True, exist_ok=True)
            click.echo(f"Created directory: {data_path}")
        except OSError as e:
            raise click.ClickException(f"Cannot create directory: {data_path}\n{e}")

    set_setting("data_dir", str(data_path))
    click.echo(f"Set data_dir: {data_path}")
    click.echo(f"Saved to: {get_settings_path()}")
