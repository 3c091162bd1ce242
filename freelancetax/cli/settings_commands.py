"""Settings CLI commands for Freelance Tax.

Manages settings.json - default state, filing status and tax year.
"""

import click

from freelancetax.sdk import (
    SETTING_KEYS,
    SettingsError,
    get_defaults,
    get_settings_path,
    load_settings,
    set_setting,
    unset_setting,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - state: default state code (e.g., NY)
    - filing_status: default filing status (single, married-jointly,
      married-separately, head-of-household)
    - tax_year: default tax year (e.g., 2025)
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and effective defaults."""
    settings_path = get_settings_path()
    try:
        current = load_settings()
        effective = get_defaults()
    except SettingsError as e:
        raise click.ClickException(str(e))

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
    click.echo("Effective defaults:")
    for key in SETTING_KEYS:
        source = "" if key in current else " (default)"
        click.echo(f"  {key}: {effective[key]}{source}")


@settings.command("set")
@click.argument("key", type=click.Choice(SETTING_KEYS))
@click.argument("value")
def settings_set(key, value):
    """Set a default, e.g. 'freelance-tax settings set state NY'."""
    try:
        path = set_setting(key, value)
        stored = load_settings()[key]
    except SettingsError as e:
        raise click.ClickException(str(e))

    click.echo(f"Set {key}: {stored}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key", type=click.Choice(SETTING_KEYS))
def settings_unset(key):
    """Clear a setting, reverting to the built-in default."""
    try:
        removed = unset_setting(key)
        effective = get_defaults()[key]
    except SettingsError as e:
        raise click.ClickException(str(e))

    if removed:
        click.echo(f"Cleared {key} setting.")
    else:
        click.echo(f"{key} was not set.")
    click.echo(f"{key} is now: {effective} (default)")
