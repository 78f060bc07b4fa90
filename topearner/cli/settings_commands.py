"""Settings CLI commands for Top Earner.

Manages settings.json - HTTP timeout and profile location.
"""

import click

from topearner.sdk import (
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_settings_path,
)
from topearner.sdk.config import DEFAULT_TIMEOUT


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - timeout: HTTP timeout in seconds
    - profile: path to profile.yaml
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
        click.echo(f"  timeout: {DEFAULT_TIMEOUT} (default)")
        return

    click.echo("Current settings:")
    for key, value in current.items():
        click.echo(f"  {key}: {value}")


@settings.command("timeout")
@click.argument("seconds", required=False, type=float)
@click.option("--clear", is_flag=True, help="Clear custom timeout, revert to default")
def settings_timeout(seconds, clear):
    """Set or clear the HTTP timeout.

    Examples:
        top-earner settings timeout 10
        top-earner settings timeout --clear
    """
    if clear:
        current = load_settings()
        if "timeout" in current:
            del current["timeout"]
            save_settings(current)
            click.echo(f"Cleared timeout setting. Using default: {DEFAULT_TIMEOUT}")
        else:
            click.echo("timeout was not set.")
        return

    if seconds is None:
        current_timeout = get_setting("timeout")
        if current_timeout is not None:
            click.echo(f"Current timeout: {current_timeout}")
        else:
            click.echo(f"No custom timeout set. Using default: {DEFAULT_TIMEOUT}")
        return

    if seconds <= 0:
        raise click.BadParameter("Timeout must be positive.", param_hint="SECONDS")

    set_setting("timeout", seconds)
    click.echo(f"Set timeout: {seconds}")
    click.echo(f"Saved to: {get_settings_path()}")
