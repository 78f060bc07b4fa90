"""Profile CLI commands for Top Earner.

Manages the job profile (profile.yaml) - endpoints and rules.
"""

import click
import yaml

from topearner.sdk import (
    DEFAULT_PROFILE,
    get_profile_path,
    load_profile,
    save_profile,
    set_profile_value,
)

# Keys that must hold integers; everything else is stored as a string
INT_KEYS = {"rules.year_offset"}


@click.group()
def profile():
    """Manage the job profile (profile.yaml)."""
    pass


@profile.command("show")
def profile_show():
    """Show the profile path and contents."""
    path = get_profile_path()
    click.echo(f"Profile path: {path}")

    if not path.exists():
        click.echo("Profile not found - using built-in defaults:")
        click.echo()
        click.echo(yaml.dump(DEFAULT_PROFILE, default_flow_style=False, sort_keys=False).rstrip())
        click.echo()
        click.echo("Create one with: top-earner profile init")
        return

    try:
        data = load_profile()
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid YAML in {path}: {e}")

    click.echo()
    click.echo(yaml.dump(data, default_flow_style=False, sort_keys=False).rstrip())


@profile.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing profile.")
def profile_init(force):
    """Write a profile.yaml with the default endpoints and rules."""
    path = get_profile_path()
    if path.exists() and not force:
        raise click.ClickException(f"Profile already exists: {path}\nUse --force to overwrite.")

    saved = save_profile(DEFAULT_PROFILE, path)
    click.echo(f"Wrote profile: {saved}")


@profile.command("set")
@click.argument("key")
@click.argument("value")
def profile_set(key, value):
    """Set a profile value by dot-notation KEY.

    \b
    Examples:
      top-earner profile set rules.category beta
      top-earner profile set rules.year_offset 2
      top-earner profile set endpoints.get_task https://example.com/get-task
    """
    if key in INT_KEYS:
        try:
            value = int(value)
        except ValueError:
            raise click.BadParameter(f"{key} must be an integer, got '{value}'", param_hint="VALUE")

    saved = set_profile_value(key, value)
    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {saved}")
