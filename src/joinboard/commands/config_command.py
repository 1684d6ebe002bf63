"""Command group 'config' of joinboard"""

from typing import Annotated

import typer
from pydantic import ValidationError

from joinboard.services.config_service import get_config_service
from joinboard.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from joinboard.utils.ui.console import get_console
from joinboard.utils.ui.formatters import format_error, format_output, format_success

app = typer.Typer(help="Configuration management commands", no_args_is_help=True)
console = get_console()


@app.command("show")
def show_config(
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output format: pretty, json, yaml")
    ] = "pretty",
) -> None:
    """Show the current configuration."""
    config = get_config_service().config.model_dump(mode="json")
    if config["api"].get("token"):
        config["api"]["token"] = "********"
    if output in ("json", "yaml"):
        format_output(config, output)
        return
    flat = {
        f"{section}.{key}": value
        for section, values in config.items()
        for key, value in values.items()
    }
    format_output(flat, output)


@app.command("get")
def get_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., api.endpoint)")],
) -> None:
    """Get a configuration value."""
    value = get_config_service().get(key)
    if value is None:
        format_error(f"Configuration key '{key}' not found")
        raise typer.Exit(ERROR_NOT_FOUND)
    console.print(value)


@app.command("set")
def set_config(
    key: Annotated[str, typer.Argument(help="Configuration key (e.g., store.backend)")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
) -> None:
    """Set a configuration value."""
    parsed_value: str | None = None if value.lower() in ("none", "null") else value
    try:
        get_config_service().set(key, parsed_value)
    except KeyError:
        format_error(f"Unknown configuration key '{key}'")
        raise typer.Exit(ERROR_NOT_FOUND) from None
    except ValidationError as e:
        format_error(f"Invalid value for '{key}': {e.errors()[0]['msg']}")
        raise typer.Exit(ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
def reset_config(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Reset configuration to defaults?"):
        console.print("[dim]Cancelled[/dim]")
        raise typer.Exit(0)
    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
