"""Configuration commands.

Provides commands to show, create and locate the junkctl config file.
"""

from typing import Annotated

import tomli_w
import typer
from rich.markup import escape

from junkctl.cli.output import OutputFormat, print_json
from junkctl.core.config import ConfigError, JunkctlConfig, require_config, save_config
from junkctl.core.paths import get_config_path
from junkctl.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the configuration file.",
    no_args_is_help=True,
)


@app.command()
def show(
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the effective configuration (file values merged with defaults)."""
    config = require_config()

    if output_format == OutputFormat.JSON:
        print_json(config.model_dump())
        return

    config_path = get_config_path()
    source = str(config_path) if config_path.exists() else "built-in defaults"
    console.print(f"[muted]# Source: {escape(source)}[/]", highlight=False)
    console.print(tomli_w.dumps(config.model_dump()), markup=False, highlight=False)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    path = get_config_path()
    if path.exists() and not force:
        print_error(f"Config already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(JunkctlConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")


@app.command()
def path() -> None:
    """Print the config file location."""
    typer.echo(str(get_config_path()))
