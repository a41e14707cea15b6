"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from junkctl import __version__
from junkctl.cli.commands import check, clean, config, history, scan
from junkctl.cli.output import setup_logging

# Create main Typer app
app = typer.Typer(
    name="junkctl",
    help="Find junk files and move them to the trash safely.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"junkctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log debug details to stderr.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log errors.",
        ),
    ] = False,
) -> None:
    """junkctl - Find junk files and move them to the trash safely.

    Scan temp, cache and download locations for disposable files and
    move them to the trash. Protected system locations are never touched.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command(name="scan")(scan.scan)
app.command(name="clean")(clean.clean)
app.command(name="check")(check.check)
app.command(name="size")(check.size)
app.command(name="info")(check.info)
app.command(name="temp-dirs")(check.temp_dirs)
app.add_typer(config.app, name="config")
app.add_typer(history.app, name="history")


if __name__ == "__main__":
    app()
