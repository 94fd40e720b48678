"""covpipe CLI - covpipe command."""

from pathlib import Path

import click

from covpipe.cli.run import run_command
from covpipe.cli.units import units_command
from covpipe.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="covpipe")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write JSON logs to this file",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_file: Path | None) -> None:
    """covpipe - per-package Go test runner with combined coverage."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["log_file"] = log_file.resolve() if log_file else None
    configure_logging(level="DEBUG" if verbose else "INFO", verbose=verbose)


cli.add_command(run_command, name="run")
cli.add_command(units_command, name="units")


if __name__ == "__main__":
    cli()
