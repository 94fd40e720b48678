"""covpipe units command - list the packages a run would test."""

from __future__ import annotations

from pathlib import Path

import click

from covpipe.cli.run import apply_logging
from covpipe.cli.utils import crashed, fail, find_project_root, interrupted
from covpipe.config.loader import load_config
from covpipe.core.errors import CovPipeError, DiscoveryError
from covpipe.core.formatting import pluralize
from covpipe.runner.discovery import discover_units, partition_units
from covpipe.toolchain.go import GoToolchain


@click.command()
@click.argument("path", default=None, required=False, type=click.Path(exists=True, path_type=Path))
@click.option(
    "-e",
    "--exclude",
    "excludes",
    multiple=True,
    metavar="PACKAGE",
    help="Mark package as excluded (repeatable)",
)
@click.pass_context
def units_command(ctx: click.Context, path: Path | None, excludes: tuple[str, ...]) -> None:
    """List discovered Go packages, marking excluded ones.

    PATH is the module root. If not specified, auto-detects by walking up
    from the current directory to find go.mod.
    """
    ctx.ensure_object(dict)

    try:
        root = find_project_root(path)
        config = load_config(root)
        apply_logging(config, ctx.obj)
        units = discover_units(GoToolchain(root, config.toolchain))
        if not units:
            raise DiscoveryError.no_units(str(root))
    except CovPipeError as e:
        fail(e)
    except KeyboardInterrupt:
        interrupted()
    except Exception as e:  # noqa: BLE001
        crashed(e)

    included, excluded = partition_units(units, [*config.run.exclude, *excludes])
    excluded_set = set(excluded)
    for unit in units:
        click.echo(f"{unit}  (excluded)" if unit in excluded_set else unit)

    click.echo(f"{pluralize(len(included), 'package')} to test, {len(excluded)} excluded")
