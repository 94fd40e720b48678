"""covpipe run command - test every package and report combined coverage."""

from __future__ import annotations

import contextlib
import json
from pathlib import Path

import click

from covpipe.cli.utils import EXIT_TESTS_FAILED, crashed, fail, find_project_root, interrupted
from covpipe.config.loader import load_config
from covpipe.config.models import CovPipeConfig, LogOutputConfig
from covpipe.core.errors import CovPipeError
from covpipe.core.logging import clear_run_id, configure_logging, get_logger, set_run_id
from covpipe.core.progress import RunProgress
from covpipe.coverage.models import CoverMode
from covpipe.runner.pipeline import RunOptions, run_pipeline
from covpipe.toolchain.go import GoToolchain

log = get_logger("cli.run")


def apply_logging(config: CovPipeConfig, ctx_obj: dict) -> None:
    """Reconfigure logging from loaded config plus the group's -v/--log-file."""
    logging_config = config.logging
    if log_file := ctx_obj.get("log_file"):
        logging_config = logging_config.model_copy(
            update={
                "outputs": [
                    *logging_config.outputs,
                    LogOutputConfig(format="json", destination=str(log_file)),
                ]
            }
        )
    configure_logging(config=logging_config, verbose=ctx_obj.get("verbose", False))


@click.command()
@click.argument("path", default=None, required=False, type=click.Path(exists=True, path_type=Path))
@click.option(
    "-e",
    "--exclude",
    "excludes",
    multiple=True,
    metavar="PACKAGE",
    help="Exclude package from testing pipeline (repeatable)",
)
@click.option(
    "-p", "--progress", "show_progress", is_flag=True, help="Show current progress of test pipeline"
)
@click.option(
    "--mode",
    type=click.Choice([m.value for m in CoverMode]),
    default=None,
    help="Coverage mode passed to go test (default: set)",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Per-package go test timeout in seconds",
)
@click.option(
    "-o",
    "--profile",
    "profile_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Keep the combined coverage profile at this path",
)
@click.option("--json", "as_json", is_flag=True, help="Output summary as JSON")
@click.pass_context
def run_command(
    ctx: click.Context,
    path: Path | None,
    excludes: tuple[str, ...],
    show_progress: bool,
    mode: str | None,
    timeout: float | None,
    profile_path: Path | None,
    as_json: bool,
) -> None:
    """Run tests for every Go package with coverage and print one summary line.

    PATH is the module root. If not specified, auto-detects by walking up
    from the current directory to find go.mod.
    """
    ctx.ensure_object(dict)
    set_run_id()

    try:
        root = find_project_root(path)
        config = load_config(root)
        apply_logging(config, ctx.obj)

        toolchain_config = config.toolchain
        if timeout is not None:
            toolchain_config = toolchain_config.model_copy(update={"test_timeout_sec": timeout})

        options = RunOptions(
            mode=CoverMode(mode) if mode else config.run.cover_mode,
            exclusions=frozenset(config.run.exclude) | frozenset(excludes),
            profile_path=profile_path.resolve() if profile_path else None,
        )
        progress_on = show_progress or config.run.show_progress
        log.info(
            "run_started",
            root=str(root),
            mode=options.mode.value,
            excluded=sorted(options.exclusions),
        )

        toolchain = GoToolchain(root, toolchain_config)
        with RunProgress(total=0) if progress_on else contextlib.nullcontext() as bar:
            summary = run_pipeline(
                toolchain,
                options,
                on_progress=bar.update if bar is not None else None,
                root=root,
            )
    except CovPipeError as e:
        fail(e)
    except KeyboardInterrupt:
        interrupted()
    except Exception as e:  # noqa: BLE001
        crashed(e)
    finally:
        clear_run_id()

    if as_json:
        click.echo(json.dumps(summary.to_dict()))
    else:
        click.echo(summary.line())

    if not summary.passed:
        raise SystemExit(EXIT_TESTS_FAILED)
