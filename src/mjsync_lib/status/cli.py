# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

import sys
from pathlib import Path
from typing import NoReturn

import click
from click_help_colors import HelpColorsCommand
from rich.console import Console

from mjsync_lib.core.config import CFG
from mjsync_lib.core.error import MJError
from mjsync_lib.core.logger import get_logger
from mjsync_lib.store.store import JobStore

from .presenter import StatusPresenter

logger = get_logger(__name__)


@click.command(
    short_help="Display the jobs stored locally.",
    help="Display the jobs stored in the jobs directory, whether they were downloaded completely, and how many images they hold.",
    cls=HelpColorsCommand,
    help_options_color="bright_blue",
)
@click.option(
    "-d",
    "--jobs-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help=f"Directory the jobs are stored in. Defaults to '{CFG.sync.jobs_dir}'.",
)
@click.option("--yaml", is_flag=True, help="Output job information in YAML format.")
def status(jobs_dir: Path | None, yaml: bool) -> NoReturn:
    try:
        records = JobStore(jobs_dir).records()
        if not records:
            logger.info("No jobs found.")
            sys.exit(0)

        presenter = StatusPresenter(records)
        if yaml:
            print(presenter.dumpYaml(), end="")
        else:
            console = Console(record=False, markup=False)
            console.print(presenter.createStatusPanel())

        sys.exit(0)
    except MJError as e:
        logger.error(e.logMessage())
        print()
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        print()
        sys.exit(CFG.exit_codes.unexpected_error)
