# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

import sys
from pathlib import Path
from typing import NoReturn

import click
from click_help_colors import HelpColorsCommand

from mjsync_lib.core.config import CFG
from mjsync_lib.core.error import MJError, MJFatalError
from mjsync_lib.core.logger import get_logger
from mjsync_lib.schedule.scheduler import Scheduler
from mjsync_lib.sync.factory import create_synchronizer

logger = get_logger(__name__)


@click.command(
    short_help="Keep downloading new jobs periodically.",
    help=f"""Synchronize your completed jobs periodically until interrupted.

A run is started every INTERVAL seconds (every {CFG.scheduler.interval:g} seconds by default)
and, unless `--no-now` is given, once immediately. Credentials are re-read before every run.

Press Ctrl-C to stop. A run in progress finishes its current download before stopping.""",
    cls=HelpColorsCommand,
    help_options_color="bright_blue",
)
@click.option(
    "-o",
    "--order",
    type=click.Choice(CFG.api.ordering_modes),
    default=CFG.sync.default_ordering,
    show_default=True,
    help="Ordering of the job listing.",
)
@click.option(
    "-i",
    "--interval",
    type=click.FloatRange(min=0, min_open=True),
    default=CFG.scheduler.interval,
    show_default=True,
    help="Time between two runs in seconds.",
)
@click.option(
    "-d",
    "--jobs-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help=f"Directory to store the jobs in. Defaults to '{CFG.sync.jobs_dir}'.",
)
@click.option(
    "--now/--no-now",
    default=True,
    show_default=True,
    help="Start a run immediately.",
)
def watch(order: str, interval: float, jobs_dir: Path | None, now: bool) -> NoReturn:
    """
    Run the scheduler until interrupted or until a fatal error occurs.
    """
    scheduler = None
    try:
        scheduler = Scheduler(create_synchronizer(jobs_dir), order, interval=interval)
        scheduler.start()
        if now:
            scheduler.trigger()

        scheduler.wait()
        sys.exit(0)
    except KeyboardInterrupt:
        if scheduler:
            scheduler.cancel()
            try:
                scheduler.wait(CFG.scheduler.join_timeout)
            except MJFatalError as e:
                # logged by the synchronizer
                sys.exit(e.exit_code)
        sys.exit(CFG.exit_codes.interrupted)
    except MJFatalError as e:
        # logged by the synchronizer
        sys.exit(e.exit_code)
    except MJError as e:
        logger.error(e.logMessage())
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
