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
from mjsync_lib.properties.credentials import Credentials

from .factory import create_synchronizer
from .synchronizer import StopReason

logger = get_logger(__name__)


@click.command(
    short_help="Download all new completed jobs once.",
    help=f"""Walk the listing of your completed jobs and download every job that is not yet stored locally.

The user ID and session token are read from '{CFG.credentials.user_id_file}' and
'{CFG.credentials.session_token_file}' in the current directory (see `{CFG.binary_name} login`).

Every listing page is saved as 'last_page_<n>.json' in the jobs directory. Each job is stored
in its own subdirectory together with its images. Jobs that were downloaded completely are skipped,
interrupted downloads are resumed.""",
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
    "-d",
    "--jobs-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help=f"Directory to store the jobs in. Defaults to '{CFG.sync.jobs_dir}'.",
)
@click.option(
    "--max-pages",
    type=click.IntRange(min=1),
    default=None,
    help=f"Last listing page to request. Defaults to {CFG.sync.max_pages}.",
)
@click.option(
    "--empty-page-limit",
    type=click.IntRange(min=0),
    default=None,
    help="Stop after this many consecutive empty pages. 0 disables the limit.",
)
def sync(
    order: str,
    jobs_dir: Path | None,
    max_pages: int | None,
    empty_page_limit: int | None,
) -> NoReturn:
    """
    Perform a single on-demand synchronization run.
    """
    try:
        credentials = Credentials.load()
        synchronizer = create_synchronizer(jobs_dir, max_pages, empty_page_limit)
        report = synchronizer.runSync(
            credentials.user_id, credentials.session_token, order
        )

        if report.stop_reason == StopReason.FAILED:
            sys.exit(CFG.exit_codes.default)
        sys.exit(0)
    except MJFatalError as e:
        # logged by the synchronizer
        sys.exit(e.exit_code)
    except MJError as e:
        logger.error(e.logMessage())
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
