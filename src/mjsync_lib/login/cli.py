# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

import sys
from typing import NoReturn

import click
from click_help_colors import HelpColorsCommand

from mjsync_lib.core.config import CFG
from mjsync_lib.core.error import MJError
from mjsync_lib.core.logger import get_logger
from mjsync_lib.properties.credentials import Credentials

logger = get_logger(__name__)


@click.command(
    short_help="Save the user ID and session token.",
    help=f"""Save the credentials used by `{CFG.binary_name} sync` and `{CFG.binary_name} watch`.

The user ID is written to '{CFG.credentials.user_id_file}' and the session token
to '{CFG.credentials.session_token_file}' in the current directory.
Values that are not provided as options are prompted for.""",
    cls=HelpColorsCommand,
    help_options_color="bright_blue",
)
@click.option("-u", "--user-id", type=str, default=None, help="Your user ID.")
@click.option(
    "-t", "--session-token", type=str, default=None, help="Your session token."
)
def login(user_id: str | None, session_token: str | None) -> NoReturn:
    try:
        if not user_id:
            user_id = click.prompt("User ID", type=str)
        if not session_token:
            session_token = click.prompt("Session token", type=str, hide_input=True)

        user_id = user_id.strip()
        session_token = session_token.strip()
        if not user_id or not session_token:
            raise MJError("User ID and session token must not be empty.")

        Credentials(user_id=user_id, session_token=session_token).save()
        logger.info("Credentials saved.")
        sys.exit(0)
    except click.Abort:
        raise
    except MJError as e:
        logger.error(e.logMessage())
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
