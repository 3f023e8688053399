# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

from dataclasses import dataclass
from pathlib import Path
from typing import Self

from mjsync_lib.core.config import CFG
from mjsync_lib.core.error import CredentialsError
from mjsync_lib.core.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Credentials:
    """
    The two strings needed to list the jobs of a user.
    """

    # Identifier of the user whose jobs are synchronized
    user_id: str

    # Session token used to authenticate the listing requests
    session_token: str

    @classmethod
    def load(
        cls,
        user_id_file: Path | None = None,
        session_token_file: Path | None = None,
    ) -> Self:
        """
        Read the credentials from their files, stripping surrounding whitespace.

        Args:
            user_id_file (Path | None): File with the user identifier.
                Defaults to the configured file in the current directory.
            session_token_file (Path | None): File with the session token.
                Defaults to the configured file in the current directory.

        Returns:
            Credentials: The loaded credentials.

        Raises:
            CredentialsError: If either file cannot be read or is empty.
        """
        user_id_file = Path(user_id_file or CFG.credentials.user_id_file)
        session_token_file = Path(
            session_token_file or CFG.credentials.session_token_file
        )

        user_id = _read_value(user_id_file, "user ID", CFG.codes.user_id_read)
        session_token = _read_value(
            session_token_file, "session token", CFG.codes.session_token_read
        )

        return cls(user_id=user_id, session_token=session_token)

    def save(
        self,
        user_id_file: Path | None = None,
        session_token_file: Path | None = None,
    ) -> None:
        """
        Write the credentials into their files.

        Raises:
            CredentialsError: If either file cannot be written.
        """
        user_id_file = Path(user_id_file or CFG.credentials.user_id_file)
        session_token_file = Path(
            session_token_file or CFG.credentials.session_token_file
        )

        for file, value, code in (
            (user_id_file, self.user_id, CFG.codes.user_id_read),
            (session_token_file, self.session_token, CFG.codes.session_token_read),
        ):
            try:
                file.write_text(value)
            except OSError as e:
                raise CredentialsError(
                    f"Could not save credentials to '{file}': {e}.", code
                ) from e
            logger.debug(f"Saved credentials to '{file}'.")


def _read_value(file: Path, description: str, code: int) -> str:
    try:
        value = file.read_text().strip()
    except OSError as e:
        raise CredentialsError(
            f"Could not read the {description} from '{file}': {e}.", code
        ) from e

    if not value:
        raise CredentialsError(f"The {description} in '{file}' is empty.", code)

    return value
