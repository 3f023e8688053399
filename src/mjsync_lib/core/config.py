# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
Configuration system for mjsync.

This module defines dataclasses representing all configurable aspects of mjsync,
including the remote API, the synchronization loop, the scheduler, network timeouts,
credential files, diagnostic codes, and presentation settings.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class EnvironmentVariables:
    """Environment variable names used by mjsync."""

    # Enables mjsync debug mode.
    debug_mode: str = "MJSYNC_DEBUG"
    # Explicit path to the mjsync config file.
    config: str = "MJSYNC_CONFIG"


@dataclass
class ApiSettings:
    """Settings of the remote job-listing API."""

    # Endpoint listing the recent jobs of a user.
    recent_jobs_url: str = "https://www.midjourney.com/api/app/recent-jobs/"
    # User agent sent with catalog requests.
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; WOW64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/114.0.0.0 Safari/537.36"
    )
    # Name of the cookie carrying the session token.
    session_cookie: str = "__Secure-next-auth.session-token"
    # Accepted values of the `orderBy` query parameter.
    ordering_modes: list[str] = field(default_factory=lambda: ["new", "top-all"])


@dataclass
class SyncSettings:
    """Settings of the synchronization loop."""

    # Directory holding the page dumps and job directories.
    jobs_dir: str = "jobs"
    # Last page number requested during a run (inclusive).
    max_pages: int = 200
    # Stop a run after this many consecutive empty pages. Disabled if 0.
    empty_page_limit: int = 0
    # Ordering mode used when none is provided.
    default_ordering: str = "new"


@dataclass
class SchedulerSettings:
    """Settings of the periodic scheduler."""

    # Interval (in seconds) between timer-triggered runs.
    interval: float = 3600.0
    # Time (in seconds) to wait for in-flight runs to notice a cancellation.
    join_timeout: float = 5.0


@dataclass
class TimeoutSettings:
    """Network timeouts in seconds. None means no timeout."""

    # Timeout for fetching a listing page.
    catalog: float | None = None
    # Timeout for downloading an image.
    image: float | None = None


@dataclass
class CredentialsSettings:
    """Files storing the credentials."""

    # File with the user identifier.
    user_id_file: str = "userid.txt"
    # File with the session token.
    session_token_file: str = "sessiontoken.txt"


@dataclass
class LogStreamSettings:
    """Settings of the in-process log stream."""

    # Maximal number of lines kept in the stream.
    max_lines: int = 10000


@dataclass
class DiagnosticCodes:
    """Numeric codes prefixed to log messages to distinguish failure causes."""

    # An image is being downloaded.
    image_download: int = 200
    # The user identifier could not be read.
    user_id_read: int = 801
    # The session token could not be read.
    session_token_read: int = 802
    # A listing page could not be fetched.
    catalog_fetch: int = 803
    # A listing page could not be written to disk.
    page_write: int = 804
    # A listing page could not be decoded.
    page_decode: int = 805
    # A job identifier failed validation.
    unsafe_job_id: int = 806
    # An image filename failed validation.
    unsafe_filename: int = 807
    # Job metadata could not be written.
    metadata_write: int = 808
    # An image could not be downloaded or written.
    image_failure: int = 809
    # The completion sentinel could not be written.
    sentinel_write: int = 810


@dataclass
class StatusPresenterSettings:
    """Settings for StatusPresenter."""

    # Style of the border lines.
    border_style: str = "white"
    # Style of the title.
    title_style: str = "white bold"
    # Style used for table headers.
    headers_style: str = "default bold"
    # Style used for completed jobs.
    completed_style: str = "bright_green"
    # Style used for partially downloaded jobs.
    partial_style: str = "bright_yellow"
    # Style used for job statistics.
    secondary_style: str = "grey70"


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by mjsync.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failures of mjsync commands.
    default: int = 91
    # Returned when a condition requires terminating the whole process.
    fatal: int = 92
    # Returned when the command is interrupted by the user.
    interrupted: int = 130
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class Config:
    """Main configuration for mjsync."""

    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    api: ApiSettings = field(default_factory=ApiSettings)
    sync: SyncSettings = field(default_factory=SyncSettings)
    scheduler: SchedulerSettings = field(default_factory=SchedulerSettings)
    timeouts: TimeoutSettings = field(default_factory=TimeoutSettings)
    credentials: CredentialsSettings = field(default_factory=CredentialsSettings)
    log_stream: LogStreamSettings = field(default_factory=LogStreamSettings)
    codes: DiagnosticCodes = field(default_factory=DiagnosticCodes)
    status_presenter: StatusPresenterSettings = field(
        default_factory=StatusPresenterSettings
    )
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)

    # Name of the mjsync binary.
    binary_name: str = "mjsync"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read mjsync config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            Path(env_path) if (env_path := os.getenv("MJSYNC_CONFIG")) else None,
            Path.cwd() / "mjsync_config.toml",
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "mjsync"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Nested tables are converted to the nested dataclasses; unknown keys are ignored.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        name = field_info.name
        if name not in data:
            continue

        value = data[name]
        if is_dataclass(field_info.type) and isinstance(value, dict):
            field_values[name] = _dict_to_dataclass(field_info.type, value)
        else:
            field_values[name] = value

    return cls(**field_values)


# Global configuration for mjsync.
CFG = Config.load()
