# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

import yaml
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mjsync_lib.core.config import CFG
from mjsync_lib.store.store import JobRecord


class StatusPresenter:
    """
    Present a read-only summary of the jobs stored in a job store.
    """

    def __init__(self, records: list[JobRecord]):
        """
        Initialize the presenter.

        Args:
            records (list[JobRecord]): Job directories to present.
        """
        self._records = records

    def createStatusPanel(self) -> Group:
        """
        Create a Rich panel with one row per job and overall statistics.

        Returns:
            Group: Rich Group containing the panel.
        """
        settings = CFG.status_presenter

        table = Table(header_style=settings.headers_style, box=None, pad_edge=False)
        table.add_column("Job ID")
        table.add_column("State")
        table.add_column("Images", justify="right")

        for record in self._records:
            style = settings.completed_style if record.completed else settings.partial_style
            table.add_row(
                record.job_id,
                Text(_state(record), style=style),
                str(len(record.images)),
            )

        panel = Panel(
            Group(table, Text(""), self._createStatsText()),
            title=Text("STORED JOBS", style=settings.title_style, justify="center"),
            border_style=settings.border_style,
            padding=(1, 1),
            expand=False,
        )

        return Group(Text(""), panel, Text(""))

    def dumpYaml(self) -> str:
        """
        Return the YAML representation of all presented jobs.
        """
        return yaml.safe_dump(
            [
                {
                    "job_id": record.job_id,
                    "state": _state(record),
                    "path": str(record.path),
                    "images": [image.name for image in record.images],
                }
                for record in self._records
            ],
            sort_keys=False,
        )

    def _createStatsText(self) -> Text:
        completed = sum(record.completed for record in self._records)
        partial = len(self._records) - completed
        images = sum(len(record.images) for record in self._records)

        return Text(
            f"{completed} completed, {partial} partial, {images} images",
            style=CFG.status_presenter.secondary_style,
        )


def _state(record: JobRecord) -> str:
    return "completed" if record.completed else "partial"
