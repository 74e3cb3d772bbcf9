"""Progress reporting contract for long-running submit operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, Protocol

PROGRESS_THIRTY_PERCENT: Final[int] = 30
PROGRESS_SEVENTY_PERCENT: Final[int] = 70


class ProgressSinkPort(Protocol):
    """Observer that receives status text and percent complete."""

    def progress_update(self, status_message: str, percent_complete: int) -> None:
        """Receive one progress update.

        Args:
            status_message: Human-readable status line.
            percent_complete: Completion percentage in [0, 100].

        Returns:
            None: Observers have no effect on control flow.
        """


@dataclass
class TaskProgress:
    """In-memory progress sink that keeps the latest update and the full history."""

    status_message: str = ""
    percent_complete: int = 0
    history: list[tuple[str, int]] = field(default_factory=list, repr=False)

    def progress_update(self, status_message: str, percent_complete: int) -> None:
        self.status_message = status_message
        self.percent_complete = percent_complete
        self.history.append((status_message, percent_complete))
