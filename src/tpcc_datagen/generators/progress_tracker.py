"""
Per-table progress bookkeeping for population runs.

Warehouse workers finish in any order, so the orchestrator reports each
completed warehouse batch here: the table moves to in_progress on its first
batch, its row count grows with every batch and its fraction tracks the share
of warehouses done. A table only becomes completed when the whole run
finishes, so a cancelled run never reports a table as completed.
"""

import logging
import threading
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class _TableStatus:
    state: str
    fraction: float = 0.0
    rows: int = 0


class TableProgressTracker:
    """
    Lock-protected state, fraction and row count per table.

    Lifecycle:
        not_started → in_progress   mark_table_started()
        in_progress → completed     mark_generation_complete()
    """

    STATE_NOT_STARTED = "not_started"
    STATE_IN_PROGRESS = "in_progress"
    STATE_COMPLETED = "completed"

    def __init__(self, table_names: list[str]) -> None:
        self._lock = threading.Lock()
        self._tables = {name: _TableStatus(self.STATE_NOT_STARTED) for name in table_names}
        logger.debug(f"Tracking progress for {len(self._tables)} tables")

    def _status(self, table_name: str) -> _TableStatus:
        # Callers hold the lock
        try:
            return self._tables[table_name]
        except KeyError:
            raise KeyError(f"Table '{table_name}' is not being tracked") from None

    def reset(self, table_names: list[str] | None = None) -> None:
        """
        Forget progress so the tables return to not_started.

        Args:
            table_names: Tables to reset; all tracked tables when omitted

        Raises:
            KeyError: For an untracked table
        """
        with self._lock:
            names = list(self._tables) if table_names is None else table_names
            for name in names:
                self._status(name)
                self._tables[name] = _TableStatus(self.STATE_NOT_STARTED)

    def mark_table_started(self, table_name: str) -> None:
        """
        Move a table from not_started to in_progress; later calls are no-ops.

        Raises:
            KeyError: For an untracked table
        """
        with self._lock:
            status = self._status(table_name)
            if status.state == self.STATE_NOT_STARTED:
                status.state = self.STATE_IN_PROGRESS
                logger.debug(f"Started table '{table_name}'")

    def update_progress(self, table_name: str, progress: float) -> None:
        """
        Record the completed fraction of a table. The state is left alone.

        Raises:
            KeyError: For an untracked table
            ValueError: If progress is outside 0.0-1.0
        """
        if progress < 0.0 or progress > 1.0:
            raise ValueError(f"Progress must be between 0.0 and 1.0, got {progress}")

        with self._lock:
            status = self._status(table_name)
            previous, status.fraction = status.fraction, progress

        # Log on every 10% boundary crossed
        if int(previous * 10) != int(progress * 10):
            logger.debug(f"Table '{table_name}' at {progress:.0%}")

    def add_rows(self, table_name: str, count: int) -> int:
        """Add ``count`` produced rows to a table and return its running total."""
        if count < 0:
            raise ValueError(f"Row count increment must be >= 0, got {count}")

        with self._lock:
            status = self._status(table_name)
            status.rows += count
            return status.rows

    def mark_generation_complete(self) -> None:
        """Close out the run: every in_progress table becomes completed."""
        with self._lock:
            finished = [
                name
                for name, status in self._tables.items()
                if status.state == self.STATE_IN_PROGRESS
            ]
            for name in finished:
                self._tables[name].state = self.STATE_COMPLETED

        logger.debug(f"Run finished; completed tables: {', '.join(finished) or 'none'}")

    def get_state(self, table_name: str) -> str:
        with self._lock:
            return self._status(table_name).state

    def get_progress(self, table_name: str) -> float:
        with self._lock:
            return self._status(table_name).fraction

    def get_rows(self, table_name: str) -> int:
        with self._lock:
            return self._status(table_name).rows

    def get_tables_by_state(self, state: str) -> list[str]:
        """Names of the tables currently in ``state``, in tracking order."""
        with self._lock:
            return [name for name, status in self._tables.items() if status.state == state]

    def get_all_states(self) -> dict[str, str]:
        with self._lock:
            return {name: status.state for name, status in self._tables.items()}

    def get_all_progress(self) -> dict[str, float]:
        with self._lock:
            return {name: status.fraction for name, status in self._tables.items()}

    def get_all_rows(self) -> dict[str, int]:
        with self._lock:
            return {name: status.rows for name, status in self._tables.items()}
