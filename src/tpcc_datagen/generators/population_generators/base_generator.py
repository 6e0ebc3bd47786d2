"""
Base generator infrastructure for TPC-C population generation.

Provides core functionality: configuration validation, the per-run load
constants, per-warehouse random sources, cancellation and progress reporting.
"""

import logging
import threading
from datetime import UTC, datetime
from typing import Any, Callable

from pydantic import ValidationError

from tpcc_datagen.config.models import TpccConfig
from tpcc_datagen.shared.constants import ALL_TABLES
from tpcc_datagen.shared.exceptions import ConfigurationError

from ..progress_tracker import TableProgressTracker
from ..utils import LoadConstants, RandomValueGenerator, spawn_seeds

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, float, str | None], None]
SurnameSelector = Callable[[int], int]
Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class BaseGenerator:
    """
    Base class providing shared infrastructure for population generation.

    Handles:
    - Configuration validation (before anything is drawn)
    - Seed derivation for the root and per-warehouse random sources
    - Load constants for the run
    - Cooperative cancellation
    - Progress tracking and callbacks
    """

    def __init__(
        self,
        config: TpccConfig | dict[str, Any],
        surname_selector: SurnameSelector | None = None,
        clock: Clock | None = None,
    ):
        """
        Initialize base generator infrastructure.

        Args:
            config: Population configuration (model or raw mapping)
            surname_selector: Replacement for the NURand C_LAST selector;
                receives the load constant and returns a number in [0, 999]
            clock: Source of entry/history timestamps (default: UTC now)

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = self._validate_config(config)
        scale = self.config.scale

        self._surname_selector = surname_selector
        self._clock = clock or _utc_now

        # Seed 0 drives items and load constants; seed w drives warehouse w
        self._seeds = spawn_seeds(self.config.seed, scale.warehouses + 1)

        self._cancel_event = threading.Event()
        self._progress_callback: ProgressCallback | None = None
        self._progress_tracker = TableProgressTracker(ALL_TABLES)
        self._reset_run_state()

    def _reset_run_state(self) -> None:
        """Rewind the root random source and clear progress before a run."""
        self._root_values = RandomValueGenerator(self._seeds[0])
        self.load_constants = LoadConstants.generate(self._root_values)
        self._progress_tracker.reset()

    @staticmethod
    def _validate_config(config: TpccConfig | dict[str, Any]) -> TpccConfig:
        # Instances are re-checked too; model_construct() or a mutated copy
        # may hold values the validators never saw
        if isinstance(config, TpccConfig):
            config = config.model_dump()
        try:
            return TpccConfig.model_validate(config)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid population configuration",
                validation_errors=[err["msg"] for err in e.errors()],
            ) from e

    def random_values_for_warehouse(self, warehouse_id: int) -> RandomValueGenerator:
        """Fresh random source for one warehouse, derived from the run seed."""
        if not 1 <= warehouse_id <= self.config.scale.warehouses:
            raise ConfigurationError(
                "Warehouse id outside configured range",
                parameter="warehouse_id",
                invalid_value=warehouse_id,
            )
        return RandomValueGenerator(self._seeds[warehouse_id])

    # -------------------------------------------------------------------------
    # Cancellation
    # -------------------------------------------------------------------------

    def cancel(self) -> None:
        """Stop before the next warehouse starts. In-flight warehouses finish.

        Cancellation is permanent for this generator instance.
        """
        logger.info("Cancellation requested")
        self._cancel_event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    # -------------------------------------------------------------------------
    # Progress
    # -------------------------------------------------------------------------

    def set_progress_callback(self, callback: ProgressCallback | None) -> None:
        """Register or clear a callback for incremental progress updates."""
        self._progress_callback = callback

    @property
    def progress_tracker(self) -> TableProgressTracker:
        return self._progress_tracker

    def _emit_progress(
        self, table_name: str, progress: float, message: str | None = None
    ) -> None:
        """Record progress and forward it to the registered callback (if any)."""
        clamped = max(0.0, min(1.0, progress))
        self._progress_tracker.update_progress(table_name, clamped)

        if not self._progress_callback:
            return

        try:
            self._progress_callback(table_name, clamped, message)
        except Exception as exc:
            # A broken UI hook must not abort a warehouse batch
            logger.debug(
                "Progress callback failed for %s: %s",
                table_name,
                exc,
                exc_info=True,
            )
