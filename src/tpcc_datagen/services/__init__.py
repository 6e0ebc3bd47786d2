"""Services for handing generated populations to downstream loaders."""

from .frames import TABLE_COLUMNS, population_to_frames, records_to_frame

__all__ = ["TABLE_COLUMNS", "population_to_frames", "records_to_frame"]
