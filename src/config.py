"""
Configuration management for play-heatmap.

Loads heatmap settings from environment variables and builds the immutable
configuration value used by the mapper and the renderer.
"""

import os
from dataclasses import dataclass
from datetime import date, datetime

from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()

HEATMAP_EPOCH = os.getenv("HEATMAP_EPOCH", "20211013")
HEATMAP_WINDOW_DAYS = os.getenv("HEATMAP_WINDOW_DAYS", "365")
HEATMAP_CELL_SIZE = os.getenv("HEATMAP_CELL_SIZE", "12")
HEATMAP_CELL_MARGIN = os.getenv("HEATMAP_CELL_MARGIN", "3")
HEATMAP_BORDER_RADIUS = os.getenv("HEATMAP_BORDER_RADIUS", "2")
HEATMAP_TITLE = os.getenv("HEATMAP_TITLE", "Play activity")


def _is_positive_int(value: str | None) -> bool:
    try:
        return int(value) > 0
    except (TypeError, ValueError):
        return False


def _is_non_negative_int(value: str | None) -> bool:
    try:
        return int(value) >= 0
    except (TypeError, ValueError):
        return False


def validate_config():
    """Validate that the heatmap settings are usable."""
    invalid = []

    try:
        datetime.strptime(HEATMAP_EPOCH or "", "%Y%m%d")
    except ValueError:
        invalid.append("HEATMAP_EPOCH")

    if not _is_positive_int(HEATMAP_WINDOW_DAYS):
        invalid.append("HEATMAP_WINDOW_DAYS")

    if not _is_positive_int(HEATMAP_CELL_SIZE):
        invalid.append("HEATMAP_CELL_SIZE")

    if not _is_non_negative_int(HEATMAP_CELL_MARGIN):
        invalid.append("HEATMAP_CELL_MARGIN")

    if not _is_non_negative_int(HEATMAP_BORDER_RADIUS):
        invalid.append("HEATMAP_BORDER_RADIUS")

    if invalid:
        raise ValueError(
            f"Invalid configuration: {', '.join(invalid)}\n"
            "HEATMAP_EPOCH must be a yyyyMMdd date, the window and cell size "
            "must be positive integers, margin and radius non-negative integers."
        )


@dataclass(frozen=True)
class HeatmapConfig:
    """Immutable heatmap layout, fixed for the lifetime of a view."""

    epoch: date
    today_offset: int
    window_days: int = 365
    cell_size: int = 12
    cell_margin: int = 3
    border_radius: int = 2

    @property
    def last_past_offset(self) -> int:
        """Today's offset clamped into [-1, window_days - 1]."""
        return max(-1, min(self.today_offset, self.window_days - 1))

    @property
    def past_offsets(self) -> range:
        """Offsets up to and including today."""
        return range(0, self.last_past_offset + 1)

    @property
    def future_offsets(self) -> range:
        """Offsets after today, up to the end of the window."""
        return range(self.last_past_offset + 1, self.window_days)

    @property
    def window_offsets(self) -> range:
        return range(0, self.window_days)


def build_config(today: date | None = None) -> HeatmapConfig:
    """
    Build the heatmap configuration from the environment.

    Args:
        today: Override for today's date (for testing). Evaluated once here
            and never refreshed afterwards.

    Returns:
        HeatmapConfig with today's offset fixed at construction time

    Raises:
        ValueError: If any setting is invalid
    """
    validate_config()

    if today is None:
        today = date.today()

    epoch = datetime.strptime(HEATMAP_EPOCH, "%Y%m%d").date()

    return HeatmapConfig(
        epoch=epoch,
        today_offset=(today - epoch).days,
        window_days=int(HEATMAP_WINDOW_DAYS),
        cell_size=int(HEATMAP_CELL_SIZE),
        cell_margin=int(HEATMAP_CELL_MARGIN),
        border_radius=int(HEATMAP_BORDER_RADIUS),
    )
