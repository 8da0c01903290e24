"""
Calendar offset mapping for the activity heatmap.

Converts calendar dates to day offsets from the epoch and back, and lays
offsets out on a week-column grid (one column per week, one row per weekday,
row 0 = Sunday).
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from src.config import HeatmapConfig

RECORD_DATE_FORMAT = "%Y%m%d"
DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class GridCoordinate:
    """Position of a day's cell in the week-column layout."""

    column: int
    row: int  # 0 = Sunday ... 6 = Saturday


@dataclass(frozen=True)
class PixelPosition:
    """Top-left corner of a cell, in pixels."""

    x: int
    y: int


def parse_record_date(text: str) -> date:
    """
    Parse a record date in yyyyMMdd format.

    Args:
        text: Date string such as "20211013"

    Returns:
        The parsed date

    Raises:
        ValueError: If the string is not exactly eight digits forming a real date
    """
    # strptime accepts unpadded fields like "2021101", so check the shape first
    if not isinstance(text, str) or len(text) != 8 or not text.isdigit():
        raise ValueError(f"Invalid record date: {text!r} (expected yyyyMMdd)")
    return datetime.strptime(text, RECORD_DATE_FORMAT).date()


def format_record_date(day: date) -> str:
    """Format a date as a yyyyMMdd record date."""
    return day.strftime(RECORD_DATE_FORMAT)


def date_to_offset(day: date | datetime, epoch: date) -> int:
    """
    Count whole calendar days from the epoch to a date.

    Datetimes are truncated to their calendar date, so the result is always
    an integer number of days.
    """
    if isinstance(day, datetime):
        day = day.date()
    return (day - epoch).days


def offset_to_date(offset: int, epoch: date) -> date:
    """Return the calendar date that is `offset` days after the epoch."""
    return epoch + timedelta(days=offset)


def offset_to_coordinate(offset: int, epoch: date) -> GridCoordinate:
    """
    Map a day offset to its grid coordinate.

    The offset is shifted by the epoch's weekday (Sunday = 0) so that the
    epoch lands on its own weekday row.
    """
    normalized = offset + epoch.isoweekday() % DAYS_PER_WEEK
    return GridCoordinate(
        column=normalized // DAYS_PER_WEEK,
        row=normalized % DAYS_PER_WEEK,
    )


def coordinate_to_pixel(
    coord: GridCoordinate, cell_size: int, cell_margin: int
) -> PixelPosition:
    """Return the pixel position of a grid coordinate."""
    step = cell_size + cell_margin
    return PixelPosition(x=coord.column * step, y=coord.row * step)


def offset_to_pixel(offset: int, config: HeatmapConfig) -> PixelPosition:
    """Shortcut for offset -> coordinate -> pixel position."""
    coord = offset_to_coordinate(offset, config.epoch)
    return coordinate_to_pixel(coord, config.cell_size, config.cell_margin)


def grid_width(config: HeatmapConfig) -> int:
    """Width of the grid, derived from the column of the last offset in the window."""
    max_column = offset_to_coordinate(config.window_days - 1, config.epoch).column
    return (max_column + 1) * config.cell_size + max_column * config.cell_margin


def grid_height(config: HeatmapConfig) -> int:
    """Height of the grid: seven weekday rows."""
    return DAYS_PER_WEEK * config.cell_size + (DAYS_PER_WEEK - 1) * config.cell_margin
