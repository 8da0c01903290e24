"""
Activity aggregator for the heatmap.

Turns raw per-date activity records into daily statistics keyed by date,
tracks running maxima, and fills gaps in the display window with zero-filled
days on demand.
"""

from dataclasses import dataclass, field
from datetime import date

from src.app_logging import get_logger
from src.calendar_mapper import (
    date_to_offset,
    format_record_date,
    offset_to_date,
    parse_record_date,
)

logger = get_logger(__name__)

# One scratch is worth seven keyboard presses.
KEYBOARD_WEIGHT = 7


@dataclass
class RawActivityRecord:
    """A single day of activity as supplied by the caller."""

    date: str  # yyyyMMdd
    keyboard_count: int
    scratch_count: int

    @classmethod
    def from_dict(cls, data: dict) -> "RawActivityRecord":
        """
        Build a record from a dict.

        Accepts both the camelCase keys used by exported data
        (keyboardCount, scratchCount) and snake_case keys.
        """
        return cls(
            date=data.get("date", ""),
            keyboard_count=data.get("keyboardCount", data.get("keyboard_count", 0)),
            scratch_count=data.get("scratchCount", data.get("scratch_count", 0)),
        )


def compute_heat(keyboard: int, scratch: int) -> float:
    """Composite activity score: keyboard / 7 + scratch."""
    return keyboard / KEYBOARD_WEIGHT + scratch


def compute_scratch_ratio(scratch: int, heat: float) -> float:
    """Share of the heat that comes from scratches (0 for a day with no heat)."""
    if heat == 0:
        return 0.0
    return scratch / heat


@dataclass(frozen=True)
class DailyStats:
    """Derived statistics for one day of the window."""

    date: str
    offset: int
    keyboard: int
    scratch: int
    heat: float
    scratch_ratio: float

    @classmethod
    def empty(cls, date: str, offset: int) -> "DailyStats":
        """Zero-filled stats for a day without a record."""
        return cls(
            date=date,
            offset=offset,
            keyboard=0,
            scratch=0,
            heat=0.0,
            scratch_ratio=0.0,
        )

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "offset": self.offset,
            "keyboard": self.keyboard,
            "scratch": self.scratch,
            "heat": self.heat,
            "scratch_ratio": self.scratch_ratio,
        }


@dataclass(frozen=True)
class RunningMaxima:
    """Maxima across every accepted record."""

    max_heat: float = 0.0
    max_keyboard: int = 0
    max_scratch: int = 0

    def update(self, stats: DailyStats) -> "RunningMaxima":
        """Return new maxima that include `stats`."""
        return RunningMaxima(
            max_heat=max(self.max_heat, stats.heat),
            max_keyboard=max(self.max_keyboard, stats.keyboard),
            max_scratch=max(self.max_scratch, stats.scratch),
        )

    def to_dict(self) -> dict:
        return {
            "max_heat": self.max_heat,
            "max_keyboard": self.max_keyboard,
            "max_scratch": self.max_scratch,
        }


@dataclass
class ActivityTable:
    """Aggregated statistics with a zero-filled fallback for missing days."""

    epoch: date
    stats_by_date: dict[str, DailyStats] = field(default_factory=dict)
    maxima: RunningMaxima = field(default_factory=RunningMaxima)
    accepted: int = 0  # records taken, including ones later overwritten by date
    rejected: int = 0

    def lookup(self, offset: int) -> DailyStats:
        """
        Return the statistics for a day offset.

        Days without a record get zero-filled stats; they are not stored.
        """
        date_str = format_record_date(offset_to_date(offset, self.epoch))
        stats = self.stats_by_date.get(date_str)
        if stats is None:
            return DailyStats.empty(date_str, offset)
        return stats


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _build_stats(record: RawActivityRecord, epoch: date) -> DailyStats:
    """
    Compute the statistics for one record.

    Raises:
        ValueError: If the date is not yyyyMMdd or a count is not a
            non-negative integer
    """
    day = parse_record_date(record.date)

    if not _is_count(record.keyboard_count):
        raise ValueError(f"Invalid keyboard count: {record.keyboard_count!r}")
    if not _is_count(record.scratch_count):
        raise ValueError(f"Invalid scratch count: {record.scratch_count!r}")

    heat = compute_heat(record.keyboard_count, record.scratch_count)
    return DailyStats(
        date=record.date,
        offset=date_to_offset(day, epoch),
        keyboard=record.keyboard_count,
        scratch=record.scratch_count,
        heat=heat,
        scratch_ratio=compute_scratch_ratio(record.scratch_count, heat),
    )


def aggregate(records: list[RawActivityRecord | dict], epoch: date) -> ActivityTable:
    """
    Aggregate raw activity records in a single pass.

    Args:
        records: Records in any order; dicts are converted with
            RawActivityRecord.from_dict
        epoch: Reference date for day offsets

    Returns:
        ActivityTable with stats keyed by date (a later record for the same
        date replaces the earlier one), maxima over all accepted records,
        and the number of accepted and rejected records
    """
    table = ActivityTable(epoch=epoch)

    for record in records:
        if isinstance(record, dict):
            record = RawActivityRecord.from_dict(record)

        try:
            stats = _build_stats(record, epoch)
        except ValueError as e:
            logger.warning("Skipping activity record: %s", e)
            table.rejected += 1
            continue

        table.stats_by_date[stats.date] = stats
        table.accepted += 1
        table.maxima = table.maxima.update(stats)

    return table
