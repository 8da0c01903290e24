"""
Heatmap orchestration.

Produces the draw instructions for the whole display window: a colored cell
for every day up to today and a blank cell for every day after it.
"""

from dataclasses import dataclass, field

from src.activity_aggregator import ActivityTable, RawActivityRecord, aggregate
from src.app_logging import get_logger
from src.calendar_mapper import grid_height, grid_width, offset_to_pixel
from src.color_deriver import (
    EMPTY_FILL,
    FUTURE_FILL,
    HslColor,
    MetricType,
    derive_color_params,
    resolve_color,
)
from src.config import HeatmapConfig

logger = get_logger(__name__)


@dataclass(frozen=True)
class ColoredCell:
    """Draw a day with activity data."""

    x: int
    y: int
    size: int
    border_radius: int
    hue: float
    saturation: float
    lightness: float
    is_zero: bool
    date: str
    value: float

    kind = "colored"

    @property
    def fill(self) -> str:
        if self.is_zero:
            return EMPTY_FILL
        return HslColor(self.hue, self.saturation, self.lightness).css()

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "x": self.x,
            "y": self.y,
            "size": self.size,
            "border_radius": self.border_radius,
            "hue": self.hue,
            "saturation": self.saturation,
            "lightness": self.lightness,
            "is_zero": self.is_zero,
            "date": self.date,
            "value": self.value,
        }


@dataclass(frozen=True)
class BlankCell:
    """Draw a placeholder for a day that has not happened yet."""

    x: int
    y: int
    size: int
    border_radius: int
    fill_color: str = FUTURE_FILL

    kind = "blank"

    @property
    def fill(self) -> str:
        return self.fill_color

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "x": self.x,
            "y": self.y,
            "size": self.size,
            "border_radius": self.border_radius,
            "fill_color": self.fill_color,
        }


@dataclass(frozen=True)
class HeatmapState:
    """Everything a render depends on."""

    config: HeatmapConfig
    table: ActivityTable
    metric: MetricType = MetricType.HEAT


def _metric_value(metric: MetricType, stats) -> float:
    if metric is MetricType.KEYBOARD:
        return stats.keyboard
    if metric is MetricType.SCRATCH:
        return stats.scratch
    return stats.heat


def render(state: HeatmapState) -> list[ColoredCell | BlankCell]:
    """
    Build the draw instructions for every offset in the window.

    Args:
        state: Configuration, aggregated activity and selected metric

    Returns:
        Cells in offset order; past days are ColoredCell, future days BlankCell
    """
    config = state.config
    cells: list[ColoredCell | BlankCell] = []

    for offset in config.past_offsets:
        position = offset_to_pixel(offset, config)
        stats = state.table.lookup(offset)
        params = derive_color_params(state.metric, stats, state.table.maxima)
        color = resolve_color(state.metric, params)
        cells.append(
            ColoredCell(
                x=position.x,
                y=position.y,
                size=config.cell_size,
                border_radius=config.border_radius,
                hue=color.hue,
                saturation=color.saturation,
                lightness=color.lightness,
                is_zero=params.is_zero,
                date=stats.date,
                value=_metric_value(state.metric, stats),
            )
        )

    for offset in config.future_offsets:
        position = offset_to_pixel(offset, config)
        cells.append(
            BlankCell(
                x=position.x,
                y=position.y,
                size=config.cell_size,
                border_radius=config.border_radius,
            )
        )

    return cells


@dataclass
class HeatmapView:
    """
    Current heatmap selection.

    Replacing the records re-aggregates everything; selecting a metric only
    changes how the existing statistics are colored.
    """

    config: HeatmapConfig
    metric: MetricType = MetricType.HEAT
    table: ActivityTable = field(init=False)

    def __post_init__(self):
        self.table = aggregate([], self.config.epoch)

    def set_records(self, records: list[RawActivityRecord | dict]) -> ActivityTable:
        """Replace the input records and recompute stats and maxima."""
        self.table = aggregate(records, self.config.epoch)
        logger.info(
            "Aggregated %d records (%d rejected)",
            self.table.accepted,
            self.table.rejected,
        )
        return self.table

    def select_metric(self, metric: str | MetricType) -> MetricType:
        """
        Change the selected metric.

        Raises:
            ValueError: If the metric name is unknown
        """
        self.metric = MetricType.parse(metric)
        return self.metric

    def state(self, metric: str | MetricType | None = None) -> HeatmapState:
        """Snapshot of the view, optionally with a different metric."""
        if metric is None:
            metric = self.metric
        return HeatmapState(
            config=self.config, table=self.table, metric=MetricType.parse(metric)
        )

    def render(self, metric: str | MetricType | None = None) -> list[ColoredCell | BlankCell]:
        return render(self.state(metric))

    @property
    def width(self) -> int:
        return grid_width(self.config)

    @property
    def height(self) -> int:
        return grid_height(self.config)

    def summary(self) -> dict:
        """
        Totals over the days shown in the window up to today.

        Returns:
            Dictionary with active_days, total_keyboard, total_scratch,
            total_heat, maxima and the accepted/rejected record counts
        """
        active_days = 0
        total_keyboard = 0
        total_scratch = 0
        total_heat = 0.0

        for offset in self.config.past_offsets:
            stats = self.table.lookup(offset)
            if stats.heat > 0:
                active_days += 1
            total_keyboard += stats.keyboard
            total_scratch += stats.scratch
            total_heat += stats.heat

        return {
            "active_days": active_days,
            "total_keyboard": total_keyboard,
            "total_scratch": total_scratch,
            "total_heat": total_heat,
            "maxima": self.table.maxima.to_dict(),
            "records": {
                "accepted": self.table.accepted,
                "rejected": self.table.rejected,
            },
        }
