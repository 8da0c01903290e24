"""
Color parameter derivation for heatmap cells.

Each metric has a fixed HSL style and a function that maps a day's
statistics, relative to the observed maxima, to normalized hue and
lightness positions.
"""

from dataclasses import dataclass
from enum import Enum

from src.activity_aggregator import DailyStats, RunningMaxima

# Fill for days with no activity for the selected metric
EMPTY_FILL = "#2d333b"
# Fill for days after today
FUTURE_FILL = "#161b22"


class MetricType(str, Enum):
    """Statistic that drives the cell color."""

    HEAT = "heat"
    KEYBOARD = "keyboard"
    SCRATCH = "scratch"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: "str | MetricType") -> "MetricType":
        """
        Look up a metric by name.

        Raises:
            ValueError: If the name is not one of heat, keyboard, scratch
        """
        try:
            return cls(value)
        except ValueError:
            names = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown metric: {value!r} (expected one of {names})")


@dataclass(frozen=True)
class ColorStyle:
    """HSL range for a metric. Hues in degrees, saturation/lightness in percent."""

    min_hue: float
    max_hue: float
    saturation: float
    min_lightness: float
    max_lightness: float

    def to_dict(self) -> dict:
        return {
            "min_hue": self.min_hue,
            "max_hue": self.max_hue,
            "saturation": self.saturation,
            "min_lightness": self.min_lightness,
            "max_lightness": self.max_lightness,
        }


STYLES = {
    # Keyboard-heavy days sit at the blue end, scratch-heavy days at the pink end
    MetricType.HEAT: ColorStyle(
        min_hue=200, max_hue=330, saturation=80, min_lightness=20, max_lightness=70
    ),
    MetricType.KEYBOARD: ColorStyle(
        min_hue=200, max_hue=200, saturation=80, min_lightness=20, max_lightness=70
    ),
    MetricType.SCRATCH: ColorStyle(
        min_hue=330, max_hue=330, saturation=80, min_lightness=20, max_lightness=70
    ),
}


@dataclass(frozen=True)
class ColorParams:
    """Normalized color positions for one cell."""

    hue_param: float
    lightness_param: float
    is_zero: bool


@dataclass(frozen=True)
class HslColor:
    hue: float
    saturation: float
    lightness: float

    def css(self) -> str:
        return f"hsl({self.hue:g}, {self.saturation:g}%, {self.lightness:g}%)"


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def _relative_lightness(value: float, maximum: float) -> float:
    """1 - (max - value) / max, or 0 when nothing was recorded at all."""
    if maximum == 0:
        return 0.0
    return _clamp(1 - (maximum - value) / maximum)


def _heat_params(stats: DailyStats, maxima: RunningMaxima) -> ColorParams:
    return ColorParams(
        hue_param=_clamp(stats.scratch_ratio),
        lightness_param=_relative_lightness(stats.heat, maxima.max_heat),
        is_zero=stats.heat == 0,
    )


def _keyboard_params(stats: DailyStats, maxima: RunningMaxima) -> ColorParams:
    return ColorParams(
        hue_param=0.0,
        lightness_param=_relative_lightness(stats.keyboard, maxima.max_keyboard),
        is_zero=stats.keyboard == 0,
    )


def _scratch_params(stats: DailyStats, maxima: RunningMaxima) -> ColorParams:
    return ColorParams(
        hue_param=0.0,
        lightness_param=_relative_lightness(stats.scratch, maxima.max_scratch),
        is_zero=stats.scratch == 0,
    )


_DERIVERS = {
    MetricType.HEAT: _heat_params,
    MetricType.KEYBOARD: _keyboard_params,
    MetricType.SCRATCH: _scratch_params,
}


def derive_color_params(
    metric: MetricType, stats: DailyStats, maxima: RunningMaxima
) -> ColorParams:
    """
    Derive the color parameters of a day for the selected metric.

    Args:
        metric: Selected metric
        stats: The day's statistics
        maxima: Maxima across all records

    Returns:
        ColorParams with hue and lightness positions in [0, 1]
    """
    return _DERIVERS[metric](stats, maxima)


def resolve_color(metric: MetricType, params: ColorParams) -> HslColor:
    """Interpolate the metric's style at the given color positions."""
    style = STYLES[metric]
    return HslColor(
        hue=style.min_hue + params.hue_param * (style.max_hue - style.min_hue),
        saturation=style.saturation,
        lightness=style.min_lightness
        + params.lightness_param * (style.max_lightness - style.min_lightness),
    )
