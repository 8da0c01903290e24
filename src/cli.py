"""
CLI display functions for play-heatmap.
"""

from src.color_deriver import STYLES, MetricType
from src.config import HeatmapConfig
from src.heatmap_renderer import BlankCell, ColoredCell

DAY_ABBREVS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

ZERO_CHAR = "·"
FUTURE_CHAR = " "
SHADES = ["░", "▒", "▓", "█"]


def shade_for_cell(cell: ColoredCell | BlankCell, metric: MetricType) -> str:
    """
    Pick the text character for a cell.

    Args:
        cell: Draw instruction from render()
        metric: Metric the cells were rendered with

    Returns:
        A blank for future days, a dot for days without activity, otherwise
        one of four shades, darkest for the least active days
    """
    if isinstance(cell, BlankCell):
        return FUTURE_CHAR
    if cell.is_zero:
        return ZERO_CHAR

    style = STYLES[metric]
    span = style.max_lightness - style.min_lightness
    position = (cell.lightness - style.min_lightness) / span if span else 1.0
    index = min(int(position * len(SHADES)), len(SHADES) - 1)
    return SHADES[max(index, 0)]


def display_heatmap(
    cells: list[ColoredCell | BlankCell],
    config: HeatmapConfig,
    metric: MetricType = MetricType.HEAT,
) -> None:
    """
    Display the heatmap as a text grid, one column per week.

    Args:
        cells: Draw instructions from render()
        config: Layout the cells were rendered with
        metric: Metric the cells were rendered with
    """
    step = config.cell_size + config.cell_margin
    columns = max((cell.x // step for cell in cells), default=-1) + 1

    # Unused slots (before the epoch's weekday, after the window) stay blank
    grid = [[FUTURE_CHAR] * columns for _ in DAY_ABBREVS]
    for cell in cells:
        grid[cell.y // step][cell.x // step] = shade_for_cell(cell, metric)

    print(f"{metric.label} activity since {config.epoch.isoformat()}:")
    for abbrev, row in zip(DAY_ABBREVS, grid):
        print(f"  {abbrev} {''.join(row)}".rstrip())
    print()


def display_summary(summary: dict) -> None:
    """
    Display activity totals to the console.

    Args:
        summary: Dictionary from HeatmapView.summary()
    """
    active = summary["active_days"]
    day_label = "day" if active == 1 else "days"
    maxima = summary["maxima"]

    print("📊 Activity Stats:")
    print(f"   Active:    {active} {day_label}")
    print(f"   Keyboard:  {summary['total_keyboard']} (best day {maxima['max_keyboard']})")
    print(f"   Scratch:   {summary['total_scratch']} (best day {maxima['max_scratch']})")
    print(f"   Heat:      {summary['total_heat']:.1f} (best day {maxima['max_heat']:.1f})")

    rejected = summary["records"]["rejected"]
    if rejected:
        record_label = "record" if rejected == 1 else "records"
        print(f"   Skipped {rejected} invalid {record_label}")
    print()
