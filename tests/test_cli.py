"""
Tests for CLI display functions.
"""

import io
from contextlib import redirect_stdout
from datetime import date

import pytest

from src.activity_aggregator import aggregate
from src.cli import (
    FUTURE_CHAR,
    SHADES,
    ZERO_CHAR,
    display_heatmap,
    display_summary,
    shade_for_cell,
)
from src.color_deriver import MetricType
from src.config import HeatmapConfig
from src.heatmap_renderer import BlankCell, ColoredCell, HeatmapState, HeatmapView, render

EPOCH = date(2021, 10, 13)


@pytest.fixture
def config():
    """Two-week window, today is the Monday after the epoch."""
    return HeatmapConfig(epoch=EPOCH, today_offset=5, window_days=14)


def _colored(lightness: float, is_zero: bool = False) -> ColoredCell:
    return ColoredCell(
        x=0,
        y=0,
        size=12,
        border_radius=2,
        hue=200,
        saturation=80,
        lightness=lightness,
        is_zero=is_zero,
        date="20211013",
        value=1,
    )


class TestShadeForCell:
    """Tests for text shading."""

    def test_blank_cell(self):
        assert shade_for_cell(BlankCell(0, 0, 12, 2), MetricType.HEAT) == FUTURE_CHAR

    def test_zero_cell(self):
        assert shade_for_cell(_colored(20, is_zero=True), MetricType.HEAT) == ZERO_CHAR

    def test_brightest_cell(self):
        assert shade_for_cell(_colored(70), MetricType.HEAT) == SHADES[-1]

    def test_dimmest_active_cell(self):
        assert shade_for_cell(_colored(21), MetricType.KEYBOARD) == SHADES[0]

    def test_middle_cell(self):
        assert shade_for_cell(_colored(45), MetricType.SCRATCH) == SHADES[2]


class TestDisplayHeatmap:
    """Tests for the text grid."""

    def _output(self, cells, config, metric=MetricType.HEAT) -> list[str]:
        captured = io.StringIO()
        with redirect_stdout(captured):
            display_heatmap(cells, config, metric)
        return captured.getvalue().splitlines()

    def test_header_names_metric_and_epoch(self, config):
        cells = render(HeatmapState(config, aggregate([], EPOCH)))
        lines = self._output(cells, config, MetricType.SCRATCH)

        assert lines[0] == "Scratch activity since 2021-10-13:"

    def test_one_row_per_weekday(self, config):
        cells = render(HeatmapState(config, aggregate([], EPOCH)))
        lines = self._output(cells, config)

        labels = [line.split()[0] for line in lines[1:8]]
        assert labels == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

    def test_active_and_quiet_days(self, config):
        table = aggregate(
            [{"date": "20211013", "keyboardCount": 70, "scratchCount": 5}], EPOCH
        )
        lines = self._output(render(HeatmapState(config, table)), config)

        # Wednesday: epoch (brightest) then two future weeks
        assert lines[4] == f"  Wed {SHADES[-1]}"
        # Sunday: no epoch-week slot, then offset 4 (quiet), then the future
        assert lines[1] == f"  Sun  {ZERO_CHAR}"

    def test_future_days_are_blank(self, config):
        cells = render(HeatmapState(config, aggregate([], EPOCH)))
        lines = self._output(cells, config)

        # Tuesday falls on offsets 6 and 13, both after today
        assert lines[3] == "  Tue"


class TestDisplaySummary:
    """Tests for the totals display."""

    def test_summary_output(self, capsys):
        view = HeatmapView(HeatmapConfig(epoch=EPOCH, today_offset=10))
        view.set_records(
            [
                {"date": "20211013", "keyboardCount": 70, "scratchCount": 5},
                {"date": "bad"},
            ]
        )

        display_summary(view.summary())
        output = capsys.readouterr().out

        assert "Active:    1 day" in output
        assert "Keyboard:  70 (best day 70)" in output
        assert "Scratch:   5 (best day 5)" in output
        assert "Heat:      15.0 (best day 15.0)" in output
        assert "Skipped 1 invalid record" in output

    def test_no_skipped_line_without_rejections(self, capsys):
        view = HeatmapView(HeatmapConfig(epoch=EPOCH, today_offset=10))

        display_summary(view.summary())
        output = capsys.readouterr().out

        assert "Active:    0 days" in output
        assert "Skipped" not in output
