"""
play-heatmap: A calendar heatmap of keyboard and scratch activity

Entry point for the command line.
"""

import argparse
import json
from pathlib import Path

from src.app_logging import configure_logging
from src.cli import display_heatmap, display_summary
from src.color_deriver import MetricType
from src.config import build_config
from src.heatmap_renderer import HeatmapView


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="play-heatmap",
        description="Render a one-year activity heatmap in the terminal.",
    )
    parser.add_argument(
        "records",
        type=Path,
        help="JSON file with a list of {date, keyboardCount, scratchCount} records",
    )
    parser.add_argument(
        "--metric",
        choices=[m.value for m in MetricType],
        default=MetricType.HEAT.value,
        help="Statistic used to color the cells (default: heat)",
    )
    return parser.parse_args(argv)


def load_records(path: Path) -> list[dict]:
    """
    Read activity records from a JSON file.

    Raises:
        ValueError: If the file is not valid JSON or not a list
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e}")

    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of records")

    return [item for item in data if isinstance(item, dict)]


def main(argv: list[str] | None = None):
    args = parse_args(argv)
    configure_logging()

    print("play-heatmap - Your year of play at a glance!")
    print("-" * 50)

    # Validate configuration
    try:
        config = build_config()
    except ValueError as e:
        print(f"\nConfiguration Error:\n{e}")
        return 1

    try:
        records = load_records(args.records)
    except (OSError, ValueError) as e:
        print(f"\nError: {e}")
        return 1

    view = HeatmapView(config)
    view.set_records(records)
    metric = view.select_metric(args.metric)

    print()
    display_heatmap(view.render(), config, metric)
    display_summary(view.summary())

    return 0


if __name__ == "__main__":
    exit(main())
