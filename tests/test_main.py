"""
Tests for the command line entry point.
"""

import json
from datetime import date
from unittest.mock import patch

import pytest

from src.config import HeatmapConfig
from src.main import load_records, main

CONFIG = HeatmapConfig(epoch=date(2021, 10, 13), today_offset=30)


@pytest.fixture
def records_file(tmp_path):
    """A JSON file with two days of activity."""
    path = tmp_path / "records.json"
    path.write_text(
        json.dumps(
            [
                {"date": "20211013", "keyboardCount": 70, "scratchCount": 5},
                {"date": "20211020", "keyboardCount": 0, "scratchCount": 2},
            ]
        )
    )
    return path


class TestLoadRecords:
    """Tests for reading the records file."""

    def test_reads_list(self, records_file):
        records = load_records(records_file)
        assert len(records) == 2
        assert records[0]["keyboardCount"] == 70

    def test_ignores_non_object_items(self, tmp_path):
        path = tmp_path / "mixed.json"
        path.write_text('[1, "x", {"date": "20211013"}]')

        assert load_records(path) == [{"date": "20211013"}]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{")

        with pytest.raises(ValueError, match="not valid JSON"):
            load_records(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "object.json"
        path.write_text('{"date": "20211013"}')

        with pytest.raises(ValueError, match="JSON list"):
            load_records(path)


class TestMain:
    """Tests for main()."""

    @patch("src.main.build_config", return_value=CONFIG)
    def test_renders_heatmap(self, mock_build_config, records_file, capsys):
        assert main([str(records_file)]) == 0

        output = capsys.readouterr().out
        assert "Heat activity since 2021-10-13:" in output
        assert "Active:    2 days" in output

    @patch("src.main.build_config", return_value=CONFIG)
    def test_metric_option(self, mock_build_config, records_file, capsys):
        assert main([str(records_file), "--metric", "keyboard"]) == 0

        output = capsys.readouterr().out
        assert "Keyboard activity since 2021-10-13:" in output

    @patch("src.main.build_config", side_effect=ValueError("Invalid configuration: HEATMAP_EPOCH"))
    def test_configuration_error(self, mock_build_config, records_file, capsys):
        assert main([str(records_file)]) == 1
        assert "Configuration Error" in capsys.readouterr().out

    @patch("src.main.build_config", return_value=CONFIG)
    def test_missing_file(self, mock_build_config, tmp_path, capsys):
        assert main([str(tmp_path / "nope.json")]) == 1
        assert "Error:" in capsys.readouterr().out

    def test_unknown_metric_is_rejected_by_argparse(self, records_file):
        with pytest.raises(SystemExit):
            main([str(records_file), "--metric", "tempo"])
