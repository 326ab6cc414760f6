"""Tests for the AutoTime application object."""

import csv
import shutil
import tempfile
import unittest
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock, patch

from autotime.config import Config
from autotime.core import LEDGER_FILENAME, AutoTime
from autotime.models import TimeEntry


def make_entry(start, minutes=30, **kwargs):
    return TimeEntry(
        application="Final Cut Pro",
        project="Product_Launch_Assets",
        time_start=start,
        time_finish=start + timedelta(minutes=minutes),
        **kwargs,
    )


class TestAutoTime(unittest.TestCase):
    """Test cases for AutoTime class."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config = Config(config_dir=Path(self.temp_dir) / "config")
        self.config.update({"default_company": "CORE", "idle_threshold": 120})
        self.app = AutoTime(
            config=self.config,
            data_dir=str(Path(self.temp_dir) / "data"),
            verbose=False,
        )

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir)

    def test_initialization_from_config(self):
        self.assertEqual(self.app.company, "CORE")
        self.assertEqual(self.app.allocation, "")
        self.assertEqual(self.app.tracker_config.idle_threshold, 120.0)
        self.assertEqual(self.app.tracker_config.sticky_threshold, 10.0)
        self.assertEqual(
            self.app.store.path, Path(self.temp_dir) / "data" / LEDGER_FILENAME
        )
        self.assertFalse(self.app.logger.verbose)

    def test_overrides_take_precedence(self):
        app = AutoTime(
            config=self.config,
            data_dir=self.temp_dir,
            company="Freelance",
            allocation="Editing",
            verbose=False,
            idle_threshold=30,
            sticky_threshold=4,
        )

        self.assertEqual(app.company, "Freelance")
        self.assertEqual(app.allocation, "Editing")
        self.assertEqual(app.tracker_config.idle_threshold, 30)
        self.assertEqual(app.tracker_config.sticky_threshold, 4)
        self.assertTrue(app.tracker_config.is_blacklisted("Finder"))

    def test_start_and_stop(self):
        self.app.tracker = MagicMock()
        self.app.monitor = MagicMock()

        with patch("builtins.print"):
            self.app.start()
            self.app.start()
            self.assertTrue(self.app.running)
            self.app.stop()
            self.app.stop()

        self.assertFalse(self.app.running)
        self.app.tracker.start.assert_called_once_with("CORE", "")
        self.app.monitor.start.assert_called_once()
        self.app.monitor.stop.assert_called_once()
        self.app.tracker.stop.assert_called_once()

    def test_ledger_reloaded_from_disk(self):
        self.app.ledger.add(make_entry(datetime(2024, 1, 15, 9, 0)))

        reopened = AutoTime(
            config=self.config,
            data_dir=str(Path(self.temp_dir) / "data"),
            verbose=False,
        )

        self.assertEqual(len(reopened.ledger), 1)

    def test_export_csv(self):
        self.app.ledger.add(
            make_entry(datetime(2024, 1, 15, 9, 0), minutes=45, company="CORE")
        )
        target = Path(self.temp_dir) / "out.csv"

        result = self.app.export_csv(target)

        self.assertEqual(result, target)
        with open(target, "r", encoding="utf-8", newline="") as f:
            rows = list(csv.reader(f))
        self.assertEqual(rows[1][1], "CORE")
        self.assertEqual(rows[1][7], "0.75")

    @patch("autotime.core.default_export_filename", return_value="export.csv")
    @patch("autotime.core.Path.cwd")
    def test_export_csv_default_name(self, mock_cwd, mock_filename):
        mock_cwd.return_value = Path(self.temp_dir)

        result = self.app.export_csv()

        self.assertEqual(result, Path(self.temp_dir) / "export.csv")
        self.assertTrue(result.exists())

    def test_list_entries(self):
        self.app.ledger.add(make_entry(datetime(2024, 1, 15, 9, 0), minutes=90))

        with patch("builtins.print") as mock_print:
            self.app.list_entries()

        printed = [call.args[0] for call in mock_print.call_args_list]
        self.assertIn("Product_Launch_Assets", printed[0])
        self.assertIn("1:30:00", printed[0])
        self.assertEqual(printed[-1], "\nTotal: 1.50 hours")

    def test_list_entries_empty(self):
        with patch("builtins.print") as mock_print:
            self.app.list_entries()

        mock_print.assert_called_once_with("No entries recorded yet")


if __name__ == "__main__":
    unittest.main()
