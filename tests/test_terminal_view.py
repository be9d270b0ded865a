import tempfile
import unittest
from datetime import date
from unittest.mock import patch

from rich.table import Table

from notecalendar import terminal_view
from notecalendar.grid import build_grid
from notecalendar.shared import get_logger


class TestTerminalView(unittest.TestCase):
    def test_table_has_one_row_per_week(self):
        grid = build_grid(date(2024, 3, 1), 3, 5)
        table = terminal_view.generate_grid_table(grid)

        self.assertIsInstance(table, Table)
        self.assertEqual(len(table.columns), 8)
        self.assertEqual(table.row_count, len(grid.weeks))
        self.assertEqual(
            [column.header for column in table.columns],
            ["Mois", "L", "M", "M", "J", "V", "S", "D"],
        )

    def test_sections_close_each_month(self):
        grid = build_grid(date(2024, 3, 1), 3, 5)
        table = terminal_view.generate_grid_table(grid)
        sections = [i for i, row in enumerate(table.rows) if row.end_section]
        self.assertEqual(sections, [3, 7])

    def test_month_label_on_first_week_only(self):
        grid = build_grid(date(2024, 3, 1), 3, 5)
        table = terminal_view.generate_grid_table(grid)
        labels = [cell.plain for cell in table.columns[0]._cells]
        self.assertEqual(labels[0], "Février 2024")
        self.assertEqual(labels[1], "")
        self.assertEqual(labels[4], "Mars 2024")
        self.assertEqual(labels[8], "Avril 2024")

    def test_day_styles(self):
        days = build_grid(date(2024, 3, 1), 0, 0).weeks[0].days
        self.assertEqual(terminal_view.day_style(days[0]), "")
        self.assertEqual(terminal_view.day_style(days[4]), "reverse bold")
        self.assertIn(
            terminal_view.BASE_COLORS["weekend_lite"], terminal_view.day_style(days[5])
        )
        self.assertIn(
            terminal_view.BASE_COLORS["weekend_full"], terminal_view.day_style(days[6])
        )

    @patch("notecalendar.terminal_view.console")
    def test_run_prints_table(self, mock_console):
        with tempfile.TemporaryDirectory() as log_dir:
            try:
                grid = terminal_view.run(
                    reference_date=date(2025, 1, 1),
                    weeks_before=1,
                    weeks_after=2,
                    log_dir=log_dir,
                )
            finally:
                for handler in list(get_logger().handlers):
                    handler.close()
                    get_logger().removeHandler(handler)

        mock_console.print.assert_called_once()
        printed = mock_console.print.call_args.args[0]
        self.assertIsInstance(printed, Table)
        self.assertEqual(len(grid.weeks), 4)
        self.assertIn("Décembre\n2024", grid.month_spans)
        self.assertIn("Janvier\n2025", grid.month_spans)


if __name__ == "__main__":
    unittest.main()
