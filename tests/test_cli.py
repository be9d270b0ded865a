import io
import unittest
from datetime import date
from unittest.mock import patch

from notecalendar import cli
from notecalendar.shared import TRACE_LEVEL_NUM


class TestCLI(unittest.TestCase):
    @patch("notecalendar.html_view.run")
    @patch("sys.argv", ["notecalendar"])
    def test_default_renders_page(self, mock_run):
        cli.main()
        mock_run.assert_called_once()
        call_args = mock_run.call_args
        self.assertEqual(call_args.kwargs["weeks_before"], 3)
        self.assertEqual(call_args.kwargs["weeks_after"], 44)
        self.assertEqual(call_args.kwargs["output_path"], "calendar.html")
        self.assertIsNone(call_args.kwargs["reference_date"])
        self.assertFalse(call_args.kwargs["open_browser"])

    @patch("notecalendar.terminal_view.run")
    @patch("sys.argv", ["notecalendar", "--preview", "--weeks-after", "8"])
    def test_preview_flag_calls_terminal_view(self, mock_run):
        cli.main()
        mock_run.assert_called_once()
        self.assertEqual(mock_run.call_args.kwargs["weeks_after"], 8)

    @patch("notecalendar.html_view.run")
    @patch(
        "sys.argv",
        [
            "notecalendar",
            "--date",
            "2024-03-01",
            "-o",
            "out/cal.html",
            "--open",
            "--log-level",
            "TRACE",
        ],
    )
    def test_page_options(self, mock_run):
        cli.main()
        call_args = mock_run.call_args
        self.assertEqual(call_args.kwargs["reference_date"], date(2024, 3, 1))
        self.assertEqual(call_args.kwargs["output_path"], "out/cal.html")
        self.assertTrue(call_args.kwargs["open_browser"])
        self.assertEqual(call_args.kwargs["log_level"], TRACE_LEVEL_NUM)

    @patch("notecalendar.html_view.setup_logging")
    @patch("sys.stderr", new_callable=io.StringIO)
    def test_negative_window_exits_with_error(self, mock_stderr, mock_logging):
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["--weeks-before", "-1"])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("weeks_before", mock_stderr.getvalue())

    @patch("notecalendar.html_view.setup_logging")
    @patch("sys.stderr", new_callable=io.StringIO)
    def test_oversized_window_exits_with_error(self, mock_stderr, mock_logging):
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["--stdout", "--weeks-after", "99999999"])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("supported date range", mock_stderr.getvalue())

    @patch("sys.stderr", new_callable=io.StringIO)
    def test_malformed_date_is_rejected(self, mock_stderr):
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["--date", "01/03/2024"])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("YYYY-MM-DD", mock_stderr.getvalue())

    @patch("sys.stderr", new_callable=io.StringIO)
    def test_non_integer_window_is_rejected(self, mock_stderr):
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["--weeks-after", "2.5"])
        self.assertEqual(ctx.exception.code, 2)

    @patch("notecalendar.html_view.run", side_effect=PermissionError("denied"))
    @patch("sys.stderr", new_callable=io.StringIO)
    def test_unwritable_output_exits_with_error(self, mock_stderr, mock_run):
        with self.assertRaises(SystemExit) as ctx:
            cli.main(["-o", "/nowhere/cal.html"])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("denied", mock_stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
