import argparse
import sys
from datetime import datetime

from colorama import Fore, Style

from . import html_view, terminal_view
from .grid import InvalidArgumentError
from .shared import LOG_LEVELS, OUTPUT_PATH, WEEKS_AFTER, WEEKS_BEFORE


def parse_date(value):
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got '{value}'")


def build_parser():
    parser = argparse.ArgumentParser(
        description="NoteCalendar - printable multi-week calendar"
    )
    parser.add_argument(
        "--weeks-before",
        type=int,
        default=WEEKS_BEFORE,
        help=f"Weeks shown before the current one (default {WEEKS_BEFORE})",
    )
    parser.add_argument(
        "--weeks-after",
        type=int,
        default=WEEKS_AFTER,
        help=f"Weeks shown after the current one (default {WEEKS_AFTER})",
    )
    parser.add_argument(
        "--date",
        type=parse_date,
        default=None,
        help="Reference day as YYYY-MM-DD (default: today, UTC)",
    )
    parser.add_argument(
        "-o", "--output", type=str, default=OUTPUT_PATH, help="Path of the HTML page"
    )
    parser.add_argument(
        "--stdout", action="store_true", help="Write the HTML page to stdout"
    )
    parser.add_argument(
        "--open", action="store_true", help="Open the page in a web browser"
    )
    parser.add_argument(
        "--preview", action="store_true", help="Show the grid in the terminal instead"
    )
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default="INFO",
        help="Level of the log file",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    log_level = LOG_LEVELS[args.log_level]

    try:
        if args.preview:
            terminal_view.run(
                reference_date=args.date,
                weeks_before=args.weeks_before,
                weeks_after=args.weeks_after,
                log_level=log_level,
            )
        else:
            html_view.run(
                reference_date=args.date,
                weeks_before=args.weeks_before,
                weeks_after=args.weeks_after,
                output_path=args.output,
                to_stdout=args.stdout,
                open_browser=args.open,
                log_level=log_level,
            )
    except InvalidArgumentError as e:
        print(f"{Fore.RED}Invalid argument: {e}{Style.RESET_ALL}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"{Fore.RED}Could not write the page: {e}{Style.RESET_ALL}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
