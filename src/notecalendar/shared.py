import logging
import os
from types import MappingProxyType

from colorama import Fore, Style, init
from rich.console import Console

init(autoreset=True)

WEEKS_BEFORE = 3
WEEKS_AFTER = 44
OUTPUT_PATH = "calendar.html"
LOG_DIR = os.path.expanduser("~/.cache/notecalendar")

TRACE_LEVEL_NUM = 5
logging.addLevelName(TRACE_LEVEL_NUM, "TRACE")

LOG_LEVELS = {
    "TRACE": TRACE_LEVEL_NUM,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class TraceLogger(logging.Logger):
    def trace(self, message, *args, **kws):
        if self.isEnabledFor(TRACE_LEVEL_NUM):
            self._log(TRACE_LEVEL_NUM, message, args, **kws)


logging.setLoggerClass(TraceLogger)

console = Console()

MONTH_NAMES = MappingProxyType(
    {
        1: "Janvier",
        2: "Février",
        3: "Mars",
        4: "Avril",
        5: "Mai",
        6: "Juin",
        7: "Juillet",
        8: "Août",
        9: "Septembre",
        10: "Octobre",
        11: "Novembre",
        12: "Décembre",
    }
)

# Indexed by date.weekday(): Monday is 0.
WEEKDAY_LABELS = ("L", "M", "M", "J", "V", "S", "D")

# Palette shared by the page and the terminal preview.
BASE_COLORS = {
    "day": "#f0f0ff",
    "weekend_lite": "#c0c0ff",
    "weekend_full": "#9090df",
    "border": "#000",
}


def month_label(year, month):
    return f"{MONTH_NAMES[month]}\n{year:04d}"


def get_logger():
    return logging.getLogger("notecalendar")


def setup_logging(log_level, log_filename="notecalendar.log", log_dir=None):
    if log_dir is None:
        log_dir = LOG_DIR
    log_file_path = os.path.join(log_dir, log_filename)

    logger = get_logger()
    logger.setLevel(log_level)

    if logger.hasHandlers():
        logger.handlers.clear()

    try:
        os.makedirs(log_dir, exist_ok=True)
        handler = logging.FileHandler(log_file_path, encoding="utf-8")
        formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    except OSError as e:
        print(
            f"{Fore.RED}Failed to configure logging to '{log_file_path}': {e}{Style.RESET_ALL}"
        )
        logger.addHandler(logging.NullHandler())

    return logger
