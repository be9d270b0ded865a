from rich.table import Table
from rich.text import Text

from .grid import build_grid
from .shared import (
    BASE_COLORS,
    WEEKDAY_LABELS,
    WEEKS_AFTER,
    WEEKS_BEFORE,
    console,
    setup_logging,
)

STATIC_STYLES = {
    "today": "reverse bold",
    "month": "bold",
    "weekend_lite": f"on {BASE_COLORS['weekend_lite']}",
    "weekend_full": f"bold on {BASE_COLORS['weekend_full']}",
}


def day_style(day):
    if day.is_today:
        return STATIC_STYLES["today"]
    if day.is_sunday:
        return STATIC_STYLES["weekend_full"]
    if day.is_saturday:
        return STATIC_STYLES["weekend_lite"]
    return ""


def generate_grid_table(grid):
    table = Table(show_header=True, box=None, padding=(0, 1))
    table.add_column("Mois", justify="left", style=STATIC_STYLES["month"])
    for label in WEEKDAY_LABELS:
        table.add_column(label, justify="right")

    last_index = len(grid.weeks) - 1
    for i, week in enumerate(grid.weeks):
        label = week.month_label.replace("\n", " ") if week.is_first_month_week else ""
        cells = [Text(f"{day.day_of_month:>2}", style=day_style(day)) for day in week.days]
        # A rule under the last week of each month.
        next_starts_month = i < last_index and grid.weeks[i + 1].is_first_month_week
        table.add_row(Text(label), *cells, end_section=next_starts_month)
    return table


def run(
    reference_date=None,
    weeks_before=WEEKS_BEFORE,
    weeks_after=WEEKS_AFTER,
    log_level="INFO",
    log_dir=None,
):
    logger = setup_logging(log_level, log_filename="notecalendar.log", log_dir=log_dir)
    grid = build_grid(reference_date, weeks_before, weeks_after, logger=logger)
    console.print(generate_grid_table(grid))
    logger.info(f"Preview printed ({len(grid.weeks)} weeks).")
    return grid
