import html
import os
import sys
import webbrowser
from pathlib import Path

from .grid import build_grid
from .shared import (
    BASE_COLORS,
    OUTPUT_PATH,
    WEEKDAY_LABELS,
    WEEKS_AFTER,
    WEEKS_BEFORE,
    setup_logging,
)

PAGE_TITLE = "Calendrier"
FONT_STACK = '"Calibri","sans-serif"'


def style_rules():
    border = BASE_COLORS["border"]
    return (
        "body { margin: 0; padding: 0; }",
        ".workspace { margin: 0; padding: 10px; position: relative; width: 100%; "
        "box-sizing: border-box; text-align: right; }",
        ".main-table-outer { display: inline-block; position: relative; right: 0px; "
        "border-spacing: 0; }",
        f".main-table {{ position: relative; right: 0px; top: 0px; border-spacing: 0; "
        f"border: 2px solid {border}; }}",
        ".day { width: 20px; height: 20px; padding: 0; margin: 0; position: relative; }",
        f".day, .month, .header {{ font-family: {FONT_STACK}; text-align: center; "
        "vertical-align: middle; box-sizing: border-box; font-size: 0.8em; }",
        f".header {{ height: 20px; padding: 0px; border-bottom: 2px solid {border}; }}",
        f".month {{ width: 70px; white-space: pre; border-right: 2px solid {border}; }}",
        ".header, .month { font-weight: bold; }",
        f".next-w-month {{ border-bottom: 1px solid {border}; }}",
        f".next-d-month {{ border-right: 1px solid {border}; }}",
        f".next-w-year {{ border-bottom: 2px solid {border}; }}",
        f".next-d-year {{ border-right: 2px solid {border}; }}",
        f".day {{ background-color: {BASE_COLORS['day']}; }}",
        f".weekend-lite {{ background-color: {BASE_COLORS['weekend_lite']}; }}",
        f".weekend-full {{ background-color: {BASE_COLORS['weekend_full']}; }}",
        '.today:before { width: 20px; height: 20px; border-radius: 15px; content: " "; '
        "box-sizing: border-box; display: block; position: absolute; padding: 0; "
        f"margin: 0; top: 0; border: 2px solid {border}; }}",
        "@media print { @page { size: A4; } }",
    )


def render_style(rules):
    return "\n".join(rules)


def _element(name, text="", classes=(), attributes=None):
    attrs = ""
    if classes:
        attrs += f' class="{html.escape(" ".join(classes))}"'
    for key, value in (attributes or {}).items():
        attrs += f' {key}="{html.escape(str(value))}"'
    return f"<{name}{attrs}>{html.escape(str(text))}</{name}>"


def day_classes(day):
    classes = ["day"]
    if day.closes_month_below:
        classes.append("next-w-month")
    if day.closes_year_below:
        classes.append("next-w-year")
    if day.closes_month_right:
        classes.append("next-d-month")
    if day.closes_year_right:
        classes.append("next-d-year")
    if day.is_saturday:
        classes.append("weekend-lite")
    if day.is_sunday:
        classes.append("weekend-full")
    if day.is_today:
        classes.append("today")
    return classes


def month_classes(week):
    classes = ["month"]
    if week.closes_month_below:
        classes.append("next-w-month")
    if week.closes_year_below:
        classes.append("next-w-year")
    return classes


def render_header_row():
    cells = [_element("th", "Month", classes=("header", "month"))]
    cells += [_element("th", label, classes=("header",)) for label in WEEKDAY_LABELS]
    return f'<tr class="header-line">{"".join(cells)}</tr>'


def render_week_row(week, month_spans):
    cells = []
    if week.is_first_month_week:
        cells.append(
            _element(
                "td",
                week.month_label,
                classes=month_classes(week),
                attributes={"rowspan": month_spans[week.month_label]},
            )
        )
    cells += [
        _element("td", day.day_of_month, classes=day_classes(day)) for day in week.days
    ]
    return f'<tr class="line">{"".join(cells)}</tr>'


def render_table(grid):
    rows = [render_header_row()]
    rows += [render_week_row(week, grid.month_spans) for week in grid.weeks]
    body = "\n".join(rows)
    return f'<table class="main-table">\n{body}\n</table>'


def render_page(grid, title=PAGE_TITLE):
    """Return a standalone HTML document showing ``grid``."""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="fr">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n"
        f"<style>\n{render_style(style_rules())}\n</style>\n"
        "</head>\n"
        "<body>\n"
        '<div class="workspace">\n'
        '<div class="main-table-outer">\n'
        f"{render_table(grid)}\n"
        "</div>\n"
        "</div>\n"
        "</body>\n"
        "</html>\n"
    )


def write_page(page, output_path):
    out_path = os.path.abspath(output_path)
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(page)
    return out_path


def run(
    reference_date=None,
    weeks_before=WEEKS_BEFORE,
    weeks_after=WEEKS_AFTER,
    output_path=OUTPUT_PATH,
    to_stdout=False,
    open_browser=False,
    log_level="INFO",
    log_dir=None,
):
    logger = setup_logging(log_level, log_filename="notecalendar.log", log_dir=log_dir)
    logger.info("--- Render pass started ---")

    # A failed build raises before anything is written.
    grid = build_grid(reference_date, weeks_before, weeks_after, logger=logger)
    page = render_page(grid)

    if to_stdout:
        sys.stdout.write(page)
        logger.info("Page written to stdout.")
        return None

    out_path = write_page(page, output_path)
    logger.info(f"Page written to {out_path} ({len(grid.weeks)} weeks).")
    print(out_path)

    if open_browser:
        try:
            webbrowser.open(Path(out_path).as_uri())
        except webbrowser.Error as e:
            logger.warning(f"Could not open a browser for {out_path}: {e}")
    return out_path
