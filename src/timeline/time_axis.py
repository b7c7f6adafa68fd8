"""
Two-row calendar axis for the Gantt chart.

The top row groups the bottom row: e.g. years over quarters. Every bottom
column has the same pixel width whatever its real duration, so months of
different lengths are drawn equally wide.
"""

import logging
from datetime import date, timedelta
from typing import List, Sequence

from src.timeline.dates import shift_date
from src.timeline.store import GanttTask, TimeAxis, TimeColumn, ZoomPreset, ZoomScale

logger = logging.getLogger(__name__)

DEFAULT_CELL_WIDTH = 70

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# Time-axis zoom presets (widest -> finest)
ZOOM_PRESETS: List[ZoomPreset] = [
    ZoomPreset("5-year", (ZoomScale("year", 5, "%Y"), ZoomScale("year", 1, "%Y"))),
    ZoomPreset("Year", (ZoomScale("year", 1, "%Y"), ZoomScale("month", 6, "%M"))),
    ZoomPreset("Quarter", (ZoomScale("year", 1, "%Y"), ZoomScale("month", 3, "%M %Y"))),
    ZoomPreset("Month", (ZoomScale("month", 1, "%M %Y"), ZoomScale("day", 7, "%j"))),
]
DEFAULT_ZOOM = "Quarter"


def get_zoom_preset(label: str) -> ZoomPreset:
    for preset in ZOOM_PRESETS:
        if preset.label == label:
            return preset
    known = ", ".join(p.label for p in ZOOM_PRESETS)
    raise ValueError(f"Unknown zoom preset {label!r} (expected one of: {known})")


def format_label(value: date, fmt: str) -> str:
    if fmt == "%M":
        return MONTH_NAMES[value.month - 1]
    if fmt == "%M %Y":
        return f"{MONTH_NAMES[value.month - 1]} {value.year}"
    if fmt == "%j":
        return str(value.day)
    return str(value.year)


def date_to_x(value: date, start: date, end: date, total_width: float) -> float:
    """
    Map a date linearly onto [0, total_width].

    Dates outside [start, end] map outside the range; callers clip.
    Returns 0 when end <= start.
    """
    total = (end - start).total_seconds()
    if total <= 0:
        return 0
    return (value - start).total_seconds() / total * total_width


def step_date(value: date, scale: ZoomScale) -> date:
    """Move forward by one step of the scale, stopping at date.max."""
    try:
        if scale.unit == "year":
            return shift_date(value, years=scale.step)
        if scale.unit == "month":
            return shift_date(value, months=scale.step)
        return value + timedelta(days=scale.step)
    except (ValueError, OverflowError):
        # Past the end of the calendar, e.g. "December 31, 9999" placeholders
        return date.max


def align_date(value: date, scale: ZoomScale) -> date:
    """
    Move back to the start of the period containing the date.

    Day periods start on the date itself; only year and month periods
    snap to multiples of the step.
    """
    if scale.unit == "year":
        year = value.year - value.year % scale.step
        if year < date.min.year:
            return date.min
        return date(year, 1, 1)
    if scale.unit == "month":
        month = value.month - 1
        return date(value.year, month - month % scale.step + 1, 1)
    return value


def compute_time_axis(
    tasks: List[GanttTask],
    scales: Sequence[ZoomScale],
    cell_width: int = DEFAULT_CELL_WIDTH,
) -> TimeAxis:
    """
    Compute the axis columns covering every task.

    The axis starts at the beginning of the coarse period holding the
    earliest task and ends one whole coarse period after the period
    holding the latest task end.

    Parameters
    ----------
    tasks : List[GanttTask]
        Tasks to cover
    scales : Sequence[ZoomScale]
        scales[0] is the top (coarse) row, scales[1] the bottom (fine) row
    cell_width : int
        Pixel width of one bottom column (default 70)

    Returns
    -------
    TimeAxis
        Column geometry; empty when there are no tasks or fewer than two
        scales
    """
    if not tasks or len(scales) < 2:
        return TimeAxis()

    top_scale, bottom_scale = scales[0], scales[1]

    min_date = min(t.start for t in tasks)
    max_date = max(t.end for t in tasks)

    start_date = align_date(min_date, top_scale)
    end_date = step_date(align_date(max_date, top_scale), top_scale)

    bottom_row: List[TimeColumn] = []
    cursor = align_date(start_date, bottom_scale)
    while cursor < end_date:
        bottom_row.append(
            TimeColumn(
                label=format_label(cursor, bottom_scale.label_format),
                x=len(bottom_row) * cell_width,
                width=cell_width,
            )
        )
        cursor = step_date(cursor, bottom_scale)

    top_row: List[TimeColumn] = []
    cursor = align_date(start_date, top_scale)
    bottom_cursor = align_date(start_date, bottom_scale)
    bottom_idx = 0
    while cursor < end_date:
        next_top = step_date(cursor, top_scale)
        group_start = bottom_idx
        while bottom_cursor < next_top and bottom_idx < len(bottom_row):
            bottom_cursor = step_date(bottom_cursor, bottom_scale)
            bottom_idx += 1
        count = bottom_idx - group_start
        if count > 0:
            top_row.append(
                TimeColumn(
                    label=format_label(cursor, top_scale.label_format),
                    x=group_start * cell_width,
                    width=count * cell_width,
                )
            )
        cursor = next_top

    total_width = len(bottom_row) * cell_width
    logger.debug(
        f"Time axis {start_date} to {end_date}: {len(top_row)} top, "
        f"{len(bottom_row)} bottom columns, {total_width}px"
    )
    return TimeAxis(
        top_row=top_row,
        bottom_row=bottom_row,
        total_width=total_width,
        start_date=start_date,
        end_date=end_date,
    )
