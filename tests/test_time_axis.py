"""Tests for the two-row time axis."""

from datetime import date

import pytest

from src.timeline.store import GanttTask, ZoomScale
from src.timeline.time_axis import (
    ZOOM_PRESETS,
    compute_time_axis,
    date_to_x,
    format_label,
    get_zoom_preset,
)

YEAR_SCALES = get_zoom_preset("Year").scales
FIVE_YEAR_SCALES = get_zoom_preset("5-year").scales
QUARTER_SCALES = get_zoom_preset("Quarter").scales
MONTH_SCALES = get_zoom_preset("Month").scales


def task(start: date, end: date) -> GanttTask:
    return GanttTask(id=1, text="Test", start=start, end=end, type="task")


class TestFormatLabel:
    def test_year(self):
        assert format_label(date(2025, 6, 15), "%Y") == "2025"

    def test_month_name(self):
        assert format_label(date(2025, 1, 15), "%M") == "Jan"
        assert format_label(date(2025, 12, 15), "%M") == "Dec"

    def test_month_and_year(self):
        assert format_label(date(2025, 3, 15), "%M %Y") == "Mar 2025"

    def test_day_of_month(self):
        assert format_label(date(2025, 6, 7), "%j") == "7"

    def test_unknown_format_falls_back_to_year(self):
        assert format_label(date(2025, 6, 7), "%Q") == "2025"


class TestDateToX:
    start = date(2020, 1, 1)
    end = date(2025, 1, 1)

    def test_start_maps_to_zero(self):
        assert date_to_x(self.start, self.start, self.end, 1000) == 0

    def test_end_maps_to_total_width(self):
        assert date_to_x(self.end, self.start, self.end, 1000) == 1000

    def test_midpoint_is_interior(self):
        x = date_to_x(date(2022, 7, 2), self.start, self.end, 1000)
        assert 400 < x < 600

    def test_degenerate_range_returns_zero(self):
        assert date_to_x(self.start, self.start, self.start, 1000) == 0
        assert date_to_x(self.start, self.end, self.start, 1000) == 0

    def test_does_not_clamp(self):
        assert date_to_x(date(2019, 1, 1), self.start, self.end, 1000) < 0
        assert date_to_x(date(2026, 1, 1), self.start, self.end, 1000) > 1000


class TestComputeTimeAxis:
    def test_empty_for_no_tasks(self):
        axis = compute_time_axis([], YEAR_SCALES)

        assert axis.top_row == [] and axis.bottom_row == []
        assert axis.total_width == 0
        assert axis.start_date is None and axis.end_date is None

    def test_empty_for_fewer_than_two_scales(self):
        axis = compute_time_axis([task(date(2024, 1, 1), date(2025, 1, 1))], YEAR_SCALES[:1])
        assert axis.total_width == 0

    def test_year_over_half_years(self):
        axis = compute_time_axis([task(date(2024, 3, 1), date(2026, 9, 1))], YEAR_SCALES)

        assert axis.start_date == date(2024, 1, 1)
        assert axis.end_date == date(2027, 1, 1)
        assert [c.label for c in axis.bottom_row] == ["Jan", "Jul"] * 3
        assert [c.x for c in axis.bottom_row] == [0, 70, 140, 210, 280, 350]
        assert [c.label for c in axis.top_row] == ["2024", "2025", "2026"]
        assert all(c.width == 140 for c in axis.top_row)
        assert axis.total_width == 420

    def test_five_years_over_years(self):
        axis = compute_time_axis([task(date(2020, 1, 1), date(2028, 12, 1))], FIVE_YEAR_SCALES)

        assert len(axis.bottom_row) == 10
        assert [(c.label, c.x, c.width) for c in axis.top_row] == [
            ("2020", 0, 350),
            ("2025", 350, 350),
        ]

    def test_start_aligned_to_coarse_period(self):
        axis = compute_time_axis([task(date(2023, 6, 1), date(2024, 2, 1))], FIVE_YEAR_SCALES)

        assert axis.start_date == date(2020, 1, 1)
        assert axis.end_date == date(2025, 1, 1)
        assert [c.label for c in axis.bottom_row] == ["2020", "2021", "2022", "2023", "2024"]

    def test_quarters(self):
        axis = compute_time_axis([task(date(2025, 2, 15), date(2025, 11, 30))], QUARTER_SCALES)

        assert [c.label for c in axis.bottom_row] == [
            "Jan 2025", "Apr 2025", "Jul 2025", "Oct 2025",
        ]
        assert [(c.label, c.width) for c in axis.top_row] == [("2025", 280)]

    def test_months_over_weeks_have_uneven_groups(self):
        axis = compute_time_axis([task(date(2025, 3, 10), date(2025, 4, 20))], MONTH_SCALES)

        assert axis.start_date == date(2025, 3, 1)
        assert axis.end_date == date(2025, 5, 1)
        assert [c.label for c in axis.bottom_row] == [
            "1", "8", "15", "22", "29", "5", "12", "19", "26",
        ]
        assert [(c.label, c.x, c.width) for c in axis.top_row] == [
            ("Mar 2025", 0, 350),
            ("Apr 2025", 350, 280),
        ]

    def test_extent_covers_every_task(self):
        tasks = [
            task(date(2025, 5, 1), date(2025, 6, 1)),
            task(date(2023, 8, 1), date(2024, 1, 1)),
            task(date(2024, 1, 1), date(2027, 2, 1)),
        ]
        axis = compute_time_axis(tasks, QUARTER_SCALES)

        assert axis.start_date == date(2023, 1, 1)
        assert axis.end_date == date(2028, 1, 1)

    def test_end_saturates_at_last_calendar_day(self):
        axis = compute_time_axis([task(date(9998, 3, 1), date(9999, 12, 31))], QUARTER_SCALES)

        assert axis.start_date == date(9998, 1, 1)
        assert axis.end_date == date.max
        assert len(axis.bottom_row) == 8
        assert axis.bottom_row[-1].label == "Oct 9999"
        assert [(c.label, c.x, c.width) for c in axis.top_row] == [
            ("9998", 0, 280),
            ("9999", 280, 280),
        ]

    def test_start_saturates_at_first_calendar_day(self):
        axis = compute_time_axis([task(date(3, 7, 1), date(4, 1, 1))], FIVE_YEAR_SCALES)

        assert axis.start_date == date.min
        assert [c.label for c in axis.bottom_row] == ["1", "2", "3", "4", "5"]
        assert [(c.label, c.x, c.width) for c in axis.top_row] == [("1", 0, 350)]

    def test_day_periods_start_on_the_task_date(self):
        scales = (ZoomScale("day", 7, "%j"), ZoomScale("day", 1, "%j"))
        axis = compute_time_axis([task(date(2025, 3, 10), date(2025, 3, 20))], scales)

        assert axis.start_date == date(2025, 3, 10)
        assert axis.end_date == date(2025, 3, 27)
        assert len(axis.bottom_row) == 17
        assert [(c.label, c.x, c.width) for c in axis.top_row] == [
            ("10", 0, 490),
            ("17", 490, 490),
            ("24", 980, 210),
        ]

    @pytest.mark.parametrize("preset", ZOOM_PRESETS, ids=lambda p: p.label)
    @pytest.mark.parametrize("cell_width", [40, 70, 100])
    def test_total_width_is_bottom_count_times_cell_width(self, preset, cell_width):
        axis = compute_time_axis(
            [task(date(2021, 4, 17), date(2026, 10, 3))], preset.scales, cell_width
        )

        assert axis.total_width == len(axis.bottom_row) * cell_width
        assert all(c.width == cell_width for c in axis.bottom_row)
        assert sum(c.width for c in axis.top_row) == axis.total_width


class TestZoomPresets:
    def test_presets_are_coarse_fine_pairs(self):
        assert [p.label for p in ZOOM_PRESETS] == ["5-year", "Year", "Quarter", "Month"]
        assert all(len(p.scales) == 2 for p in ZOOM_PRESETS)

    def test_unknown_preset_raises(self):
        with pytest.raises(ValueError, match="Unknown zoom preset"):
            get_zoom_preset("Decade")

    @pytest.mark.parametrize("unit,step", [("week", 1), ("month", 0), ("day", -7)])
    def test_invalid_scale_raises(self, unit, step):
        with pytest.raises(ValueError):
            ZoomScale(unit, step, "%Y")
