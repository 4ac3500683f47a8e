import datetime as dt

from gantt_chart.calendar_utils import (
    days_in_month,
    first_day_of_month,
    iter_months,
    last_day_of_month,
    month_short_name,
    next_month_first_day,
)


def test_days_in_month_handles_leap_years_without_special_cases():
    assert days_in_month(2023, 2) == 28
    assert days_in_month(2024, 2) == 29
    assert days_in_month(1900, 2) == 28
    assert days_in_month(2000, 2) == 29
    assert days_in_month(2023, 4) == 30
    assert days_in_month(2023, 12) == 31


def test_next_month_first_day_rolls_the_year_in_december():
    assert next_month_first_day(dt.date(2023, 12, 15)) == dt.date(2024, 1, 1)
    assert next_month_first_day(dt.date(2023, 1, 31)) == dt.date(2023, 2, 1)


def test_month_short_names():
    assert month_short_name(1) == "Jan"
    assert month_short_name(12) == "Dec"


def test_month_snapping():
    assert first_day_of_month(dt.date(2023, 3, 17)) == dt.date(2023, 3, 1)
    assert last_day_of_month(dt.date(2024, 2, 3)) == dt.date(2024, 2, 29)


def test_iter_months_crosses_year_boundary():
    months = list(iter_months(dt.date(2023, 11, 20), dt.date(2024, 2, 1)))

    assert months == [(2023, 11), (2023, 12), (2024, 1), (2024, 2)]
