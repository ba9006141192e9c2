from datetime import date, datetime

import pytest

from faculty_portal.events.academic_year import academic_year, academic_years


@pytest.mark.parametrize("value, expected", [
    ("2024-06-01", "2024-2025"),
    ("2024-05-31", "2023-2024"),
    ("2024-01-10", "2023-2024"),
    ("2023-12-31", "2023-2024"),
    (date(2022, 7, 4), "2022-2023"),
    (datetime(2021, 3, 1, 9, 30), "2020-2021"),
    ("2024-06-15T10:00:00Z", "2024-2025"),
])
def test_academic_year_june_boundary(value, expected):
    assert academic_year(value) == expected


@pytest.mark.parametrize("value", [None, "", "   ", "not a date", "2024-13-01"])
def test_academic_year_missing_or_unparseable(value):
    assert academic_year(value) is None


def test_academic_years_distinct_and_descending():
    dates = ["2023-01-10", "2024-07-01", None, "2022-09-09", "2023-03-03", "garbage"]

    assert academic_years(dates) == ["2024-2025", "2022-2023"]


def test_academic_years_empty():
    assert academic_years([]) == []
