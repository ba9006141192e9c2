"""Academic-year labels.

An academic year runs from June 1 to May 31 and is labelled by the two
calendar years it spans, e.g. '2023-2024'.
"""

from typing import Iterable, List, Optional

from .dates import DateLike, parse_event_date

# First month (1-based) of an academic year
ACADEMIC_YEAR_START_MONTH = 6


def academic_year(value: DateLike) -> Optional[str]:
    """
    Map a date to its academic-year label.

    Args:
        value: Event date (ISO string or date)

    Returns:
        'YYYY-YYYY' label, or None when the date is missing or unparseable
    """
    parsed = parse_event_date(value)
    if parsed is None:
        return None
    year = parsed.year
    if parsed.month >= ACADEMIC_YEAR_START_MONTH:
        return f"{year}-{year + 1}"
    return f"{year - 1}-{year}"


def academic_years(dates: Iterable[DateLike]) -> List[str]:
    """Distinct academic-year labels of the given dates, newest first."""
    labels = {academic_year(value) for value in dates}
    labels.discard(None)
    return sorted(labels, reverse=True)
