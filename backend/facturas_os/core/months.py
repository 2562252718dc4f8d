"""Month Range — parses the 'mes' query parameter into a half-open date range.

Invariants:
    - Accepted shape is exactly YYYY-MM (four digits, dash, two digits)
    - Month must be 01..12; anything else is rejected, even if the shape matches
    - start is always day 1; end is day 1 of the following month (exclusive)

Design Decisions:
    - Range computed in Python, not with STR_TO_DATE/DATE_ADD: the query stays
      portable across dialects and the range is testable without a database
"""

import re
from dataclasses import dataclass
from datetime import date

from facturas_os.core.errors import InvalidMonthError, ErrorContext

MONTH_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}")


@dataclass(frozen=True)
class MonthRange:
    """Calendar month as [start, end)."""
    month: str
    start: date
    end: date


def parse_month(value: str | None) -> MonthRange:
    """Validate 'mes' and return its calendar range. Raises InvalidMonthError."""
    if not value or not MONTH_PATTERN.fullmatch(value):
        raise InvalidMonthError(value, ErrorContext(month=value))

    year, month = int(value[:4]), int(value[5:])
    if not 1 <= month <= 12 or year < 1:
        raise InvalidMonthError(value, ErrorContext(month=value))

    start = date(year, month, 1)
    try:
        end = _first_of_next_month(start)
    except ValueError:
        # 9999-12 has no representable successor
        raise InvalidMonthError(value, ErrorContext(month=value))
    return MonthRange(month=value, start=start, end=end)


def _first_of_next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)
