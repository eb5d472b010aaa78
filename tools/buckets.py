"""Calendar-month bucketing of transactions.

Dates are always reduced to their UTC calendar date before the month is taken,
so a transaction stamped at midnight UTC never moves to the adjacent day.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

from models.transaction import Transaction

MonthKey = Tuple[int, int]

LAST_MONTHS = "last_months"
CURRENT_AND_PREVIOUS = "current_and_previous"
WINDOW_KINDS = (LAST_MONTHS, CURRENT_AND_PREVIOUS)


class WindowError(ValueError):
    """Raised for a missing or malformed window."""


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def to_utc_date(value) -> date:
    """Reduce a date, datetime or ISO-8601 string to its UTC calendar date.

    Naive datetimes are taken to be UTC already.

    Raises:
        ValueError: If a string is not valid ISO-8601.
        TypeError: For any other input type.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Cannot convert {type(value).__name__} to a date")


def month_key_of(value) -> MonthKey:
    """Get the (year, month) bucket of a date using its UTC calendar date."""
    day = to_utc_date(value)
    return (day.year, day.month)


def shift_month(key: MonthKey, months: int) -> MonthKey:
    shifted = date(key[0], key[1], 1) + relativedelta(months=months)
    return (shifted.year, shifted.month)


def previous_month(key: MonthKey) -> MonthKey:
    return shift_month(key, -1)


def format_month_key(key: MonthKey) -> str:
    """Format a bucket as "YYYY/MM"."""
    return f"{key[0]:04d}/{key[1]:02d}"


@dataclass(frozen=True)
class WindowSpec:
    """A contiguous run of calendar months ending at an anchor month.

    Attributes:
        kind: "last_months" or "current_and_previous".
        months: Number of months in the window, anchor included.
        anchor: (year, month) of the newest bucket.
    """

    kind: str
    months: int
    anchor: MonthKey

    @classmethod
    def last_months(cls, months: int, today: Optional[date] = None) -> "WindowSpec":
        """Last N calendar months including the current one."""
        return cls(LAST_MONTHS, months, month_key_of(today or utc_today()))

    @classmethod
    def current_and_previous(cls, today: Optional[date] = None) -> "WindowSpec":
        """Exactly the current month and the one before it."""
        return cls(CURRENT_AND_PREVIOUS, 2, month_key_of(today or utc_today()))

    @classmethod
    def for_month(cls, year: int, month: int, months: int = 2) -> "WindowSpec":
        """Window whose newest bucket is an explicit month."""
        kind = CURRENT_AND_PREVIOUS if months == 2 else LAST_MONTHS
        return cls(kind, months, (year, month))


def validate_window(window: Optional[WindowSpec]) -> None:
    """Reject malformed windows before any aggregation starts.

    Raises:
        WindowError: If the window is missing or malformed.
    """
    if window is None:
        raise WindowError("A window is required")
    if window.kind not in WINDOW_KINDS:
        raise WindowError(f"Unknown window kind: {window.kind!r}")
    # bool is an int subclass, but True is not a month count
    if not isinstance(window.months, int) or isinstance(window.months, bool):
        raise WindowError(f"Window months must be an integer, got {window.months!r}")
    if window.months <= 0:
        raise WindowError(f"Window months must be positive, got {window.months}")
    if window.kind == CURRENT_AND_PREVIOUS and window.months != 2:
        raise WindowError("A current+previous window always spans 2 months")
    try:
        year, month = window.anchor
    except (TypeError, ValueError):
        raise WindowError(f"Invalid window anchor: {window.anchor!r}") from None
    if not isinstance(year, int) or not isinstance(month, int) or not 1 <= month <= 12:
        raise WindowError(f"Invalid window anchor: {window.anchor!r}")


def buckets_for(window: WindowSpec) -> List[MonthKey]:
    """Enumerate the window's months, oldest first, including empty ones.

    Raises:
        WindowError: If the window is malformed.
    """
    validate_window(window)
    return [
        shift_month(window.anchor, -offset)
        for offset in range(window.months - 1, -1, -1)
    ]


def transactions_in(
    bucket: MonthKey, transactions: Iterable[Transaction]
) -> List[Transaction]:
    """Get the transactions falling in one bucket, in input order."""
    return [t for t in transactions if month_key_of(t.date) == bucket]


def group_by_month(
    transactions: Iterable[Transaction], buckets: Iterable[MonthKey]
) -> Dict[MonthKey, List[Transaction]]:
    """Group transactions into the given buckets in a single pass.

    Every bucket is present in the result, empty or not. Transactions outside
    all buckets are dropped.
    """
    grouped: Dict[MonthKey, List[Transaction]] = {bucket: [] for bucket in buckets}
    for transaction in transactions:
        key = month_key_of(transaction.date)
        if key in grouped:
            grouped[key].append(transaction)
    return grouped
