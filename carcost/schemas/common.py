"""Validateurs partagés / Shared schema validators."""

import datetime


def today_utc() -> datetime.date:
    """Date du jour en UTC / Today's date in UTC."""
    return datetime.datetime.now(datetime.timezone.utc).date()


def ensure_not_future(value: datetime.date | None) -> datetime.date | None:
    if value is not None and value > today_utc():
        raise ValueError("Date cannot be in the future")
    return value
