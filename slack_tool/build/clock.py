"""Clock capability used to timestamp builds."""

from datetime import UTC, datetime
from typing import Protocol

BUILD_TIMESTAMP_FORMAT = "%Y-%m-%d_%H:%M:%S"


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Reads the host clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """Always returns the same instant."""

    def __init__(self, instant: datetime) -> None:
        self.instant = instant

    def now(self) -> datetime:
        return self.instant


def format_build_timestamp(moment: datetime) -> str:
    """Format ``moment`` as ``YYYY-MM-DD_HH:MM:SS`` in UTC.

    Naive datetimes are taken to already be in UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).strftime(BUILD_TIMESTAMP_FORMAT)
