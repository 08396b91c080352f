"""Expiry resolution.

Callers describe an expiry in one of three shapes. Each shape is a tagged
variant that resolves to an absolute, naive, second-precision local
``datetime``:

- ``AbsoluteTimestamp``: an already resolved point in time
- ``RelativeExpression``: text such as ``"2 days"``, ``"90 seconds"`` or
  ``"2017-12-01"``, parsed with dateparser
- ``UnixInteger``: seconds since the epoch

Example:
    >>> now = datetime(2026, 1, 1, 12, 0, 0)
    >>> to_datetime("2 days", now)
    datetime.datetime(2026, 1, 3, 12, 0)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

import dateparser

from objectstore.shared.constants import Expiry
from objectstore.shared.errors import create_expiry_error


def _truncate(value: datetime) -> datetime:
    """Drop sub-second precision and convert aware values to naive local time."""
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value.replace(microsecond=0)


@dataclass(frozen=True)
class AbsoluteTimestamp:
    """An already resolved expiry."""

    value: datetime

    def resolve(self, now: datetime) -> datetime:  # noqa: ARG002
        return _truncate(self.value)


@dataclass(frozen=True)
class RelativeExpression:
    """A human readable absolute or relative date/time expression.

    Relative expressions without a direction ("2 days") point into the
    future; "ago" points into the past.
    """

    text: str

    def resolve(self, now: datetime) -> datetime:
        """Parse the expression anchored at ``now``.

        Raises:
            InvalidExpiryError: If the text cannot be parsed
        """
        try:
            parsed = dateparser.parse(
                self.text,
                languages=Expiry.PARSER_LANGUAGES,
                settings={
                    "PREFER_DATES_FROM": "future",
                    "RELATIVE_BASE": now,
                    "RETURN_AS_TIMEZONE_AWARE": False,
                },
            )
        except (ValueError, TypeError, OverflowError) as e:
            raise create_expiry_error(self.text, "unparseable expression", e) from e

        if parsed is None:
            raise create_expiry_error(self.text, "unparseable expression")

        return _truncate(parsed)


@dataclass(frozen=True)
class UnixInteger:
    """Seconds since the epoch, resolved in local time."""

    seconds: int

    def resolve(self, now: datetime) -> datetime:  # noqa: ARG002
        try:
            return datetime.fromtimestamp(self.seconds).replace(microsecond=0)
        except (OverflowError, OSError, ValueError) as e:
            raise create_expiry_error(self.seconds, "timestamp out of range", e) from e


ExpirySpec = Union[AbsoluteTimestamp, RelativeExpression, UnixInteger]
ExpiryInput = Union[ExpirySpec, str, int, datetime, date]


def to_expiry(raw: ExpiryInput) -> ExpirySpec:
    """Tag a raw expiry argument by its runtime shape.

    Args:
        raw: Text expression, Unix timestamp, datetime/date, or a variant

    Returns:
        The matching expiry variant

    Raises:
        InvalidExpiryError: If ``raw`` has an unsupported shape
    """
    if isinstance(raw, (AbsoluteTimestamp, RelativeExpression, UnixInteger)):
        return raw
    if isinstance(raw, str):
        return RelativeExpression(raw)
    # bool is an int subclass but never a meaningful timestamp
    if isinstance(raw, int) and not isinstance(raw, bool):
        return UnixInteger(raw)
    if isinstance(raw, datetime):
        return AbsoluteTimestamp(raw)
    if isinstance(raw, date):
        return AbsoluteTimestamp(datetime(raw.year, raw.month, raw.day))

    raise create_expiry_error(raw, f"unsupported type {type(raw).__name__}")


def to_datetime(raw: ExpiryInput, now: datetime) -> datetime:
    """Resolve an expiry argument to an absolute timestamp.

    Args:
        raw: Expiry argument in any supported shape
        now: Anchor for relative expressions

    Returns:
        Naive local datetime without microseconds

    Raises:
        InvalidExpiryError: If the argument is unsupported or unparseable
    """
    return to_expiry(raw).resolve(now)


def format_timestamp(value: datetime) -> str:
    """Format a timestamp the way it is stored."""
    return Expiry.TIMESTAMP_FORMAT.format(year=value.year, value=value)


def parse_timestamp(value: str) -> datetime:
    """Parse a stored timestamp.

    Accepts any ISO 8601 form so rows written through the raw connection
    still read back.
    """
    return _truncate(datetime.fromisoformat(value))


__all__ = [
    "AbsoluteTimestamp",
    "ExpiryInput",
    "ExpirySpec",
    "RelativeExpression",
    "UnixInteger",
    "format_timestamp",
    "parse_timestamp",
    "to_datetime",
    "to_expiry",
]
