# utils/clock.py
"""
Time source for everything that compares against "now": schedule date validation,
the missed-appointment sweep and the dashboard counters.

Datetimes are naive UTC, which is what pymongo hands back from the database by
default, so values read from a collection can be compared with `Clock.now()`
directly.
"""

from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
	return datetime.now(timezone.utc).replace(tzinfo=None)

def to_naive_utc(value: datetime) -> datetime:
	"""Converts an aware datetime to naive UTC, naive values are assumed to be UTC already."""
	if value.tzinfo is not None:
		value = value.astimezone(timezone.utc).replace(tzinfo=None)
	return value

def start_of_day(value: datetime) -> datetime:
	return value.replace(hour=0, minute=0, second=0, microsecond=0)

class Clock:
	"""Wall-clock time."""

	def now(self) -> datetime:
		return utcnow()

	def today(self) -> datetime:
		return start_of_day(self.now())

class FixedClock(Clock):
	"""A clock that only moves when told to."""

	def __init__(self, moment: datetime):
		self.moment = to_naive_utc(moment)

	def now(self) -> datetime:
		return self.moment

	def advance(self, **delta) -> None:
		self.moment = self.moment + timedelta(**delta)
