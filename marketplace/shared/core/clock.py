# 📄 File: marketplace/shared/core/clock.py
# 🧭 Purpose (Layman Explanation):
# Tells the service what "today" is. Birthday and expired-card checks ask this clock
# instead of the computer's calendar, so tests can pretend it is any day they like.
# 🧪 Purpose (Technical Summary):
# Injectable time source abstraction with a system UTC implementation and a fixed
# implementation used by tests and by deterministic tooling.
# 🔗 Dependencies:
# datetime, abc
# 🔄 Connected Modules / Calls From:
# UserService (birthdays), CardService (expired cards, expiration rule), presentation dependencies

from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from typing import Optional


class Clock(ABC):
    """Source of the current date and time."""

    @abstractmethod
    def now(self) -> datetime:
        pass

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Clock backed by the system time in a fixed timezone (UTC by default)."""

    def __init__(self, tz: timezone = timezone.utc):
        self._tz = tz

    def now(self) -> datetime:
        return datetime.now(self._tz)


class FixedClock(Clock):
    """Clock frozen at a given instant. ``set`` moves it."""

    def __init__(self, instant: datetime):
        self._instant = instant

    @classmethod
    def on(cls, day: date) -> "FixedClock":
        return cls(datetime(day.year, day.month, day.day, 12, 0, tzinfo=timezone.utc))

    def set(self, instant: datetime) -> None:
        self._instant = instant

    def now(self) -> datetime:
        return self._instant


_default_clock: Optional[Clock] = None


def get_default_clock() -> Clock:
    global _default_clock
    if _default_clock is None:
        _default_clock = SystemClock()
    return _default_clock
