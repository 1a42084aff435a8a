from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

MINUTES_PER_DAY = 24 * 60


def now_local(tz: str) -> datetime:
    """Текущее время в зоне tz без tzinfo (так хранятся все моменты в БД)."""
    return datetime.now(ZoneInfo(tz)).replace(tzinfo=None)


def as_local_naive(dt: datetime, tz: str) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(ZoneInfo(tz)).replace(tzinfo=None)


def minutes_of_day(value: time | datetime) -> int:
    """Минуты от полуночи, 0..1439; секунды отбрасываются."""
    return value.hour * 60 + value.minute


def combine(day: date, at: time) -> datetime:
    return datetime(day.year, day.month, day.day, at.hour, at.minute)


def whole_minutes(delta: timedelta) -> int:
    return int(delta.total_seconds() // 60)
