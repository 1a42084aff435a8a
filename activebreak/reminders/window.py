from __future__ import annotations

from datetime import datetime, time

from activebreak.utils.dates import minutes_of_day


def is_within_window(now: time | datetime, start: time, end: time) -> bool:
    """
    Попадает ли время суток now в окно [start, end] (границы включительно).
    Если start > end, окно переходит через полночь (22:00–06:00).
    """
    cur = minutes_of_day(now)
    s = minutes_of_day(start)
    e = minutes_of_day(end)

    if s <= e:
        return s <= cur <= e
    return cur >= s or cur <= e


def wraps_midnight(start: time, end: time) -> bool:
    return minutes_of_day(start) > minutes_of_day(end)
