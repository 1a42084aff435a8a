# activebreak/reminders/cadence.py
"""
Проверка шага (cadence) правила.

Два режима, выбор по interval_minutes:
  - < 1440: минутный шаг от начала окна с допуском (tolerance), чтобы тик,
    пришедший чуть позже границы интервала, её не пропустил;
  - >= 1440: дневной режим, каждые interval_days дней от даты создания
    правила в целых сутках (0 = каждый день).
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta

from activebreak.reminders.domain import EngineTuning
from activebreak.reminders.window import wraps_midnight
from activebreak.utils.dates import MINUTES_PER_DAY, combine, minutes_of_day, whole_minutes

logger = logging.getLogger(__name__)

_DEFAULT_TUNING = EngineTuning()


def tolerance_minutes(interval_minutes: int, max_tolerance: int = 3) -> int:
    return min(max_tolerance, interval_minutes // 2)


def window_anchor(rule, now: datetime) -> datetime:
    """
    Начало текущего окна. Для окна через полночь после 00:00 окно началось вчера.
    """
    today_start = combine(now.date(), rule.window_start)
    if (
        now < today_start
        and wraps_midnight(rule.window_start, rule.window_end)
        and minutes_of_day(now) <= minutes_of_day(rule.window_end)
    ):
        return today_start - timedelta(days=1)
    return today_start


def is_minute_cadence(rule) -> bool:
    return rule.interval_minutes < MINUTES_PER_DAY


def is_eligible_tick(rule, now: datetime, tuning: EngineTuning | None = None) -> bool:
    tuning = tuning or _DEFAULT_TUNING

    if is_minute_cadence(rule):
        anchor = window_anchor(rule, now)
        if now < anchor:
            return False

        elapsed = whole_minutes(now - anchor)
        tol = tolerance_minutes(rule.interval_minutes, tuning.max_tolerance_minutes)
        since_boundary = elapsed % rule.interval_minutes
        logger.debug(
            "cadence: rule=%s elapsed=%sm interval=%sm since_boundary=%sm tol=%sm",
            rule.id, elapsed, rule.interval_minutes, since_boundary, tol,
        )
        return since_boundary <= tol

    interval_days = rule.interval_days or 0
    if interval_days == 0:
        return True

    # целые сутки (по 24 ч) с момента создания, а не календарные даты
    days = (now - rule.created_at).days if rule.created_at else 0
    if days < 0:
        return False
    return days % interval_days == 0
