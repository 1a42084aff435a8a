# activebreak/reminders/gates.py
from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta

from activebreak.reminders.domain import EngineTuning
from activebreak.reminders.errors import StoreUnavailable
from activebreak.reminders.protocols import ActivityStore, TriggerLogStore

logger = logging.getLogger(__name__)


class CompletionGate:
    """
    Пользователь уже сделал эту активность за последний интервал?
    Если да, напоминать незачем.
    """

    def __init__(self, activities: ActivityStore, fail_open: bool = True):
        self.activities = activities
        self.fail_open = fail_open

    async def has_recently_completed(
        self,
        user_id: int,
        activity_type_id: int,
        interval_minutes: int,
        now: datetime,
    ) -> bool:
        start = now - timedelta(minutes=interval_minutes)
        try:
            records = await self.activities.find_in_range(user_id, activity_type_id, start, now)
        except StoreUnavailable as e:
            logger.warning(
                "completion_check_failed fail_open=%s: %s", self.fail_open, e,
                extra={"user_id": user_id, "activity_type_id": activity_type_id},
            )
            return not self.fail_open

        done = len(records) > 0
        logger.debug(
            "completion: %s..%s found=%s", start.isoformat(), now.isoformat(), len(records),
            extra={"user_id": user_id, "activity_type_id": activity_type_id},
        )
        return done


def cooldown_for(interval_minutes: int, tuning: EngineTuning) -> timedelta:
    """
    Окно антидубля. Короткие интервалы (<= short_interval_minutes) получают
    долю short_cooldown_ratio, но не меньше min_cooldown_seconds.
    """
    if interval_minutes > tuning.short_interval_minutes:
        return timedelta(minutes=math.ceil(interval_minutes * tuning.long_cooldown_ratio))

    seconds = math.ceil(interval_minutes * 60 * tuning.short_cooldown_ratio)
    return timedelta(seconds=max(seconds, tuning.min_cooldown_seconds))


class DuplicateSuppressionGate:
    """Было ли срабатывание по той же активности внутри окна антидубля."""

    def __init__(self, trigger_log: TriggerLogStore, tuning: EngineTuning | None = None):
        self.trigger_log = trigger_log
        self.tuning = tuning or EngineTuning()

    @property
    def fail_open(self) -> bool:
        return self.tuning.duplicate_fail_open

    async def has_recent_trigger(
        self,
        user_id: int,
        activity_type_id: int,
        interval_minutes: int,
        now: datetime,
    ) -> bool:
        cooldown = cooldown_for(interval_minutes, self.tuning)
        since = now - cooldown
        try:
            entries = await self.trigger_log.find_recent(user_id, activity_type_id, since)
        except StoreUnavailable as e:
            logger.warning(
                "duplicate_check_failed fail_open=%s: %s", self.fail_open, e,
                extra={"user_id": user_id, "activity_type_id": activity_type_id},
            )
            return not self.fail_open

        if entries:
            last = max(e.triggered_at for e in entries)
            logger.debug(
                "duplicate: last trigger %ss ago, cooldown=%ss",
                int((now - last).total_seconds()), int(cooldown.total_seconds()),
                extra={"user_id": user_id, "activity_type_id": activity_type_id},
            )
            return True
        return False
