# activebreak/reminders/dispatcher.py
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import List

from activebreak.reminders.domain import SendResult, Verdict
from activebreak.reminders.errors import InvalidRule, NotificationDeliveryFailed, StoreUnavailable
from activebreak.reminders.evaluator import RuleEvaluator
from activebreak.reminders.messages import compose_reminder, notification_id_for
from activebreak.reminders.protocols import (
    ActivityCatalog,
    NotificationSink,
    RuleStore,
    TriggerLogStore,
)
from activebreak.utils.dates import as_local_naive

logger = logging.getLogger(__name__)


class ReminderDispatcher:
    """
    Точка входа для хоста: один вызов run_tick на тик планировщика.

    Все зависимости передаются явно. Порядок на FIRE: отправка уведомления,
    затем запись в журнал. Упадём между ними, получим максимум один дубль на
    следующем тике (at-least-once). Не ушло уведомление: журнал не пишем,
    следующий тик попробует снова.
    """

    def __init__(
        self,
        *,
        rules: RuleStore,
        evaluator: RuleEvaluator,
        trigger_log: TriggerLogStore,
        catalog: ActivityCatalog,
        sink: NotificationSink,
        language: str = "en",
        fallback_activity_name: str = "exercise",
        tz: str = "UTC",
    ) -> None:
        self.rules = rules
        self.evaluator = evaluator
        self.trigger_log = trigger_log
        self.catalog = catalog
        self.sink = sink
        self.language = language
        self.fallback_activity_name = fallback_activity_name
        self.tz = tz

    async def run_tick(self, user_id: int, now: datetime) -> List[Verdict]:
        return await self._tick(user_id, now, dry_run=False)

    async def preview(self, user_id: int, now: datetime) -> List[Verdict]:
        """Те же вердикты, что и run_tick, но без уведомлений и записи в журнал."""
        return await self._tick(user_id, now, dry_run=True)

    async def _tick(self, user_id: int, now: datetime, *, dry_run: bool) -> List[Verdict]:
        now = as_local_naive(now, self.tz)
        ctx = {"user_id": user_id}

        try:
            rules = await self.rules.list_enabled_rules(user_id)
        except StoreUnavailable:
            # тик пропускаем целиком
            logger.exception("tick_aborted: rules not loaded", extra=ctx)
            return []

        logger.info("tick: %s rule(s) at %s dry_run=%s", len(rules), now.isoformat(), dry_run, extra=ctx)

        verdicts: List[Verdict] = []
        for rule in rules:
            rctx = {
                "user_id": user_id,
                "rule_id": getattr(rule, "id", "-"),
                "activity_type_id": getattr(rule, "activity_type_id", "-"),
            }
            try:
                verdict = await self.evaluator.evaluate(rule, now)
                if verdict.fired and not dry_run:
                    verdict = await self._fire(rule, verdict, now)
            except InvalidRule as e:
                logger.warning("rule_skipped: %s", e.reason, extra=rctx)
                continue
            except Exception:
                logger.exception("rule_failed", extra=rctx)
                continue

            logger.info("verdict: %s (%s)", verdict.outcome.value, verdict.reason, extra=rctx)
            verdicts.append(verdict)

        return verdicts

    async def _activity_name(self, activity_type_id: int) -> str:
        try:
            name = await self.catalog.name_of(activity_type_id)
        except StoreUnavailable:
            logger.warning("activity_name_lookup_failed", extra={"activity_type_id": activity_type_id})
            name = None
        return name or self.fallback_activity_name

    async def _send(self, notification_id: int, title: str, body: str) -> None:
        try:
            result = await self.sink.send(notification_id, title, body)
        except Exception as e:
            raise NotificationDeliveryFailed(notification_id, repr(e)) from e
        if not isinstance(result, SendResult) or not result.ok:
            reason = getattr(result, "error", None) or "sink returned failure"
            raise NotificationDeliveryFailed(notification_id, reason)

    async def _fire(self, rule, verdict: Verdict, now: datetime) -> Verdict:
        ctx = {
            "user_id": rule.user_id,
            "rule_id": rule.id,
            "activity_type_id": rule.activity_type_id,
        }
        name = await self._activity_name(rule.activity_type_id)
        title, body = compose_reminder(name, self.language)
        notification_id = notification_id_for(rule.user_id, rule.activity_type_id)

        try:
            await self._send(notification_id, title, body)
        except NotificationDeliveryFailed as e:
            logger.error("delivery_failed: %s", e.reason, extra=ctx)
            return replace(verdict, delivered=False)

        try:
            await self.trigger_log.append(rule.user_id, rule.activity_type_id, now)
        except StoreUnavailable:
            # уведомление ушло, журнал не записан: на следующем тике возможен дубль
            logger.exception("trigger_log_append_failed", extra=ctx)

        logger.info("reminder_sent: %s id=%s", name, notification_id, extra=ctx)
        return replace(verdict, delivered=True)

