# activebreak/reminders/evaluator.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from activebreak.reminders.cadence import is_eligible_tick, is_minute_cadence
from activebreak.reminders.domain import EngineTuning, Outcome, Verdict
from activebreak.reminders.errors import InvalidRule
from activebreak.reminders.gates import CompletionGate, DuplicateSuppressionGate
from activebreak.reminders.protocols import ActivityStore, TriggerLogStore
from activebreak.reminders.window import is_within_window

logger = logging.getLogger(__name__)


def validate_rule(rule) -> None:
    rid = getattr(rule, "id", None)
    interval = getattr(rule, "interval_minutes", None)
    if not isinstance(interval, int) or interval <= 0:
        raise InvalidRule(rid, f"interval_minutes must be positive, got {interval!r}")
    days = getattr(rule, "interval_days", 0) or 0
    if days < 0:
        raise InvalidRule(rid, f"interval_days must be >= 0, got {days!r}")
    if getattr(rule, "window_start", None) is None or getattr(rule, "window_end", None) is None:
        raise InvalidRule(rid, "time window is not set")


class RuleEvaluator:
    """
    Прогоняет правило через гейты в порядке: выключено → окно → шаг →
    уже сделал → антидубль. Первый сработавший гейт даёт вердикт.
    Состояния между вызовами нет: всё берётся из хранилищ.
    """

    def __init__(
        self,
        activities: ActivityStore,
        trigger_log: TriggerLogStore,
        tuning: EngineTuning | None = None,
    ) -> None:
        self.tuning = tuning or EngineTuning()
        self.completion = CompletionGate(activities, fail_open=self.tuning.completion_fail_open)
        self.duplicates = DuplicateSuppressionGate(trigger_log, self.tuning)

    def _verdict(self, rule, now: datetime, outcome: Outcome, reason: str) -> Verdict:
        return Verdict(
            rule_id=rule.id,
            user_id=rule.user_id,
            activity_type_id=rule.activity_type_id,
            outcome=outcome,
            evaluated_at=now,
            reason=reason,
        )

    async def evaluate(self, rule, now: datetime) -> Verdict:
        if not rule.enabled:
            return self._verdict(rule, now, Outcome.SUPPRESSED_DISABLED, "rule is disabled")

        validate_rule(rule)

        if not is_within_window(now, rule.window_start, rule.window_end):
            return self._verdict(
                rule, now, Outcome.SUPPRESSED_BY_WINDOW,
                f"{now:%H:%M} outside {rule.window_start:%H:%M}-{rule.window_end:%H:%M}",
            )

        if not is_eligible_tick(rule, now, self.tuning):
            kind = "minute" if is_minute_cadence(rule) else "day"
            return self._verdict(
                rule, now, Outcome.SUPPRESSED_BY_CADENCE, f"not a {kind} cadence point"
            )

        if await self.completion.has_recently_completed(
            rule.user_id, rule.activity_type_id, rule.interval_minutes, now
        ):
            return self._verdict(
                rule, now, Outcome.SUPPRESSED_BY_COMPLETION,
                f"activity done within last {rule.interval_minutes}m",
            )

        if await self.duplicates.has_recent_trigger(
            rule.user_id, rule.activity_type_id, rule.interval_minutes, now
        ):
            return self._verdict(
                rule, now, Outcome.SUPPRESSED_BY_DUPLICATE, "already reminded within cooldown"
            )

        return self._verdict(rule, now, Outcome.FIRE, "all gates passed")

    async def explain(self, rule, now: datetime) -> dict[str, Any]:
        """
        Диагностика: все гейты без короткого замыкания.
        Побочных эффектов нет, но гейты хранилищ реально ходят в БД.
        """
        report: dict[str, Any] = {
            "rule_id": rule.id,
            "enabled": bool(rule.enabled),
            "now": now.isoformat(),
        }
        try:
            validate_rule(rule)
        except InvalidRule as e:
            report["invalid"] = e.reason
            return report

        report["in_window"] = is_within_window(now, rule.window_start, rule.window_end)
        report["cadence_mode"] = "minute" if is_minute_cadence(rule) else "day"
        report["cadence_ok"] = is_eligible_tick(rule, now, self.tuning)
        report["completed"] = await self.completion.has_recently_completed(
            rule.user_id, rule.activity_type_id, rule.interval_minutes, now
        )
        report["recent_trigger"] = await self.duplicates.has_recent_trigger(
            rule.user_id, rule.activity_type_id, rule.interval_minutes, now
        )
        report["verdict"] = (await self.evaluate(rule, now)).outcome.value
        return report
