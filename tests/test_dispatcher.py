from datetime import datetime, time, timedelta, timezone

from activebreak.reminders.domain import Outcome
from activebreak.reminders.evaluator import RuleEvaluator
from activebreak.reminders.messages import compose_reminder, notification_id_for

from tests.fakes import FakeActivityStore, FakeRule, FakeRuleStore

NOW = datetime(2025, 1, 2, 9, 0)


class TestFire:
    async def test_sends_then_logs(self, make_dispatcher, sink, trigger_log):
        verdicts = await make_dispatcher([FakeRule()]).run_tick(7, NOW)

        assert [v.outcome for v in verdicts] == [Outcome.FIRE]
        assert verdicts[0].delivered is True
        assert sink.sent == [(7003, "Exercise Reminder", "Time to exercise: Squats")]
        assert [(e.user_id, e.activity_type_id, e.triggered_at) for e in trigger_log.appended] == [
            (7, 3, NOW)
        ]

    async def test_second_tick_at_same_instant_is_deduplicated(self, make_dispatcher, sink):
        dispatcher = make_dispatcher([FakeRule()])
        await dispatcher.run_tick(7, NOW)
        verdicts = await dispatcher.run_tick(7, NOW)
        assert verdicts[0].outcome is Outcome.SUPPRESSED_BY_DUPLICATE
        assert len(sink.sent) == 1

    async def test_only_requested_users_rules(self, make_dispatcher, sink):
        rules = [FakeRule(id=1, user_id=7), FakeRule(id=2, user_id=8)]
        verdicts = await make_dispatcher(rules).run_tick(7, NOW)
        assert [v.rule_id for v in verdicts] == [1]

    async def test_chinese_texts(self, make_dispatcher, sink, catalog):
        catalog.names[3] = "深蹲"
        await make_dispatcher([FakeRule()], language="zh").run_tick(7, NOW)
        assert sink.sent[0][1:] == ("运动提醒", "该运动了: 深蹲")

    async def test_unknown_activity_name_falls_back(self, make_dispatcher, sink, catalog):
        catalog.names.clear()
        await make_dispatcher([FakeRule()]).run_tick(7, NOW)
        assert sink.sent[0][2] == "Time to exercise: exercise"

    async def test_catalog_failure_falls_back(self, make_dispatcher, sink, catalog):
        catalog.fail = True
        verdicts = await make_dispatcher([FakeRule()], fallback_activity_name="a break").run_tick(7, NOW)
        assert verdicts[0].delivered is True
        assert sink.sent[0][2] == "Time to exercise: a break"

    async def test_aware_now_is_converted_to_local_time(self, make_dispatcher, trigger_log):
        aware = datetime(2025, 1, 2, 12, 0, tzinfo=timezone(timedelta(hours=3)))
        verdicts = await make_dispatcher([FakeRule()], tz="UTC").run_tick(7, aware)
        assert verdicts[0].outcome is Outcome.FIRE
        assert verdicts[0].evaluated_at == NOW
        assert trigger_log.appended[0].triggered_at == NOW


class TestDeliveryFailure:
    async def test_failed_result_leaves_log_untouched(self, make_dispatcher, sink, trigger_log):
        sink.mode = "fail"
        verdicts = await make_dispatcher([FakeRule()]).run_tick(7, NOW)
        assert verdicts[0].outcome is Outcome.FIRE
        assert verdicts[0].delivered is False
        assert len(sink.sent) == 1
        assert trigger_log.appended == []

    async def test_raising_sink_leaves_log_untouched(self, make_dispatcher, sink, trigger_log):
        sink.mode = "raise"
        verdicts = await make_dispatcher([FakeRule()]).run_tick(7, NOW)
        assert verdicts[0].delivered is False
        assert trigger_log.appended == []

    async def test_failed_delivery_is_retried_next_tick(self, make_dispatcher, sink, trigger_log):
        dispatcher = make_dispatcher([FakeRule()])
        sink.mode = "fail"
        await dispatcher.run_tick(7, NOW)
        sink.mode = "ok"
        verdicts = await dispatcher.run_tick(7, NOW + timedelta(minutes=2))
        assert verdicts[0].delivered is True
        assert len(trigger_log.appended) == 1

    async def test_log_append_failure_does_not_abort(self, make_dispatcher, trigger_log):
        trigger_log.fail_append = True
        rules = [FakeRule(id=1), FakeRule(id=2, activity_type_id=4)]
        verdicts = await make_dispatcher(rules).run_tick(7, NOW)
        assert [v.delivered for v in verdicts] == [True, True]


class TestIsolation:
    async def test_rule_store_failure_returns_empty(self, make_dispatcher, sink):
        dispatcher = make_dispatcher([], rule_store=FakeRuleStore([FakeRule()], fail=True))
        assert await dispatcher.run_tick(7, NOW) == []
        assert sink.sent == []

    async def test_invalid_rule_is_skipped(self, make_dispatcher, sink):
        rules = [FakeRule(id=1, interval_minutes=0), FakeRule(id=2)]
        verdicts = await make_dispatcher(rules).run_tick(7, NOW)
        assert [v.rule_id for v in verdicts] == [2]
        assert len(sink.sent) == 1

    async def test_unexpected_error_in_one_rule(self, make_dispatcher, sink):
        class Flaky(FakeActivityStore):
            async def find_in_range(self, user_id, activity_type_id, start, end):
                if activity_type_id == 99:
                    raise RuntimeError("corrupted row")
                return await super().find_in_range(user_id, activity_type_id, start, end)

        dispatcher = make_dispatcher([FakeRule(id=1, activity_type_id=99), FakeRule(id=2)])
        dispatcher.evaluator = RuleEvaluator(Flaky(), dispatcher.trigger_log)

        verdicts = await dispatcher.run_tick(7, NOW)
        assert [v.rule_id for v in verdicts] == [2]
        assert sink.sent[0][0] == notification_id_for(7, 3)


class TestIdempotence:
    async def test_same_instant_same_verdicts_without_store_changes(self, make_dispatcher, sink):
        rules = [
            FakeRule(id=1),
            FakeRule(id=2, activity_type_id=4, window_start=time(10, 0)),
            FakeRule(id=3, activity_type_id=5, interval_minutes=45),
        ]
        sink.mode = "fail"  # журнал не меняется между вызовами
        dispatcher = make_dispatcher(rules)
        first = await dispatcher.run_tick(7, NOW)
        second = await dispatcher.run_tick(7, NOW)
        assert [(v.rule_id, v.outcome) for v in first] == [(v.rule_id, v.outcome) for v in second]

    async def test_preview_has_no_side_effects(self, make_dispatcher, sink, trigger_log):
        dispatcher = make_dispatcher([FakeRule()])
        first = await dispatcher.preview(7, NOW)
        second = await dispatcher.preview(7, NOW)
        assert first == second
        assert first[0].outcome is Outcome.FIRE
        assert first[0].delivered is None
        assert sink.sent == []
        assert trigger_log.appended == []


class TestMessages:
    def test_notification_id_is_deterministic(self):
        assert notification_id_for(7, 3) == 7003
        assert notification_id_for(7, 3) == notification_id_for(7, 3)
        assert notification_id_for(7, 3) != notification_id_for(7, 4)

    def test_unknown_language_defaults_to_english(self):
        assert compose_reminder("Walking", "de") == ("Exercise Reminder", "Time to exercise: Walking")
