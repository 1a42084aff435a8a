from .domain import EngineTuning, Outcome, SendResult, Verdict
from .errors import InvalidRule, NotificationDeliveryFailed, ReminderError, StoreUnavailable
from .evaluator import RuleEvaluator
from .dispatcher import ReminderDispatcher

__all__ = [
    "EngineTuning",
    "Outcome",
    "SendResult",
    "Verdict",
    "ReminderError",
    "StoreUnavailable",
    "NotificationDeliveryFailed",
    "InvalidRule",
    "RuleEvaluator",
    "ReminderDispatcher",
]
