from .base import Base
from .user import User
from .physical_activity import PhysicalActivity, PhysicalActivityName
from .reminder_rule import ReminderRule
from .activity_record import ActivityRecord
from .trigger_log import TriggerLogEntry

__all__ = [
    "Base",
    "User",
    "PhysicalActivity",
    "PhysicalActivityName",
    "ReminderRule",
    "ActivityRecord",
    "TriggerLogEntry",
]
