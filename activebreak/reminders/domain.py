from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Outcome(str, Enum):
    FIRE = "fire"
    SUPPRESSED_DISABLED = "suppressed_disabled"
    SUPPRESSED_BY_WINDOW = "suppressed_by_window"
    SUPPRESSED_BY_CADENCE = "suppressed_by_cadence"
    SUPPRESSED_BY_COMPLETION = "suppressed_by_completion"
    SUPPRESSED_BY_DUPLICATE = "suppressed_by_duplicate"


@dataclass(frozen=True)
class Verdict:
    rule_id: Optional[int]
    user_id: int
    activity_type_id: int
    outcome: Outcome
    evaluated_at: datetime
    reason: str = ""
    # заполняется диспетчером только для FIRE: ушло уведомление или нет
    delivered: Optional[bool] = None

    @property
    def fired(self) -> bool:
        return self.outcome is Outcome.FIRE


@dataclass(frozen=True)
class SendResult:
    ok: bool
    error: Optional[str] = None

    @classmethod
    def success(cls) -> "SendResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str) -> "SendResult":
        return cls(ok=False, error=error)


@dataclass(frozen=True)
class EngineTuning:
    """
    Эмпирические константы движка. Значения по умолчанию взяты из
    нескольких итераций мобильного клиента; крутятся через Settings.
    """
    max_tolerance_minutes: int = 3
    short_interval_minutes: int = 5
    long_cooldown_ratio: float = 0.8
    short_cooldown_ratio: float = 0.5
    min_cooldown_seconds: int = 30
    completion_fail_open: bool = True
    duplicate_fail_open: bool = True

    @classmethod
    def from_settings(cls, s) -> "EngineTuning":
        return cls(
            max_tolerance_minutes=s.MAX_TOLERANCE_MINUTES,
            short_interval_minutes=s.SHORT_INTERVAL_MINUTES,
            long_cooldown_ratio=s.LONG_COOLDOWN_RATIO,
            short_cooldown_ratio=s.SHORT_COOLDOWN_RATIO,
            min_cooldown_seconds=s.MIN_COOLDOWN_SECONDS,
            completion_fail_open=s.COMPLETION_FAIL_OPEN,
            duplicate_fail_open=s.DUPLICATE_FAIL_OPEN,
        )
