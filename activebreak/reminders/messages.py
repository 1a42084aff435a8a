from __future__ import annotations

_TEXTS = {
    "en": ("Exercise Reminder", "Time to exercise: {name}"),
    "zh": ("运动提醒", "该运动了: {name}"),
}


def notification_id_for(user_id: int, activity_type_id: int) -> int:
    """
    Детерминированный id слота уведомления: повторные напоминания по той же
    паре (user, activity) заменяют предыдущее, а не копятся.
    """
    return user_id * 1000 + activity_type_id


def compose_reminder(activity_name: str, language: str = "en") -> tuple[str, str]:
    title, body = _TEXTS.get(language, _TEXTS["en"])
    return title, body.format(name=activity_name)
