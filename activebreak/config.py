from __future__ import annotations
from typing import Annotated, List, Optional

from pydantic import Field, AliasChoices, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _parse_csv_ints(value: str | List[int] | None) -> List[int]:
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return [int(x) for x in value]
    if isinstance(value, int):
        return [value]
    parts = [p.strip() for p in str(value).split(",") if p.strip()]
    return [int(p) for p in parts]


class Settings(BaseSettings):
    # === Telegram ===
    BOT_TOKEN: str = ""

    # === Storage / DB ===
    DATABASE_URL: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "DB_URL"),
    )
    POSTGRES_DSN: Optional[str] = None
    SQL_ECHO: bool = False
    INIT_DB_ON_START: bool = False

    # === Планировщик ===
    REMINDER_TZ: str = "UTC"
    TICK_INTERVAL_MINUTES: int = 5
    # пусто = все пользователи, у которых есть включённые правила
    TICK_USER_IDS: Annotated[List[int], NoDecode] = Field(default_factory=list)

    # === Движок напоминаний (эмпирические константы, можно крутить) ===
    MAX_TOLERANCE_MINUTES: int = 3
    SHORT_INTERVAL_MINUTES: int = 5
    LONG_COOLDOWN_RATIO: float = 0.8
    SHORT_COOLDOWN_RATIO: float = 0.5
    MIN_COOLDOWN_SECONDS: int = 30
    COMPLETION_FAIL_OPEN: bool = True
    DUPLICATE_FAIL_OPEN: bool = True

    # === Уведомления ===
    NOTIFICATION_LANGUAGE: str = Field("en", description="en | zh")
    FALLBACK_ACTIVITY_NAME: str = "exercise"

    # === Логи ===
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=False, alias="LOG_JSON")
    log_sql: str = Field(default="WARNING", alias="LOG_SQL")
    log_aiogram: str = Field(default="INFO", alias="LOG_AIOGRAM")

    # ---- валидаторы ДО валидации типов ----
    @field_validator("TICK_USER_IDS", mode="before")
    @classmethod
    def _v_user_ids(cls, v):
        return _parse_csv_ints(v)

    @field_validator("LONG_COOLDOWN_RATIO", "SHORT_COOLDOWN_RATIO")
    @classmethod
    def _v_ratio(cls, v: float) -> float:
        if not 0 < v <= 1:
            raise ValueError("cooldown ratio must be in (0, 1]")
        return v

    @field_validator("TICK_INTERVAL_MINUTES", "SHORT_INTERVAL_MINUTES")
    @classmethod
    def _v_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("NOTIFICATION_LANGUAGE")
    @classmethod
    def _v_language(cls, v: str) -> str:
        v = (v or "en").lower()
        return v if v in {"en", "zh"} else "en"

    @model_validator(mode="after")
    def _backfill_dsn(self):
        # совместимость DSN/URL
        if not self.DATABASE_URL and self.POSTGRES_DSN:
            self.DATABASE_URL = self.POSTGRES_DSN
        if not self.DATABASE_URL:
            self.DATABASE_URL = "sqlite+aiosqlite:///./activebreak.db"
        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
