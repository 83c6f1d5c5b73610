import functools as ft
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class DebounceSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LULL_")

    default_delay: float = 1500
    """Delay in milliseconds used when a wrapper is created without one."""

    scheduler: Literal["thread", "asyncio"] = "thread"

    log_level: LogLevel = "WARNING"
    log_file: str | None = None


@ft.cache
def get_settings() -> DebounceSettings:
    return DebounceSettings()
