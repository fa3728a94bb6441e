import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv


ENV_PREFIX = "LOGANALYSIS_"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    dot_size: float = 5.0
    dpi: float = 100.0
    width: float = 10.0
    height: float = 5.0

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv()

        log_level = (os.getenv(ENV_PREFIX + "LOG_LEVEL") or cls.log_level).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValueError(f"{ENV_PREFIX}LOG_LEVEL is not a log level: {log_level!r}")

        return cls(
            log_level=log_level,
            dot_size=_env_float("DOT_SIZE", cls.dot_size),
            dpi=_env_float("DPI", cls.dpi),
            width=_env_float("WIDTH", cls.width),
            height=_env_float("HEIGHT", cls.height),
        )
