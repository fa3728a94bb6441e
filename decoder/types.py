from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, Optional


class LogLevel(IntEnum):
    """
    Severity levels as written by the locking service.

    The integer values are the ones found in the `log_level` field.
    """
    DEBUG = 0
    INFO = 1
    ERROR = 2
    FATAL = 3


class LogDecodeError(ValueError):
    """
    Raised when a byte stream does not frame as text lines.

    This terminates decoding for the whole source.
    """

    def __init__(self, source: str, line: int, reason: str):
        super().__init__(f"{source}:{line}: {reason}")
        self.source = source
        self.line = line
        self.reason = reason


@dataclass(frozen=True)
class LogRecord:
    """
    One decoded line.

    Unstructured lines only carry `raw`; every other field is empty.
    """
    is_structured: bool
    raw: str
    level: Optional[LogLevel] = None
    timestamp: Optional[datetime] = None
    message: str = ""
    source: str = ""
    session: str = ""
    error: Optional[str] = None
    trace: str = ""
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def unstructured(cls, raw: str) -> "LogRecord":
        return cls(is_structured=False, raw=raw)
