from .stream import DecodeStats, decode_lines, decode_stream
from .types import LogDecodeError, LogLevel, LogRecord

__all__ = [
    "DecodeStats",
    "LogDecodeError",
    "LogLevel",
    "LogRecord",
    "decode_lines",
    "decode_stream",
]
