import json
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from .detect import find_payload_start
from .types import LogLevel, LogRecord


_JSON = json.JSONDecoder()


# -----------------------------
# TIMESTAMPS
# -----------------------------

EPOCH_RE = re.compile(r"^(?P<sec>\d+)(?:\.(?P<frac>\d*))?$")

RFC3339_RE = re.compile(
    r"""
    ^
    (?P<date>\d{4}-\d{2}-\d{2})
    [Tt\ ]
    (?P<time>\d{2}:\d{2}:\d{2})
    (?:\.(?P<frac>\d+))?
    (?P<tz>[Zz]|[+-]\d{2}:\d{2})
    $
    """,
    re.VERBOSE,
)


def _micros(frac: Optional[str]) -> int:
    # anything finer than a microsecond is truncated
    if not frac:
        return 0
    return int(frac[:6].ljust(6, "0"))


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse either an epoch-seconds string ("1476312345.123456789")
    or an RFC 3339 time ("2023-01-02T15:04:05.123456789Z").

    Returns a UTC-aware datetime, or None when neither shape fits.
    """
    m = EPOCH_RE.match(value)
    if m:
        try:
            base = datetime.fromtimestamp(int(m.group("sec")), tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
        return base + timedelta(microseconds=_micros(m.group("frac")))

    m = RFC3339_RE.match(value)
    if not m:
        return None

    tz = m.group("tz")
    if tz in ("Z", "z"):
        tz = "+00:00"

    try:
        parsed = datetime.fromisoformat(f"{m.group('date')}T{m.group('time')}{tz}")
    except ValueError:
        return None

    parsed = parsed.replace(microsecond=_micros(m.group("frac")))
    return parsed.astimezone(timezone.utc)


# -----------------------------
# LEVELS
# -----------------------------

LEVEL_NAMES = {level.name.lower(): level for level in LogLevel}


def parse_level(payload: Dict[str, Any]) -> Optional[LogLevel]:
    """
    Older writers emit an integer `log_level`, newer ones a `level` name.
    A record with neither is DEBUG.
    """
    if "log_level" in payload:
        raw = payload["log_level"]
        if isinstance(raw, bool) or not isinstance(raw, int):
            return None
        try:
            return LogLevel(raw)
        except ValueError:
            return None

    if "level" in payload:
        raw = payload["level"]
        if not isinstance(raw, str):
            return None
        return LEVEL_NAMES.get(raw.lower())

    return LogLevel.DEBUG


# -----------------------------
# STRUCTURED LINE PARSER
# -----------------------------

def _optional_str(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        return None
    return value


def parse_structured(line: str) -> Optional[LogRecord]:
    """
    Parse lines like:
      {"timestamp":"1476312345.12","source":"locket","message":"locket.lock.acquired-lock","log_level":1,"data":{"session":"3"}}

    Leading text before the first `{` and trailing text after the JSON
    object are ignored. Returns None when the line is not a structured
    record.
    """
    start = find_payload_start(line)
    if start is None:
        return None

    try:
        payload, _ = _JSON.raw_decode(line, start)
    except (ValueError, RecursionError):
        return None

    if not isinstance(payload, dict):
        return None

    ts = payload.get("timestamp")
    if not isinstance(ts, str):
        return None
    timestamp = parse_timestamp(ts)
    if timestamp is None:
        return None

    level = parse_level(payload)
    if level is None:
        return None

    source = _optional_str(payload, "source")
    message = _optional_str(payload, "message")
    if source is None or message is None:
        return None

    data = payload.get("data")
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return None
    data = dict(data)

    error = None
    if level in (LogLevel.ERROR, LogLevel.FATAL) and "error" in data:
        error = data.pop("error")
        if not isinstance(error, str):
            return None

    trace = data.pop("trace", "")
    session = data.pop("session", "")
    if not isinstance(trace, str) or not isinstance(session, str):
        return None

    return LogRecord(
        is_structured=True,
        raw=line,
        level=level,
        timestamp=timestamp,
        message=message,
        source=source,
        session=session,
        error=error,
        trace=trace,
        data=data,
    )
