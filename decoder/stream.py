import logging
from typing import BinaryIO, Iterable, Iterator

from .parsers import parse_structured
from .types import LogDecodeError, LogRecord


logger = logging.getLogger(__name__)


# ---------- Metrics ----------

class DecodeStats:
    def __init__(self):
        self.structured = 0
        self.unstructured = 0

    @property
    def total(self) -> int:
        return self.structured + self.unstructured

    def record(self, record: LogRecord):
        if record.is_structured:
            self.structured += 1
        else:
            self.unstructured += 1


# ---------- Decode Pipeline ----------

def _split_line(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
    if raw.endswith(b"\r"):
        raw = raw[:-1]
    return raw


def decode_lines(
    lines: Iterable[bytes],
    name: str = "<stream>",
    stats: DecodeStats | None = None,
) -> Iterator[LogRecord]:
    """
    Decode raw byte lines into LogRecords, lazily and in order.

    A line that is not a structured record is still yielded, flagged
    unstructured. A line that is not valid UTF-8 raises LogDecodeError
    and ends the stream.
    """
    for lineno, raw in enumerate(lines, 1):
        try:
            text = _split_line(raw).decode("utf-8")
        except UnicodeDecodeError as e:
            raise LogDecodeError(name, lineno, f"invalid UTF-8: {e.reason}") from e

        record = parse_structured(text) or LogRecord.unstructured(text)
        if not record.is_structured:
            logger.debug("%s:%d: unstructured line", name, lineno)

        if stats is not None:
            stats.record(record)
        yield record


def decode_stream(
    stream: BinaryIO,
    name: str = "<stream>",
    stats: DecodeStats | None = None,
) -> Iterator[LogRecord]:
    """
    Decode a binary stream without reading it into memory first.
    """
    return decode_lines(iter(stream.readline, b""), name=name, stats=stats)
