import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

from decoder import LogLevel, LogRecord


class Category(str, Enum):
    ACQUIRED = "acquired"
    RELEASED = "released"
    EXPIRED = "expired"


@dataclass(frozen=True)
class ClassifiedEvent:
    timestamp: datetime
    category: Category
    errored: bool
    message: str = ""


# Ordered lifecycle rules.
# Order matters: the first pattern that matches decides the category.
LIFECYCLE_RULES: List[Tuple[re.Pattern, Category]] = [
    (re.compile(r"register-ttl\..*lock-expired"), Category.EXPIRED),
    (re.compile(r"lock\..*acquired-lock"), Category.ACQUIRED),
    (re.compile(r"release\..*released-lock"), Category.RELEASED),
]


def match_category(message: str) -> Optional[Category]:
    """
    Map a log message to at most one lifecycle category.

    Returns None when the message is not a lock lifecycle event.
    """
    if not message:
        return None

    for pattern, category in LIFECYCLE_RULES:
        if pattern.search(message):
            return category

    return None


def classify(records: Iterable[LogRecord]) -> Iterator[ClassifiedEvent]:
    """
    Turn structured records from one log source into lifecycle events.

    Records that match no pattern produce nothing. Only the ERROR level
    marks an event as errored; FATAL does not.
    """
    for record in records:
        category = match_category(record.message)
        if category is None:
            continue

        yield ClassifiedEvent(
            timestamp=record.timestamp,
            category=category,
            errored=record.level == LogLevel.ERROR,
            message=record.message,
        )
