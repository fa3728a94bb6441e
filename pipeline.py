import logging
import os
from collections import Counter
from typing import List, Sequence

from classifier import ClassifiedEvent, classify
from decoder import DecodeStats, decode_stream
from layout import SourceSeries, build_source_series


logger = logging.getLogger(__name__)


def load_source(path: str) -> List[ClassifiedEvent]:
    """
    Decode and classify a single log file.

    The events are fully materialised so that a decode failure anywhere in
    the file surfaces here, before anything is drawn.
    """
    stats = DecodeStats()

    with open(path, "rb") as f:
        records = decode_stream(f, name=path, stats=stats)
        events = list(classify(r for r in records if r.is_structured))

    by_category = Counter(e.category.value for e in events)
    logger.info(
        "%s: %d lines (%d structured, %d unstructured), %d lock events %s",
        path,
        stats.total,
        stats.structured,
        stats.unstructured,
        len(events),
        dict(by_category),
    )
    return events


def load_sources(paths: Sequence[str]) -> List[List[ClassifiedEvent]]:
    # In argument order; the first failing file aborts the run.
    return [load_source(p) for p in paths]


def build_series(
    sources: Sequence[Sequence[ClassifiedEvent]],
    names: Sequence[str] | None = None,
) -> List[SourceSeries]:
    if names is None:
        names = [f"source-{i}" for i in range(len(sources))]

    return [
        build_source_series(i, os.path.basename(name), events)
        for i, (name, events) in enumerate(zip(names, sources, strict=True))
    ]
