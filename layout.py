from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Sequence, Tuple

from classifier import Category, ClassifiedEvent


ROWS_PER_SOURCE = 3
SPACE_BETWEEN_SOURCES = 2
BAND_HEIGHT = ROWS_PER_SOURCE * SPACE_BETWEEN_SOURCES

# Lanes at or below this value keep their own colour; higher lanes fold.
# Deliberately not derived from BAND_HEIGHT.
COLOR_FOLD_THRESHOLD = 3

ROW_OFFSETS: Dict[Category, int] = {
    Category.ACQUIRED: 0,
    Category.RELEASED: 1,
    Category.EXPIRED: 2,
}

Point = Tuple[datetime, float]


@dataclass(frozen=True)
class SourceSeries:
    """
    Plot coordinates for a single log source.

    `errored` runs parallel to `points`.
    """
    name: str
    index: int
    points: Tuple[Point, ...]
    errored: Tuple[bool, ...]

    def __len__(self) -> int:
        return len(self.points)


def band_base(
    source_index: int,
    rows_per_source: int = ROWS_PER_SOURCE,
    spacing: int = SPACE_BETWEEN_SOURCES,
) -> int:
    return source_index * rows_per_source * spacing


def lane_for(
    source_index: int,
    category: Category,
    rows_per_source: int = ROWS_PER_SOURCE,
    spacing: int = SPACE_BETWEEN_SOURCES,
) -> float:
    return float(
        band_base(source_index, rows_per_source, spacing) + ROW_OFFSETS[category]
    )


def layout(
    source_index: int,
    events: Iterable[ClassifiedEvent],
    rows_per_source: int = ROWS_PER_SOURCE,
    spacing: int = SPACE_BETWEEN_SOURCES,
) -> List[Point]:
    """
    Place each event of one source on its lane.

    One point per event, in input order; nothing is sorted or dropped.
    """
    return [
        (
            e.timestamp,
            lane_for(source_index, e.category, rows_per_source, spacing),
        )
        for e in events
    ]


def build_source_series(
    source_index: int,
    name: str,
    events: Sequence[ClassifiedEvent],
) -> SourceSeries:
    return SourceSeries(
        name=name,
        index=source_index,
        points=tuple(layout(source_index, events)),
        errored=tuple(e.errored for e in events),
    )


def color_bucket(y: float, band_height: int = BAND_HEIGHT) -> int:
    """
    Palette index for a lane value.

    Lanes up to 3 map to themselves; anything above is folded modulo the
    band height. The threshold stays 3 even if the band height changes.
    """
    color = int(y)
    if y > COLOR_FOLD_THRESHOLD:
        color = color % band_height
    return color
