import io
import logging
from typing import Callable, List, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.dates as mdates
import matplotlib.pyplot as plt

from classifier import Category
from layout import BAND_HEIGHT, ROW_OFFSETS, SourceSeries, band_base, color_bucket
from settings import Settings


logger = logging.getLogger(__name__)

ERROR_EDGE_COLOR = "tab:red"


class RenderError(RuntimeError):
    pass


def bucket_color(bucket: int, band_height: int = BAND_HEIGHT):
    """
    Sample the viridis palette for a colour bucket.
    """
    palette = matplotlib.colormaps["viridis"]
    position = bucket / max(band_height - 1, 1)
    return palette(min(max(position, 0.0), 1.0))


def lane_ticks(series: Sequence[SourceSeries]):
    positions: List[float] = []
    labels: List[str] = []

    for s in series:
        base = band_base(s.index)
        for category in Category:
            positions.append(float(base + ROW_OFFSETS[category]))
            labels.append(f"{s.name} {category.value}")

    return positions, labels


def render_png(
    series: Sequence[SourceSeries],
    color_for: Callable[[float], int] = color_bucket,
    settings: Settings | None = None,
) -> bytes:
    """
    Draw one scatter series per log source and return the PNG bytes.

    Dots are coloured per point through `color_for`; errored events get a
    red outline.
    """
    settings = settings or Settings()

    if not any(len(s) for s in series):
        raise RenderError("no lock events to plot")

    fig, ax = plt.subplots(figsize=(settings.width, settings.height))
    try:
        for s in series:
            if not s.points:
                logger.info("source %s has no lock events", s.name)
                continue

            xs = [t for t, _ in s.points]
            ys = [y for _, y in s.points]

            ax.scatter(
                xs,
                ys,
                s=settings.dot_size ** 2,
                c=[bucket_color(color_for(y)) for y in ys],
                edgecolors=[ERROR_EDGE_COLOR if e else "none" for e in s.errored],
                linewidths=1.0,
            )

        positions, labels = lane_ticks(series)
        ax.set_yticks(positions)
        ax.set_yticklabels(labels)

        ax.xaxis.set_major_formatter(mdates.DateFormatter("%H:%M"))
        ax.grid(True, axis="x", alpha=0.3)
        fig.tight_layout()

        buf = io.BytesIO()
        fig.savefig(buf, format="png", dpi=settings.dpi)
    except (ValueError, OverflowError) as e:
        raise RenderError(f"failed to render chart: {e}") from e
    finally:
        plt.close(fig)

    return buf.getvalue()
