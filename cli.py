import argparse
import logging
import sys
from typing import BinaryIO, List, Optional

from decoder import LogDecodeError
from pipeline import build_series, load_sources
from render import RenderError, render_png
from settings import Settings


VERSION = "0.1.0"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("loganalysis")


# ---------------- CLI ----------------

def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        prog="loganalysis",
        description="Logging Analysis: a CLI to analyze distributed system logs",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    locket = commands.add_parser(
        "locket",
        help="Parse and chart locket logs",
        description="Parse and chart locket logs. The PNG is written to stdout.",
    )
    locket.add_argument("files", nargs="+", metavar="FILE")

    return parser.parse_args(argv)


# ---------------- Commands ----------------

def run_locket(files: List[str], settings: Settings, out: BinaryIO):
    sources = load_sources(files)
    series = build_series(sources, names=files)
    image = render_png(series, settings=settings)

    out.write(image)
    out.flush()


# ---------------- Main ----------------

def main(argv: Optional[List[str]] = None, out: Optional[BinaryIO] = None) -> int:
    args = parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        logging.basicConfig(stream=sys.stderr, format=LOG_FORMAT)
        logger.error("invalid configuration: %s", e)
        return 1

    logging.basicConfig(
        level=settings.log_level,
        stream=sys.stderr,
        format=LOG_FORMAT,
    )

    if out is None:
        out = sys.stdout.buffer

    try:
        if args.command == "locket":
            run_locket(args.files, settings, out)
    except (OSError, LogDecodeError, RenderError) as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
