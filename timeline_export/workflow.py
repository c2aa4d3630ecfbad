"""Offline helpers for turning a Takeout archive into GPX, KML and CSV files."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .core import Timeline
from .core.exceptions import ProcessingError
from .services import ArchiveParser, FormatExporter

__all__ = ["load_timeline", "export_timeline", "export_takeout_archive", "main"]

LOGGER = logging.getLogger(__name__)


def load_timeline(archive: Path, *, sort: bool = False) -> Timeline:
    """Parse ``archive`` and optionally order the result by start time.

    Parameters
    ----------
    archive:
        Path to a Google Takeout ZIP containing Semantic Location History.
    sort:
        When ``True`` segments and visits are sorted chronologically. By
        default they keep the order in which the archive lists its files.
    """

    timeline = ArchiveParser().parse(archive)
    return timeline.sorted_chronologically() if sort else timeline


def export_timeline(
    timeline: Timeline,
    output_dir: Path,
    *,
    stem: str = "timeline",
    exporter: Optional[FormatExporter] = None,
) -> list[Path]:
    """Write the flattened segment points of ``timeline`` in every format."""

    exporter = exporter or FormatExporter()
    return exporter.write_all(timeline.points(), output_dir, stem=stem)


def export_takeout_archive(
    archive: Path,
    output_dir: Path,
    *,
    stem: str = "timeline",
    sort: bool = False,
) -> list[Path]:
    """Parse ``archive`` and write ``<stem>.gpx``, ``.kml`` and ``.csv``."""

    timeline = load_timeline(archive, sort=sort)
    if not timeline.segments:
        LOGGER.warning("Archive %s contains no movement segments", archive)
    return export_timeline(timeline, output_dir, stem=stem)


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export Google Takeout location history as GPX, KML and CSV.",
    )
    parser.add_argument("archive", type=Path, help="Path to the Takeout ZIP archive")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory that receives the exported files (default: current directory)",
    )
    parser.add_argument(
        "--stem",
        default="timeline",
        help="Base filename for the exported files (default: timeline)",
    )
    parser.add_argument(
        "--sort",
        action="store_true",
        help="Order segments by start time instead of archive order.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        written = export_takeout_archive(
            args.archive,
            args.output_dir,
            stem=args.stem,
            sort=args.sort,
        )
    except ProcessingError as exc:
        LOGGER.error("%s", exc)
        return 1

    for path in written:
        print(path)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
