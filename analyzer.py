import logging
from typing import Iterable, List, Optional

from canvaslog.ingest import parse_lines
from replay import replay
from report import Check, Report, ReportBuilder
from settings import AnalyzerConfig
from validators import (
    ArtistCountCheck,
    ColorConsistencyCheck,
    ColorUniquenessCheck,
    IslandCheck,
    OverlapCheck,
    PatternUniquenessCheck,
    PixelsDrawnCheck,
    ShapeUniquenessCheck,
    StructureCheck,
)


logger = logging.getLogger(__name__)


class LogReadError(Exception):
    """The log could not be read at all; no check has run."""


def build_checks(config: AnalyzerConfig):
    checks: List[Check] = [
        StructureCheck(),
        OverlapCheck(),
        ColorUniquenessCheck(),
        ColorConsistencyCheck(),
        ArtistCountCheck(
            expected_main=config.expected_main,
            expected_rookie=config.expected_rookie,
            category_source=config.category_source,
            first_artist_id=config.first_artist_id,
        ),
        PixelsDrawnCheck(
            strict_pixel_count=config.strict_pixel_count,
            expected_pixels_per_artist=config.expected_pixels_per_artist,
        ),
        PatternUniquenessCheck(),
        IslandCheck(),
        ShapeUniquenessCheck(),
    ]

    skipped: List[str] = []
    if not config.check_islands:
        skipped.append(IslandCheck.name)
    if not config.check_shapes:
        skipped.append(ShapeUniquenessCheck.name)

    return checks, skipped


def analyze_lines(lines: Iterable[str], config: Optional[AnalyzerConfig] = None) -> Report:
    config = (config or AnalyzerConfig()).validate()

    outcome = replay(
        parse_lines(lines, config.dialect),
        spawn_on_first_draw=config.dialect.spawn_on_first_draw,
    )

    checks, skipped = build_checks(config)
    return ReportBuilder(checks, skipped).build(outcome)


def read_log(path: str) -> List[str]:
    try:
        with open(path, encoding="utf-8") as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        raise LogReadError(f"cannot read log file {path}: {e}") from e

    logger.info("read %d lines from %s", len(lines), path)
    return lines


def analyze_file(path: str, config: Optional[AnalyzerConfig] = None) -> Report:
    return analyze_lines(read_log(path), config)
