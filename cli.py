import argparse
import logging
import sys

from analyzer import LogReadError, analyze_file
from canvaslog.detect import LAYOUTS
from report import render_text
from settings import CATEGORY_SOURCES, ConfigError, load_config


EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


# ---------------- CLI ----------------

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Canvas log checker: validates the log of a concurrent "
        "pixel-drawing program"
    )
    parser.add_argument("--log-file", required=True)
    parser.add_argument("--expected-main", type=int)
    parser.add_argument("--expected-rookie", type=int)

    parser.add_argument(
        "--strict-pixel-count",
        action="store_true",
        default=None,
        help="Require every artist to draw exactly --pixels-per-artist pixels",
    )
    parser.add_argument("--pixels-per-artist", type=int)

    parser.add_argument(
        "--category-source",
        choices=CATEGORY_SOURCES,
        help="Tell main from rookie artists by spawn tag or by id range, "
        "or only count all artists",
    )
    parser.add_argument("--first-artist-id", type=int)

    parser.add_argument("--check-islands", action="store_true", default=None)
    parser.add_argument("--check-shapes", action="store_true", default=None)

    parser.add_argument(
        "--layout",
        choices=sorted(LAYOUTS),
        help="Record layout: tagged SPAWN/DRAW/DONE lines, or one "
        "'tid, x, y, r, g, b' pixel per line",
    )
    parser.add_argument(
        "--delimiter",
        help="Field separator of the log ('space' for any whitespace)",
    )
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("-v", "--verbose", action="store_true")

    return parser.parse_args(argv)


# ---------------- Main ----------------

def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(
            expected_main=args.expected_main,
            expected_rookie=args.expected_rookie,
            strict_pixel_count=args.strict_pixel_count,
            expected_pixels_per_artist=args.pixels_per_artist,
            category_source=args.category_source,
            first_artist_id=args.first_artist_id,
            check_islands=args.check_islands,
            check_shapes=args.check_shapes,
            layout=args.layout,
            delimiter=args.delimiter,
        )
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_ERROR

    # ---- Analyze ----
    try:
        report = analyze_file(args.log_file, config)
    except LogReadError as e:
        print(f"Input error: {e}", file=sys.stderr)
        return EXIT_ERROR

    # ---- Report ----
    if args.json:
        print(report.to_json())
    else:
        print(render_text(report))

    return EXIT_PASSED if report.passed else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
