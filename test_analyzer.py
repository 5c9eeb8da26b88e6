import json

import pytest

from analyzer import LogReadError, analyze_file, analyze_lines, read_log
from canvaslog.detect import PIXEL_DIALECT
from canvaslog.types import ArtistCategory, Color
from loggen import generate_canvas_log
from report import CheckStatus, render_text
from settings import AnalyzerConfig, ConfigError
from violations import ArtistCountMismatch, DuplicatePattern, MixedColors, OverlapDraw


CHECK_ORDER = [
    "parse",
    "structure",
    "overlap",
    "unique_colors",
    "consistent_colors",
    "artist_count",
    "pixels_drawn",
    "unique_patterns",
    "islands",
    "unique_shapes",
]


class TestCleanRun:
    def test_full_cast_passes(self) -> None:
        report = analyze_lines(generate_canvas_log())
        assert report.passed
        assert report.failed_checks() == []
        assert report.stats["artists"] == 54
        assert list(report.checks) == CHECK_ORDER

    def test_optional_checks_skipped_by_default(self) -> None:
        report = analyze_lines(generate_canvas_log())
        assert report.checks["islands"].status == CheckStatus.SKIPPED
        assert report.checks["unique_shapes"].status == CheckStatus.SKIPPED

    def test_enabled_optional_check_runs(self) -> None:
        report = analyze_lines(
            generate_canvas_log(pixels=1),
            AnalyzerConfig(check_islands=True),
        )
        # single pixels are islands by definition
        assert report.checks["islands"].status == CheckStatus.FAIL
        assert len(report.checks["islands"].details) == 54
        assert not report.passed

    def test_deterministic_output(self) -> None:
        lines = generate_canvas_log(faults=["overlap", "duplicate_color"])
        first = analyze_lines(lines)
        second = analyze_lines(lines)
        assert render_text(first) == render_text(second)
        assert first.to_json() == second.to_json()


class TestFaults:
    def test_missing_main_only_fails_artist_count(self) -> None:
        report = analyze_lines(generate_canvas_log(faults=["missing_main"]))
        assert not report.passed
        assert report.failed_checks() == ["artist_count"]
        assert report.checks["artist_count"].details == (
            ArtistCountMismatch(category=ArtistCategory.MAIN, expected=4, actual=3),
        )
        for name in CHECK_ORDER[:-2]:
            if name != "artist_count":
                assert report.checks[name].status == CheckStatus.PASS

    def test_overlap(self) -> None:
        report = analyze_lines(generate_canvas_log(faults=["overlap"]))
        (overlap,) = report.checks["overlap"].details
        assert isinstance(overlap, OverlapDraw)
        assert (overlap.first_owner, overlap.second_owner) == (0, 1)

    def test_duplicate_pattern(self) -> None:
        report = analyze_lines(generate_canvas_log(faults=["duplicate_pattern"]))
        (dup,) = report.checks["unique_patterns"].details
        assert isinstance(dup, DuplicatePattern)
        assert dup.artist_ids == (0, 1)

    def test_every_fault_at_once(self) -> None:
        report = analyze_lines(
            generate_canvas_log(
                faults=[
                    "overlap",
                    "duplicate_color",
                    "duplicate_pattern",
                    "missing_main",
                    "idle_artist",
                ]
            )
        )
        assert report.failed_checks() == [
            "overlap",
            "unique_colors",
            "artist_count",
            "pixels_drawn",
            "unique_patterns",
        ]

    def test_parse_error_fails_run(self) -> None:
        lines = generate_canvas_log() + ["DRAW, 0, nowhere, 1"]
        report = analyze_lines(lines)
        assert not report.passed
        assert report.failed_checks() == ["parse"]
        assert report.checks["parse"].details[0].line_number == len(lines)

    def test_strict_config_without_expectation(self) -> None:
        with pytest.raises(ConfigError):
            analyze_lines([], AnalyzerConfig(strict_pixel_count=True))

    def test_draw_logged_before_spawn(self) -> None:
        report = analyze_lines(
            ["DRAW, 0, 1, 1", "SPAWN, 0, red, a, main"],
            AnalyzerConfig(expected_main=1, expected_rookie=0),
        )
        assert report.checks["structure"].status == CheckStatus.PASS
        assert report.checks["pixels_drawn"].status == CheckStatus.PASS
        assert report.passed


class TestPixelLog:
    CONFIG = AnalyzerConfig(
        dialect=PIXEL_DIALECT,
        category_source="total",
        expected_main=1,
        expected_rookie=2,
    )

    LINES = [
        "0, 10, 10, 255, 0, 0",
        "1, 20, 20, 0, 255, 0",
        "2, 30, 30, 0, 0, 255",
        "0, 10, 11, 255, 0, 0",
    ]

    def test_clean_pixel_log(self) -> None:
        report = analyze_lines(self.LINES, self.CONFIG)
        assert report.passed
        assert report.stats["artists"] == 3

    def test_artist_switching_color(self) -> None:
        report = analyze_lines(self.LINES + ["2, 30, 31, 255, 0, 0"], self.CONFIG)
        assert report.failed_checks() == ["consistent_colors"]
        assert report.checks["consistent_colors"].details == (
            MixedColors(artist_id=2, colors=(Color(0, 0, 255), Color(255, 0, 0))),
        )

    def test_shared_color(self) -> None:
        report = analyze_lines(self.LINES + ["3, 40, 40, 0, 255, 0"], self.CONFIG)
        assert report.failed_checks() == ["unique_colors", "artist_count"]

class TestReportOutput:
    def test_json_shape(self) -> None:
        report = analyze_lines(generate_canvas_log(faults=["duplicate_color"]))
        data = json.loads(report.to_json())
        assert data["passed"] is False
        detail = data["checks"]["unique_colors"]["details"][0]
        assert detail["kind"] == "DuplicateColor"
        assert detail["artist_ids"] == [0, 1]
        assert detail["color"].startswith("(")

    def test_text_lists_failures(self) -> None:
        report = analyze_lines(generate_canvas_log(faults=["idle_artist"]))
        text = render_text(report)
        assert "[FAIL   ] pixels_drawn" in text
        assert "artist 53 drew no pixels" in text
        assert text.endswith("RESULT: FAILED")

    def test_text_truncates_long_lists(self) -> None:
        report = analyze_lines(
            generate_canvas_log(pixels=1), AnalyzerConfig(check_islands=True)
        )
        text = render_text(report, max_details=5)
        assert "... and 49 more" in text


class TestFiles:
    def test_analyze_file(self, tmp_path) -> None:
        path = tmp_path / "canvas.log"
        generate_canvas_log(str(path))
        assert analyze_file(str(path)).passed

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(LogReadError):
            read_log(str(tmp_path / "absent.log"))

    def test_undecodable_file(self, tmp_path) -> None:
        path = tmp_path / "binary.log"
        path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(LogReadError):
            analyze_file(str(path))
