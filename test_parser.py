import types

import pytest

from canvaslog.colors import parse_color
from canvaslog.detect import PIXEL_DIALECT, Dialect
from canvaslog.ingest import parse_lines
from canvaslog.types import (
    ArtistCategory,
    ArtistDone,
    ArtistSpawn,
    Color,
    MalformedLine,
    PixelDraw,
    UnknownKind,
)


class TestColors:
    @pytest.mark.parametrize(
        "token, expected",
        [
            ("#ff8800", Color(255, 136, 0)),
            ("#FF8800", Color(255, 136, 0)),
            ("#f80", Color(255, 136, 0)),
            ("10/20/30", Color(10, 20, 30)),
            ("Red", Color(255, 0, 0)),
            ("  navy ", Color(0, 0, 128)),
        ],
    )
    def test_recognized(self, token, expected) -> None:
        assert parse_color(token) == expected

    @pytest.mark.parametrize("token", ["", "#ff88", "256/0/0", "chartreuse", "1,2,3"])
    def test_unrecognized(self, token) -> None:
        assert parse_color(token) is None

    def test_str_matches_tuple_form(self) -> None:
        assert str(Color(1, 2, 3)) == "(1, 2, 3)"


class TestParseLines:
    def test_is_lazy_generator(self) -> None:
        results = parse_lines(["DRAW, 1, 2, 3"])
        assert isinstance(results, types.GeneratorType)

    def test_each_kind(self) -> None:
        results = list(
            parse_lines(
                [
                    "SPAWN, 7, #000080, abc123, main",
                    "DRAW, 7, -3, 12",
                    "DONE, 7",
                ]
            )
        )
        assert results == [
            ArtistSpawn(
                line_number=1,
                artist_id=7,
                color=Color(0, 0, 128),
                pattern="abc123",
                category=ArtistCategory.MAIN,
            ),
            PixelDraw(line_number=2, artist_id=7, x=-3, y=12),
            ArtistDone(line_number=3, artist_id=7),
        ]

    def test_spawn_without_category(self) -> None:
        (spawn,) = list(parse_lines(["SPAWN, 1, red, s1"]))
        assert isinstance(spawn, ArtistSpawn)
        assert spawn.category is None

    def test_kind_token_case_insensitive(self) -> None:
        (draw,) = list(parse_lines(["draw, 1, 2, 3"]))
        assert isinstance(draw, PixelDraw)
        assert draw.position == (2, 3)

    def test_skips_blank_comment_and_header_lines(self) -> None:
        lines = [
            "# canvas log\n",
            "event, artist, x, y\n",
            "\n",
            "   \n",
            "DRAW, 1, 2, 3\n",
        ]
        results = list(parse_lines(lines))
        assert len(results) == 1
        # line numbers count skipped lines too
        assert results[0].line_number == 5

    def test_unknown_kind(self) -> None:
        (result,) = list(parse_lines(["PAINT, 1, 2, 3"]))
        assert isinstance(result, UnknownKind)
        assert result.token == "PAINT"
        assert result.line_number == 1

    @pytest.mark.parametrize(
        "line, reason",
        [
            ("DRAW, 1, 2", "fields"),
            ("DRAW, 1, 2, 3, 4, 5", "fields"),
            ("DRAW, 1, 2, 3, chartreuse", "color"),
            ("DRAW, +1, 2, 3", "artist id"),
            ("DRAW, 1, 1_000, 3", "x"),
            ("DRAW, 1, 2, \u0663", "y"),
            ("DRAW, one, 2, 3", "artist id"),
            ("DRAW, 1, 2.5, 3", "x"),
            ("DRAW, -1, 2, 3", "negative"),
            ("SPAWN, 1, chartreuse, s1", "color"),
            ("SPAWN, 1, red, , main", "pattern"),
            ("SPAWN, 1, red, s1, veteran", "category"),
            ("DONE", "fields"),
        ],
    )
    def test_malformed(self, line, reason) -> None:
        (result,) = list(parse_lines([line]))
        assert isinstance(result, MalformedLine)
        assert reason in result.reason
        assert result.raw == line

    def test_bad_line_does_not_stop_parsing(self) -> None:
        results = list(parse_lines(["DRAW, x, 2, 3", "BOGUS", "DRAW, 1, 2, 3"]))
        assert [type(r) for r in results] == [MalformedLine, UnknownKind, PixelDraw]
        assert [r.line_number for r in results] == [1, 2, 3]

    def test_whitespace_dialect(self) -> None:
        dialect = Dialect(delimiter=None)
        results = list(parse_lines(["SPAWN 1  #fff  s1", "DRAW\t1 4 5"], dialect))
        assert results[0].color == Color(255, 255, 255)
        assert results[1].position == (4, 5)

    def test_custom_tokens(self) -> None:
        dialect = Dialect(delimiter="|", draw_token="PX", comment_prefix="//")
        results = list(parse_lines(["// note", "PX|3|1|1", "DRAW|3|1|1"], dialect))
        assert isinstance(results[0], PixelDraw)
        assert isinstance(results[1], UnknownKind)

    def test_parse_error_describe_mentions_line(self) -> None:
        (result,) = list(parse_lines(["DRAW, 1"]))
        assert result.describe().startswith("line 1:")
        assert result.to_dict()["kind"] == "MalformedLine"

    def test_draw_with_color(self) -> None:
        results = list(parse_lines(["DRAW, 1, 2, 3, navy", "DRAW, 1, 2, 4, 0, 0, 128"]))
        assert [r.color for r in results] == [Color(0, 0, 128), Color(0, 0, 128)]


class TestPixelLayout:
    def test_lines_without_kind_token(self) -> None:
        results = list(parse_lines(["3, 10, 20, 255, 0, 0", "4, 0, 0, 0, 255, 0"], PIXEL_DIALECT))
        assert results == [
            PixelDraw(line_number=1, artist_id=3, x=10, y=20, color=Color(255, 0, 0)),
            PixelDraw(line_number=2, artist_id=4, x=0, y=0, color=Color(0, 255, 0)),
        ]

    def test_bad_pixel_line_is_malformed(self) -> None:
        results = list(parse_lines(["SPAWN, 1, red, s1", "1, 2, 3, 300, 0, 0"], PIXEL_DIALECT))
        assert all(isinstance(r, MalformedLine) for r in results)
        assert "artist id" in results[0].reason
        assert "color" in results[1].reason

    def test_column_header_skipped(self) -> None:
        results = list(parse_lines(["artist_tid, x, y, r, g, b", "1, 2, 3, 4, 5, 6"], PIXEL_DIALECT))
        assert [r.line_number for r in results] == [2]
