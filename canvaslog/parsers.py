import re
from typing import List, Optional

from .colors import parse_color
from .types import (
    ArtistCategory,
    ArtistDone,
    ArtistSpawn,
    Color,
    PixelDraw,
)


class FieldError(ValueError):
    """A field of an otherwise recognised record is missing or malformed."""


# Plain decimal only: no sign prefix, no underscores, no non-ASCII digits.
INT_RE = re.compile(r"^-?[0-9]+$")


# -----------------------------
# FIELD HELPERS
# -----------------------------
# Parsers receive the fields that follow the kind token, if the layout
# has one.

def _expect_count(values: List[str], allowed: tuple, record: str) -> None:
    if len(values) not in allowed:
        expected = " or ".join(str(n) for n in allowed)
        raise FieldError(
            f"{record} record needs {expected} fields after the kind, "
            f"got {len(values)}"
        )


def _as_int(token: str, name: str) -> int:
    if not INT_RE.match(token):
        raise FieldError(f"{name} must be an integer, got {token!r}")
    return int(token)


def _as_artist_id(token: str) -> int:
    artist_id = _as_int(token, "artist id")
    if artist_id < 0:
        raise FieldError(f"artist id must not be negative, got {artist_id}")
    return artist_id


def _as_color(tokens: List[str]) -> Color:
    # one token (#ff8800, navy, 255/136/0) or three channels (255, 136, 0)
    token = tokens[0] if len(tokens) == 1 else "/".join(tokens)
    color = parse_color(token)
    if color is None:
        raise FieldError(f"unrecognized color token {token!r}")
    return color


def _as_category(token: str) -> ArtistCategory:
    value = token.lower()
    if value not in (ArtistCategory.MAIN.value, ArtistCategory.ROOKIE.value):
        raise FieldError(f"unrecognized artist category {token!r}")
    return ArtistCategory(value)


# -----------------------------
# SPAWN
# -----------------------------

def parse_spawn(values: List[str], line_number: int) -> ArtistSpawn:
    """
    Parse records like:
      SPAWN, 3, #ff8800, 9f3a2c, main
    The trailing category is optional.
    """
    _expect_count(values, (3, 4), "spawn")

    artist_id = _as_artist_id(values[0])
    color = _as_color(values[1:2])

    pattern = values[2]
    if not pattern:
        raise FieldError("pattern must not be empty")

    category: Optional[ArtistCategory] = None
    if len(values) == 4:
        category = _as_category(values[3])

    return ArtistSpawn(
        line_number=line_number,
        artist_id=artist_id,
        color=color,
        pattern=pattern,
        category=category,
    )


# -----------------------------
# DRAW
# -----------------------------

def parse_draw(values: List[str], line_number: int) -> PixelDraw:
    """
    Parse records like:
      DRAW, 3, 120, 45
      DRAW, 3, 120, 45, #ff8800
      3, 120, 45, 255, 136, 0        (pixels layout)
    The colour is optional, as one token or as three channels.
    """
    _expect_count(values, (3, 4, 6), "draw")

    artist_id = _as_artist_id(values[0])
    x = _as_int(values[1], "x")
    y = _as_int(values[2], "y")

    color: Optional[Color] = None
    if len(values) > 3:
        color = _as_color(values[3:])

    return PixelDraw(
        line_number=line_number,
        artist_id=artist_id,
        x=x,
        y=y,
        color=color,
    )


# -----------------------------
# DONE
# -----------------------------

def parse_done(values: List[str], line_number: int) -> ArtistDone:
    _expect_count(values, (1,), "done")

    return ArtistDone(
        line_number=line_number,
        artist_id=_as_artist_id(values[0]),
    )
