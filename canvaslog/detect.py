from dataclasses import dataclass
from typing import List, Optional

from .types import EventKind


@dataclass(frozen=True)
class Dialect:
    """
    Line layout of the drawing program's log.

    This is about structure, not meaning: which separator splits a line,
    which lines are noise, and which leading token names each record kind.
    A `delimiter` of None splits on any run of whitespace.

    With `implicit_kind` set, lines carry no kind token at all and every
    line is a record of that kind. `spawn_on_first_draw` lets the first
    pixel of an artist stand in for its spawn record, for layouts that
    never announce artists.
    """
    delimiter: Optional[str] = ","
    comment_prefix: str = "#"
    header_token: str = "event"
    spawn_token: str = "SPAWN"
    draw_token: str = "DRAW"
    done_token: str = "DONE"
    implicit_kind: Optional[EventKind] = None
    spawn_on_first_draw: bool = False

    def kind_tokens(self) -> dict:
        return {
            self.spawn_token.upper(): EventKind.SPAWN,
            self.draw_token.upper(): EventKind.DRAW,
            self.done_token.upper(): EventKind.DONE,
        }


DEFAULT_DIALECT = Dialect()

# One coloured pixel per line, no kind token:
#   artist_tid, x, y, r, g, b
PIXEL_DIALECT = Dialect(
    header_token="artist_tid",
    implicit_kind=EventKind.DRAW,
    spawn_on_first_draw=True,
)

LAYOUTS = {
    "tagged": DEFAULT_DIALECT,
    "pixels": PIXEL_DIALECT,
}


def split_fields(line: str, dialect: Dialect) -> List[str]:
    return [f.strip() for f in line.strip().split(dialect.delimiter)]


def is_skippable(line: str, dialect: Dialect) -> bool:
    """
    Blank lines, comments and the column header carry no event.

    Must be cheap and must never throw.
    """
    s = line.strip()
    if not s:
        return True

    if dialect.comment_prefix and s.startswith(dialect.comment_prefix):
        return True

    first = split_fields(s, dialect)[0]
    return first.lower() == dialect.header_token.lower()


def detect_kind(fields: List[str], dialect: Dialect) -> Optional[EventKind]:
    """
    Identify the record kind from the leading token (case-insensitive).
    Returns None for tokens the dialect does not know.
    """
    if dialect.implicit_kind is not None:
        return dialect.implicit_kind
    if not fields:
        return None
    return dialect.kind_tokens().get(fields[0].upper())
