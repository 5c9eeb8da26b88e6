from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union


Point = Tuple[int, int]


@dataclass(frozen=True, order=True)
class Color:
    r: int
    g: int
    b: int

    def __str__(self) -> str:
        return f"({self.r}, {self.g}, {self.b})"


class ArtistCategory(str, Enum):
    MAIN = "main"
    ROOKIE = "rookie"
    UNCLASSIFIED = "unclassified"
    # every artist, when the log does not tell categories apart
    ALL = "all"


class EventKind(str, Enum):
    SPAWN = "spawn"
    DRAW = "draw"
    DONE = "done"


# ---------- Events ----------

@dataclass(frozen=True)
class ArtistSpawn:
    """
    An artist announced itself with its colour and draw pattern.

    `category` is None when the log line carries no tag.
    """
    kind: ClassVar[EventKind] = EventKind.SPAWN

    line_number: int
    artist_id: int
    color: Color
    pattern: str
    category: Optional[ArtistCategory] = None


@dataclass(frozen=True)
class PixelDraw:
    """`color` is None unless the layout puts a colour on every pixel."""
    kind: ClassVar[EventKind] = EventKind.DRAW

    line_number: int
    artist_id: int
    x: int
    y: int
    color: Optional[Color] = None

    @property
    def position(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True)
class ArtistDone:
    kind: ClassVar[EventKind] = EventKind.DONE

    line_number: int
    artist_id: int


Event = Union[ArtistSpawn, PixelDraw, ArtistDone]


# ---------- Parse errors ----------

@dataclass(frozen=True)
class ParseError:
    """
    A log line that could not be turned into an event.

    Parse errors are values, not exceptions: the parser yields them in
    place of the event and carries on with the next line.
    """
    line_number: int
    raw: str

    @property
    def kind(self) -> str:
        return type(self).__name__

    def describe(self) -> str:
        return f"line {self.line_number}: {self.raw!r}"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "line_number": self.line_number,
            "raw": self.raw,
        }


@dataclass(frozen=True)
class MalformedLine(ParseError):
    reason: str = "malformed line"

    def describe(self) -> str:
        return f"line {self.line_number}: {self.reason}: {self.raw!r}"

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["reason"] = self.reason
        return data


@dataclass(frozen=True)
class UnknownKind(ParseError):
    token: str = ""

    def describe(self) -> str:
        return (
            f"line {self.line_number}: unknown event kind "
            f"{self.token!r}: {self.raw!r}"
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["token"] = self.token
        return data


ParseResult = Union[ArtistSpawn, PixelDraw, ArtistDone, ParseError]
