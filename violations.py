from dataclasses import dataclass, fields
from typing import Optional, Tuple

from canvaslog.types import ArtistCategory, Color


def _plain(value):
    if isinstance(value, Color):
        return str(value)
    if isinstance(value, ArtistCategory):
        return value.value
    if isinstance(value, tuple):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class Violation:
    """Base for semantic correctness failures found in a log."""

    @property
    def kind(self) -> str:
        return type(self).__name__

    def describe(self) -> str:
        raise NotImplementedError

    def to_dict(self) -> dict:
        data = {"kind": self.kind}
        for f in fields(self):
            data[f.name] = _plain(getattr(self, f.name))
        return data


# ---------- Found during replay ----------

@dataclass(frozen=True)
class ArtistRedefined(Violation):
    artist_id: int
    line_number: int
    first_color: Color
    first_pattern: str
    color: Color
    pattern: str

    def describe(self) -> str:
        return (
            f"artist {self.artist_id} respawned on line {self.line_number} "
            f"with color {self.color} and pattern {self.pattern!r}; first "
            f"spawned with color {self.first_color} and pattern "
            f"{self.first_pattern!r}"
        )


@dataclass(frozen=True)
class UnknownArtist(Violation):
    artist_id: int
    line_number: int
    event: str

    def describe(self) -> str:
        return (
            f"line {self.line_number}: {self.event} event for artist "
            f"{self.artist_id}, which never spawned"
        )


@dataclass(frozen=True)
class DrawAfterDone(Violation):
    artist_id: int
    line_number: int
    x: int
    y: int

    def describe(self) -> str:
        return (
            f"line {self.line_number}: artist {self.artist_id} drew "
            f"({self.x}, {self.y}) after reporting done"
        )


@dataclass(frozen=True)
class OverlapDraw(Violation):
    x: int
    y: int
    first_owner: int
    second_owner: int
    line_number: int

    def describe(self) -> str:
        return (
            f"artist {self.second_owner} painted over ({self.x}, {self.y}) "
            f"owned by artist {self.first_owner} (line {self.line_number})"
        )


# ---------- Found by validators ----------

@dataclass(frozen=True)
class DuplicateColor(Violation):
    color: Color
    artist_ids: Tuple[int, ...]

    def describe(self) -> str:
        ids = ", ".join(str(i) for i in self.artist_ids)
        return f"color {self.color} is shared by artists {ids}"


@dataclass(frozen=True)
class DuplicatePattern(Violation):
    pattern: str
    artist_ids: Tuple[int, ...]

    def describe(self) -> str:
        ids = ", ".join(str(i) for i in self.artist_ids)
        return f"pattern {self.pattern!r} is shared by artists {ids}"


@dataclass(frozen=True)
class ArtistCountMismatch(Violation):
    category: ArtistCategory
    expected: int
    actual: int

    def describe(self) -> str:
        label = "" if self.category == ArtistCategory.ALL else f"{self.category.value} "
        return f"expected {self.expected} {label}artists, found {self.actual}"


@dataclass(frozen=True)
class MissingArtist(Violation):
    artist_id: int
    category: Optional[ArtistCategory] = None

    def describe(self) -> str:
        label = f"{self.category.value} " if self.category else ""
        return f"{label}artist {self.artist_id} never spawned"


@dataclass(frozen=True)
class NoPixelsDrawn(Violation):
    artist_id: int

    def describe(self) -> str:
        return f"artist {self.artist_id} drew no pixels"


@dataclass(frozen=True)
class PixelCountMismatch(Violation):
    artist_id: int
    expected: int
    actual: int

    def describe(self) -> str:
        return (
            f"artist {self.artist_id} drew {self.actual} pixels; "
            f"expected exactly {self.expected}"
        )


@dataclass(frozen=True)
class IsolatedPixel(Violation):
    artist_id: int
    x: int
    y: int

    def describe(self) -> str:
        return (
            f"pixel ({self.x}, {self.y}) of artist {self.artist_id} "
            f"touches none of its own pixels"
        )


@dataclass(frozen=True)
class DuplicateShape(Violation):
    artist_ids: Tuple[int, ...]
    size: int

    def describe(self) -> str:
        ids = ", ".join(str(i) for i in self.artist_ids)
        return f"artists {ids} drew the same {self.size}-pixel shape"


@dataclass(frozen=True)
class MixedColors(Violation):
    artist_id: int
    colors: Tuple[Color, ...]

    def describe(self) -> str:
        used = ", ".join(str(c) for c in self.colors)
        return f"artist {self.artist_id} painted with several colors: {used}"
