from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from canvaslog.types import ArtistCategory, ArtistSpawn, Color, PixelDraw, Point


@dataclass
class ArtistRecord:
    artist_id: int
    color: Optional[Color]
    pattern: Optional[str]
    category: Optional[ArtistCategory]
    spawn_line: Optional[int]
    pixel_count: int = 0
    cells: Set[Point] = field(default_factory=set)
    # every colour the artist spawned or painted with
    colors: Set[Color] = field(default_factory=set)
    done: bool = False


@dataclass(frozen=True)
class CanvasCell:
    owner_artist_id: int
    first_line: int


class ArtistRegistry:
    def __init__(self):
        # artist_id -> record, created on spawn, never removed
        self._records: Dict[int, ArtistRecord] = {}

    # ---------- Write API ----------

    def spawn(self, event: ArtistSpawn) -> Tuple[ArtistRecord, bool]:
        """
        Register an artist on first spawn.

        Returns the record and whether this is its first spawn record. An
        existing record keeps its first colour and pattern; a record made
        from a first pixel takes the attributes it was missing.
        """
        existing = self._records.get(event.artist_id)
        if existing is not None:
            if existing.spawn_line is not None:
                return existing, False

            existing.spawn_line = event.line_number
            existing.pattern = event.pattern
            existing.category = event.category
            if existing.color is None:
                existing.color = event.color
            existing.colors.add(event.color)
            return existing, True

        record = ArtistRecord(
            artist_id=event.artist_id,
            color=event.color,
            pattern=event.pattern,
            category=event.category,
            spawn_line=event.line_number,
            colors={event.color},
        )
        self._records[event.artist_id] = record
        return record, True

    def adopt(self, event: PixelDraw) -> ArtistRecord:
        """Create a record from an artist's first pixel, for spawnless layouts."""
        record = ArtistRecord(
            artist_id=event.artist_id,
            color=event.color,
            pattern=None,
            category=None,
            spawn_line=None,
        )
        self._records[event.artist_id] = record
        return record

    # ---------- Read API ----------

    def get(self, artist_id: int) -> Optional[ArtistRecord]:
        return self._records.get(artist_id)

    def __contains__(self, artist_id: int) -> bool:
        return artist_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def ids(self) -> List[int]:
        return sorted(self._records)

    def records(self) -> List[ArtistRecord]:
        return [self._records[i] for i in self.ids()]


class CanvasState:
    def __init__(self):
        self._cells: Dict[Point, CanvasCell] = {}

    def claim(self, position: Point, artist_id: int, line_number: int) -> Optional[int]:
        """
        Insert-if-absent ownership of a cell.

        Returns the current owner when it is a different artist, else None.
        The first writer in log order stays the owner.
        """
        cell = self._cells.get(position)
        if cell is None:
            self._cells[position] = CanvasCell(
                owner_artist_id=artist_id,
                first_line=line_number,
            )
            return None

        if cell.owner_artist_id != artist_id:
            return cell.owner_artist_id
        return None

    def cell(self, position: Point) -> Optional[CanvasCell]:
        return self._cells.get(position)

    def owner(self, position: Point) -> Optional[int]:
        cell = self._cells.get(position)
        return cell.owner_artist_id if cell else None

    def positions(self) -> List[Point]:
        return sorted(self._cells)

    def items(self) -> Iterator[Tuple[Point, CanvasCell]]:
        for position in self.positions():
            yield position, self._cells[position]

    def __len__(self) -> int:
        return len(self._cells)
