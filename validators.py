from collections import defaultdict
from enum import Enum
from typing import Callable, Dict, Hashable, List, Optional, Tuple

from canvaslog.types import ArtistCategory, Point
from replay import ReplayOutcome
from settings import ConfigError
from store import ArtistRecord
from violations import (
    ArtistCountMismatch,
    ArtistRedefined,
    DrawAfterDone,
    DuplicateColor,
    DuplicatePattern,
    DuplicateShape,
    IsolatedPixel,
    MissingArtist,
    MixedColors,
    NoPixelsDrawn,
    OverlapDraw,
    PixelCountMismatch,
    UnknownArtist,
    Violation,
)


class CategorySource(str, Enum):
    TAG = "tag"
    ID_RANGE = "id_range"
    # only the total number of artists is known
    TOTAL = "total"


def group_duplicates(
    records: List[ArtistRecord],
    key: Callable[[ArtistRecord], Hashable],
) -> List[Tuple[Hashable, Tuple[int, ...]]]:
    """
    Group artists by `key` and keep groups with more than one member.
    Artists whose key is None (attribute never logged) are left out.

    Member ids are ascending; groups are ordered by their smallest id.
    """
    groups: Dict[Hashable, List[int]] = defaultdict(list)
    for record in records:
        value = key(record)
        if value is not None:
            groups[value].append(record.artist_id)

    duplicates = [
        (value, tuple(sorted(ids)))
        for value, ids in groups.items()
        if len(ids) > 1
    ]
    duplicates.sort(key=lambda group: group[1][0])
    return duplicates


# ---------------- Replay-time checks ----------------

class StructureCheck:
    name = "structure"

    def check(self, outcome: ReplayOutcome) -> List[Violation]:
        found = [
            v for v in outcome.violations
            if isinstance(v, (ArtistRedefined, UnknownArtist, DrawAfterDone))
        ]
        # log order; some are only settled once the whole log is read
        found.sort(key=lambda v: v.line_number)
        return found


class OverlapCheck:
    name = "overlap"

    def check(self, outcome: ReplayOutcome) -> List[Violation]:
        seen = set()
        overlaps: List[Violation] = []

        # first collision per cell only
        for v in outcome.violations:
            if not isinstance(v, OverlapDraw):
                continue
            if (v.x, v.y) in seen:
                continue
            seen.add((v.x, v.y))
            overlaps.append(v)

        return overlaps


# ---------------- Registry checks ----------------

class ColorUniquenessCheck:
    name = "unique_colors"

    def check(self, outcome: ReplayOutcome) -> List[Violation]:
        return [
            DuplicateColor(color=color, artist_ids=ids)
            for color, ids in group_duplicates(
                outcome.registry.records(), key=lambda r: r.color
            )
        ]


class ColorConsistencyCheck:
    """Each artist keeps one colour, across its spawn and every pixel."""
    name = "consistent_colors"

    def check(self, outcome: ReplayOutcome) -> List[Violation]:
        return [
            MixedColors(artist_id=r.artist_id, colors=tuple(sorted(r.colors)))
            for r in outcome.registry.records()
            if len(r.colors) > 1
        ]


class PatternUniquenessCheck:
    name = "unique_patterns"

    def check(self, outcome: ReplayOutcome) -> List[Violation]:
        return [
            DuplicatePattern(pattern=pattern, artist_ids=ids)
            for pattern, ids in group_duplicates(
                outcome.registry.records(), key=lambda r: r.pattern
            )
        ]


class ArtistCountCheck:
    name = "artist_count"

    def __init__(
        self,
        expected_main: int = 4,
        expected_rookie: int = 50,
        category_source: CategorySource = CategorySource.TAG,
        first_artist_id: int = 0,
    ):
        self.expected_main = expected_main
        self.expected_rookie = expected_rookie
        self.category_source = CategorySource(category_source)
        self.first_artist_id = first_artist_id

    def expected_ids(self) -> Dict[ArtistCategory, range]:
        main_start = self.first_artist_id
        rookie_start = main_start + self.expected_main
        return {
            ArtistCategory.MAIN: range(main_start, rookie_start),
            ArtistCategory.ROOKIE: range(
                rookie_start, rookie_start + self.expected_rookie
            ),
        }

    def categorize(self, record: ArtistRecord) -> ArtistCategory:
        if self.category_source == CategorySource.TAG:
            return record.category or ArtistCategory.UNCLASSIFIED

        for category, ids in self.expected_ids().items():
            if record.artist_id in ids:
                return category
        return ArtistCategory.UNCLASSIFIED

    def check(self, outcome: ReplayOutcome) -> List[Violation]:
        violations: List[Violation] = []

        if self.category_source == CategorySource.TOTAL:
            expected = {
                ArtistCategory.ALL: self.expected_main + self.expected_rookie,
            }
            actual = {ArtistCategory.ALL: len(outcome.registry)}
        else:
            expected = {
                ArtistCategory.MAIN: self.expected_main,
                ArtistCategory.ROOKIE: self.expected_rookie,
                ArtistCategory.UNCLASSIFIED: 0,
            }
            actual = {category: 0 for category in expected}
            for record in outcome.registry.records():
                actual[self.categorize(record)] += 1

        for category in expected:
            if actual[category] != expected[category]:
                violations.append(
                    ArtistCountMismatch(
                        category=category,
                        expected=expected[category],
                        actual=actual[category],
                    )
                )

        # ids are only predictable when they encode the category
        if self.category_source == CategorySource.ID_RANGE:
            for category, ids in self.expected_ids().items():
                for artist_id in ids:
                    if artist_id not in outcome.registry:
                        violations.append(
                            MissingArtist(artist_id=artist_id, category=category)
                        )

        return violations


class PixelsDrawnCheck:
    name = "pixels_drawn"

    def __init__(
        self,
        strict_pixel_count: bool = False,
        expected_pixels_per_artist: Optional[int] = None,
    ):
        if strict_pixel_count and expected_pixels_per_artist is None:
            raise ConfigError(
                "strict pixel count needs expected_pixels_per_artist"
            )
        self.strict_pixel_count = strict_pixel_count
        self.expected_pixels_per_artist = expected_pixels_per_artist

    def check(self, outcome: ReplayOutcome) -> List[Violation]:
        violations: List[Violation] = []

        for record in outcome.registry.records():
            if record.pixel_count == 0:
                violations.append(NoPixelsDrawn(artist_id=record.artist_id))
            elif (
                self.strict_pixel_count
                and record.pixel_count != self.expected_pixels_per_artist
            ):
                violations.append(
                    PixelCountMismatch(
                        artist_id=record.artist_id,
                        expected=self.expected_pixels_per_artist,
                        actual=record.pixel_count,
                    )
                )

        return violations


# ---------------- Spatial checks (optional) ----------------

NEIGHBOUR_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))


class IslandCheck:
    """
    Flags drawn cells with no orthogonal neighbour owned by the same artist.

    Runs over the final canvas; the owner of a cell is its first writer.
    """
    name = "islands"

    def check(self, outcome: ReplayOutcome) -> List[Violation]:
        canvas = outcome.canvas
        islands: List[Violation] = []

        for (x, y), cell in canvas.items():
            owner = cell.owner_artist_id
            if any(
                canvas.owner((x + dx, y + dy)) == owner
                for dx, dy in NEIGHBOUR_OFFSETS
            ):
                continue
            islands.append(IsolatedPixel(artist_id=owner, x=x, y=y))

        islands.sort(key=lambda v: (v.artist_id, v.x, v.y))
        return islands


def normalize_shape(cells) -> Tuple[Point, ...]:
    """Translate a set of cells so its smallest (x, y) sits at the origin."""
    if not cells:
        return ()
    ox, oy = min(cells)
    return tuple(sorted((x - ox, y - oy) for x, y in cells))


class ShapeUniquenessCheck:
    """
    Two artists seeded alike trace the same shape, wherever they start.

    Artists that drew nothing are left to the pixels_drawn check.
    """
    name = "unique_shapes"

    def check(self, outcome: ReplayOutcome) -> List[Violation]:
        drawn = [r for r in outcome.registry.records() if r.cells]
        return [
            DuplicateShape(artist_ids=ids, size=len(shape))
            for shape, ids in group_duplicates(
                drawn, key=lambda r: normalize_shape(r.cells)
            )
        ]
