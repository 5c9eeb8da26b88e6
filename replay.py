import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Union

from canvaslog.types import (
    ArtistDone,
    ArtistSpawn,
    ParseError,
    ParseResult,
    PixelDraw,
)
from store import ArtistRecord, ArtistRegistry, CanvasState
from violations import (
    ArtistRedefined,
    DrawAfterDone,
    OverlapDraw,
    UnknownArtist,
    Violation,
)


logger = logging.getLogger(__name__)


@dataclass
class ReplayOutcome:
    registry: ArtistRegistry
    canvas: CanvasState
    violations: List[Violation] = field(default_factory=list)
    parse_errors: List[ParseError] = field(default_factory=list)
    event_count: int = 0


class Replayer:
    """
    Single forward pass over parsed log results.

    Owns the registry and canvas while replaying; violations that can be
    decided from one event plus the state so far are recorded inline.
    Events of an artist that has not spawned yet are held back and applied
    once its spawn shows up; only `finish()` can tell that an artist never
    spawned.
    """

    def __init__(self, spawn_on_first_draw: bool = False):
        self.spawn_on_first_draw = spawn_on_first_draw
        self.outcome = ReplayOutcome(
            registry=ArtistRegistry(),
            canvas=CanvasState(),
        )
        # artist_id -> events logged before the artist spawned
        self._pending: Dict[int, List[Union[PixelDraw, ArtistDone]]] = defaultdict(list)

    def feed(self, result: ParseResult) -> None:
        if isinstance(result, ParseError):
            self.outcome.parse_errors.append(result)
            return

        self.outcome.event_count += 1

        if isinstance(result, ArtistSpawn):
            self._on_spawn(result)
        elif isinstance(result, PixelDraw):
            self._on_draw(result)
        elif isinstance(result, ArtistDone):
            self._on_done(result)

    def finish(self) -> ReplayOutcome:
        leftovers = sorted(
            (event for events in self._pending.values() for event in events),
            key=lambda e: e.line_number,
        )
        self._pending.clear()

        for event in leftovers:
            self._report(
                UnknownArtist(
                    artist_id=event.artist_id,
                    line_number=event.line_number,
                    event=event.kind.value,
                )
            )

        return self.outcome

    # ---------- Handlers ----------

    def _on_spawn(self, event: ArtistSpawn) -> None:
        record, first = self.outcome.registry.spawn(event)
        if first:
            self._flush_pending(record)
            return

        if record.color != event.color or record.pattern != event.pattern:
            self._report(
                ArtistRedefined(
                    artist_id=event.artist_id,
                    line_number=event.line_number,
                    first_color=record.color,
                    first_pattern=record.pattern,
                    color=event.color,
                    pattern=event.pattern,
                )
            )

    def _on_draw(self, event: PixelDraw) -> None:
        registry = self.outcome.registry
        record = registry.get(event.artist_id)

        if record is None and self.spawn_on_first_draw:
            record = registry.adopt(event)
            self._flush_pending(record)

        if record is None:
            self._pending[event.artist_id].append(event)
        else:
            self._apply_draw(record, event)

        # the pixel is on the canvas, in log order, whether or not its
        # artist has spawned yet
        owner = self.outcome.canvas.claim(
            event.position, event.artist_id, event.line_number
        )
        if owner is not None:
            self._report(
                OverlapDraw(
                    x=event.x,
                    y=event.y,
                    first_owner=owner,
                    second_owner=event.artist_id,
                    line_number=event.line_number,
                )
            )

    def _on_done(self, event: ArtistDone) -> None:
        record = self.outcome.registry.get(event.artist_id)
        if record is None:
            self._pending[event.artist_id].append(event)
            return
        record.done = True

    # ---------- Record updates ----------

    def _flush_pending(self, record: ArtistRecord) -> None:
        for early in self._pending.pop(record.artist_id, []):
            if isinstance(early, PixelDraw):
                self._apply_draw(record, early)
            else:
                record.done = True

    def _apply_draw(self, record: ArtistRecord, event: PixelDraw) -> None:
        if record.done:
            self._report(
                DrawAfterDone(
                    artist_id=event.artist_id,
                    line_number=event.line_number,
                    x=event.x,
                    y=event.y,
                )
            )

        record.pixel_count += 1
        if event.position in record.cells:
            logger.debug(
                "artist %d already painted at %s (line %d)",
                event.artist_id, event.position, event.line_number,
            )
        record.cells.add(event.position)

        if event.color is not None:
            if record.color is None:
                record.color = event.color
            record.colors.add(event.color)

    def _report(self, violation: Violation) -> None:
        logger.debug("replay: %s", violation.describe())
        self.outcome.violations.append(violation)


def replay(results: Iterable[ParseResult], spawn_on_first_draw: bool = False) -> ReplayOutcome:
    """
    Consume parser output exactly once and return the accumulated state.
    """
    replayer = Replayer(spawn_on_first_draw=spawn_on_first_draw)
    for result in results:
        replayer.feed(result)

    outcome = replayer.finish()
    logger.info(
        "replayed %d events: %d artists, %d cells, %d parse errors",
        outcome.event_count,
        len(outcome.registry),
        len(outcome.canvas),
        len(outcome.parse_errors),
    )
    return outcome
