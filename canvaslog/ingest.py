import logging
from typing import Iterable, Iterator

from .detect import DEFAULT_DIALECT, Dialect, detect_kind, is_skippable, split_fields
from .parsers import FieldError, parse_done, parse_draw, parse_spawn
from .types import EventKind, MalformedLine, ParseResult, UnknownKind


logger = logging.getLogger(__name__)


PARSERS = {
    EventKind.SPAWN: parse_spawn,
    EventKind.DRAW: parse_draw,
    EventKind.DONE: parse_done,
}


def ingest_line(line: str, line_number: int, dialect: Dialect = DEFAULT_DIALECT) -> ParseResult:
    """
    Turn one non-skippable raw line into an event or a parse error.

    Pipeline:
      raw line
        → field split
          → kind detection
            → kind-specific parser
              → event

    Never raises for bad input: failures come back as ParseError values.
    """
    raw = line.rstrip("\r\n")
    fields = split_fields(raw, dialect)

    kind = detect_kind(fields, dialect)
    if kind is None:
        return UnknownKind(line_number=line_number, raw=raw, token=fields[0])

    values = fields if dialect.implicit_kind is not None else fields[1:]

    try:
        return PARSERS[kind](values, line_number)
    except FieldError as e:
        return MalformedLine(line_number=line_number, raw=raw, reason=str(e))


def parse_lines(
    lines: Iterable[str],
    dialect: Dialect = DEFAULT_DIALECT,
) -> Iterator[ParseResult]:
    """
    Lazily parse a log, one result per meaningful line.

    Line numbers are 1-based and count every input line, skipped ones
    included, so they point straight back into the file.
    """
    for line_number, line in enumerate(lines, 1):
        if is_skippable(line, dialect):
            continue

        result = ingest_line(line, line_number, dialect)
        if isinstance(result, (MalformedLine, UnknownKind)):
            logger.debug("parse failure %s", result.describe())

        yield result
