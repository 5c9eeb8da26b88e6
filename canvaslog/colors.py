import re
from typing import Callable, List, Optional

from .types import Color


NAMED_COLORS = {
    "black": Color(0, 0, 0),
    "white": Color(255, 255, 255),
    "red": Color(255, 0, 0),
    "lime": Color(0, 255, 0),
    "blue": Color(0, 0, 255),
    "yellow": Color(255, 255, 0),
    "cyan": Color(0, 255, 255),
    "magenta": Color(255, 0, 255),
    "silver": Color(192, 192, 192),
    "gray": Color(128, 128, 128),
    "maroon": Color(128, 0, 0),
    "olive": Color(128, 128, 0),
    "green": Color(0, 128, 0),
    "purple": Color(128, 0, 128),
    "teal": Color(0, 128, 128),
    "navy": Color(0, 0, 128),
    "orange": Color(255, 165, 0),
}

HEX6_RE = re.compile(r"^#([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)
HEX3_RE = re.compile(r"^#([0-9a-f])([0-9a-f])([0-9a-f])$", re.IGNORECASE)
TRIPLE_RE = re.compile(r"^([0-9]{1,3})/([0-9]{1,3})/([0-9]{1,3})$")


def _from_hex6(token: str) -> Optional[Color]:
    m = HEX6_RE.match(token)
    if not m:
        return None
    return Color(*(int(part, 16) for part in m.groups()))


def _from_hex3(token: str) -> Optional[Color]:
    m = HEX3_RE.match(token)
    if not m:
        return None
    # #abc is shorthand for #aabbcc
    return Color(*(int(part * 2, 16) for part in m.groups()))


def _from_triple(token: str) -> Optional[Color]:
    m = TRIPLE_RE.match(token)
    if not m:
        return None
    r, g, b = (int(part) for part in m.groups())
    if max(r, g, b) > 255:
        return None
    return Color(r, g, b)


def _from_name(token: str) -> Optional[Color]:
    return NAMED_COLORS.get(token.lower())


# Ordered colour formats. First match wins.
COLOR_FORMATS: List[Callable[[str], Optional[Color]]] = [
    _from_hex6,
    _from_hex3,
    _from_triple,
    _from_name,
]


def parse_color(token: str) -> Optional[Color]:
    """
    Decode a colour token. Returns None when no format recognises it.

    It should NEVER throw.
    """
    token = token.strip()
    if not token:
        return None

    for fmt in COLOR_FORMATS:
        color = fmt(token)
        if color is not None:
            return color

    return None
