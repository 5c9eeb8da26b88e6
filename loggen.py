import argparse
import random
from typing import Iterable, List, Optional


FAULTS = (
    "overlap",
    "duplicate_color",
    "duplicate_pattern",
    "missing_main",
    "idle_artist",
)


def _color(index: int) -> str:
    # distinct per index for up to 2**20 artists
    return "#%06x" % (0x0F0000 + index * 37)


def generate_canvas_log(
    filename: Optional[str] = None,
    main: int = 4,
    rookie: int = 50,
    pixels: int = 5,
    width: int = 64,
    seed: int = 0,
    faults: Iterable[str] = (),
) -> List[str]:
    """
    Produce the log a correct drawing run would write, then break it on
    purpose for each requested fault.

    Artist ids start at 0, mains first. Artist i only ever draws on row i,
    so a clean log has no overlaps. Draw lines are shuffled to mimic the
    interleaving of concurrent artists.
    """
    faults = set(faults)
    unknown = faults - set(FAULTS)
    if unknown:
        raise ValueError(f"unknown faults: {', '.join(sorted(unknown))}")
    if pixels > width:
        raise ValueError("an artist cannot draw more pixels than a row holds")

    rng = random.Random(seed)

    artists = []
    for i in range(main + rookie):
        artists.append(
            {
                "id": i,
                "category": "main" if i < main else "rookie",
                "color": _color(i),
                "pattern": f"p{i:04d}-{rng.getrandbits(16):04x}",
                "cells": [(x, i) for x in rng.sample(range(width), pixels)],
            }
        )

    if "missing_main" in faults and main > 0:
        artists = [a for a in artists if a["id"] != main - 1]
    if "duplicate_color" in faults and len(artists) > 1:
        artists[1]["color"] = artists[0]["color"]
    if "duplicate_pattern" in faults and len(artists) > 1:
        artists[1]["pattern"] = artists[0]["pattern"]
    if "idle_artist" in faults and artists:
        artists[-1]["cells"] = []
    if "overlap" in faults and len(artists) > 1 and artists[0]["cells"]:
        artists[1]["cells"].append(artists[0]["cells"][0])

    lines = ["# canvas log", "event, artist, a, b, c"]

    for a in artists:
        lines.append(
            f"SPAWN, {a['id']}, {a['color']}, {a['pattern']}, {a['category']}"
        )

    draws = [
        (a["id"], x, y)
        for a in artists
        for x, y in a["cells"]
    ]
    rng.shuffle(draws)

    # keep the overlapping draw after the one it collides with
    if "overlap" in faults and len(artists) > 1 and artists[0]["cells"]:
        target = artists[0]["cells"][0]
        late = (artists[1]["id"],) + target
        draws.remove(late)
        draws.append(late)

    for artist_id, x, y in draws:
        lines.append(f"DRAW, {artist_id}, {x}, {y}")

    for a in artists:
        lines.append(f"DONE, {a['id']}")

    if filename:
        with open(filename, "w") as f:
            for line in lines:
                f.write(line + "\n")
        print(f"Generated {len(lines)} lines in {filename}")

    return lines


def main(argv=None):
    parser = argparse.ArgumentParser(description="Sample canvas log generator")
    parser.add_argument("output")
    parser.add_argument("--main", type=int, default=4)
    parser.add_argument("--rookie", type=int, default=50)
    parser.add_argument("--pixels", type=int, default=5)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--fault", action="append", choices=FAULTS, default=[])
    args = parser.parse_args(argv)

    generate_canvas_log(
        args.output,
        main=args.main,
        rookie=args.rookie,
        pixels=args.pixels,
        seed=args.seed,
        faults=args.fault,
    )


if __name__ == "__main__":
    main()
