from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Tuple

from almanac.intervals import Interval
from almanac.stages.remap import Stage
from almanac.utils import get_logger, load_file

logger = get_logger(__name__)

SEEDS_RE = re.compile(r"^seeds:[ \t]*(.*)$", re.MULTILINE)
MAP_LINE_RE = re.compile(r"^(\d+) (\d+) (\d+)$")
MAP_HEADER_RE = re.compile(r"([A-Za-z0-9_-]+)\s*$")


@dataclass(frozen=True)
class Almanac:
    seeds: Tuple[int, ...]
    stages: Tuple[Stage, ...]

    def seed_intervals(self) -> List[Interval]:
        """Read the seed numbers as ``(start, length)`` pairs."""
        if len(self.seeds) % 2:
            raise ValueError(f"Seed line has an odd number of values ({len(self.seeds)}); expected start/length pairs")
        return [Interval.from_length(self.seeds[i], self.seeds[i + 1]) for i in range(0, len(self.seeds), 2)]

    def total_seed_values(self) -> int:
        return sum(len(r) for r in self.seed_intervals())


def _stage_name(header: str, index: int) -> str:
    # Header is the text just before "map:" on the previous chunk's last line.
    m = MAP_HEADER_RE.search(header.strip().splitlines()[-1]) if header.strip() else None
    return m.group(1) if m else f"stage-{index}"


def parse_almanac(text: str) -> Almanac:
    m = SEEDS_RE.search(text)
    if not m:
        raise ValueError("Almanac has no 'seeds:' line")
    seeds = tuple(int(x) for x in m.group(1).split())

    chunks = text.split("map:")
    stages: List[Stage] = []
    for i, body in enumerate(chunks[1:]):
        triples = []
        for line in body.splitlines():
            lm = MAP_LINE_RE.match(line.strip())
            if lm:
                triples.append(tuple(int(g) for g in lm.groups()))
        stages.append(Stage.from_triples(_stage_name(chunks[i], i), triples))

    logger.info("parsed seeds=%d stages=%d mappings=%d", len(seeds), len(stages), sum(len(s) for s in stages))
    return Almanac(seeds=seeds, stages=tuple(stages))


def load_almanac(path: str) -> Almanac:
    return parse_almanac(load_file(path))
