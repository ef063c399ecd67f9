from __future__ import annotations

from typing import Iterable, List, Sequence

import numpy as np

from almanac.intervals import Interval
from almanac.stages.remap import Stage
from almanac.utils import get_logger

logger = get_logger(__name__)

SPLIT_MODES = ("first", "all")


class Pipeline:
    """Ordered chain of stages applied left to right.

    ``split_mode`` picks how a stage cuts an interval:

    - ``"first"``: only the first overlapping mapping is honoured per interval
      (:meth:`Stage.map_interval`), remainders pass through unchanged.
    - ``"all"``: every overlapping mapping is honoured
      (:meth:`Stage.split_interval`).
    """

    def __init__(self, stages: Sequence[Stage], split_mode: str = "first"):
        if split_mode not in SPLIT_MODES:
            raise ValueError(f"Unknown split mode: {split_mode}")
        self.stages = tuple(stages)
        self.split_mode = split_mode

    def __len__(self) -> int:
        return len(self.stages)

    def _step(self, stage: Stage, r: Interval) -> List[Interval]:
        if self.split_mode == "all":
            return stage.split_interval(r)
        return stage.map_interval(r)

    def map_value(self, value: int) -> int:
        for stage in self.stages:
            value = stage.map_value(value)
        return value

    def map_interval(self, r: Interval) -> List[Interval]:
        current = [r]
        for stage in self.stages:
            nxt: List[Interval] = []
            for piece in current:
                nxt.extend(self._step(stage, piece))
            current = nxt
        return current

    def translate_and_minimize(self, seed_intervals: Iterable[Interval]) -> int:
        best = None
        n = 0
        for seed in seed_intervals:
            n += 1
            lowest = min(piece.start for piece in self.map_interval(seed))
            if best is None or lowest < best:
                best = lowest
        if best is None:
            raise ValueError("At least one seed interval is required")
        logger.debug("pipeline.intervals: seeds=%d stages=%d mode=%s best=%d", n, len(self.stages), self.split_mode, best)
        return best

    def minimize_points(self, seeds: Iterable[int]) -> int:
        values = [self.map_value(s) for s in seeds]
        if not values:
            raise ValueError("At least one seed is required")
        return min(values)

    def minimize_exhaustive(self, seed_intervals: Iterable[Interval], *, chunk_size: int = 65536) -> int:
        """Push every member of every seed interval through the stages.

        Cost grows with the total length of the intervals; meant as an oracle
        for the interval path on small inputs.
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        best = None
        for seed in seed_intervals:
            for lo in range(seed.start, seed.end + 1, chunk_size):
                hi = min(lo + chunk_size - 1, seed.end)
                values = np.arange(lo, hi + 1, dtype=np.int64)
                for stage in self.stages:
                    values = stage.map_array(values)
                lowest = int(values.min())
                if best is None or lowest < best:
                    best = lowest
        if best is None:
            raise ValueError("At least one seed interval is required")
        return best
