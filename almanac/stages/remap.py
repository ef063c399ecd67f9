from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from almanac.intervals import Interval, Mapping
from almanac.utils import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Stage:
    """One almanac table: disjoint fixed-offset mappings, identity elsewhere.

    ``mappings`` keeps parse order; that order decides which mapping wins in
    :meth:`map_value` and :meth:`map_interval`. A copy sorted by source start is
    built once for :meth:`split_interval`.
    """

    name: str
    mappings: Tuple[Mapping, ...] = ()
    _by_source: Tuple[Mapping, ...] = field(init=False, repr=False, compare=False)
    _source_starts: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "mappings", tuple(self.mappings))
        ordered = tuple(sorted(self.mappings, key=lambda m: m.source.start))
        object.__setattr__(self, "_by_source", ordered)
        object.__setattr__(self, "_source_starts", tuple(m.source.start for m in ordered))

    @classmethod
    def from_triples(cls, name: str, triples: Iterable[Sequence[int]]) -> "Stage":
        return cls(name=name, mappings=tuple(Mapping.from_triple(*t) for t in triples))

    def __len__(self) -> int:
        return len(self.mappings)

    # ---------- Single values ----------

    def map_value(self, value: int) -> int:
        for m in self.mappings:
            if m.contains(value):
                return m.apply(value)
        return value

    def map_array(self, values: np.ndarray) -> np.ndarray:
        """Vectorised :meth:`map_value` over an integer array."""
        values = np.asarray(values, dtype=np.int64)
        out = values.copy()
        done = np.zeros(values.shape, dtype=bool)
        for m in self.mappings:
            mask = (values >= m.source.start) & (values <= m.source.end) & ~done
            out[mask] = values[mask] + m.delta
            done |= mask
        return out

    # ---------- Intervals ----------

    def map_interval(self, r: Interval) -> List[Interval]:
        """Map ``r`` against the first overlapping mapping only.

        The translated overlap comes first, followed by the unmapped left and
        right remainders. Remainders are passed through unchanged even if
        another mapping of this stage covers them.
        """
        for m in self.mappings:
            overlap = r.intersection(m.source)
            if overlap is None:
                continue
            out = [overlap.shift(m.delta)]
            if r.start < m.source.start:
                out.append(Interval(r.start, m.source.start - 1))
            if r.end > m.source.end:
                out.append(Interval(m.source.end + 1, r.end))
            return out
        return [r]

    def split_interval(self, r: Interval) -> List[Interval]:
        """Partition ``r`` against every overlapping mapping.

        Pieces are emitted in ascending source order: identity pieces for the
        gaps, translated pieces for each overlap.
        """
        out: List[Interval] = []
        cursor = r.start
        i = max(0, bisect_right(self._source_starts, r.start) - 1)
        for m in self._by_source[i:]:
            if m.source.end < cursor:
                continue
            if m.source.start > r.end:
                break
            if m.source.start > cursor:
                out.append(Interval(cursor, m.source.start - 1))
            overlap = Interval(max(cursor, m.source.start), min(r.end, m.source.end))
            out.append(overlap.shift(m.delta))
            cursor = overlap.end + 1
            if cursor > r.end:
                break
        if cursor <= r.end:
            out.append(Interval(cursor, r.end))
        return out

    # ---------- Validation ----------

    def overlapping_sources(self) -> List[Tuple[Mapping, Mapping]]:
        pairs: List[Tuple[Mapping, Mapping]] = []
        ordered = self._by_source
        for i, a in enumerate(ordered):
            for b in ordered[i + 1:]:
                if b.source.start > a.source.end:
                    break
                pairs.append((a, b))
        return pairs

    def validate(self) -> None:
        pairs = self.overlapping_sources()
        if pairs:
            desc = ", ".join(f"{a.source}/{b.source}" for a, b in pairs)
            raise ValueError(f"Stage '{self.name}' has overlapping source intervals: {desc}")
        logger.debug("stage.validate: name=%s mappings=%d ok", self.name, len(self.mappings))
