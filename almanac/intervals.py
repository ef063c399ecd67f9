from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Interval:
    """Inclusive range ``[start, end]`` of non-negative integers."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"Interval start must be non-negative, got {self.start}")
        if self.start > self.end:
            raise ValueError(f"Interval start ({self.start}) must be <= end ({self.end})")

    @classmethod
    def from_length(cls, start: int, length: int) -> "Interval":
        if length <= 0:
            raise ValueError(f"Interval length must be positive, got {length}")
        return cls(start, start + length - 1)

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        return f"[{self.start}, {self.end}]"

    def contains(self, value: int) -> bool:
        return self.start <= value <= self.end

    def overlaps(self, other: "Interval") -> bool:
        return not (self.end < other.start or self.start > other.end)

    def intersection(self, other: "Interval") -> Optional["Interval"]:
        if not self.overlaps(other):
            return None
        return Interval(max(self.start, other.start), min(self.end, other.end))

    def shift(self, delta: int) -> "Interval":
        return Interval(self.start + delta, self.end + delta)


@dataclass(frozen=True)
class Mapping:
    """Fixed-offset translation active only inside ``source``."""

    source: Interval
    destination: Interval

    def __post_init__(self) -> None:
        if len(self.source) != len(self.destination):
            raise ValueError(
                f"Mapping source {self.source} and destination {self.destination} differ in length"
            )

    @classmethod
    def from_triple(cls, destination_start: int, source_start: int, length: int) -> "Mapping":
        # Almanac lines list the destination first.
        return cls(
            source=Interval.from_length(source_start, length),
            destination=Interval.from_length(destination_start, length),
        )

    @property
    def delta(self) -> int:
        return self.destination.start - self.source.start

    def contains(self, value: int) -> bool:
        return self.source.contains(value)

    def apply(self, value: int) -> int:
        return value + self.delta
