from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class StageSummary(BaseModel):
    name: str
    mappings: int


class CrossCheck(BaseModel):
    value: Optional[int] = None
    agrees: Optional[bool] = None
    skipped_reason: Optional[str] = None


class SolveReport(BaseModel):
    title: str
    date: str
    input: str
    split_mode: str
    part1: int
    part2: int
    cross_check: Optional[CrossCheck] = None
    stages: List[StageSummary] = Field(default_factory=list)
    timings_ms: Dict[str, float] = Field(default_factory=dict)
