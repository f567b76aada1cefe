"""Search settings.

Environment-first (TTT_TIE_BREAK, TTT_SEED); CLI flags override.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .solver import Chooser, RandomChoice, SearchEngine, first_choice

TIE_BREAKS = ("first", "random")


@dataclass
class SearchConfig:
    tie_break: str = "first"  # one of: "first", "random"
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.tie_break not in TIE_BREAKS:
            raise ValueError(f"Unknown tie-break: {self.tie_break!r} (expected one of {TIE_BREAKS})")

    @classmethod
    def from_env(cls) -> "SearchConfig":
        tie_break = os.getenv("TTT_TIE_BREAK") or "first"
        seed = os.getenv("TTT_SEED")
        try:
            seed_val = int(seed) if seed else None
        except ValueError:
            raise ValueError(f"TTT_SEED must be an integer, got {seed!r}") from None
        return cls(tie_break=tie_break.strip().lower(), seed=seed_val)

    def make_chooser(self) -> Chooser:
        if self.tie_break == "random":
            return RandomChoice(self.seed)
        return first_choice

    def make_engine(self) -> SearchEngine:
        return SearchEngine(choose=self.make_chooser())
