"""Six-stat block on the 0-200 scale.

Tier is value // 20 (0..10). Reaching 100 unlocks a stat's secondary
effect; anything above 100 feeds that secondary effect until the 200 cap.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from d2_planner.models.constants import (
    BREAKPOINT,
    STAT_MAX,
    STAT_MIN,
    STATS,
    TIER_SIZE,
    Stat,
)


def clamp_stat(value: int) -> int:
    return max(STAT_MIN, min(STAT_MAX, int(value)))


def stat_tier(value: int) -> int:
    return clamp_stat(value) // TIER_SIZE


def stat_efficiency(value: int) -> float:
    """Normalized investment value in [0, 1].

    Points past the breakpoint are worth 80% of a primary point, so 100
    maps to 1/1.8 and 200 maps to 1.0.
    """
    value = clamp_stat(value)
    if value <= BREAKPOINT:
        return (value / BREAKPOINT) / 1.8
    secondary = (value - BREAKPOINT) / (STAT_MAX - BREAKPOINT)
    return (1.0 + secondary * 0.8) / 1.8


def next_breakpoint(value: int) -> int | None:
    value = clamp_stat(value)
    if value < BREAKPOINT:
        return BREAKPOINT
    if value < STAT_MAX:
        return STAT_MAX
    return None


@dataclass(frozen=True, slots=True)
class StatBlock:
    """Stat totals. Values are clamped to [0, 200] on construction."""

    mobility: int = 0
    resilience: int = 0
    recovery: int = 0
    discipline: int = 0
    intellect: int = 0
    strength: int = 0

    def __post_init__(self) -> None:
        for stat in STATS:
            object.__setattr__(self, stat, clamp_stat(getattr(self, stat)))

    @classmethod
    def from_mapping(cls, values: Mapping[str, int] | None) -> "StatBlock":
        if not values:
            return cls()
        unknown = set(values) - set(STATS)
        if unknown:
            raise ValueError(f"Unknown stats: {sorted(unknown)}")
        return cls(**{stat: int(values.get(stat, 0)) for stat in STATS})

    @classmethod
    def uniform(cls, value: int) -> "StatBlock":
        return cls(**{stat: value for stat in STATS})

    def get(self, stat: Stat) -> int:
        return getattr(self, stat)

    def tier(self, stat: Stat) -> int:
        return stat_tier(self.get(stat))

    def breakpoint_reached(self, stat: Stat) -> bool:
        return self.get(stat) >= BREAKPOINT

    def plus(self, other: "StatBlock | Mapping[str, int]") -> "StatBlock":
        if not isinstance(other, StatBlock):
            other = StatBlock.from_mapping(other)
        return StatBlock(**{s: self.get(s) + other.get(s) for s in STATS})

    def elementwise_max(self, other: "StatBlock") -> "StatBlock":
        return StatBlock(**{s: max(self.get(s), other.get(s)) for s in STATS})

    def total(self) -> int:
        return sum(self.get(s) for s in STATS)

    def as_dict(self) -> dict[str, int]:
        return {s: self.get(s) for s in STATS}
