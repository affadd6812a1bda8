"""Normalized build request produced by the intent parser."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from d2_planner.models.constants import (
    ACTIVITIES,
    CLASS_TYPES,
    ELEMENTS,
    PLAYSTYLES,
    STATS,
    WEAPON_ARCHETYPES,
    Activity,
    ClassType,
    Element,
    Playstyle,
    Stat,
    WeaponArchetype,
)


@dataclass(frozen=True, slots=True)
class Constraints:
    use_inventory_only: bool = False


@dataclass(frozen=True, slots=True)
class BuildRequest:
    """Immutable description of what the user asked for.

    Every field is always populated; "any"/"general"/"balanced" and an
    empty ``focus_stats`` mean "no preference".
    """

    class_type: ClassType = "any"
    element: Element = "any"
    activity: Activity = "general"
    playstyle: Playstyle = "balanced"
    focus_stats: frozenset[Stat] = frozenset()
    locked_exotic: int | None = None
    constraints: Constraints = field(default_factory=Constraints)
    # Order used when focus stats compete (mod placement, tie-breaks).
    stat_priority: tuple[Stat, ...] = STATS
    pinned_items: frozenset[int] = frozenset()
    weapon_archetypes: tuple[WeaponArchetype, ...] = ()
    source_text: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "focus_stats", frozenset(self.focus_stats))
        object.__setattr__(self, "pinned_items", frozenset(self.pinned_items))
        object.__setattr__(self, "stat_priority", tuple(self.stat_priority))
        object.__setattr__(self, "weapon_archetypes", tuple(self.weapon_archetypes))
        if self.class_type not in CLASS_TYPES:
            raise ValueError(f"Unknown class: {self.class_type!r}")
        if self.element not in ELEMENTS:
            raise ValueError(f"Unknown element: {self.element!r}")
        if self.activity not in ACTIVITIES:
            raise ValueError(f"Unknown activity: {self.activity!r}")
        if self.playstyle not in PLAYSTYLES:
            raise ValueError(f"Unknown playstyle: {self.playstyle!r}")
        bad_stats = (self.focus_stats | set(self.stat_priority)) - set(STATS)
        if bad_stats:
            raise ValueError(f"Unknown stats: {sorted(bad_stats)}")
        if len(set(self.stat_priority)) != len(self.stat_priority):
            raise ValueError(f"Duplicate stats in priority: {list(self.stat_priority)}")
        bad_archetypes = set(self.weapon_archetypes) - set(WEAPON_ARCHETYPES)
        if bad_archetypes:
            raise ValueError(f"Unknown weapon archetypes: {sorted(bad_archetypes)}")

    def ordered_focus(self) -> tuple[Stat, ...]:
        """Focus stats ordered by ``stat_priority`` (unranked ones last)."""
        ranked = [s for s in self.stat_priority if s in self.focus_stats]
        rest = [s for s in STATS if s in self.focus_stats and s not in ranked]
        return tuple(ranked + rest)

    def with_changes(self, **changes) -> "BuildRequest":
        return replace(self, **changes)
