"""UI-facing adapter over a scored Build.

This module intentionally contains no GUI code. It provides stable, testable
data shapes that any UI toolkit can render.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from d2_planner.models.build import Build, by_strength
from d2_planner.models.constants import (
    ARCHETYPE_LABELS,
    ARMOR_SLOTS,
    STAT_EFFECTS,
    STAT_LABELS,
    STATS,
    WEAPON_SLOTS,
    Stat,
)
from d2_planner.models.stats import StatBlock, next_breakpoint, stat_efficiency


EntryKind = Literal["subclass", "weapon", "armor", "mod"]


@dataclass(frozen=True, slots=True)
class StatRow:
    """One stat as a renderer shows it."""

    stat: Stat
    label: str
    value: int
    tier: int
    breakpoint_active: bool      # secondary effect unlocked (value >= 100)
    efficiency: float
    next_breakpoint: int | None
    effect: str


@dataclass(frozen=True, slots=True)
class LoadoutEntry:
    kind: EntryKind
    slot: str
    label: str
    item_hash: int | None = None
    exotic: bool = False


@dataclass(frozen=True, slots=True)
class BuildComparison:
    """Stat and score delta from one build to another."""

    from_name: str
    to_name: str
    stat_deltas: dict[str, int]
    score_delta: int


@dataclass(frozen=True, slots=True)
class UiDiagnostic:
    """UI-facing warning/error message about an incomplete or degraded build."""

    severity: Literal["info", "warning", "error"]
    code: str
    message: str
    slot: str | None = None


def stat_rows(stats: StatBlock) -> list[StatRow]:
    rows: list[StatRow] = []
    for stat in STATS:
        value = stats.get(stat)
        active = stats.breakpoint_reached(stat)
        primary, secondary = STAT_EFFECTS[stat]
        rows.append(StatRow(
            stat=stat,
            label=STAT_LABELS[stat],
            value=value,
            tier=stats.tier(stat),
            breakpoint_active=active,
            efficiency=round(stat_efficiency(value), 3),
            next_breakpoint=next_breakpoint(value),
            effect=secondary if active else primary,
        ))
    return rows


class BuildUiModel:
    """Read-only adapter for build result screens."""

    __slots__ = ("_build",)

    def __init__(self, build: Build) -> None:
        self._build = build

    @property
    def build(self) -> Build:
        return self._build

    def stat_rows(self) -> list[StatRow]:
        return stat_rows(self._build.stats)

    def loadout_entries(self) -> list[LoadoutEntry]:
        """Every filled slot in display order; empty slots are left out."""
        loadout = self._build.loadout
        entries: list[LoadoutEntry] = []

        sub = loadout.subclass
        for slot, ability in (
            ("subclass", sub.subclass),
            ("super", sub.super_ability),
            ("grenade", sub.grenade),
            ("melee", sub.melee),
            ("class_ability", sub.class_ability),
        ):
            if ability is not None:
                entries.append(LoadoutEntry("subclass", slot, ability.name, ability.item_hash))
        for ability in sub.aspects:
            entries.append(LoadoutEntry("subclass", "aspect", ability.name, ability.item_hash))
        for ability in sub.fragments:
            entries.append(LoadoutEntry("subclass", "fragment", ability.name, ability.item_hash))

        for slot in WEAPON_SLOTS:
            weapon = loadout.weapons.get(slot)
            if weapon is None:
                continue
            entries.append(LoadoutEntry(
                kind="weapon",
                slot=slot,
                label=f"{weapon.name} ({ARCHETYPE_LABELS[weapon.archetype]})",
                item_hash=weapon.item_hash,
                exotic=weapon.is_exotic,
            ))

        for slot in ARMOR_SLOTS:
            armor = loadout.armor.get(slot)
            if armor is not None:
                entries.append(LoadoutEntry(
                    "armor", slot, armor.name, armor.item_hash, armor.is_exotic,
                ))
            for mod in loadout.mods.get(slot, []):
                entries.append(LoadoutEntry("mod", slot, mod.name, mod.item_hash))
        return entries

    def search_loadout(self, query: str) -> list[LoadoutEntry]:
        q = query.strip().lower()
        if not q:
            return self.loadout_entries()
        return [e for e in self.loadout_entries() if q in e.label.lower()]

    def synergy_lines(self) -> list[str]:
        return [
            f"[{s.strength}] {s.description}"
            for s in by_strength(self._build.synergies)
        ]

    def compare(self, other: Build) -> BuildComparison:
        mine = self._build
        deltas = {s: other.stats.get(s) - mine.stats.get(s) for s in STATS}
        my_total = mine.score.total if mine.score else 0
        other_total = other.score.total if other.score else 0
        return BuildComparison(
            from_name=mine.name,
            to_name=other.name,
            stat_deltas=deltas,
            score_delta=other_total - my_total,
        )

    def diagnostics(self) -> list[UiDiagnostic]:
        """Warnings for empty slots and degraded scores."""
        diagnostics: list[UiDiagnostic] = []
        for slot in self._build.empty_slots():
            diagnostics.append(UiDiagnostic(
                severity="warning",
                code="empty_slot",
                message=f"No catalog item available for {slot}.",
                slot=slot,
            ))
        score = self._build.score
        if score is None:
            diagnostics.append(UiDiagnostic(
                severity="info",
                code="unscored",
                message="Build has not been scored yet.",
            ))
        elif score.degraded:
            diagnostics.append(UiDiagnostic(
                severity="error",
                code="score_degraded",
                message=f"Scoring failed, showing a neutral score: {score.error}",
            ))
        return diagnostics
