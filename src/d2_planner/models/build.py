"""Composed build: loadout, derived stats, synergies, and score."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from d2_planner.models.constants import (
    ARMOR_SLOTS,
    WEAPON_SLOTS,
    ArmorSlot,
    ClassType,
    Element,
    WeaponSlot,
)
from d2_planner.models.item import Ability, Armor, Mod, Weapon
from d2_planner.models.request import BuildRequest
from d2_planner.models.stats import StatBlock


SynergyKind = Literal["weapon", "stat", "activity", "exotic", "element"]
SynergyStrength = Literal["low", "medium", "high", "legendary"]

STRENGTH_RANK: dict[SynergyStrength, int] = {
    "low": 0,
    "medium": 1,
    "high": 2,
    "legendary": 3,
}


@dataclass(frozen=True, slots=True)
class Synergy:
    kind: SynergyKind
    participants: tuple[str, ...]
    strength: SynergyStrength
    description: str


def by_strength(synergies: list[Synergy]) -> list[Synergy]:
    """Strongest first; detection order is kept among equals."""
    return sorted(synergies, key=lambda s: -STRENGTH_RANK[s.strength])


@dataclass(frozen=True, slots=True)
class ScoreResult:
    """Weighted score with the per-category breakdown behind it.

    ``recommendations`` address the weakest category only; ``optimizations``
    are tuning hints produced for every build.
    ``tier`` is "unknown" and ``error`` is set when scoring failed and a
    neutral fallback was returned instead.
    """

    total: int
    tier: str
    breakdown: dict[str, int] = field(default_factory=dict)
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    optimizations: tuple[str, ...] = ()
    error: str | None = None

    @property
    def degraded(self) -> bool:
        return self.error is not None


@dataclass(slots=True)
class SubclassLoadout:
    class_type: ClassType
    element: Element
    subclass: Ability | None = None
    super_ability: Ability | None = None
    aspects: list[Ability] = field(default_factory=list)
    fragments: list[Ability] = field(default_factory=list)
    grenade: Ability | None = None
    melee: Ability | None = None
    class_ability: Ability | None = None

    def abilities(self) -> list[Ability]:
        singles = [
            self.subclass, self.super_ability, self.grenade,
            self.melee, self.class_ability,
        ]
        return [a for a in singles if a is not None] + self.aspects + self.fragments


@dataclass(slots=True)
class Loadout:
    subclass: SubclassLoadout
    weapons: dict[WeaponSlot, Weapon | None] = field(
        default_factory=lambda: {slot: None for slot in WEAPON_SLOTS}
    )
    armor: dict[ArmorSlot, Armor | None] = field(
        default_factory=lambda: {slot: None for slot in ARMOR_SLOTS}
    )
    mods: dict[ArmorSlot, list[Mod]] = field(
        default_factory=lambda: {slot: [] for slot in ARMOR_SLOTS}
    )


@dataclass(slots=True)
class Build:
    """A complete loadout plus everything derived from it.

    Created by the composer, then enriched in place: synergies by the
    detector and ``score`` by the score engine.
    """

    request: BuildRequest
    loadout: Loadout
    stats: StatBlock = StatBlock()
    name: str = ""
    description: str = ""
    synergies: list[Synergy] = field(default_factory=list)
    score: ScoreResult | None = None

    # -- Queries ------------------------------------------------------------

    def equipped_weapons(self) -> list[Weapon]:
        return [w for w in self.loadout.weapons.values() if w is not None]

    def equipped_armor(self) -> list[Armor]:
        return [a for a in self.loadout.armor.values() if a is not None]

    def exotic_weapons(self) -> list[Weapon]:
        return [w for w in self.equipped_weapons() if w.is_exotic]

    def exotic_armor(self) -> list[Armor]:
        return [a for a in self.equipped_armor() if a.is_exotic]

    def exotics(self) -> list[Armor | Weapon]:
        return [*self.exotic_armor(), *self.exotic_weapons()]

    def all_mods(self) -> list[Mod]:
        return [m for slot in ARMOR_SLOTS for m in self.loadout.mods.get(slot, [])]

    def mod_count(self) -> int:
        return len(self.all_mods())

    def empty_slots(self) -> list[str]:
        """Unfilled slots as "<group>:<slot>" labels, in loadout order."""
        empty: list[str] = []
        sub = self.loadout.subclass
        for label, value in (
            ("subclass", sub.subclass),
            ("super", sub.super_ability),
            ("grenade", sub.grenade),
            ("melee", sub.melee),
            ("class_ability", sub.class_ability),
        ):
            if value is None:
                empty.append(f"subclass:{label}")
        for slot in WEAPON_SLOTS:
            if self.loadout.weapons.get(slot) is None:
                empty.append(f"weapon:{slot}")
        for slot in ARMOR_SLOTS:
            if self.loadout.armor.get(slot) is None:
                empty.append(f"armor:{slot}")
        return empty

    def item_hashes(self) -> set[int]:
        hashes = {a.item_hash for a in self.loadout.subclass.abilities()}
        hashes.update(w.item_hash for w in self.equipped_weapons())
        hashes.update(a.item_hash for a in self.equipped_armor())
        hashes.update(m.item_hash for m in self.all_mods())
        return hashes
