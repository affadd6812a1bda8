"""Catalog item definitions: armor, weapons, mods, and subclass abilities.

Items are immutable. Category tags (slot, archetype, ability category) are
resolved once when the catalog is loaded, so nothing downstream needs to
guess an item's role from its display name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from d2_planner.models.constants import (
    ARCHETYPE_RANGE,
    Activity,
    ArmorSlot,
    ClassType,
    Element,
    ItemCategory,
    RangeBand,
    Stat,
    Tier,
    WeaponArchetype,
    WeaponSlot,
)
from d2_planner.models.stats import StatBlock


ItemRef = int   # catalog item hash


@dataclass(frozen=True, slots=True)
class Armor:
    """An armor piece with its rolled stats."""
    category: ClassVar[ItemCategory] = "armor"

    item_hash: int
    name: str
    slot: ArmorSlot
    class_type: ClassType = "any"      # "any" fits every class
    tier: Tier = "legendary"
    stats: StatBlock = StatBlock()
    element_affinity: Element | None = None          # exotic perk element
    stat_affinities: tuple[Stat, ...] = ()           # stats the exotic perk feeds

    @property
    def is_exotic(self) -> bool:
        return self.tier == "exotic"


@dataclass(frozen=True, slots=True)
class Weapon:
    category: ClassVar[ItemCategory] = "weapon"

    item_hash: int
    name: str
    slot: WeaponSlot
    archetype: WeaponArchetype
    element: Element | None = None     # None = kinetic damage
    tier: Tier = "legendary"
    class_type: ClassType = "any"

    @property
    def is_exotic(self) -> bool:
        return self.tier == "exotic"

    @property
    def range_band(self) -> RangeBand:
        return ARCHETYPE_RANGE[self.archetype]


@dataclass(frozen=True, slots=True)
class Mod:
    """An armor mod. Stat mods add ``bonus`` to ``stat``; utility mods have no stat."""
    category: ClassVar[ItemCategory] = "mod"

    item_hash: int
    name: str
    stat: Stat | None = None
    bonus: int = 10
    slot: ArmorSlot | None = None      # None = fits any armor slot
    activities: tuple[Activity, ...] = ()
    tier: Tier = "legendary"

    @property
    def is_exotic(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Ability:
    """Subclass piece: the subclass itself, super, aspect, fragment, or ability."""

    item_hash: int
    name: str
    category: ItemCategory
    class_type: ClassType = "any"
    element: Element = "any"
    stat_affinity: Stat | None = None
    tier: Tier = "legendary"

    @property
    def is_exotic(self) -> bool:
        return False


Item = Armor | Weapon | Mod | Ability


def item_fits_class(item: Item, class_type: ClassType) -> bool:
    """True if the item is usable by ``class_type`` ("any" matches everything)."""
    item_class = getattr(item, "class_type", "any")
    return item_class == "any" or class_type == "any" or item_class == class_type
