"""Read-only view over item definitions.

The view is built once from already-loaded items and passed explicitly to
every component that needs it. Query results are tuples ordered by item
hash so composition stays deterministic.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from d2_planner.models.constants import ClassType, ItemCategory
from d2_planner.models.item import (
    Ability,
    Armor,
    Item,
    Mod,
    Weapon,
    item_fits_class,
)


logger = logging.getLogger(__name__)


class CatalogView:
    """Immutable item index keyed by hash and by category."""

    __slots__ = ("_items", "_by_category")

    def __init__(self, items: Iterable[Item] = ()) -> None:
        by_hash: dict[int, Item] = {}
        for item in items:
            if item.item_hash in by_hash:
                raise ValueError(f"Duplicate item hash in catalog: {item.item_hash}")
            by_hash[item.item_hash] = item
        by_category: dict[str, list[Item]] = {}
        for item_hash in sorted(by_hash):
            item = by_hash[item_hash]
            by_category.setdefault(item.category, []).append(item)
        self._items: dict[int, Item] = by_hash
        self._by_category: dict[str, tuple[Item, ...]] = {
            category: tuple(items) for category, items in by_category.items()
        }

    @classmethod
    def from_items(cls, items: Iterable[Item]) -> "CatalogView":
        return cls(items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_hash: object) -> bool:
        return item_hash in self._items

    def __iter__(self) -> Iterator[Item]:
        for item_hash in sorted(self._items):
            yield self._items[item_hash]

    def __repr__(self) -> str:
        counts = ", ".join(f"{c}={len(v)}" for c, v in sorted(self._by_category.items()))
        return f"CatalogView({counts})"

    # -- Queries ------------------------------------------------------------

    def get(self, item_hash: int) -> Item | None:
        return self._items.get(item_hash)

    def get_items_by_category(self, category: ItemCategory) -> tuple[Item, ...]:
        return self._by_category.get(category, ())

    def get_items_by_slot_and_class(
        self, slot: str, class_type: ClassType
    ) -> tuple[Armor | Weapon, ...]:
        """Armor or weapons for ``slot`` usable by ``class_type``."""
        pool = self.get_items_by_category("armor") + self.get_items_by_category("weapon")
        return tuple(
            item for item in pool
            if item.slot == slot and item_fits_class(item, class_type)
        )

    def abilities(self, category: ItemCategory, class_type: ClassType, element: str) -> tuple[Ability, ...]:
        return tuple(
            item for item in self.get_items_by_category(category)
            if isinstance(item, Ability)
            and item_fits_class(item, class_type)
            and item.element in ("any", element)
        )

    def stat_mods(self, stat: str) -> tuple[Mod, ...]:
        return tuple(
            m for m in self.get_items_by_category("mod")
            if isinstance(m, Mod) and m.stat == stat
        )

    def is_exotic(self, item: Item | int) -> bool:
        if isinstance(item, int):
            resolved = self.get(item)
            if resolved is None:
                return False
            item = resolved
        return item.is_exotic

    def restricted_to(self, item_hashes: Iterable[int]) -> "CatalogView":
        """Copy keeping only the listed armor and weapons.

        Subclass abilities and mods are account-wide unlocks, so they are
        always kept.
        """
        owned = set(item_hashes)
        kept = [
            item for item in self
            if not isinstance(item, (Armor, Weapon)) or item.item_hash in owned
        ]
        logger.debug("Restricted catalog to inventory: %d of %d items", len(kept), len(self))
        return CatalogView(kept)
