"""Parse catalog JSON (as produced by the item loader) into item models.

Payload shape::

    {"armor": [...], "weapons": [...], "mods": [...], "abilities": [...]}

Every row carries an explicit ``hash``; slot, archetype and ability
category are explicit tags, never inferred from the display name. Rows
that fail validation are logged and skipped so one bad definition does not
sink the whole catalog.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any, TypeVar

from d2_planner.catalog.view import CatalogView
from d2_planner.models.constants import (
    ABILITY_CATEGORIES,
    ACTIVITIES,
    ARMOR_SLOTS,
    CLASS_TYPES,
    ELEMENTS,
    STATS,
    TIERS,
    WEAPON_ARCHETYPES,
    WEAPON_SLOTS,
)
from d2_planner.models.item import Ability, Armor, Item, Mod, Weapon
from d2_planner.models.stats import StatBlock


logger = logging.getLogger(__name__)

T = TypeVar("T")


def _hash(row: Mapping[str, Any]) -> int:
    value = row.get("hash", row.get("item_hash"))
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Missing item hash: {row!r}")
    if isinstance(value, str):
        return int(value.strip(), 0)
    return int(value)


def _choice(
    row: Mapping[str, Any],
    key: str,
    allowed: Iterable[str],
    default: str | None = None,
    *,
    required: bool = False,
) -> Any:
    value = row.get(key, default)
    if value is None:
        if required:
            raise ValueError(f"Missing {key} for item {row.get('name')!r}")
        return None
    value = str(value).strip().lower()
    if value not in allowed:
        raise ValueError(f"Invalid {key} {value!r} for item {row.get('name')!r}")
    return value


def _stats_tuple(values: Any) -> tuple[str, ...]:
    if not values:
        return ()
    stats = tuple(str(v).lower() for v in values)
    unknown = [s for s in stats if s not in STATS]
    if unknown:
        raise ValueError(f"Unknown stats: {unknown}")
    return stats


def parse_armor(row: Mapping[str, Any]) -> Armor:
    return Armor(
        item_hash=_hash(row),
        name=str(row.get("name", "")),
        slot=_choice(row, "slot", ARMOR_SLOTS, required=True),
        class_type=_choice(row, "class", CLASS_TYPES, "any"),
        tier=_choice(row, "tier", TIERS, "legendary"),
        stats=StatBlock.from_mapping(row.get("stats")),
        element_affinity=_choice(row, "elementAffinity", ELEMENTS),
        stat_affinities=_stats_tuple(row.get("statAffinities")),
    )


def parse_weapon(row: Mapping[str, Any]) -> Weapon:
    element = row.get("element")
    return Weapon(
        item_hash=_hash(row),
        name=str(row.get("name", "")),
        slot=_choice(row, "slot", WEAPON_SLOTS, required=True),
        archetype=_choice(row, "archetype", WEAPON_ARCHETYPES, required=True),
        # "kinetic" is a damage type, not a subclass element
        element=None if element in (None, "kinetic") else _choice(row, "element", ELEMENTS),
        tier=_choice(row, "tier", TIERS, "legendary"),
        class_type=_choice(row, "class", CLASS_TYPES, "any"),
    )


def parse_mod(row: Mapping[str, Any]) -> Mod:
    activities = tuple(str(a).lower() for a in row.get("activities") or ())
    unknown = [a for a in activities if a not in ACTIVITIES]
    if unknown:
        raise ValueError(f"Unknown activities: {unknown}")
    return Mod(
        item_hash=_hash(row),
        name=str(row.get("name", "")),
        stat=_choice(row, "stat", STATS),
        bonus=int(row.get("bonus", 10)),
        slot=_choice(row, "slot", ARMOR_SLOTS),
        activities=activities,
    )


def parse_ability(row: Mapping[str, Any]) -> Ability:
    return Ability(
        item_hash=_hash(row),
        name=str(row.get("name", "")),
        category=_choice(row, "category", ABILITY_CATEGORIES, required=True),
        class_type=_choice(row, "class", CLASS_TYPES, "any"),
        element=_choice(row, "element", ELEMENTS, "any"),
        stat_affinity=_choice(row, "statAffinity", STATS),
    )


def _parse_rows(rows: Any, parse: Callable[[Mapping[str, Any]], T], kind: str) -> list[T]:
    if not isinstance(rows, list):
        return []
    parsed: list[T] = []
    for row in rows:
        if not isinstance(row, Mapping):
            logger.warning("Skipping non-object %s row: %r", kind, row)
            continue
        try:
            parsed.append(parse(row))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping %s row %r: %s", kind, row.get("name"), exc)
    return parsed


def parse_catalog_items(payload: Mapping[str, Any]) -> list[Item]:
    items: list[Item] = []
    items += _parse_rows(payload.get("abilities"), parse_ability, "ability")
    items += _parse_rows(payload.get("armor"), parse_armor, "armor")
    items += _parse_rows(payload.get("weapons"), parse_weapon, "weapon")
    items += _parse_rows(payload.get("mods"), parse_mod, "mod")
    return items


def catalog_from_dict(payload: Mapping[str, Any]) -> CatalogView:
    if not isinstance(payload, Mapping):
        raise ValueError("Catalog payload must be an object")
    items = parse_catalog_items(payload)
    logger.info("Loaded catalog with %d items", len(items))
    return CatalogView.from_items(items)


def load_catalog(path: Path) -> CatalogView:
    return catalog_from_dict(json.loads(Path(path).read_text()))
