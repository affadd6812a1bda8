"""Assemble a complete loadout for a BuildRequest.

Composition is greedy and deterministic. Every ranking ends with the item
hash as the tie-breaker, so the same request against the same catalog
always produces the same build.

Order of work:
  1. Resolve the locked exotic, the class and the subclass element.
  2. Validate pinned items against the locked exotic.
  3. Subclass: subclass, super, aspects, fragments and abilities.
  4. Weapons: one per slot, at most one exotic.
  5. Armor: one per slot, at most one exotic.
  6. Mods: focus stat mods, the playstyle mod, then activity utility mods.
  7. Stats: armor contributions plus mod bonuses, clamped to [0, 200].
"""

from __future__ import annotations

import logging

from d2_planner.catalog.view import CatalogView
from d2_planner.engine.build_config import EngineConfig
from d2_planner.models.build import Build, Loadout, SubclassLoadout
from d2_planner.models.constants import (
    ACTIVITY_FAVORED_STATS,
    ACTIVITY_LABELS,
    ACTIVITY_SLOT_RANGE,
    ACTIVITY_WEAPON_BONUS,
    ARMOR_SLOTS,
    PLAYSTYLE_ELEMENTS,
    PLAYSTYLE_LABELS,
    PLAYSTYLE_MOD_STAT,
    PLAYSTYLE_STATS,
    STAT_LABELS,
    STATS,
    WEAPON_SLOTS,
    ArmorSlot,
    ClassType,
    Element,
    ItemCategory,
    Stat,
)
from d2_planner.models.item import Ability, Armor, Mod, Weapon, item_fits_class
from d2_planner.models.request import BuildRequest
from d2_planner.models.stats import StatBlock


logger = logging.getLogger(__name__)

# Ranking bonuses
REQUESTED_ARCHETYPE_BONUS = 20
SLOT_RANGE_BONUS = 5
WEAPON_ELEMENT_BONUS = 3
EXOTIC_ELEMENT_BONUS = 40
EXOTIC_AFFINITY_BONUS = 20


class CompositionError(ValueError):
    """The request's hard constraints cannot be satisfied."""


def resolve_class(
    request: BuildRequest,
    locked: Armor | Weapon | None,
    config: EngineConfig,
) -> ClassType:
    if request.class_type != "any":
        return request.class_type
    if locked is not None and locked.class_type != "any":
        return locked.class_type
    return config.default_class


def resolve_element(request: BuildRequest) -> Element:
    if request.element != "any":
        return request.element
    return PLAYSTYLE_ELEMENTS[request.playstyle]


def generate_build_name(
    request: BuildRequest,
    class_type: ClassType,
    element: Element,
    locked: Armor | Weapon | None = None,
) -> str:
    parts = [element.title(), class_type.title()]
    if locked is not None:
        parts.append(locked.name)
    elif request.focus_stats:
        parts.append(f"High {STAT_LABELS[request.ordered_focus()[0]]}")
    if request.activity != "general":
        parts.append(ACTIVITY_LABELS[request.activity])
    parts.append("Build")
    return " ".join(parts)


def generate_build_description(request: BuildRequest) -> str:
    parts: list[str] = []
    if request.focus_stats:
        parts.append("Optimized for " + " and ".join(request.ordered_focus()))
    if request.activity != "general":
        parts.append(f"Designed for {ACTIVITY_LABELS[request.activity]}")
    if request.playstyle != "balanced":
        parts.append(f"{PLAYSTYLE_LABELS[request.playstyle]} playstyle")
    if not parts:
        return "Balanced all-round build."
    return ". ".join(parts) + "."


class BuildComposer:
    """Greedy, deterministic loadout assembly over a catalog view."""

    __slots__ = ("catalog", "config")

    def __init__(self, catalog: CatalogView, config: EngineConfig | None = None) -> None:
        self.catalog = catalog
        self.config = config or EngineConfig()

    # -- Public API -----------------------------------------------------------

    def compose(self, request: BuildRequest) -> Build:
        locked = self._resolve_locked(request)
        class_type = resolve_class(request, locked, self.config)
        element = resolve_element(request)
        fixed = self._resolve_fixed(request, class_type, locked)

        loadout = Loadout(
            subclass=self._compose_subclass(request, class_type, element),
            weapons=self._compose_weapons(request, class_type, element, fixed),
            armor=self._compose_armor(request, class_type, element, fixed),
        )
        self._assign_mods(request, loadout)

        build = Build(
            request=request,
            loadout=loadout,
            stats=self.compute_stats(request, loadout),
            name=generate_build_name(request, class_type, element, locked),
            description=generate_build_description(request),
        )
        self._check_exotics(build)
        logger.debug(
            "Composed %r: %d empty slots, %d mods",
            build.name, len(build.empty_slots()), build.mod_count(),
        )
        return build

    def stat_targets(self, request: BuildRequest) -> StatBlock:
        """Per-piece contribution floor. Floors combine with max, never add."""
        cfg = self.config
        favored = ACTIVITY_FAVORED_STATS[request.activity]
        playstyle = PLAYSTYLE_STATS[request.playstyle]
        values: dict[str, int] = {}
        for stat in STATS:
            value = cfg.base_floor
            if stat in request.focus_stats:
                value = max(value, cfg.focus_investment)
            if stat in favored:
                value = max(value, cfg.activity_floor)
            if stat in playstyle:
                value = max(value, cfg.playstyle_floor)
            values[stat] = value
        return StatBlock(**values)

    def compute_stats(self, request: BuildRequest, loadout: Loadout) -> StatBlock:
        target = self.stat_targets(request)
        total = StatBlock()
        for piece in loadout.armor.values():
            if piece is not None:
                total = total.plus(piece.stats.elementwise_max(target))
        bonus = {stat: 0 for stat in STATS}
        for mods in loadout.mods.values():
            for mod in mods:
                if mod.stat is not None:
                    bonus[mod.stat] += mod.bonus
        return total.plus(bonus)

    # -- Constraint resolution ----------------------------------------------

    def _resolve_locked(self, request: BuildRequest) -> Armor | Weapon | None:
        if request.locked_exotic is None:
            return None
        item = self.catalog.get(request.locked_exotic)
        if item is None:
            where = "inventory" if request.constraints.use_inventory_only else "catalog"
            raise CompositionError(
                f"Locked exotic {request.locked_exotic} is not available in the {where}"
            )
        if not isinstance(item, (Armor, Weapon)) or not item.is_exotic:
            raise CompositionError(f"Locked item {item.name!r} is not an exotic armor piece or weapon")
        if request.class_type != "any" and not item_fits_class(item, request.class_type):
            raise CompositionError(
                f"Locked exotic {item.name!r} is {item.class_type} gear "
                f"but the request is for {request.class_type}"
            )
        return item

    def _resolve_fixed(
        self,
        request: BuildRequest,
        class_type: ClassType,
        locked: Armor | Weapon | None,
    ) -> dict[str, Armor | Weapon]:
        """Slots occupied before ranking: the locked exotic plus pinned items."""
        fixed: dict[str, Armor | Weapon] = {}
        exotic_categories: set[str] = set()
        if locked is not None:
            fixed[locked.slot] = locked
            exotic_categories.add(locked.category)

        for item_hash in sorted(request.pinned_items):
            if locked is not None and item_hash == locked.item_hash:
                continue
            item = self.catalog.get(item_hash)
            if item is None:
                raise CompositionError(f"Pinned item {item_hash} is not available")
            if not isinstance(item, (Armor, Weapon)):
                raise CompositionError(f"Pinned item {item.name!r} is not armor or a weapon")
            if not item_fits_class(item, class_type):
                raise CompositionError(f"Pinned item {item.name!r} cannot be used by {class_type}")
            if item.slot in fixed:
                raise CompositionError(
                    f"Pinned item {item.name!r} conflicts with "
                    f"{fixed[item.slot].name!r} in the {item.slot} slot"
                )
            if item.is_exotic:
                if item.category in exotic_categories:
                    raise CompositionError(
                        f"Pinned exotic {item.name!r} would be a second exotic {item.category}"
                    )
                exotic_categories.add(item.category)
            fixed[item.slot] = item
        return fixed

    # -- Subclass -------------------------------------------------------------

    def _ranked_abilities(
        self,
        category: ItemCategory,
        request: BuildRequest,
        class_type: ClassType,
        element: Element,
    ) -> list[Ability]:
        focus = request.ordered_focus()

        def key(ability: Ability) -> tuple[int, int, int]:
            if ability.stat_affinity in focus:
                return (0, focus.index(ability.stat_affinity), ability.item_hash)
            return (1, 0, ability.item_hash)

        return sorted(self.catalog.abilities(category, class_type, element), key=key)

    def _compose_subclass(
        self,
        request: BuildRequest,
        class_type: ClassType,
        element: Element,
    ) -> SubclassLoadout:
        def first(category: ItemCategory) -> Ability | None:
            ranked = self._ranked_abilities(category, request, class_type, element)
            return ranked[0] if ranked else None

        subclass = first("subclass")
        if subclass is None:
            logger.warning("No %s subclass for %s in catalog", element, class_type)
        return SubclassLoadout(
            class_type=class_type,
            element=element,
            subclass=subclass,
            super_ability=first("super"),
            aspects=self._ranked_abilities("aspect", request, class_type, element)[
                : self.config.max_aspects
            ],
            fragments=self._ranked_abilities("fragment", request, class_type, element)[
                : self.config.max_fragments
            ],
            grenade=first("grenade"),
            melee=first("melee"),
            class_ability=first("class_ability"),
        )

    # -- Weapons --------------------------------------------------------------

    def weapon_rank(self, weapon: Weapon, request: BuildRequest, element: Element) -> int:
        rank = ACTIVITY_WEAPON_BONUS[request.activity].get(weapon.archetype, 0)
        if weapon.archetype in request.weapon_archetypes:
            rank += REQUESTED_ARCHETYPE_BONUS
        if weapon.range_band == ACTIVITY_SLOT_RANGE[request.activity][weapon.slot]:
            rank += SLOT_RANGE_BONUS
        if weapon.element is not None and weapon.element == element:
            rank += WEAPON_ELEMENT_BONUS
        return rank

    def _compose_weapons(
        self,
        request: BuildRequest,
        class_type: ClassType,
        element: Element,
        fixed: dict[str, Armor | Weapon],
    ) -> dict[str, Weapon | None]:
        weapons: dict[str, Weapon | None] = {
            slot: fixed.get(slot) for slot in WEAPON_SLOTS
        }
        open_slots = [slot for slot in WEAPON_SLOTS if weapons[slot] is None]

        def key(weapon: Weapon) -> tuple[int, int]:
            return (-self.weapon_rank(weapon, request, element), weapon.item_hash)

        candidates = {
            slot: sorted(
                (w for w in self.catalog.get_items_by_slot_and_class(slot, class_type)
                 if isinstance(w, Weapon)),
                key=key,
            )
            for slot in open_slots
        }

        if not any(w is not None and w.is_exotic for w in weapons.values()):
            exotics = sorted(
                (w for slot in open_slots for w in candidates[slot] if w.is_exotic),
                key=key,
            )
            if exotics:
                weapons[exotics[0].slot] = exotics[0]

        for slot in open_slots:
            if weapons[slot] is not None:
                continue
            weapons[slot] = next((w for w in candidates[slot] if not w.is_exotic), None)
            if weapons[slot] is None:
                logger.warning("No %s weapon available for %s", slot, class_type)
        return weapons

    # -- Armor ----------------------------------------------------------------

    def stat_weights(self, request: BuildRequest) -> dict[Stat, int]:
        favored = ACTIVITY_FAVORED_STATS[request.activity]
        playstyle = PLAYSTYLE_STATS[request.playstyle]
        weights: dict[Stat, int] = {}
        for stat in STATS:
            weight = 1
            if stat in request.focus_stats:
                weight += 3
            if stat in favored:
                weight += 2
            if stat in playstyle:
                weight += 1
            weights[stat] = weight
        return weights

    def armor_fit(self, armor: Armor, request: BuildRequest, element: Element) -> int:
        weights = self.stat_weights(request)
        fit = sum(weights[stat] * armor.stats.get(stat) for stat in STATS)
        if not armor.is_exotic:
            return fit
        if armor.element_affinity is not None and armor.element_affinity == element:
            fit += EXOTIC_ELEMENT_BONUS
        wanted = set(request.focus_stats) | set(ACTIVITY_FAVORED_STATS[request.activity])
        fit += EXOTIC_AFFINITY_BONUS * len(wanted.intersection(armor.stat_affinities))
        return fit

    def _compose_armor(
        self,
        request: BuildRequest,
        class_type: ClassType,
        element: Element,
        fixed: dict[str, Armor | Weapon],
    ) -> dict[str, Armor | None]:
        armor: dict[str, Armor | None] = {
            slot: fixed.get(slot) for slot in ARMOR_SLOTS
        }
        open_slots = [slot for slot in ARMOR_SLOTS if armor[slot] is None]

        def key(piece: Armor) -> tuple[int, int]:
            return (-self.armor_fit(piece, request, element), piece.item_hash)

        candidates = {
            slot: sorted(
                (a for a in self.catalog.get_items_by_slot_and_class(slot, class_type)
                 if isinstance(a, Armor)),
                key=key,
            )
            for slot in open_slots
        }

        if not any(a is not None and a.is_exotic for a in armor.values()):
            exotics = sorted(
                (a for slot in open_slots for a in candidates[slot] if a.is_exotic),
                key=key,
            )
            if exotics:
                armor[exotics[0].slot] = exotics[0]

        for slot in open_slots:
            if armor[slot] is not None:
                continue
            armor[slot] = next((a for a in candidates[slot] if not a.is_exotic), None)
            if armor[slot] is None:
                logger.warning("No %s armor available for %s", slot, class_type)
        return armor

    # -- Mods -----------------------------------------------------------------

    def _best_stat_mod(self, stat: Stat) -> Mod | None:
        mods = self.catalog.stat_mods(stat)
        if not mods:
            return None
        return max(mods, key=lambda m: (m.bonus, -m.item_hash))

    def _mod_slot(self, mod: Mod, loadout: Loadout) -> ArmorSlot | None:
        cap = self.config.mod_slots_per_piece
        open_slots = [
            slot for slot in ARMOR_SLOTS
            if loadout.armor.get(slot) is not None and len(loadout.mods[slot]) < cap
        ]
        if mod.slot is not None:
            return mod.slot if mod.slot in open_slots else None
        if not open_slots:
            return None
        return min(open_slots, key=lambda slot: len(loadout.mods[slot]))

    def _assign_mods(self, request: BuildRequest, loadout: Loadout) -> None:
        queue: list[Mod] = []
        for stat in request.ordered_focus():
            mod = self._best_stat_mod(stat)
            if mod is not None:
                queue.append(mod)
        playstyle_stat = PLAYSTYLE_MOD_STAT[request.playstyle]
        if playstyle_stat is not None:
            mod = self._best_stat_mod(playstyle_stat)
            if mod is not None:
                queue.append(mod)
        queue.extend(
            m for m in self.catalog.get_items_by_category("mod")
            if isinstance(m, Mod) and m.stat is None and request.activity in m.activities
        )

        for mod in queue:
            slot = self._mod_slot(mod, loadout)
            if slot is None:
                logger.debug("No room for mod %s", mod.name)
                continue
            loadout.mods[slot].append(mod)

    # -- Invariants -----------------------------------------------------------

    @staticmethod
    def _check_exotics(build: Build) -> None:
        if len(build.exotic_armor()) > 1:
            raise CompositionError("Build holds more than one exotic armor piece")
        if len(build.exotic_weapons()) > 1:
            raise CompositionError("Build holds more than one exotic weapon")


def compose(
    request: BuildRequest,
    catalog: CatalogView,
    config: EngineConfig | None = None,
) -> Build:
    return BuildComposer(catalog, config).compose(request)
