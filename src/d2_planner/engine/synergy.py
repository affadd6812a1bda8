"""Rule-based synergy detection over a composed build.

Rules are evaluated in a fixed order and every rule runs; results are
concatenated in that order. Exotic rules read ``element_affinity`` and
``stat_affinities`` from the item definitions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from d2_planner.engine.build_config import EngineConfig
from d2_planner.models.build import Build, Synergy, SynergyStrength
from d2_planner.models.constants import (
    ACTIVITY_FAVORED_STATS,
    ACTIVITY_LABELS,
    MAX_TIER,
    STAT_LABELS,
    Element,
    Stat,
)
from d2_planner.models.item import Armor


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StatPairRule:
    name: str
    stats: tuple[Stat, Stat]
    strength: SynergyStrength
    description: str


STAT_PAIR_RULES: tuple[StatPairRule, ...] = (
    StatPairRule(
        "ability_loop", ("discipline", "strength"), "high",
        "Grenade and melee energy feed each other",
    ),
    StatPairRule(
        "super_focus", ("intellect", "recovery"), "medium",
        "Frequent supers backed by fast class ability uptime",
    ),
    StatPairRule(
        "duelist", ("mobility", "resilience"), "high",
        "Fast handling with enough shields to win duels",
    ),
)

ELEMENT_STAT_RULES: dict[Element, tuple[Stat, str]] = {
    "solar": ("recovery", "Solar healing scales with recovery"),
    "arc": ("mobility", "Arc speed effects reward mobility"),
    "void": ("discipline", "Void grenades drive the subclass loop"),
    "stasis": ("resilience", "Stasis crystals favor a sturdy playstyle"),
    "strand": ("strength", "Strand melee abilities scale with strength"),
}

EXOTIC_AFFINITY_TIER = 5
ELEMENT_STAT_TIER = 5


class SynergyDetector:
    """Stateless; safe to share between threads."""

    __slots__ = ("config",)

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def detect(self, build: Build) -> list[Synergy]:
        synergies: list[Synergy] = []
        synergies += self._weapon_coverage(build)
        synergies += self._stat_pairs(build)
        synergies += self._activity_fit(build)
        synergies += self._exotic_presence(build)
        synergies += self._exotic_affinities(build)
        synergies += self._element_stats(build)
        logger.debug("Detected %d synergies for %r", len(synergies), build.name)
        return synergies

    def enrich(self, build: Build) -> Build:
        build.synergies = self.detect(build)
        return build

    # -- Rules ----------------------------------------------------------------

    def _weapon_coverage(self, build: Build) -> list[Synergy]:
        weapons = build.equipped_weapons()
        bands = {w.range_band for w in weapons}
        if "close" not in bands or "long" not in bands:
            return []
        participants = tuple(w.name for w in weapons if w.range_band in ("close", "long"))
        return [Synergy("weapon", participants, "medium", "Close and long range weapons cover every engagement")]

    def _stat_pairs(self, build: Build) -> list[Synergy]:
        found: list[Synergy] = []
        for rule in STAT_PAIR_RULES:
            tiers = [build.stats.tier(stat) for stat in rule.stats]
            if min(tiers) < self.config.synergy_stat_tier:
                continue
            strength = "legendary" if min(tiers) >= MAX_TIER else rule.strength
            found.append(Synergy("stat", rule.stats, strength, rule.description))
        return found

    def _activity_fit(self, build: Build) -> list[Synergy]:
        activity = build.request.activity
        found: list[Synergy] = []
        for stat in ACTIVITY_FAVORED_STATS[activity]:
            if build.stats.tier(stat) >= self.config.synergy_stat_tier:
                found.append(
                    Synergy(
                        "activity", (stat, activity), "medium",
                        f"High {STAT_LABELS[stat]} suits {ACTIVITY_LABELS[activity]}",
                    )
                )
        return found

    def _exotic_presence(self, build: Build) -> list[Synergy]:
        return [
            Synergy("exotic", (item.name,), "low", f"{item.name} anchors the build")
            for item in build.exotics()
        ]

    def _exotic_affinities(self, build: Build) -> list[Synergy]:
        element = build.loadout.subclass.element
        found: list[Synergy] = []
        for item in build.exotics():
            item_element = item.element_affinity if isinstance(item, Armor) else item.element
            if item_element is not None and item_element == element:
                found.append(
                    Synergy(
                        "element", (item.name, element), "medium",
                        f"{item.name} matches the {element} subclass",
                    )
                )
            if isinstance(item, Armor) and item.stat_affinities and all(
                build.stats.tier(stat) >= EXOTIC_AFFINITY_TIER for stat in item.stat_affinities
            ):
                found.append(
                    Synergy(
                        "exotic", (item.name, *item.stat_affinities), "medium",
                        f"{item.name} is fed by " + " and ".join(item.stat_affinities),
                    )
                )
        return found

    def _element_stats(self, build: Build) -> list[Synergy]:
        element = build.loadout.subclass.element
        rule = ELEMENT_STAT_RULES.get(element)
        if rule is None:
            return []
        stat, description = rule
        if build.stats.tier(stat) < ELEMENT_STAT_TIER:
            return []
        return [Synergy("element", (element, stat), "medium", description)]


def detect_synergies(build: Build, config: EngineConfig | None = None) -> list[Synergy]:
    return SynergyDetector(config).detect(build)
