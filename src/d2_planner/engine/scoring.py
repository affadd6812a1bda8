"""Weighted build scoring.

Six categories, each scored 0-100, combine into a 0-100 total:

    stat_distribution      0.25   activity-weighted stat tiers
    synergy                0.20   detected synergies by strength
    exotic_utility         0.15   one exotic per category, activity fit
    mod_effectiveness      0.15   mods slotted
    activity_optimization  0.15   weapon archetypes and stat priorities
    user_preference        0.10   focus stats reached, free-text keywords

Recommendations cover the weakest category only. Optimizations are
produced for every build and flag wasted tier points as well as gaps in
gear and mods.

Scoring never raises: an unexpected failure is logged and a neutral
result with ``tier == "unknown"`` is returned instead.
"""

from __future__ import annotations

import logging

from d2_planner.engine.build_config import SCORE_CATEGORIES, EngineConfig
from d2_planner.models.build import Build, ScoreResult
from d2_planner.models.constants import (
    ACTIVITY_LABELS,
    ACTIVITY_STAT_PRIORITIES,
    ACTIVITY_WEAPON_BONUS,
    ARCHETYPE_LABELS,
    BREAKPOINT,
    MAX_TIER,
    STAT_LABELS,
    STATS,
    TIER_SIZE,
    WEAPON_FALLBACK_BONUS,
)
from d2_planner.models.request import BuildRequest
from d2_planner.models.stats import next_breakpoint
from d2_planner.parser.intent_parser import tokenize
from d2_planner.parser.keywords import PREFERENCE_KEYWORDS


logger = logging.getLogger(__name__)

CATEGORY_LABELS = {
    "stat_distribution": "stat distribution",
    "synergy": "synergy",
    "exotic_utility": "exotic utility",
    "mod_effectiveness": "mod effectiveness",
    "activity_optimization": "activity optimization",
    "user_preference": "preference match",
}

SYNERGY_POINTS = {"low": 3, "medium": 7, "high": 12, "legendary": 20}

TIER_LADDER = ((90, "S"), (80, "A"), (70, "B"), (60, "C"), (50, "D"))

DEGRADED_TOTAL = 50

# Points past the last full tier above this count as wasted.
TIER_WASTE_LIMIT = 15
MIN_MOD_COUNT = 5


def tier_for(total: int) -> str:
    for threshold, tier in TIER_LADDER:
        if total >= threshold:
            return tier
    return "F"


def _clamp(value: float) -> int:
    return int(round(max(0.0, min(100.0, value))))


def _focus_match(tier: int) -> float:
    if tier >= 8:
        return 1.0
    if tier >= 6:
        return 0.7
    if tier >= 4:
        return 0.4
    return 0.0


class ScoreEngine:
    """Scores builds against the request that produced them."""

    __slots__ = ("config",)

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def score(self, build: Build, request: BuildRequest | None = None) -> ScoreResult:
        request = request or build.request
        try:
            return self._score(build, request)
        except Exception as exc:
            logger.exception("Scoring failed for %r", build.name)
            return ScoreResult(total=DEGRADED_TOTAL, tier="unknown", error=str(exc) or repr(exc))

    def score_build(self, build: Build) -> Build:
        build.score = self.score(build)
        return build

    # -- Categories -----------------------------------------------------------

    def stat_distribution(self, build: Build, request: BuildRequest) -> int:
        priorities = ACTIVITY_STAT_PRIORITIES[request.activity]
        weighted = sum(
            build.stats.tier(stat) / MAX_TIER * 100 * priorities[stat] for stat in STATS
        )
        return _clamp(weighted / sum(priorities.values()))

    def synergy(self, build: Build, request: BuildRequest) -> int:
        if not build.synergies:
            return 30
        return _clamp(40 + sum(SYNERGY_POINTS[s.strength] for s in build.synergies))

    def exotic_utility(self, build: Build, request: BuildRequest) -> int:
        armor = build.exotic_armor()
        weapons = build.exotic_weapons()
        score = 40
        if len(armor) == 1:
            score += 25
        if len(weapons) == 1:
            score += 20
        if len(armor) > 1:
            score -= 30
        if len(weapons) > 1:
            score -= 30
        if request.activity == "raid" and armor:
            score += 10
        if request.activity in ("pvp", "trials") and weapons:
            score += 10
        return _clamp(score)

    def mod_effectiveness(self, build: Build, request: BuildRequest) -> int:
        cap = self.config.mod_score_cap
        return _clamp(30 + min(build.mod_count(), cap) * 70 / cap)

    def activity_optimization(self, build: Build, request: BuildRequest) -> int:
        bonuses = ACTIVITY_WEAPON_BONUS[request.activity]
        priorities = ACTIVITY_STAT_PRIORITIES[request.activity]
        score = 50.0
        for weapon in build.equipped_weapons():
            score += bonuses.get(weapon.archetype, WEAPON_FALLBACK_BONUS)
        for stat in STATS:
            score += build.stats.tier(stat) / MAX_TIER * priorities[stat] * 15
        return _clamp(score)

    def user_preference(self, build: Build, request: BuildRequest) -> int:
        score = 60.0
        if request.focus_stats:
            matched = sum(_focus_match(build.stats.tier(s)) for s in request.focus_stats)
            score += 30 * matched / len(request.focus_stats)
        rewarded: set[str] = set()
        for token in tokenize(request.source_text):
            stat = PREFERENCE_KEYWORDS.get(token)
            if stat is not None and stat not in rewarded and build.stats.tier(stat) >= 8:
                rewarded.add(stat)
                score += 10
        return _clamp(score)

    # -- Assembly -------------------------------------------------------------

    def _score(self, build: Build, request: BuildRequest) -> ScoreResult:
        breakdown = {
            category: getattr(self, category)(build, request) for category in SCORE_CATEGORIES
        }
        weights = self.config.score_weights
        total = _clamp(sum(breakdown[c] * weights[c] for c in SCORE_CATEGORIES))
        return ScoreResult(
            total=total,
            tier=tier_for(total),
            breakdown=breakdown,
            strengths=tuple(self._strengths(build, breakdown)),
            weaknesses=tuple(self._weaknesses(build, request, breakdown)),
            recommendations=tuple(self._recommendations(build, request, breakdown)),
            optimizations=tuple(self._optimizations(build, request)),
        )

    def _strengths(self, build: Build, breakdown: dict[str, int]) -> list[str]:
        strengths = [
            f"Strong {CATEGORY_LABELS[c]} ({breakdown[c]})"
            for c in SCORE_CATEGORIES
            if breakdown[c] >= self.config.strength_threshold
        ]
        for stat in STATS:
            if build.stats.get(stat) >= BREAKPOINT:
                strengths.append(f"{STAT_LABELS[stat]} secondary effects active")
        if len(build.synergies) > 2:
            strengths.append(f"{len(build.synergies)} synergies detected")
        if build.stats.total() > 600:
            strengths.append("High total stats")
        if build.exotic_armor():
            strengths.append(f"Built around {build.exotic_armor()[0].name}")
        return strengths

    def _weaknesses(
        self, build: Build, request: BuildRequest, breakdown: dict[str, int]
    ) -> list[str]:
        weaknesses = [
            f"Weak {CATEGORY_LABELS[c]} ({breakdown[c]})"
            for c in SCORE_CATEGORIES
            if breakdown[c] < self.config.weakness_threshold
        ]
        weaknesses += [f"Empty slot: {slot}" for slot in build.empty_slots()]
        for stat in request.ordered_focus():
            if build.stats.tier(stat) < 5:
                weaknesses.append(f"{STAT_LABELS[stat]} is below tier 5 despite being a focus")
        return weaknesses

    def _recommendations(
        self, build: Build, request: BuildRequest, breakdown: dict[str, int]
    ) -> list[str]:
        # Lowest category only; ties resolve in category order.
        lowest = min(SCORE_CATEGORIES, key=lambda c: breakdown[c])
        if breakdown[lowest] >= self.config.recommendation_threshold:
            return []
        return self._advice(lowest, build, request)

    def _optimizations(self, build: Build, request: BuildRequest) -> list[str]:
        hints: list[str] = []
        for stat in STATS:
            value = build.stats.get(stat)
            waste = value % TIER_SIZE
            if waste > TIER_WASTE_LIMIT:
                hints.append(f"Consider redistributing {waste} points from {STAT_LABELS[stat]}")
            if stat in request.focus_stats and build.stats.tier(stat) < 5:
                hints.append(f"Increase {STAT_LABELS[stat]} to reach higher tiers")
        if not build.exotic_armor():
            hints.append("Consider adding an exotic armor piece for additional benefits")
        if build.mod_count() < MIN_MOD_COUNT:
            hints.append("Add more mods to maximize build potential")
        return hints

    def _advice(self, category: str, build: Build, request: BuildRequest) -> list[str]:
        if category == "stat_distribution":
            priorities = ACTIVITY_STAT_PRIORITIES[request.activity]
            stat = max(
                STATS,
                key=lambda s: (priorities[s] * (MAX_TIER - build.stats.tier(s)), -STATS.index(s)),
            )
            target = next_breakpoint(build.stats.get(stat))
            if target is None:
                return []
            gap = target - build.stats.get(stat)
            return [f"Add {gap} more {STAT_LABELS[stat]} to reach {target}"]
        if category == "synergy":
            return ["Raise a stat pair such as discipline and strength to tier 7 to unlock synergies"]
        if category == "exotic_utility":
            if len(build.exotic_armor()) > 1 or len(build.exotic_weapons()) > 1:
                return ["Keep at most one exotic armor piece and one exotic weapon"]
            missing = []
            if not build.exotic_armor():
                missing.append("an exotic armor piece")
            if not build.exotic_weapons():
                missing.append("an exotic weapon")
            return ["Equip " + " and ".join(missing)] if missing else []
        if category == "mod_effectiveness":
            missing = self.config.mod_score_cap - build.mod_count()
            return [f"Slot {missing} more mods"] if missing > 0 else []
        if category == "activity_optimization":
            preferred = ACTIVITY_WEAPON_BONUS[request.activity]
            if preferred:
                names = ", ".join(ARCHETYPE_LABELS[a] for a in preferred)
                return [f"Use weapons suited to {ACTIVITY_LABELS[request.activity]}: {names}"]
            priorities = ACTIVITY_STAT_PRIORITIES[request.activity]
            top = sorted(STATS, key=lambda s: -priorities[s])[:2]
            return ["Invest in " + " and ".join(top)]
        if category == "user_preference":
            short = [s for s in request.ordered_focus() if build.stats.tier(s) < 8]
            if short:
                return ["Invest further in " + ", ".join(short)]
            return ["Add focus stats to your request for a more personal build"]
        return []


def score_build(build: Build, config: EngineConfig | None = None) -> Build:
    return ScoreEngine(config).score_build(build)
