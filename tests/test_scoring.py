"""Tests for weighted build scoring."""

import logging

import pytest

from d2_planner.engine.build_config import SCORE_CATEGORIES, EngineConfig
from d2_planner.engine.scoring import ScoreEngine, score_build, tier_for
from d2_planner.models.build import Build, Loadout, SubclassLoadout, Synergy
from d2_planner.models.item import Armor, Mod, Weapon
from d2_planner.models.request import BuildRequest
from d2_planner.models.stats import StatBlock


def _build(request=None, stats=None, *, weapons=(), armor=(), mods=0, synergies=()):
    request = request or BuildRequest()
    loadout = Loadout(subclass=SubclassLoadout("hunter", "solar"))
    for weapon in weapons:
        loadout.weapons[weapon.slot] = weapon
    for piece in armor:
        loadout.armor[piece.slot] = piece
    loadout.mods["helmet"] = [Mod(4000 + i, f"Mod {i}", stat="mobility") for i in range(mods)]
    return Build(
        request=request,
        loadout=loadout,
        stats=stats or StatBlock(),
        name="test build",
        synergies=list(synergies),
    )


@pytest.mark.parametrize(
    ("total", "tier"),
    [(100, "S"), (90, "S"), (89, "A"), (80, "A"), (70, "B"), (60, "C"), (50, "D"), (49, "F"), (0, "F")],
)
def test_tier_ladder(total, tier):
    assert tier_for(total) == tier


def test_empty_build_score():
    result = ScoreEngine().score(_build())
    assert result.breakdown == {
        "stat_distribution": 0,
        "synergy": 30,
        "exotic_utility": 40,
        "mod_effectiveness": 30,
        "activity_optimization": 50,
        "user_preference": 60,
    }
    assert result.total == 30
    assert result.tier == "F"
    assert not result.degraded
    # only the lowest category gets advice
    assert result.recommendations == ("Add 100 more Resilience to reach 100",)
    assert "Weak synergy (30)" in result.weaknesses
    assert "Empty slot: armor:helmet" in result.weaknesses
    assert result.strengths == ()
    assert result.optimizations == (
        "Consider adding an exotic armor piece for additional benefits",
        "Add more mods to maximize build potential",
    )


def test_breakdown_covers_every_category_in_range():
    build = _build(
        BuildRequest(activity="raid", focus_stats={"recovery"}),
        StatBlock(recovery=160, discipline=100, resilience=60),
        mods=3,
    )
    result = ScoreEngine().score(build)
    assert set(result.breakdown) == set(SCORE_CATEGORIES)
    assert all(0 <= value <= 100 for value in result.breakdown.values())
    assert 0 <= result.total <= 100


def test_synergy_points_by_strength():
    engine = ScoreEngine()
    request = BuildRequest()
    synergies = [
        Synergy("stat", ("discipline", "strength"), "legendary", ""),
        Synergy("exotic", ("x",), "low", ""),
    ]
    assert engine.synergy(_build(synergies=synergies), request) == 63
    many = [Synergy("stat", ("a", "b"), "legendary", "")] * 5
    assert engine.synergy(_build(synergies=many), request) == 100


def test_exotic_utility():
    engine = ScoreEngine()
    exotic = Armor(1, "Exotic Helm", "helmet", tier="exotic")
    raid = BuildRequest(activity="raid")
    assert engine.exotic_utility(_build(raid, armor=[exotic]), raid) == 75

    bow = Weapon(2, "Exotic Bow", "energy", "bow", tier="exotic")
    pvp = BuildRequest(activity="pvp")
    assert engine.exotic_utility(_build(pvp, weapons=[bow], armor=[exotic]), pvp) == 95


def test_mod_effectiveness_is_capped():
    engine = ScoreEngine()
    request = BuildRequest()
    assert engine.mod_effectiveness(_build(mods=4), request) == 65
    assert engine.mod_effectiveness(_build(mods=8), request) == 100
    assert engine.mod_effectiveness(_build(mods=12), request) == 100


def test_activity_optimization_rewards_preferred_archetypes():
    engine = ScoreEngine()
    raid = BuildRequest(activity="raid")
    weapons = [
        Weapon(1, "Linear Fusion", "power", "linear_fusion_rifle"),
        Weapon(2, "Hand Cannon", "kinetic", "hand_cannon"),
    ]
    # 50 + 15 for the linear fusion + fallback 2 for the hand cannon
    assert engine.activity_optimization(_build(raid, weapons=weapons), raid) == 67


def test_user_preference_focus_and_keywords():
    engine = ScoreEngine()
    focus = BuildRequest(focus_stats={"recovery", "discipline"})
    # recovery tier 8 counts fully, discipline tier 6 counts 0.7
    build = _build(focus, StatBlock(recovery=160, discipline=120))
    assert engine.user_preference(build, focus) == 86

    tank = BuildRequest(source_text="tank build, tanky please")
    assert engine.user_preference(_build(tank, StatBlock(resilience=160)), tank) == 70
    assert engine.user_preference(_build(tank, StatBlock(resilience=150)), tank) == 60


def test_optimizations_flag_tier_waste_and_gaps():
    exotic = Armor(1, "Exotic Helm", "helmet", tier="exotic")
    request = BuildRequest(focus_stats={"strength"})
    build = _build(request, StatBlock(recovery=158, mobility=115, strength=60), armor=[exotic], mods=5)
    result = ScoreEngine().score(build)
    assert result.optimizations == (
        "Consider redistributing 18 points from Recovery",
        "Increase Strength to reach higher tiers",
    )
    # optimizations do not depend on the weakest-category rule
    assert ScoreEngine(EngineConfig(recommendation_threshold=0)).score(build).optimizations == (
        result.optimizations
    )


def test_recommendation_threshold_is_60():
    engine = ScoreEngine()
    build = _build()
    request = build.request
    assert engine.config.recommendation_threshold == 60
    breakdown = dict.fromkeys(SCORE_CATEGORIES, 65)
    assert engine._recommendations(build, request, breakdown) == []
    breakdown["mod_effectiveness"] = 59
    assert engine._recommendations(build, request, breakdown) == ["Slot 8 more mods"]


def test_no_recommendations_above_threshold():
    engine = ScoreEngine(EngineConfig(recommendation_threshold=0))
    assert engine.score(_build()).recommendations == ()


def test_scoring_failure_degrades(monkeypatch, caplog):
    def boom(self, build, request):
        raise RuntimeError("boom")

    monkeypatch.setattr(ScoreEngine, "synergy", boom)
    with caplog.at_level(logging.ERROR):
        result = ScoreEngine().score(_build())
    assert result.total == 50
    assert result.tier == "unknown"
    assert result.error == "boom"
    assert result.degraded
    assert "Scoring failed" in caplog.text


def test_score_build_sets_score():
    build = score_build(_build())
    assert build.score is not None
    assert build.score.total == 30


def test_custom_weights_change_total():
    weights = dict.fromkeys(SCORE_CATEGORIES, 0.0)
    weights["user_preference"] = 1.0
    result = ScoreEngine(EngineConfig(score_weights=weights)).score(_build())
    assert result.total == 60
    assert result.tier == "C"


def test_invalid_weights_are_rejected():
    with pytest.raises(ValueError):
        EngineConfig(score_weights={"synergy": 1.0})
    with pytest.raises(ValueError):
        EngineConfig(score_weights=dict.fromkeys(SCORE_CATEGORIES, 0.5))
    with pytest.raises(ValueError):
        EngineConfig(default_class="any")
