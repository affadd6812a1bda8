"""End-to-end tests for generate_recommendation against the sample catalog."""

import json

import pytest

from d2_planner.catalog.sample import CONTRAVERSE_HOLD, PHOENIX_PROTOCOL, sample_catalog
from d2_planner.engine.composer import CompositionError
from d2_planner.engine.export_state import build_to_dict, recommendation_to_dict
from d2_planner.optimizer import (
    RecommendationOptions,
    build_request,
    generate_recommendation,
)


# Warlock "Deep Explorer" legendary set plus one kinetic weapon
WARLOCK_INVENTORY = [2201, 2211, 2221, 2231, 2241, 3001]


def test_high_recovery_void_warlock_raid():
    result = generate_recommendation(
        "High recovery Warlock void build for raids", sample_catalog()
    )
    primary = result.primary
    assert primary.loadout.subclass.class_type == "warlock"
    assert primary.loadout.subclass.element == "void"
    assert primary.loadout.subclass.subclass.name == "Voidwalker"
    assert primary.stats.recovery >= 140
    assert primary.stats.recovery == 160
    # four pieces floored at 20 plus Contraverse Hold rolling 22
    assert primary.stats.discipline == 102
    assert [a.item_hash for a in primary.exotic_armor()] == [CONTRAVERSE_HOLD]
    assert len(primary.exotic_weapons()) <= 1
    assert primary.score.breakdown["user_preference"] > 60
    assert primary.name == "Void Warlock High Recovery Raid Build"

    mod_names = {m.name for m in primary.all_mods()}
    assert {"Recovery Mod", "Ammo Finder", "Concussive Dampener", "Recuperation"} <= mod_names

    assert len(result.alternatives) == 3
    assert result.confidence == 55
    assert result.warnings == []


def test_inventory_only_requires_inventory():
    options = RecommendationOptions(use_inventory_only=True)
    with pytest.raises(ValueError, match="inventory"):
        generate_recommendation("void warlock", sample_catalog(), options)


def test_inventory_only_restricts_armor_and_weapons():
    options = RecommendationOptions(
        use_inventory_only=True,
        inventory=WARLOCK_INVENTORY,
        include_alternatives=False,
    )
    result = generate_recommendation("void warlock raid", sample_catalog(), options)
    build = result.primary
    assert result.request.constraints.use_inventory_only is True
    owned = {a.item_hash for a in build.equipped_armor()} | {
        w.item_hash for w in build.equipped_weapons()
    }
    assert owned == set(WARLOCK_INVENTORY)
    assert "weapon:energy" in build.empty_slots()
    assert "weapon:power" in build.empty_slots()
    # subclass unlocks are account-wide
    assert build.loadout.subclass.subclass is not None


def test_locked_exotic_from_options():
    options = RecommendationOptions(locked_exotic=PHOENIX_PROTOCOL, include_alternatives=False)
    result = generate_recommendation("solar warlock recovery", sample_catalog(), options)
    assert result.request.locked_exotic == PHOENIX_PROTOCOL
    assert result.primary.loadout.armor["chest"].item_hash == PHOENIX_PROTOCOL
    assert len(result.primary.exotic_armor()) == 1


def test_locked_exotic_outside_inventory_fails():
    options = RecommendationOptions(
        use_inventory_only=True,
        inventory=WARLOCK_INVENTORY,
        locked_exotic=CONTRAVERSE_HOLD,
    )
    with pytest.raises(CompositionError, match="inventory"):
        generate_recommendation("void warlock", sample_catalog(), options)


def test_structured_input():
    result = generate_recommendation(
        {"class": "titan", "activity": "pvp", "focusStats": ["mobility"]},
        sample_catalog(),
        RecommendationOptions(include_alternatives=False),
    )
    assert result.request.class_type == "titan"
    assert result.primary.loadout.subclass.class_type == "titan"
    assert result.primary.stats.mobility >= 140
    assert result.alternatives == []


def test_empty_input_falls_back_to_defaults():
    result = generate_recommendation("", sample_catalog(), RecommendationOptions(alternatives_count=1))
    sub = result.primary.loadout.subclass
    assert sub.class_type == "hunter"
    assert sub.element == "solar"
    assert sub.subclass.name == "Gunslinger"
    assert len(result.alternatives) == 1
    assert result.confidence == 0
    assert "Build request may be too vague" in result.warnings


def test_build_request_applies_option_overrides():
    request = build_request("arc hunter", RecommendationOptions(locked_exotic=1201))
    assert request.locked_exotic == 1201
    assert request.constraints.use_inventory_only is False


def test_export_is_json_serializable():
    result = generate_recommendation(
        "tank titan void raid resilience", sample_catalog(), RecommendationOptions(alternatives_count=2)
    )
    payload = json.loads(json.dumps(recommendation_to_dict(result)))
    assert payload["confidence"] == 85
    assert payload["primary"]["subclass"]["class"] == "titan"
    assert len(payload["alternatives"]) == 2
    assert payload["primary"]["request"]["focusStats"] == ["resilience"]
    assert [row["stat"] for row in payload["primary"]["stats"]][0] == "mobility"

    single = build_to_dict(result.primary)
    assert single["score"]["total"] == result.primary.score.total
    assert single["emptySlots"] == []
    assert single["score"]["optimizations"] == list(result.primary.score.optimizations)
