"""Tests for rule-based synergy detection."""

from d2_planner.engine.build_config import EngineConfig
from d2_planner.engine.synergy import SynergyDetector, detect_synergies
from d2_planner.models.build import Build, Loadout, SubclassLoadout, by_strength
from d2_planner.models.item import Armor, Weapon
from d2_planner.models.request import BuildRequest
from d2_planner.models.stats import StatBlock


def _build(stats=None, *, activity="general", element="solar", weapons=(), armor=()):
    loadout = Loadout(subclass=SubclassLoadout("warlock", element))
    for weapon in weapons:
        loadout.weapons[weapon.slot] = weapon
    for piece in armor:
        loadout.armor[piece.slot] = piece
    return Build(
        request=BuildRequest(class_type="warlock", element=element, activity=activity),
        loadout=loadout,
        stats=stats or StatBlock(),
        name="test build",
    )


def _kinds(synergies):
    return [s.kind for s in synergies]


def test_empty_build_has_no_synergies():
    assert detect_synergies(_build()) == []


def test_weapon_coverage_needs_close_and_long():
    close = Weapon(1, "Shotgun", "energy", "shotgun")
    long = Weapon(2, "Scout", "kinetic", "scout_rifle")
    medium = Weapon(3, "Pulse", "kinetic", "pulse_rifle")

    found = detect_synergies(_build(weapons=[close, long]))
    assert _kinds(found) == ["weapon"]
    assert found[0].strength == "medium"
    assert set(found[0].participants) == {"Shotgun", "Scout"}

    assert detect_synergies(_build(weapons=[close, medium])) == []


def test_stat_pair_thresholds():
    # tier 7 starts at 140
    found = detect_synergies(_build(StatBlock(discipline=140, strength=140)))
    assert [(s.participants, s.strength) for s in found] == [(("discipline", "strength"), "high")]

    assert detect_synergies(_build(StatBlock(discipline=139, strength=200))) == []

    maxed = detect_synergies(_build(StatBlock(discipline=200, strength=200)))
    assert maxed[0].strength == "legendary"


def test_stat_pair_threshold_follows_config():
    detector = SynergyDetector(EngineConfig(synergy_stat_tier=5))
    found = detector.detect(_build(StatBlock(intellect=100, recovery=100), element="stasis"))
    assert [s.participants for s in found] == [("intellect", "recovery")]
    assert found[0].strength == "medium"


def test_activity_fit_per_favored_stat():
    found = detect_synergies(_build(StatBlock(recovery=140, discipline=160), activity="raid"))
    activity = [s for s in found if s.kind == "activity"]
    assert [s.participants for s in activity] == [("recovery", "raid"), ("discipline", "raid")]

    found = detect_synergies(_build(StatBlock(recovery=140), activity="general"))
    assert "activity" not in _kinds(found)


def test_exotic_presence_and_affinities():
    exotic = Armor(
        10, "Contraverse Hold", "arms", "warlock", "exotic",
        element_affinity="void", stat_affinities=("discipline",),
    )
    build = _build(StatBlock(discipline=100), element="void", armor=[exotic])
    found = detect_synergies(build)
    exotic_kinds = [(s.kind, s.strength) for s in found if "Contraverse Hold" in s.participants]
    assert exotic_kinds == [("exotic", "low"), ("element", "medium"), ("exotic", "medium")]

    # affinity stat below tier 5 and mismatched element
    found = detect_synergies(_build(StatBlock(discipline=99), element="solar", armor=[exotic]))
    assert [(s.kind, s.strength) for s in found] == [("exotic", "low")]


def test_exotic_weapon_element_match():
    bow = Weapon(11, "Le Monarque", "energy", "bow", "void", tier="exotic")
    found = detect_synergies(_build(element="void", weapons=[bow]))
    assert [(s.kind, s.participants) for s in found] == [
        ("exotic", ("Le Monarque",)),
        ("element", ("Le Monarque", "void")),
    ]


def test_element_stat_rule():
    found = detect_synergies(_build(StatBlock(recovery=100), element="solar"))
    assert [(s.kind, s.participants) for s in found] == [("element", ("solar", "recovery"))]
    assert detect_synergies(_build(StatBlock(recovery=99), element="solar")) == []


def test_rules_run_in_fixed_order():
    exotic = Armor(
        10, "Contraverse Hold", "arms", "warlock", "exotic",
        element_affinity="void", stat_affinities=("discipline",),
    )
    build = _build(
        StatBlock(discipline=160, strength=160, recovery=140),
        activity="raid",
        element="void",
        weapons=[Weapon(1, "Shotgun", "energy", "shotgun"), Weapon(2, "Scout", "kinetic", "scout_rifle")],
        armor=[exotic],
    )
    found = SynergyDetector().enrich(build).synergies
    assert _kinds(found) == [
        "weapon",
        "stat",
        "activity",
        "activity",
        "exotic",
        "element",
        "exotic",
        "element",
    ]
    assert build.synergies is found
    assert by_strength(found)[0].kind == "stat"
