"""Tests for free-text and structured request parsing."""

from d2_planner.models.request import BuildRequest
from d2_planner.parser.intent_parser import (
    parse,
    parse_confidence,
    parse_structured,
    tokenize,
    validate_request,
)


def test_parse_end_to_end_example():
    req = parse("High recovery Warlock void build for raids")
    assert req.class_type == "warlock"
    assert req.element == "void"
    assert req.activity == "raid"
    assert req.focus_stats == frozenset({"recovery"})
    assert req.playstyle == "balanced"
    assert req.locked_exotic is None
    assert req.source_text == "High recovery Warlock void build for raids"


def test_parse_empty_and_garbage_yield_defaults():
    for text in ("", "   ", None, "qwerty asdf !!!", 42):
        req = parse(text)
        assert req.class_type == "any"
        assert req.element == "any"
        assert req.activity == "general"
        assert req.playstyle == "balanced"
        assert req.focus_stats == frozenset()
        assert req.weapon_archetypes == ()
    assert parse("") == BuildRequest()


def test_first_match_wins_for_single_valued_fields():
    req = parse("titan or maybe hunter, solar then arc, gambit not raid")
    assert req.class_type == "titan"
    assert req.element == "solar"
    assert req.activity == "gambit"


def test_all_stat_keywords_are_collected():
    req = parse("discipline and strength melee build with some mobility")
    assert req.focus_stats == frozenset({"discipline", "strength", "mobility"})


def test_nicknames_and_multi_word_phrases():
    req = parse("crayon build for GMs")
    assert req.class_type == "titan"
    assert req.activity == "nightfall"

    req = parse("Trials of Osiris hand cannon dress")
    assert req.activity == "trials"
    assert req.class_type == "warlock"
    assert req.weapon_archetypes == ("hand_cannon",)


def test_grenade_launcher_is_a_weapon_not_a_discipline_focus():
    req = parse("grenade launcher build")
    assert req.weapon_archetypes == ("grenade_launcher",)
    assert req.focus_stats == frozenset()

    req = parse("grenade spam")
    assert req.focus_stats == frozenset({"discipline"})


def test_playstyle_keywords():
    assert parse("tanky hunter").playstyle == "tank"
    assert parse("fast arc hunter").playstyle == "speed"
    assert parse("boss damage warlock").playstyle == "dps"


def test_tokenize_keeps_apostrophes():
    assert tokenize("King's Fall, please!") == ["king's", "fall", "please"]


def test_parse_structured_validates_against_vocabularies():
    req = parse_structured({
        "class": "Warlock",
        "activity": "raids",
        "element": "purple",
        "focusStats": ["recovery", "bogus"],
        "lockedExotic": "1300",
        "weaponTypes": ["Sniper", "laser"],
    })
    assert req.class_type == "warlock"
    assert req.activity == "raid"
    assert req.element == "void"
    assert req.focus_stats == frozenset({"recovery"})
    assert req.locked_exotic == 1300
    assert req.weapon_archetypes == ("sniper_rifle",)


def test_parse_structured_invalid_values_fall_back_to_defaults():
    req = parse_structured({
        "class": "paladin",
        "element": 7,
        "activity": None,
        "playstyle": ["tank"],
        "lockedExotic": "not-a-hash",
        "useInventoryOnly": "yes",
    })
    assert req.class_type == "any"
    assert req.element == "any"
    assert req.activity == "general"
    assert req.playstyle == "balanced"
    assert req.locked_exotic is None
    assert req.constraints.use_inventory_only is False


def test_parse_structured_non_mapping_is_default_request():
    assert parse_structured(None) == BuildRequest()
    assert parse_structured(["class", "titan"]) == BuildRequest()


def test_parse_structured_accepts_class_codes_and_snake_case():
    req = parse_structured({
        "class_type": 2,
        "focus_stats": "intellect",
        "use_inventory_only": True,
        "pinned_items": [2001, "0x7d2"],
    })
    assert req.class_type == "warlock"
    assert req.focus_stats == frozenset({"intellect"})
    assert req.constraints.use_inventory_only is True
    assert req.pinned_items == frozenset({2001, 2002})


def test_parse_structured_fields_override_text():
    req = parse_structured({"text": "solar hunter pvp recovery", "class": "titan"})
    assert req.class_type == "titan"
    assert req.element == "solar"
    assert req.activity == "pvp"
    assert req.focus_stats == frozenset({"recovery"})
    assert req.source_text == "solar hunter pvp recovery"


def test_parse_confidence():
    assert parse_confidence(parse("")) == 0
    # activity 20 + element 10 + class 10 + focus 15
    assert parse_confidence(parse("High recovery Warlock void build for raids")) == 55
    full = parse("tank titan void raid resilience hand cannon")
    assert parse_confidence(full) == 100


def test_validate_request_warnings():
    vague = validate_request(parse("something cool"))
    assert "Build request may be too vague" in vague.warnings

    mixed = validate_request(parse("tank pvp build that also works in raid"))
    assert any("PvP" in w for w in mixed.warnings)

    weapons = validate_request(parse("hand cannon scout sniper shotgun tank raid"))
    assert "Too many weapon types specified" in weapons.warnings
    assert len(weapons.warnings) == len(weapons.suggestions)

    clean = validate_request(parse("tank titan void raid resilience"))
    assert clean.warnings == []
