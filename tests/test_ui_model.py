import pytest

from d2_planner.catalog.sample import sample_catalog
from d2_planner.engine.pipeline import BuildPipeline
from d2_planner.engine.ui_model import BuildUiModel, stat_rows
from d2_planner.models.build import Build, Loadout, ScoreResult, SubclassLoadout
from d2_planner.models.stats import StatBlock, next_breakpoint, stat_efficiency, stat_tier
from d2_planner.parser.intent_parser import parse


def _scored_build(text="High recovery Warlock void build for raids"):
    return BuildPipeline.for_catalog(sample_catalog()).run(parse(text))


def _bare_build(stats=None, score=None):
    return Build(
        request=parse(""),
        loadout=Loadout(subclass=SubclassLoadout("hunter", "solar")),
        stats=stats or StatBlock(),
        name="bare",
        score=score,
    )


def test_stat_block_clamps_and_validates():
    block = StatBlock(mobility=250, resilience=-5)
    assert block.mobility == 200
    assert block.resilience == 0
    assert block.plus({"mobility": 10}).mobility == 200
    with pytest.raises(ValueError):
        StatBlock.from_mapping({"agility": 10})


def test_tier_and_breakpoint_helpers():
    assert stat_tier(99) == 4
    assert stat_tier(100) == 5
    assert stat_tier(200) == 10
    assert next_breakpoint(0) == 100
    assert next_breakpoint(100) == 200
    assert next_breakpoint(200) is None
    assert stat_efficiency(0) == 0.0
    assert stat_efficiency(200) == pytest.approx(1.0)
    assert stat_efficiency(100) == pytest.approx(1 / 1.8)


def test_stat_rows_mark_the_breakpoint():
    rows = {row.stat: row for row in stat_rows(StatBlock(recovery=100, discipline=99))}
    assert rows["recovery"].breakpoint_active is True
    assert rows["recovery"].effect == "Overshield on class ability"
    assert rows["recovery"].next_breakpoint == 200
    assert rows["discipline"].breakpoint_active is False
    assert rows["discipline"].effect == "Grenade cooldown"
    assert rows["discipline"].tier == 4
    assert [row.label for row in stat_rows(StatBlock())][:2] == ["Mobility", "Resilience"]


def test_composed_build_crosses_breakpoints():
    ui = BuildUiModel(_scored_build())
    rows = {row.stat: row for row in ui.stat_rows()}
    assert rows["recovery"].value == 160
    assert rows["recovery"].breakpoint_active
    assert rows["discipline"].value == 102
    assert rows["discipline"].breakpoint_active
    assert not rows["mobility"].breakpoint_active


def test_loadout_entries_and_search():
    ui = BuildUiModel(_scored_build())
    entries = ui.loadout_entries()
    kinds = [e.kind for e in entries]
    assert kinds[0] == "subclass"
    assert entries[0].label == "Voidwalker"
    assert kinds.count("armor") == 5
    assert kinds.count("weapon") == 3
    exotic = [e for e in entries if e.exotic and e.kind == "armor"]
    assert [e.label for e in exotic] == ["Contraverse Hold"]

    hits = ui.search_loadout("  contraverse ")
    assert [e.item_hash for e in hits] == [1300]
    assert ui.search_loadout("") == entries
    assert ui.search_loadout("no such item") == []


def test_synergy_lines_strongest_first():
    ui = BuildUiModel(_scored_build())
    lines = ui.synergy_lines()
    assert lines
    ranks = ["low", "medium", "high", "legendary"]
    strengths = [line[1:line.index("]")] for line in lines]
    assert [ranks.index(s) for s in strengths] == sorted(
        (ranks.index(s) for s in strengths), reverse=True
    )


def test_compare_builds():
    mine = _bare_build(StatBlock(recovery=100), ScoreResult(total=40, tier="F"))
    other = _bare_build(StatBlock(recovery=60, mobility=20), ScoreResult(total=55, tier="D"))
    diff = BuildUiModel(mine).compare(other)
    assert diff.stat_deltas["recovery"] == -40
    assert diff.stat_deltas["mobility"] == 20
    assert diff.score_delta == 15


def test_diagnostics():
    unscored = BuildUiModel(_bare_build()).diagnostics()
    codes = [d.code for d in unscored]
    assert codes.count("empty_slot") == len(_bare_build().empty_slots())
    assert codes[-1] == "unscored"

    degraded = _bare_build(score=ScoreResult(total=50, tier="unknown", error="boom"))
    last = BuildUiModel(degraded).diagnostics()[-1]
    assert last.severity == "error"
    assert last.code == "score_degraded"
    assert "boom" in last.message

    assert BuildUiModel(_scored_build("tank titan void raid resilience")).diagnostics() == []
