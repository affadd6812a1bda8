import argparse
import json

import pytest

from scripts.recommend_build import _load_json_arg, _options_from_args, _parse_int_like, main


def test_parse_int_like_accepts_hex_and_ints():
    assert _parse_int_like("0x514") == 1300
    assert _parse_int_like(" 2201 ") == 2201
    assert _parse_int_like(7) == 7
    with pytest.raises(ValueError):
        _parse_int_like(True)
    with pytest.raises(ValueError):
        _parse_int_like(1.5)


def test_load_json_arg_requires_object(tmp_path):
    assert _load_json_arg(None, None) is None
    assert _load_json_arg('{"class": "titan"}', None) == {"class": "titan"}
    path = tmp_path / "filters.json"
    path.write_text('{"activity": "pvp"}')
    assert _load_json_arg(None, path) == {"activity": "pvp"}
    with pytest.raises(ValueError):
        _load_json_arg("[1, 2]", None)


def test_options_from_args_enables_inventory_mode():
    args = argparse.Namespace(
        inventory=["0x899", "2211"],
        lock_exotic=None,
        alternatives=0,
        workers=2,
    )
    options = _options_from_args(args)
    assert options.use_inventory_only is True
    assert options.inventory == [2201, 2211]
    assert options.include_alternatives is False
    assert options.max_workers == 2


def test_main_json_output(capsys):
    code = main(["--text", "High recovery Warlock void build for raids", "--json", "--alternatives", "1"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["primary"]["name"] == "Void Warlock High Recovery Raid Build"
    assert len(payload["alternatives"]) == 1


def test_main_text_output_with_filters(capsys):
    code = main(["--filters-json", '{"class": "titan", "activity": "pvp"}', "--alternatives", "0"])
    assert code == 0
    out = capsys.readouterr().out
    assert out.startswith("confidence: 30")
    assert "primary: " in out
    assert "Titan" in out
    assert "alternative 1" not in out


def test_main_reports_unusable_lock(capsys):
    code = main(["--text", "void warlock", "--lock-exotic", "2201", "--alternatives", "0"])
    assert code == 2
    assert "error:" in capsys.readouterr().err
