import argparse

import pytest

import euclid_engine.__main__ as cli
from euclid_engine import ValidationError


def test_main_prints_proof_for_proposition(capsys):
    cli.main(["1"])

    out = capsys.readouterr().out
    assert out.startswith("I.1: Construct an equilateral triangle on a given finite line")
    assert "=== Proven Facts ===" in out
    assert "=== Citations ===\n[Def.15] BC = BA" in out
    assert "Ghost Layers" not in out
    assert "Steps completed: 5/5" in out


def test_main_lists_ghost_layers_and_conclusion(capsys):
    cli.main(["4", "--ghosts"])

    out = capsys.readouterr().out
    assert "=== Ghost Layers ===\nNo ghost geometry." in out
    assert "Conclusion: △ABC = △DEF; ∠ABC = ∠DEF, ∠ACB = ∠DFE" in out


def test_main_validate_only(capsys):
    cli.main(["2", "--validate-only"])

    assert capsys.readouterr().out == "I.2: definition OK\n"


def test_main_rejects_unknown_proposition():
    with pytest.raises(SystemExit) as exc:
        cli.main(["48"])
    assert exc.value.code == 1


def test_main_moves_draggable_point(capsys):
    cli.main(["1", "--move", "B=3,0"])

    out = capsys.readouterr().out
    assert "Steps completed: 5/5" in out


def test_main_refuses_to_move_fixed_point():
    with pytest.raises(SystemExit) as exc:
        cli.main(["5", "--move", "pt-C=1,1"])
    assert exc.value.code == 1


def test_main_exits_on_malformed_definition(monkeypatch):
    def _invalid(prop):
        raise ValidationError("I.1 is not well-formed (1 problem(s)): boom")

    monkeypatch.setattr(cli, "ensure_valid_proposition_def", _invalid)

    with pytest.raises(SystemExit) as exc:
        cli.main(["1"])
    assert exc.value.code == 1


def test_main_reports_broken_construction(capsys, caplog):
    cli.main(["3", "--move", "pt-B=-2,0.5"])

    assert "Steps completed: 2/3" in capsys.readouterr().out
    assert any("broke down" in rec.getMessage() for rec in caplog.records)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("pt-A=1,2", ("pt-A", (1.0, 2.0))),
        ("B= -0.5, 3", ("pt-B", (-0.5, 3.0))),
    ],
)
def test_parse_move(value, expected):
    assert cli._parse_move(value) == expected


@pytest.mark.parametrize("value", ["A", "A=1", "A=x,y", "A=1,2,3"])
def test_parse_move_rejects_malformed(value):
    with pytest.raises(argparse.ArgumentTypeError):
        cli._parse_move(value)
