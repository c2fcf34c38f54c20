import pytest

from agroscan import cli
from agroscan.services import rule_engine as rules


def feed(monkeypatch, answers):
    answers = iter(answers)

    def fake_input(prompt):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


def test_safe_input_defaults(monkeypatch):
    feed(monkeypatch, ["   "])
    assert cli.safe_input("pH", "6.5") == "6.5"
    assert cli.safe_input("pH", "7.0") == "7.0"


def test_blank_temperature_means_absent(monkeypatch):
    feed(monkeypatch, ["5.5", "40", "", "beans"])
    soil = cli.collect_soil_inputs()
    assert soil == cli.SoilInputs(5.5, 40.0, None, "beans")


def test_main_prints_rules_and_ai_answer(monkeypatch, capsys):
    feed(monkeypatch, ["6.5", "50", "25", ""])
    monkeypatch.setattr(cli, "PERPLEXITY_API_KEY", "key")
    monkeypatch.setattr(cli, "recommend", lambda ph, moisture, temperature, crop: "Grow rice.")

    cli.main()

    out = capsys.readouterr().out
    assert rules.OPTIMAL_CROPS in out
    assert "Grow rice." in out


def test_main_exits_without_api_key(monkeypatch, capsys):
    feed(monkeypatch, [])
    monkeypatch.setattr(cli, "PERPLEXITY_API_KEY", None)

    with pytest.raises(SystemExit) as exc:
        cli.main()

    assert exc.value.code == 1
    assert rules.PH_OK in capsys.readouterr().out
