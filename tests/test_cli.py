import json

import pytest

import main
from docassist.llm import CompletionSuccess


@pytest.fixture(autouse=True)
def user_config(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    monkeypatch.setenv("DOCASSIST_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("DOCASSIST_API_KEY", "sk-test")
    return config_dir


def test_settings_set_and_show(user_config, capsys):
    assert main._cli(["settings", "set", "--model", "gpt-4o-mini", "--max-tokens", "300"]) == 0
    stored = json.loads((user_config / "properties.json").read_text(encoding="utf-8"))
    assert json.loads(stored["settings"])["model"] == "gpt-4o-mini"

    assert main._cli(["settings", "show"]) == 0
    out = capsys.readouterr().out
    assert "gpt-4o-mini" in out
    assert "300" in out


def test_settings_set_rejects_invalid_value(user_config, capsys):
    assert main._cli(["settings", "set", "--temperature", "1.5"]) == 2
    assert "Temperature must be between 0 and 1" in capsys.readouterr().out
    assert not (user_config / "properties.json").exists()


def test_enhance_writes_result_after_selection(tmp_path, monkeypatch):
    monkeypatch.setattr(main.CompletionClient, "request", lambda self, prompt: CompletionSuccess("Polished"))
    src = tmp_path / "draft.txt"
    src.write_text("rough words\nmore\n", encoding="utf-8")
    out = tmp_path / "result.txt"

    assert main._cli(["enhance", "--file", str(src), "--select", "0:5", "--out", str(out)]) == 0
    assert out.read_text(encoding="utf-8") == "rough\n\nPolished words\nmore\n"
    assert src.read_text(encoding="utf-8") == "rough words\nmore\n"


def test_transform_without_selection_aborts(tmp_path, capsys):
    src = tmp_path / "draft.txt"
    src.write_text("keep me\n", encoding="utf-8")
    assert main._cli(["summarize", "--file", str(src)]) == 1
    assert "Please select some text first." in capsys.readouterr().out
    assert src.read_text(encoding="utf-8") == "keep me\n"


def test_invalid_selection_range(tmp_path, capsys):
    src = tmp_path / "draft.txt"
    src.write_text("tiny\n", encoding="utf-8")
    assert main._cli(["fix-grammar", "--file", str(src), "--select", "0:99"]) == 2
    assert "Invalid selection" in capsys.readouterr().out


def test_panel_lists_commands(capsys):
    assert main._cli(["panel"]) == 0
    out = capsys.readouterr().out
    assert "Fix grammar" in out
    assert "gpt-3.5-turbo" in out


def test_corrupt_settings_file_is_reported_and_reset_recovers(user_config, capsys):
    user_config.mkdir(parents=True)
    (user_config / "properties.json").write_text("{broken", encoding="utf-8")

    assert main._cli(["settings", "show"]) == 2
    assert main._cli(["panel"]) == 2
    assert "settings reset" in capsys.readouterr().out

    assert main._cli(["settings", "reset"]) == 0
    assert json.loads((user_config / "properties.json").read_text(encoding="utf-8")) == {}
    assert main._cli(["settings", "show"]) == 0
    assert "gpt-3.5-turbo" in capsys.readouterr().out


def test_settings_set_overwrites_corrupt_file(user_config):
    user_config.mkdir(parents=True)
    (user_config / "properties.json").write_text("[1, 2]", encoding="utf-8")

    assert main._cli(["settings", "set", "--model", "gpt-4o-mini"]) == 0
    stored = json.loads((user_config / "properties.json").read_text(encoding="utf-8"))
    assert json.loads(stored["settings"])["model"] == "gpt-4o-mini"
