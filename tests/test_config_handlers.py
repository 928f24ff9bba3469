import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

import json
from typing import Dict, Any

import config
from config import HandlerSpec, UserConfig, _normalize_handlers


def test_handler_entries_accept_strings_and_lists():
    data = {
        "pager": [["less", "-R"], "more"],
        "editor": ["nvim", "-p"],
    }

    handlers, warnings = _normalize_handlers(data)

    assert warnings == []
    assert set(handlers.keys()) == {"pager", "editor"}

    pager_spec = handlers["pager"]
    assert isinstance(pager_spec, HandlerSpec)
    assert pager_spec.commands == [["less", "-R"], ["more"]]

    assert handlers["editor"].commands == [["nvim", "-p"]]


def test_object_handler_entries_read_commands_key():
    data = {"editor": {"commands": [["hx"], "vim -u NONE"]}}

    handlers, warnings = _normalize_handlers(data)

    assert warnings == []
    assert handlers["editor"].commands == [["hx"], ["vim", "-u", "NONE"]]


def test_invalid_handler_entries_produce_warnings():
    handlers, warnings = _normalize_handlers({"editor": 3, "  ": "vim"})

    assert handlers == {}
    assert any("editor" in warning for warning in warnings)
    assert any("empty key" in warning for warning in warnings)


def test_editor_falls_back_to_environment(monkeypatch):
    monkeypatch.delenv("VISUAL", raising=False)
    monkeypatch.setenv("EDITOR", "nano -w")

    assert UserConfig().get_handler_commands("editor") == [["nano", "-w"], ["vi"]]
    assert UserConfig().get_handler_commands("pager") == []


def test_configured_editor_overrides_environment(monkeypatch):
    monkeypatch.setenv("EDITOR", "nano")
    cfg = UserConfig(handlers={"editor": HandlerSpec(commands=[["hx"]])})

    assert cfg.get_handler_commands("editor") == [["hx"]]


def test_load_user_config_reads_file(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    payload: Dict[str, Any] = {
        "handlers": {"editor": "vim"},
        "jump_size": 5,
        "last_dir_path": "~/.cache/vfm/last_dir",
        "log_level": "DEBUG",
        "log_file": "~/vfm.log",
    }

    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps(payload), encoding="utf-8")

    monkeypatch.setattr(config, "_config_path", lambda: str(cfg_path), raising=False)

    user_config = config.load_user_config()

    assert user_config.warnings == []
    assert user_config.get_handler_commands("editor") == [["vim"]]
    assert user_config.jump_size == 5
    assert user_config.last_dir_path == str(tmp_path / ".cache" / "vfm" / "last_dir")
    assert user_config.log_level == "debug"
    assert user_config.log_file == str(tmp_path / "vfm.log")


def test_load_user_config_warns_on_bad_values(tmp_path: Path):
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps({"jump_size": 0, "handlers": []}), encoding="utf-8")

    user_config = config.load_user_config(str(cfg_path))

    assert user_config.jump_size == 10
    warning_text = "\n".join(user_config.warnings)
    assert "jump_size" in warning_text
    assert "handlers" in warning_text


def test_load_user_config_survives_broken_json(tmp_path: Path):
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text("{not json", encoding="utf-8")

    user_config = config.load_user_config(str(cfg_path))

    assert user_config.handlers == {}
    assert len(user_config.warnings) == 1
    assert str(cfg_path) in user_config.warnings[0]


def test_missing_config_file_is_silent(tmp_path: Path):
    user_config = config.load_user_config(str(tmp_path / "absent.json"))

    assert user_config.warnings == []
    assert user_config.jump_size == 10


def test_config_path_follows_xdg(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert config.get_config_path() == str(tmp_path / "vfm" / "config.json")
