import json
import os
import shlex
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from constants import Constants


@dataclass
class HandlerSpec:
    commands: List[List[str]] = field(default_factory=list)


@dataclass
class UserConfig:
    handlers: Dict[str, HandlerSpec] = field(default_factory=dict)
    jump_size: int = Constants.DEFAULT_JUMP
    last_dir_path: str = ""
    log_level: str = "warning"
    log_file: str = ""
    warnings: List[str] = field(default_factory=list)

    def get_handler_commands(self, name: str) -> List[List[str]]:
        spec = self.handlers.get(name)
        if spec is None or not spec.commands:
            if name == "editor":
                return default_editor_commands()
            return []
        return spec.commands


def _config_path() -> str:
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if not xdg_config:
        xdg_config = os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(xdg_config, "vfm", "config.json")


def default_editor_commands() -> List[List[str]]:
    commands: List[List[str]] = []
    for var in ("VISUAL", "EDITOR"):
        cmd = _parse_command(os.environ.get(var, ""))
        if cmd and cmd not in commands:
            commands.append(cmd)
    commands.append([Constants.DEFAULT_EDITOR])
    return commands


def _parse_command(entry) -> List[str]:
    """One command: a shell-style string or a list of argv tokens."""
    if isinstance(entry, str):
        return shlex.split(entry) if entry.strip() else []
    if isinstance(entry, list) and entry and all(isinstance(token, str) for token in entry):
        return [token for token in entry if token]
    return []


def _parse_alternatives(raw_value) -> List[List[str]]:
    # "vim", ["nvim", "-p"] and [["nvim"], "vim -u NONE"] are all accepted;
    # a list made only of strings is a single argv, not several commands.
    if isinstance(raw_value, list) and not all(isinstance(entry, str) for entry in raw_value):
        candidates = raw_value
    else:
        candidates = [raw_value]

    parsed: List[List[str]] = []
    for candidate in candidates:
        cmd = _parse_command(candidate)
        if cmd and cmd not in parsed:
            parsed.append(cmd)
    return parsed


def _normalize_handlers(raw_handlers) -> Tuple[Dict[str, HandlerSpec], List[str]]:
    handlers: Dict[str, HandlerSpec] = {}
    warnings: List[str] = []

    if not isinstance(raw_handlers, dict):
        if raw_handlers is not None:
            warnings.append("handlers ignored (expected object)")
        return handlers, warnings

    for raw_key, raw_value in raw_handlers.items():
        key = raw_key.strip() if isinstance(raw_key, str) else None
        if not key:
            warnings.append("handlers entry ignored (empty key)")
            continue

        if isinstance(raw_value, dict):
            raw_value = raw_value.get("commands", raw_value.get("command"))

        commands = _parse_alternatives(raw_value)
        if not commands:
            warnings.append(f"handler '{key}' ignored (no valid commands)")
            continue

        handlers[key] = HandlerSpec(commands=commands)

    return handlers, warnings


def _normalize_jump_size(raw_value) -> Tuple[int, List[str]]:
    if raw_value is None:
        return Constants.DEFAULT_JUMP, []
    if isinstance(raw_value, bool) or not isinstance(raw_value, int) or raw_value < 1:
        return Constants.DEFAULT_JUMP, [
            f"jump_size {raw_value!r} ignored (expected a positive integer)"
        ]
    return raw_value, []


def _normalize_path(value) -> str:
    if not isinstance(value, str):
        return ""
    expanded = os.path.expanduser(value.strip())
    if not expanded:
        return ""
    return os.path.abspath(expanded)


def load_user_config(path: Optional[str] = None) -> UserConfig:
    path = path or _config_path()
    data = {}
    warnings: List[str] = []

    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError:
        pass
    except (OSError, ValueError) as exc:
        warnings.append(f"config {path} ignored ({exc})")
        data = {}

    if not isinstance(data, dict):
        warnings.append(f"config {path} ignored (expected object)")
        data = {}

    handlers, handler_warnings = _normalize_handlers(data.get("handlers"))
    jump_size, jump_warnings = _normalize_jump_size(data.get("jump_size"))

    log_level = data.get("log_level")
    if not isinstance(log_level, str) or not log_level.strip():
        log_level = "warning"

    return UserConfig(
        handlers=handlers,
        jump_size=jump_size,
        last_dir_path=_normalize_path(data.get("last_dir_path")),
        log_level=log_level.strip().lower(),
        log_file=_normalize_path(data.get("log_file")),
        warnings=warnings + handler_warnings + jump_warnings,
    )


USER_CONFIG = load_user_config()


def get_config_path() -> str:
    return _config_path()
