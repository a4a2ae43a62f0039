#!/usr/bin/env python3
# nodeconsole/db/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in CWD: .env, config.ini, config.json, config.toml
  3) Environment variables prefixed with NODECONSOLE_
  4) Explicit overrides passed to load_config()

Validation:
  - DATADIR: normalized path (no creation here)
  - HISTORY_FILE: resolved under DATADIR when relative
  - LOG_FILE_PATH / MANIFEST_PATH: None or normalized path
  - ENABLE_COMPLETION / CONFIRM_TRANSACTIONS / LOG_BATCH_HISTORY / SHOW_BANNER: bool
  - PROMPT: non-empty str
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - SECRET_PATTERN: must compile as a regular expression
  - POLL_INTERVAL: float > 0
"""

from dataclasses import dataclass, field
from typing import Any, Mapping
from pathlib import Path
import configparser
import json
import os
import re
import tomllib  # stdlib in 3.11+

from .history import DEFAULT_SECRET_PATTERN

ENV_PREFIX = "NODECONSOLE_"

# ---------- defaults ----------

DEFAULTS: dict[str, Any] = {
    "DATADIR": str(Path("~") / ".expanse"),
    "HISTORY_FILE": "history",          # relative names live under DATADIR
    "PROMPT": "> ",
    "LOG_LEVEL": None,                  # 'DEBUG'/'INFO'/'WARNING'/'ERROR'/'CRITICAL'
    "LOG_FILE_PATH": None,
    "ENABLE_COMPLETION": True,
    "CONFIRM_TRANSACTIONS": True,
    "SECRET_PATTERN": DEFAULT_SECRET_PATTERN,
    "MANIFEST_PATH": None,              # None -> bundled manifests
    "LOG_BATCH_HISTORY": False,
    "SHOW_BANNER": True,
    "POLL_INTERVAL": 0.1,               # seconds between interrupt checks
}


# ---------- data model ----------

@dataclass(frozen=True)
class ConsoleConfig:
    datadir: Path
    history_file: Path
    prompt: str
    log_level: str | None
    log_file_path: Path | None

    enable_completion: bool
    confirm_transactions: bool
    secret_pattern: str
    manifest_path: Path | None
    log_batch_history: bool
    show_banner: bool
    poll_interval: float

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def history_path(self) -> Path:
        return self.history_file


# ---------- file loaders (stdlib) ----------

def _load_env_file(path: Path) -> dict[str, str]:
    """Very small .env parser: KEY=VALUE, supports quotes; ignores comments/blank lines."""
    out: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return out

    line_re = re.compile(r"""^\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$""")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = line_re.match(line)
        if not m:
            continue
        k, v = m.group(1), m.group(2)
        if (v.startswith("'") and v.endswith("'")) or (v.startswith('"') and v.endswith('"')):
            v = v[1:-1]
        out[k] = v
    return out


def _load_ini_file(path: Path) -> dict[str, str]:
    # no interpolation: SECRET_PATTERN and PROMPT may contain '%'
    cfg = configparser.ConfigParser(interpolation=None)
    try:
        cfg.read(path, encoding="utf-8")
    except configparser.Error:
        return {}
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return {}


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'log': {'level': 'debug'}} -> {'LOG_LEVEL': 'debug'}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def _find_config_files(cwd: Path) -> list[Path]:
    return [
        cwd / ".env",
        cwd / "config.ini",
        cwd / "config.json",
        cwd / "config.toml",
    ]


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"Expected boolean, got: {val!r}")


def _as_float(val: Any) -> float:
    if isinstance(val, (int, float)) and not isinstance(val, bool):
        return float(val)
    try:
        return float(str(val).strip())
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Expected number, got: {val!r}") from exc


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_log_level(val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ValueError(
            f"LOG_LEVEL must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_path(val: Any) -> Path:
    s = str(val)
    # expand both ~ and env vars
    s = os.path.expandvars(os.path.expanduser(s))
    return Path(s).resolve()


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    return None if v is None else _as_path(v)


def _as_pattern(val: Any) -> str:
    pattern = str(val)
    try:
        re.compile(pattern)
    except re.error as exc:
        raise ValueError(f"SECRET_PATTERN is not a valid regular expression: {exc}") from exc
    return pattern


def _resolve_under(base: Path, value: Any) -> Path:
    """Resolve a config path relative to `base` (the data directory) when not absolute."""
    p = Path(os.path.expandvars(os.path.expanduser(str(value))))
    return p if p.is_absolute() else (base / p).resolve()


# ---------- merge & load ----------

def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper(): v for k, v in d.items()}


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    """NODECONSOLE_LOG_LEVEL=debug -> {'LOG_LEVEL': 'debug'}"""
    return {
        k[len(ENV_PREFIX):]: v
        for k, v in environ.items()
        if k.startswith(ENV_PREFIX) and re.fullmatch(r"[A-Z0-9_]+", k[len(ENV_PREFIX):])
    }


def _merge_sources(cwd: Path | None = None, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(cwd or Path.cwd()):
        if file.name == ".env":
            merged.update(_normalize_keys(_load_env_file(file)))
        elif file.suffix == ".ini":
            merged.update(_normalize_keys(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_json_file(file))))
        elif file.suffix == ".toml":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_toml_file(file))))

    # Environment variables override files
    merged.update(_env_overrides(os.environ if environ is None else environ))
    return merged


# ---------- validation ----------

def _validate_and_build(config: dict[str, Any]) -> ConsoleConfig:
    datadir = _as_path(config.get("DATADIR", DEFAULTS["DATADIR"]))
    history_file = _resolve_under(datadir, config.get("HISTORY_FILE", DEFAULTS["HISTORY_FILE"]))
    log_file_path = _as_opt_path(config.get("LOG_FILE_PATH", DEFAULTS["LOG_FILE_PATH"]))
    manifest_path = _as_opt_path(config.get("MANIFEST_PATH", DEFAULTS["MANIFEST_PATH"]))

    # --- basic coercions ---
    prompt = config.get("PROMPT", DEFAULTS["PROMPT"])
    prompt = DEFAULTS["PROMPT"] if prompt is None or str(prompt) == "" else str(prompt)
    log_level = _as_log_level(config.get("LOG_LEVEL", DEFAULTS["LOG_LEVEL"]))
    enable_completion = _as_bool(config.get(
        "ENABLE_COMPLETION", DEFAULTS["ENABLE_COMPLETION"]))
    confirm_transactions = _as_bool(config.get(
        "CONFIRM_TRANSACTIONS", DEFAULTS["CONFIRM_TRANSACTIONS"]))
    secret_pattern = _as_pattern(config.get("SECRET_PATTERN", DEFAULTS["SECRET_PATTERN"]))
    log_batch_history = _as_bool(config.get(
        "LOG_BATCH_HISTORY", DEFAULTS["LOG_BATCH_HISTORY"]))
    show_banner = _as_bool(config.get("SHOW_BANNER", DEFAULTS["SHOW_BANNER"]))
    poll_interval = _as_float(config.get("POLL_INTERVAL", DEFAULTS["POLL_INTERVAL"]))

    # --- constraints (no filesystem creation here) ---
    if poll_interval <= 0:
        raise ValueError("POLL_INTERVAL must be > 0")

    # Carry through extra keys
    recognized = set(DEFAULTS.keys())
    extra = {k: v for k, v in config.items() if k not in recognized}

    return ConsoleConfig(
        datadir=datadir,
        history_file=history_file,
        prompt=prompt,
        log_level=log_level,
        log_file_path=log_file_path,
        enable_completion=enable_completion,
        confirm_transactions=confirm_transactions,
        secret_pattern=secret_pattern,
        manifest_path=manifest_path,
        log_batch_history=log_batch_history,
        show_banner=show_banner,
        poll_interval=poll_interval,
        extra=extra,
    )


# ---------- public API ----------

def load_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ConsoleConfig:
    """
    Load, merge, normalize, and validate configuration.
    No filesystem side-effects (no directory creation).
    """
    raw = _merge_sources(cwd, environ)
    if overrides:
        raw.update(_normalize_keys(overrides))
    return _validate_and_build(raw)
