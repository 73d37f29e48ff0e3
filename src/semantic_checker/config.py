from __future__ import annotations

import json
import logging
from pathlib import Path

from semantic_checker.errors import ConfigError
from semantic_checker.models import AppConfig

__all__ = ["ConfigError", "load_config"]

_KNOWN_KEYS = {"report_path", "write_report", "html_suffixes", "disabled_rules", "log_level"}


def load_config(path: str | Path | None = None) -> AppConfig:
    if path is None:
        return AppConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file is not valid JSON: {config_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError("Config must be a JSON object")

    unknown = sorted(set(raw) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    defaults = AppConfig()

    report_path = _optional_str(raw.get("report_path")) or defaults.report_path
    if Path(report_path).is_absolute():
        raise ConfigError("'report_path' must be relative to the project root")

    write_report = raw.get("write_report", defaults.write_report)
    if not isinstance(write_report, bool):
        raise ConfigError("'write_report' must be true or false")

    suffixes = raw.get("html_suffixes")
    html_suffixes = defaults.html_suffixes
    if suffixes is not None:
        html_suffixes = tuple(_normalize_suffix(item) for item in _ensure_string_list(suffixes))
        if not html_suffixes:
            raise ConfigError("'html_suffixes' must not be empty")

    log_level = (_optional_str(raw.get("log_level")) or defaults.log_level).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"Unknown log level: {log_level}")

    return AppConfig(
        report_path=report_path,
        write_report=write_report,
        html_suffixes=html_suffixes,
        disabled_rules=tuple(item.strip().upper() for item in _ensure_string_list(raw.get("disabled_rules", []))),
        log_level=log_level,
    )


def _normalize_suffix(value: str) -> str:
    suffix = value.strip().lower()
    if not suffix:
        raise ConfigError("Empty entry in 'html_suffixes'")
    return suffix if suffix.startswith(".") else f".{suffix}"


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _ensure_string_list(value: object) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError("Expected a list of strings")
    return [str(item) for item in value]
