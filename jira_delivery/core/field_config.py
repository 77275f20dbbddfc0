"""Load Jira custom field ids from YAML (with fallbacks)."""

from __future__ import annotations

from pathlib import Path

import yaml

from .config import FIELD_IDS

_CACHE: dict[str, str] | None = None


def load_field_ids(base_path: str | Path | None = None, *, reload: bool = False) -> dict[str, str]:
    """Return the custom field id mapping.

    Reads ``fields.yaml`` from ``base_path`` (defaults to the package root).
    The file holds a ``fields`` mapping whose keys override ``FIELD_IDS``;
    unknown keys are ignored. A missing or unreadable file yields the defaults.
    """
    global _CACHE
    if _CACHE is not None and not reload:
        return _CACHE
    base = Path(base_path or Path(__file__).resolve().parent.parent)
    yaml_path = base / "fields.yaml"
    merged = dict(FIELD_IDS)
    if not yaml_path.exists():
        _CACHE = merged
        return _CACHE
    try:
        data = yaml.safe_load(yaml_path.read_text()) or {}
    except (OSError, yaml.YAMLError):
        _CACHE = merged
        return _CACHE
    overrides = data.get("fields") if isinstance(data, dict) else None
    if isinstance(overrides, dict):
        for name, field_id in overrides.items():
            if name in merged and isinstance(field_id, str) and field_id:
                merged[name] = field_id
    _CACHE = merged
    return _CACHE


def get_field_id(name: str) -> str | None:
    return load_field_ids().get(name)


def custom_field_ids() -> list[str]:
    return list(load_field_ids().values())
