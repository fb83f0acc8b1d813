import json
import os
from pathlib import Path
from typing import Any, Dict

import yaml

from domain.constants import COLLISION_POLICIES
from domain.models import OrganizerConfig


def load_config(path: str | None) -> Dict[str, Any]:
    if not path:
        return {}

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if p.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    else:
        data = json.loads(p.read_text(encoding="utf-8"))

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if v is not None:
            out[k] = v
    return out


def _as_bool(key: str, v) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str) and v.strip().lower() in ("1", "true", "yes", "on"):
        return True
    if isinstance(v, str) and v.strip().lower() in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{key}: expected a boolean, got {v!r}")


def _norm_ext(e: str) -> str:
    return str(e).strip().lower().lstrip(".")


def build_config(cfg: Dict[str, Any]) -> OrganizerConfig:
    """Turn a merged dict into an OrganizerConfig. Unknown keys are ignored."""
    kw: Dict[str, Any] = {}

    if cfg.get("dry_run") is not None:
        kw["dry_run"] = _as_bool("dry_run", cfg["dry_run"])
    if cfg.get("verify") is not None:
        kw["verify"] = _as_bool("verify", cfg["verify"])

    if cfg.get("target_root"):
        kw["target_root"] = os.path.abspath(os.path.expanduser(str(cfg["target_root"])))

    if cfg.get("allowed_exts") is not None:
        exts = cfg["allowed_exts"]
        if isinstance(exts, str) or not isinstance(exts, (list, tuple)):
            raise ValueError("allowed_exts: expected a list of extensions")
        kw["allowed_exts"] = tuple(_norm_ext(e) for e in exts)

    if cfg.get("ext_folders") is not None:
        folders = cfg["ext_folders"]
        if not isinstance(folders, dict):
            raise ValueError("ext_folders: expected a mapping of extension -> folder")
        kw["ext_folders"] = {_norm_ext(k): str(v) for k, v in folders.items()}

    if cfg.get("max_export_slots") is not None:
        try:
            n = int(cfg["max_export_slots"])
        except (TypeError, ValueError):
            raise ValueError(f"max_export_slots: expected an integer, got {cfg['max_export_slots']!r}")
        if n < 1:
            raise ValueError("max_export_slots: must be >= 1")
        kw["max_export_slots"] = n

    if cfg.get("export_prefix") is not None:
        kw["export_prefix"] = str(cfg["export_prefix"])

    if cfg.get("on_collision") is not None:
        pol = str(cfg["on_collision"]).strip().lower()
        if pol not in COLLISION_POLICIES:
            raise ValueError(f"on_collision: expected one of {sorted(COLLISION_POLICIES)}, got {pol!r}")
        kw["on_collision"] = pol

    if cfg.get("log_file"):
        kw["log_file"] = str(cfg["log_file"])
    if cfg.get("report_dir"):
        kw["report_dir"] = str(cfg["report_dir"])

    return OrganizerConfig(**kw)
