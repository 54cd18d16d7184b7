# pumplog/common/config.py
from pathlib import Path
import os, yaml
from typing import Dict, Any, Optional

# repository root is two levels up from this file
ROOT = Path(__file__).resolve().parents[2]

ON_ERROR_CHOICES = ("raise", "skip")
FORMAT_CHOICES = ("text", "json")


def _candidates():
    env = os.environ.get("PUMPLOG_CONFIG")
    return [
        Path(env) if env else None,
        Path.cwd() / "config.yaml",
        ROOT / "config.yaml",
    ]


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load YAML config. An explicit path must exist; otherwise the first
    existing candidate wins and no file at all means {}.
    """
    if path:
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}
    for p in _candidates():
        if p and p.exists():
            with open(p, "r") as f:
                return yaml.safe_load(f) or {}
    return {}


def get_decode_settings(cfg: Dict[str, Any]) -> Dict[str, Any]:
    d = (cfg or {}).get("decode", {}) or {}
    base = {
        "on_error": "raise",
        "format": "text",
        "disabled_types": [],
    }
    merged = {**base, **d}
    if merged["on_error"] not in ON_ERROR_CHOICES:
        raise ValueError(f"decode.on_error must be one of {', '.join(ON_ERROR_CHOICES)}, got {merged['on_error']!r}")
    if merged["format"] not in FORMAT_CHOICES:
        raise ValueError(f"decode.format must be one of {', '.join(FORMAT_CHOICES)}, got {merged['format']!r}")
    merged["disabled_types"] = [_as_type_code(v) for v in (merged["disabled_types"] or [])]
    return merged


def _as_type_code(val) -> int:
    # YAML may hand us 110, "110" or "0x6e"
    if isinstance(val, int):
        return val
    return int(str(val).strip(), 0)
