from __future__ import annotations
import json, logging, os, re
from pathlib import Path
from typing import Any, Dict, Pattern

from dotenv import load_dotenv
from pydantic import BaseModel

logger = logging.getLogger(__name__)

CONFIG_FILE = ".secrets-scanner.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    # Extra rules, name -> regex, merged over the built-in set
    "custom_patterns": {},
    # Thresholds handed to the entropy detector
    "entropy": {
        "base64_threshold": 4.5,
        "hex_threshold": 3.0,
        "min_length": 20,
    },
    "scan_entropy": False,
}


class DriveSettings(BaseModel):
    access_token: str | None = None
    base_url: str = "https://www.googleapis.com"
    timeout: float = 30
    rate_limit_per_min: int = 60


def load_settings() -> DriveSettings:
    load_dotenv()
    return DriveSettings(
        access_token=os.getenv("GOOGLE_DRIVE_TOKEN"),
        base_url=os.getenv("GOOGLE_DRIVE_API", "https://www.googleapis.com"),
        timeout=float(os.getenv("DRIVE_TIMEOUT", "30")),
        rate_limit_per_min=int(os.getenv("RATE_LIMIT_PER_MIN", "60")),
    )


def _defaults() -> Dict[str, Any]:
    return json.loads(json.dumps(DEFAULT_CONFIG))


def load_config(path: str | Path = CONFIG_FILE) -> Dict[str, Any]:
    p = Path(path)
    cfg = _defaults()
    if not p.exists():
        return cfg
    try:
        user_conf = json.loads(p.read_text(encoding="utf-8"))
        if not isinstance(user_conf, dict):
            raise ValueError("top level must be an object")
    except (OSError, ValueError) as e:
        logger.warning("Failed to load %s: %s", p, e)
        return cfg
    # shallow-merge for simple keys
    for k, v in user_conf.items():
        if isinstance(v, dict) and isinstance(cfg.get(k), dict):
            tmp = cfg[k].copy()
            tmp.update(v)
            cfg[k] = tmp
        else:
            cfg[k] = v
    return cfg


def compile_custom_patterns(cfg: Dict[str, Any]) -> Dict[str, Pattern[bytes]]:
    out: Dict[str, Pattern[bytes]] = {}
    for name, pat in (cfg.get("custom_patterns") or {}).items():
        try:
            out[name] = re.compile(pat.encode("utf-8"))
        except (re.error, AttributeError) as e:
            logger.warning("Skipping custom pattern %s: %s", name, e)
    return out
