from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SCORING_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "scoring.yaml"


def scoring_config_path() -> Path:
    override = (os.getenv("SCORING_CONFIG_PATH") or "").strip()
    return Path(override) if override else DEFAULT_SCORING_CONFIG_PATH


def _read_rubric(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            parsed = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise RuntimeError(f"Scoring rubric not found at '{path}'.") from exc
    except OSError as exc:
        raise RuntimeError(f"Failed to read scoring rubric '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring rubric '{path}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid scoring rubric '{path}': expected a top-level mapping.")
    return parsed


@lru_cache(maxsize=1)
def get_scoring_config() -> dict[str, Any]:
    """Quick-score rubric, read once from config/scoring.yaml (or SCORING_CONFIG_PATH)."""
    path = scoring_config_path()
    config = _read_rubric(path)
    logger.debug("scoring_config_loaded path=%s sections=%s", path, sorted(config))
    return config


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Look up a nested rubric value by dot path, e.g. 'quick_score.contact.email_points'."""
    node: Any = get_scoring_config()
    for key in (path or "").split("."):
        if not key or not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node
