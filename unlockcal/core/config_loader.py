"""unlockcal.core.config_loader

Lightweight config loader for unlockcal.

- Reads YAML with PyYAML; JSON is a subset of YAML so JSON files load too.
- Exposes a typed dataclass `Config` and a `load_config()` helper that accepts
  an optional path override.
- Environment overrides are applied by `apply_env_overrides()`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from unlockcal.domain.activity_classifier import DEFAULT_KEYWORDS

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("unlockcal.yaml")


@dataclass
class Config:
    """Typed configuration for unlockcal.

    Fields:
        keywords: category keywords an event summary must contain
        next_events_count: size of the compact next-events window (>= 0)
        search_term: default free-text filter, empty for none
        log_level: logging level name
    """

    keywords: list[str] = field(default_factory=lambda: list(DEFAULT_KEYWORDS))
    next_events_count: int = 5
    search_term: str = ""
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Config:
        """Create Config from a plain mapping, applying defaults and validation.

        Numeric-like values are coerced to int, a scalar ``keywords`` becomes a
        single-item list, and a negative ``next_events_count`` is clamped to 0.
        Each coercion is logged as a warning.
        """
        if data is None:
            data = {}

        keywords_raw = data.get("keywords")
        if keywords_raw is None:
            keywords = list(DEFAULT_KEYWORDS)
        elif isinstance(keywords_raw, (list, tuple)):
            keywords = [str(k) for k in keywords_raw if str(k).strip()]
        else:
            logger.warning("Config `keywords` is not a list; coercing to single-item list")
            keywords = [str(keywords_raw)]
        if not keywords:
            logger.warning("Config `keywords` is empty; using defaults %s", DEFAULT_KEYWORDS)
            keywords = list(DEFAULT_KEYWORDS)

        raw_count = data.get("next_events_count", 5)
        try:
            next_events_count = int(raw_count)
        except (TypeError, ValueError):
            logger.warning("Config next_events_count=%r is not an int; using default 5", raw_count)
            next_events_count = 5
        if next_events_count < 0:
            logger.warning("next_events_count %d below minimum; coercing to 0", next_events_count)
            next_events_count = 0

        search_term = data.get("search_term") or ""
        log_level = data.get("log_level") or "INFO"

        return cls(
            keywords=keywords,
            next_events_count=next_events_count,
            search_term=str(search_term),
            log_level=str(log_level).upper(),
        )


def apply_env_overrides(cfg: Config, environ: Mapping[str, str] | None = None) -> Config:
    """Return a copy of cfg with UNLOCKCAL_* environment overrides applied.

    Environment Variables:
        UNLOCKCAL_KEYWORDS: comma separated keyword list
        UNLOCKCAL_NEXT_EVENTS: next-events window size
        UNLOCKCAL_LOG_LEVEL: logging level name
    """
    env = os.environ if environ is None else environ
    updates: dict[str, Any] = {}

    keywords_env = env.get("UNLOCKCAL_KEYWORDS", "")
    keywords = [k.strip() for k in keywords_env.split(",") if k.strip()]
    if keywords:
        updates["keywords"] = keywords

    next_env = env.get("UNLOCKCAL_NEXT_EVENTS", "").strip()
    if next_env:
        try:
            updates["next_events_count"] = max(0, int(next_env))
        except ValueError:
            logger.warning("Ignoring UNLOCKCAL_NEXT_EVENTS=%r; not an int", next_env)

    level_env = env.get("UNLOCKCAL_LOG_LEVEL", "").strip().upper()
    if level_env:
        updates["log_level"] = level_env

    if updates:
        logger.debug("Applying environment overrides: %s", sorted(updates))
    return replace(cfg, **updates)


def _load_yaml(path: Path) -> Any:
    """Load a YAML (or JSON) document from path."""
    text = path.read_text(encoding="utf-8")
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Unable to parse config file {path}: {exc}") from exc
    # safe_load returns None for empty files
    return {} if loaded is None else loaded


def load_config(path: str | Path | None = None) -> Config:
    """Load configuration from a YAML/JSON file and return a Config instance.

    Args:
        path: Optional path to the config file. Defaults to ./unlockcal.yaml.

    Returns:
        Config dataclass instance with values from file (or defaults).

    Behavior:
    - If file is missing: returns Config() with defaults.
    - If file exists but cannot be parsed or its top level is not a mapping:
      raises ConfigError.
    """
    p = Path(path) if path else Path.cwd() / DEFAULT_CONFIG_PATH
    logger.debug("Attempting to load config from %s", p)
    if not p.exists():
        logger.info("Config file %s not found; using defaults", p)
        return Config()

    raw = _load_yaml(p)
    if not isinstance(raw, dict):
        logger.warning("Config file %s parsed but top-level is not a mapping: %r", p, raw)
        raise ConfigError("Config file must contain a mapping at top level")
    cfg = Config.from_dict(raw)
    logger.info("Loaded configuration from %s", p)
    logger.debug("Configuration values: %s", cfg)
    return cfg
