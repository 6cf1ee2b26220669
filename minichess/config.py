"""Engine configuration loaded from YAML.

Example ``configs/engine.yaml``::

    search:
      max_depth: 2
      time_budget_ms: 5000
      ply_cap: 100
    logging:
      level: INFO
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

import yaml

logger = logging.getLogger("minichess.config")

DEPTH_ENV_VAR = "MINICHESS_SEARCH_DEPTH"


@dataclass
class SearchConfig:
    max_depth: int = 2  # difficulty
    time_budget_ms: int = 5000
    ply_cap: int = 100  # runaway guard, not a draw rule


@dataclass
class EngineConfig:
    search: SearchConfig = field(default_factory=SearchConfig)
    log_level: str = "INFO"

    def validate(self):
        """Raise ValueError for settings the search cannot run with."""
        if self.search.max_depth < 1:
            raise ValueError(f"search.max_depth must be >= 1, got {self.search.max_depth}")
        if self.search.time_budget_ms < 0:
            raise ValueError(
                f"search.time_budget_ms must be >= 0, got {self.search.time_budget_ms}")
        if self.search.ply_cap < 1:
            raise ValueError(f"search.ply_cap must be >= 1, got {self.search.ply_cap}")


def load_config(path: Optional[str] = None) -> EngineConfig:
    """Load configuration, falling back to defaults for anything not set.

    A missing file yields the defaults. Unknown keys are ignored. The
    ``MINICHESS_SEARCH_DEPTH`` environment variable overrides the depth.

    Raises:
        ValueError: If a value is out of range.
    """
    cfg = EngineConfig()

    if path is not None and os.path.exists(path):
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        for k, v in (raw.get("search") or {}).items():
            if hasattr(cfg.search, k):
                setattr(cfg.search, k, int(v))
            else:
                logger.warning(f"Ignoring unknown search setting {k!r}")
        level = (raw.get("logging") or {}).get("level")
        if level:
            cfg.log_level = str(level).upper()
    elif path is not None:
        logger.info(f"Config {path} not found, using defaults")

    override_depth = os.environ.get(DEPTH_ENV_VAR)
    if override_depth:
        cfg.search.max_depth = int(override_depth)

    cfg.validate()
    return cfg
