"""Configuration helpers for the construction engine."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Tuple

from .types import BYRNE_CYCLE, BYRNE_GIVEN, BYRNE_RED


@dataclass
class EngineConfig:
    palette: Tuple[str, ...] = BYRNE_CYCLE
    given_color: str = BYRNE_GIVEN
    free_color: str = BYRNE_RED
    # Used for a ghost production segment whose parent segment is gone.
    production_fallback_color: str = "#888888"
    # Log a warning when the highest-Y pick cannot tell two candidates apart.
    warn_on_ambiguous_pick: bool = True


_ENGINE_CONFIG = EngineConfig()


def get_engine_config() -> EngineConfig:
    return copy.deepcopy(_ENGINE_CONFIG)


def set_engine_config(config: EngineConfig) -> None:
    global _ENGINE_CONFIG
    if not config.palette:
        raise ValueError("palette must contain at least one color")
    _ENGINE_CONFIG = copy.deepcopy(config)
