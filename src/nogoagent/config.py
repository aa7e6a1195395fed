"""Agent option parsing.

Agents are configured from flat ``key=value`` strings such as
``"name=mcts role=black seed=7"``. Recognized keys are validated by
:class:`AgentConfig`; unrecognized keys are kept so ``property()`` can still
report them.
"""
from __future__ import annotations

import logging
import os
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from nogoagent.engine import Color

DEFAULT_ARGS = "name=unknown role=unknown"
INVALID_NAME_CHARS = "[]():; "


def parse_agent_args(args: str = "", defaults: str = DEFAULT_ARGS) -> Dict[str, str]:
    meta: Dict[str, str] = {}
    for pair in f"{defaults} {args}".split():
        key, sep, value = pair.partition("=")
        meta[key] = value if sep else pair
    return meta


class AgentConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = "unknown"
    role: str = "unknown"
    seed: Optional[int] = None

    @field_validator("seed", mode="before")
    @classmethod
    def _truncate_seed(cls, value):
        # Numeric strings such as "7.0" seed with their integer part.
        if isinstance(value, str):
            try:
                return int(float(value))
            except (ValueError, OverflowError):
                raise ValueError(f"invalid seed: {value}") from None
        return value

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if any(ch in INVALID_NAME_CHARS for ch in value):
            raise ValueError(f"invalid name: {value}")
        return value

    @field_validator("role")
    @classmethod
    def _check_role(cls, value: str) -> str:
        if value not in (Color.BLACK.value, Color.WHITE.value):
            raise ValueError(f"invalid role: {value}")
        return value

    @property
    def color(self) -> Color:
        return Color(self.role)

    @classmethod
    def from_args(cls, args: str = "", defaults: str = DEFAULT_ARGS) -> "AgentConfig":
        return cls(**parse_agent_args(args, defaults))


def env_time_scale(default: float = 1.0) -> float:
    raw = os.environ.get("NOGO_TIME_SCALE")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"NOGO_TIME_SCALE must be a number, got {raw!r}") from exc


def resolve_log_level(name: Optional[str] = None, default: str = "WARNING") -> int:
    """Map a level name (argument, then $NOGO_LOG_LEVEL, then default) to a logging level."""
    raw = (name or os.environ.get("NOGO_LOG_LEVEL") or default).upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {raw}")
    return level
