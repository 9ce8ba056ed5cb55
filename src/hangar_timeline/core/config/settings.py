"""
Settings tipados do Hangar Timeline.

Materializa as seções `timeline`, `propagation` e `ingest` da configuração
efetiva em um objeto imutável e validado.

Config esperada (exemplo):
timeline:
  day_width: 60
  row_height: 48
  header_height: 56
  buffer: 5
  default_interval_days: 80
propagation:
  max_passes: 100
  strategy: relaxation
ingest:
  default_start_hour: 8
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .errors import InvalidSettingsError


DEFAULT_CONFIG: Dict[str, Any] = {
    "timeline": {
        "day_width": 60,
        "row_height": 48,
        "header_height": 56,
        "buffer": 5,
        "default_interval_days": 80,
    },
    "propagation": {
        "max_passes": 100,
        "strategy": "relaxation",
    },
    "ingest": {
        "default_start_hour": 8,
    },
}

_STRATEGIES = ("relaxation", "topological")


@dataclass(frozen=True)
class TimelineSettings:
    """Parâmetros efetivos de geometria, propagação e importação."""

    day_width: float = 60
    row_height: float = 48
    header_height: float = 56
    buffer: int = 5
    default_interval_days: int = 80
    max_passes: int = 100
    strategy: str = "relaxation"
    default_start_hour: int = 8
    config_hash: Optional[str] = None


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = config.get(name, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidSettingsError(f"{name} must be a mapping")
    return value


def _number(section: Dict[str, Any], path: str, key: str, default: float, *, minimum: float, strict: bool) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidSettingsError(f"{path}.{key} must be a number")
    if (strict and value <= minimum) or (not strict and value < minimum):
        op = ">" if strict else ">="
        raise InvalidSettingsError(f"{path}.{key} must be {op} {minimum}")
    return value


def _integer(section: Dict[str, Any], path: str, key: str, default: int, *, minimum: int, maximum: Optional[int] = None) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSettingsError(f"{path}.{key} must be an integer")
    if value < minimum or (maximum is not None and value > maximum):
        upper = "" if maximum is None else f" and <= {maximum}"
        raise InvalidSettingsError(f"{path}.{key} must be >= {minimum}{upper}")
    return value


def resolve_settings(config: Dict[str, Any], *, config_hash: Optional[str] = None) -> TimelineSettings:
    """
    Valida a configuração efetiva e devolve `TimelineSettings`.

    Chaves ausentes assumem os valores de `DEFAULT_CONFIG`.

    Raises:
        InvalidSettingsError: tipo ou faixa inválidos.
    """
    if not isinstance(config, dict):
        raise InvalidSettingsError("config must be a mapping")

    timeline = _section(config, "timeline")
    propagation = _section(config, "propagation")
    ingest = _section(config, "ingest")

    t_defaults = DEFAULT_CONFIG["timeline"]
    p_defaults = DEFAULT_CONFIG["propagation"]
    i_defaults = DEFAULT_CONFIG["ingest"]

    strategy = propagation.get("strategy", p_defaults["strategy"])
    if strategy not in _STRATEGIES:
        raise InvalidSettingsError(f"propagation.strategy must be one of {_STRATEGIES}")

    return TimelineSettings(
        day_width=_number(timeline, "timeline", "day_width", t_defaults["day_width"], minimum=0, strict=True),
        row_height=_number(timeline, "timeline", "row_height", t_defaults["row_height"], minimum=0, strict=True),
        header_height=_number(timeline, "timeline", "header_height", t_defaults["header_height"], minimum=0, strict=False),
        buffer=_integer(timeline, "timeline", "buffer", t_defaults["buffer"], minimum=0),
        default_interval_days=_integer(
            timeline, "timeline", "default_interval_days", t_defaults["default_interval_days"], minimum=1
        ),
        max_passes=_integer(propagation, "propagation", "max_passes", p_defaults["max_passes"], minimum=0),
        strategy=strategy,
        default_start_hour=_integer(
            ingest, "ingest", "default_start_hour", i_defaults["default_start_hour"], minimum=0, maximum=23
        ),
        config_hash=config_hash,
    )
