# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# config.py
# -----------------------------------------------------------------------------
# Purpose:
#   Load, merge and validate run configuration (YAML or the plain ten-value
#   input format) before any engine object is built.
#
# Design notes:
#   - The config is a nested dict (sim / servers / rates / probabilities);
#     SimConfig is the validated, typed view the simulation is built from.
#   - Invalid values raise ConfigError.
#
# Usage:
#   cfg = apply_overrides(load_config("config/baseline.yaml"), {"sim": {"seed": 3}})
#   sc = SimConfig.from_mapping(cfg)
# -----------------------------------------------------------------------------

from __future__ import annotations
import copy
from dataclasses import dataclass
from typing import Any, Dict, Optional
import yaml
from .errors import ConfigError

DEFAULTS: Dict[str, Any] = {
    "sim": {"seed": 1, "customers": 20},
    "servers": {"human": 2, "self_checkout": 0, "queue_capacity": 2},
    "rates": {"arrival": 1.0, "service": 1.0, "rest": 0.0},
    "probabilities": {"rest": 0.0, "greedy": 0.0},
}

def apply_overrides(cfg: Dict, overrides: Dict) -> Dict:
    """Apply overrides (recursive merge) on top of a base config."""
    new = copy.deepcopy(cfg)

    def _merge(dst: Dict, src: Dict):
        for key, val in src.items():
            if isinstance(val, dict) and isinstance(dst.get(key), dict):
                _merge(dst[key], val)
            else:
                dst[key] = copy.deepcopy(val)

    _merge(new, overrides)
    return new

def load_config(path: Optional[str] = None) -> Dict:
    """Read a YAML config and merge it over DEFAULTS; no path gives DEFAULTS."""
    if path is None:
        return copy.deepcopy(DEFAULTS)
    try:
        with open(path, "r") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"config {path} must be a mapping, got {type(raw).__name__}")
    return apply_overrides(DEFAULTS, raw)

# Order of the plain whitespace-separated input format.
PLAIN_FIELDS = (
    ("sim", "seed", int),
    ("servers", "human", int),
    ("servers", "self_checkout", int),
    ("servers", "queue_capacity", int),
    ("sim", "customers", int),
    ("rates", "arrival", float),
    ("rates", "service", float),
    ("rates", "rest", float),
    ("probabilities", "rest", float),
    ("probabilities", "greedy", float),
)

def parse_plain_values(text: str) -> Dict:
    """
    Parse the ten whitespace-separated values: seed, human servers,
    self-checkouts, queue capacity, customers, arrival rate, service rate,
    rest rate, rest probability, greedy probability.
    """
    tokens = text.split()
    if len(tokens) != len(PLAIN_FIELDS):
        raise ConfigError(f"expected {len(PLAIN_FIELDS)} values, got {len(tokens)}")
    overrides: Dict[str, Dict[str, Any]] = {}
    for tok, (section, key, conv) in zip(tokens, PLAIN_FIELDS):
        try:
            val = conv(tok)
        except ValueError as e:
            raise ConfigError(f"{section}.{key}: cannot parse {tok!r} as {conv.__name__}") from e
        overrides.setdefault(section, {})[key] = val
    return apply_overrides(DEFAULTS, overrides)


@dataclass(frozen=True)
class SimConfig:
    seed: int
    customers: int
    human_servers: int
    self_checkouts: int
    queue_capacity: int
    arrival_rate: float
    service_rate: float
    rest_rate: float
    rest_probability: float
    greedy_probability: float

    @classmethod
    def from_mapping(cls, cfg: Dict) -> "SimConfig":
        """Validate a nested config dict and return the typed view."""
        def _get(section: str, key: str):
            sec = cfg.get(section)
            if not isinstance(sec, dict) or key not in sec:
                raise ConfigError(f"missing config value {section}.{key}")
            return sec[key]

        def _integer(section: str, key: str) -> int:
            val = _get(section, key)
            if isinstance(val, bool) or not isinstance(val, int):
                raise ConfigError(f"{section}.{key} must be an integer, got {val!r}")
            return val

        def _count(section: str, key: str) -> int:
            val = _integer(section, key)
            if val < 0:
                raise ConfigError(f"{section}.{key} must be a non-negative integer, got {val!r}")
            return val

        def _number(section: str, key: str) -> float:
            val = _get(section, key)
            if isinstance(val, bool) or not isinstance(val, (int, float)):
                raise ConfigError(f"{section}.{key} must be a number, got {val!r}")
            return float(val)

        def _probability(key: str) -> float:
            val = _number("probabilities", key)
            if not 0.0 <= val <= 1.0:
                raise ConfigError(f"probabilities.{key} must be within [0, 1], got {val}")
            return val

        sc = cls(
            seed=_integer("sim", "seed"),
            customers=_count("sim", "customers"),
            human_servers=_count("servers", "human"),
            self_checkouts=_count("servers", "self_checkout"),
            queue_capacity=_count("servers", "queue_capacity"),
            arrival_rate=_number("rates", "arrival"),
            service_rate=_number("rates", "service"),
            rest_rate=_number("rates", "rest"),
            rest_probability=_probability("rest"),
            greedy_probability=_probability("greedy"),
        )
        if sc.arrival_rate <= 0:
            raise ConfigError(f"rates.arrival must be > 0, got {sc.arrival_rate}")
        if sc.service_rate <= 0:
            raise ConfigError(f"rates.service must be > 0, got {sc.service_rate}")
        if sc.rest_rate < 0:
            raise ConfigError(f"rates.rest must be >= 0, got {sc.rest_rate}")
        if sc.rest_probability > 0 and sc.rest_rate <= 0:
            raise ConfigError("rates.rest must be > 0 when probabilities.rest is positive")
        return sc
