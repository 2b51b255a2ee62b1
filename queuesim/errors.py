# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# errors.py
# -----------------------------------------------------------------------------
# Purpose:
#   Exception types shared by the engine, the config layer and the CLI.
#
# Design notes:
#   - InvariantViolation marks a routing/state-machine defect; it is never
#     caught inside the engine.
#   - ConfigError is raised before any engine object is built.
#
# Usage:
#   from queuesim.errors import InvariantViolation, ConfigError
# -----------------------------------------------------------------------------

from __future__ import annotations


class SimulationError(Exception):
    """Base class for every error raised by queuesim."""


class InvariantViolation(SimulationError, RuntimeError):
    """A server, queue or event precondition was broken."""


class ConfigError(SimulationError, ValueError):
    """Configuration rejected before the simulation is constructed."""
