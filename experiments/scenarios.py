"""
experiments/scenarios.py

Holds scenario definitions (server mix, routing and rest behaviour) to sweep
during experiments. Each scenario is a set of overrides on the base config.
"""

from __future__ import annotations

BASELINE = {
    "name": "baseline",
    "overrides": {},  # override config keys here per scenario
}

ALL_GREEDY = {
    "name": "all_greedy",
    "overrides": {
        "probabilities": {"greedy": 1.0},
    },
}

SELF_CHECKOUT_HEAVY = {
    "name": "self_checkout_heavy",
    "overrides": {
        "servers": {"human": 1, "self_checkout": 4},
    },
}

NO_RESTING = {
    "name": "no_resting",
    "overrides": {
        "probabilities": {"rest": 0.0},
    },
}

SCENARIOS = [BASELINE, ALL_GREEDY, SELF_CHECKOUT_HEAVY, NO_RESTING]
