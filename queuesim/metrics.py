# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# metrics.py
# -----------------------------------------------------------------------------
# Purpose:
#   Collect and summarize run statistics: served / left counts, total and
#   average wait, per-server throughput and rest periods.
#
# Design notes:
#   - Keep side-effect methods (note_*) for instrumentation from event
#     effects; one Metrics instance is owned by each Simulator.
#   - Summaries return JSON-serializable dicts for easy tabulation.
#
# Usage:
#   M = Metrics(); ...; M.statistics(); M.summary()
# -----------------------------------------------------------------------------

from __future__ import annotations
from collections import defaultdict
from typing import Dict

class Metrics:
    def __init__(self):
        self.served = 0
        self.left = 0
        self.total_wait = 0.0
        self.served_by_server = defaultdict(int)   # server label -> customers served
        self.rests = 0

    def note_served(self, server, wait: float):
        self.served += 1
        self.total_wait += wait
        self.served_by_server[str(server)] += 1

    def note_leave(self, customer):
        self.left += 1

    def note_rest(self, server):
        self.rests += 1

    @property
    def customers(self) -> int:
        return self.served + self.left

    @property
    def average_wait(self) -> float:
        """Mean wait over served customers; 0 when nobody was served."""
        return self.total_wait / self.served if self.served > 0 else 0.0

    def statistics(self) -> str:
        return f"[{self.average_wait:.3f} {self.served} {self.left}]"

    def summary(self) -> Dict:
        return {
            "served": self.served,
            "left": self.left,
            "customers": self.customers,
            "avg_wait": self.average_wait,
            "total_wait": self.total_wait,
            "served_by_server": dict(self.served_by_server),
            "rests": self.rests,
        }
