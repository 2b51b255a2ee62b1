# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# entities.py
# -----------------------------------------------------------------------------
# Purpose:
#   Entity definitions for the checkout DES: Customer.
#
# Design notes:
#   - Customers are immutable; ids are handed out by the arrival generator in
#     creation order, never by a process-wide counter.
#
# Usage:
#   from queuesim.entities import Customer
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class Customer:
    cid: int
    arrival_time: float
    greedy: bool = False             # greedy customers join the shortest queue

    def wait_until(self, t: float) -> float:
        """Time spent between arrival and `t`."""
        return t - self.arrival_time

    def __str__(self) -> str:
        return f"{self.cid}(greedy)" if self.greedy else str(self.cid)
