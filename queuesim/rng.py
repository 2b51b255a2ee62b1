# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# rng.py
# -----------------------------------------------------------------------------
# Purpose:
#   Seeded random source for the simulation: inter-arrival gaps, service
#   times, rest periods, rest decisions and customer-type samples.
#
# Design notes:
#   - Each quantity has its own random.Random stream derived from one seed,
#     so changing e.g. the rest probability does not shift arrival times.
#   - Any object with the same five methods can stand in (tests script them).
#
# Usage:
#   rng = RandomGenerator(seed=1, arrival_rate=1.0, service_rate=1.0, rest_rate=0.1)
#   rng.service_time()
# -----------------------------------------------------------------------------

from __future__ import annotations
import random

class RandomGenerator:
    """Independent, deterministic draw streams keyed by a single seed.

    Parameters
    ----------
    seed : int
        Base seed; streams use seed, seed+1, ... seed+4.
    arrival_rate : float
        Poisson arrival rate (inter-arrival gaps are Exponential(rate)).
    service_rate : float
        Exponential service rate.
    rest_rate : float
        Exponential rate of rest periods (only drawn when a server rests).
    """
    def __init__(self, seed: int, arrival_rate: float, service_rate: float, rest_rate: float = 0.0):
        self.seed = seed
        self.arrival_rate = arrival_rate
        self.service_rate = service_rate
        self.rest_rate = rest_rate
        self._arrival = random.Random(seed)
        self._service = random.Random(seed + 1)
        self._rest_period = random.Random(seed + 2)
        self._rest_decision = random.Random(seed + 3)
        self._customer_type = random.Random(seed + 4)

    def interarrival(self) -> float:
        return self._arrival.expovariate(self.arrival_rate)

    def service_time(self) -> float:
        return self._service.expovariate(self.service_rate)

    def rest_period(self) -> float:
        return self._rest_period.expovariate(self.rest_rate)

    def rest_decision(self) -> float:
        return self._rest_decision.random()

    def customer_type(self) -> float:
        return self._customer_type.random()
