# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# simulation.py
# -----------------------------------------------------------------------------
# Purpose:
#   The event loop (Simulator) and the single-run entry point: build servers
#   and customers from config, schedule arrivals, drain the event list and
#   return the trace plus statistics.
#
# Design notes:
#   - The future event list is a heap of (time, kind, seq, event); seq keeps
#     events with identical (time, kind) in scheduling order.
#   - REST and BACK events run like any other but are kept out of the log.
#
# Usage:
#   from queuesim.simulation import run_simulation
#   result = run_simulation(cfg); print(result.report)
# -----------------------------------------------------------------------------

from __future__ import annotations
import heapq, itertools, logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
from .arrivals import generate_customers
from .config import SimConfig
from .entities import Customer
from .events import Arrival, Event, apply, decide
from .metrics import Metrics
from .rng import RandomGenerator
from .stations import SystemState, make_state

logger = logging.getLogger(__name__)

class Simulator:
    """Discrete-event simulator holding the clock, FEL and the visible log.

    Attributes
    ----------
    t : float
        Time of the last processed event.
    FEL : list
        Min-heap of (time, kind, seq, event).
    log : list[Event]
        Processed events in processing order, REST/BACK excluded.
    """
    def __init__(self, state: SystemState, rng, metrics: Optional[Metrics] = None):
        self.state = state
        self.rng = rng
        self.metrics = metrics if metrics is not None else Metrics()
        self.t: float = 0.0
        self.FEL: List[Tuple[float, int, int, Event]] = []
        self.log: List[Event] = []
        self._seq = itertools.count()

    def schedule(self, ev: Event):
        heapq.heappush(self.FEL, (ev.time, int(ev.kind), next(self._seq), ev))
        logger.debug("scheduled: %s", ev)

    def schedule_arrivals(self, customers: Iterable[Customer]):
        for cust in customers:
            self.schedule(Arrival(cust.arrival_time, cust))

    def pending(self) -> int:
        return len(self.FEL)

    def step(self) -> Event:
        """Process the earliest pending event and return it."""
        ev = heapq.heappop(self.FEL)[-1]
        self.t = ev.time
        logger.debug("processing: %s", ev)
        tr = decide(ev, self.state, self.rng)
        apply(tr, self.metrics)
        if tr.successor is not None:
            self.schedule(tr.successor)
        if ev.visible:
            self.log.append(ev)
        return ev

    def run(self) -> Metrics:
        while self.FEL:
            self.step()
        logger.info("run finished at t=%.3f: %s", self.t, self.metrics.statistics())
        return self.metrics

    def trace(self) -> List[str]:
        return [str(ev) for ev in self.log]

    def report(self) -> str:
        return "\n".join(self.trace() + [self.metrics.statistics()])


@dataclass(frozen=True)
class SimulationResult:
    trace: List[str]
    summary: Dict
    report: str

def build_simulation(cfg: Dict) -> Simulator:
    """Create servers, customers and the initial arrivals from a config dict."""
    sc = SimConfig.from_mapping(cfg)
    rng = RandomGenerator(sc.seed, sc.arrival_rate, sc.service_rate, sc.rest_rate)
    state = make_state(sc.human_servers, sc.self_checkouts, sc.queue_capacity, sc.rest_probability)
    sim = Simulator(state, rng)
    sim.schedule_arrivals(generate_customers(sc.customers, rng, sc.greedy_probability))
    logger.info(
        "simulating %d customers, %d human servers, %d self-checkouts, capacity %d, seed %d",
        sc.customers, sc.human_servers, sc.self_checkouts, sc.queue_capacity, sc.seed,
    )
    return sim

def run_simulation(cfg: Dict) -> SimulationResult:
    sim = build_simulation(cfg)
    sim.run()
    return SimulationResult(sim.trace(), sim.metrics.summary(), sim.report())
