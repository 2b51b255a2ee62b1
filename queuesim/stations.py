# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# stations.py
# -----------------------------------------------------------------------------
# Purpose:
#   Build the server set (human servers + self-checkouts sharing one queue)
#   and wrap it in SystemState, the read-only view the event transitions
#   route against.
#
# Design notes:
#   - SystemState itself never changes after construction; the servers and
#     the shared queue it references are mutated by event effects.
#   - Server ids run over human servers first, then self-checkouts.
#
# Usage:
#   from queuesim.stations import make_state
#   state = make_state(human=2, self_checkout=1, capacity=2, rest_probability=0.5)
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple
from .queues import BoundedQueue, HumanServer, SelfCheckoutServer, Server
from . import policies

@dataclass(frozen=True)
class SystemState:
    human_servers: Tuple[HumanServer, ...]
    self_checkouts: Tuple[SelfCheckoutServer, ...]
    shared_queue: BoundedQueue

    @property
    def shared_capacity(self) -> int:
        return self.shared_queue.capacity

    def servers(self) -> Iterator[Server]:
        yield from self.human_servers
        yield from self.self_checkouts

    def first_servable_server(self) -> Optional[Server]:
        return policies.first_servable(self.human_servers, self.self_checkouts)

    def first_waitable_server(self) -> Optional[Server]:
        return policies.first_waitable(self.human_servers, self.self_checkouts, self.shared_queue)

    def shortest_queue_server(self) -> Optional[Server]:
        return policies.shortest_queue(self.human_servers, self.self_checkouts, self.shared_queue)

def make_state(human: int, self_checkout: int, capacity: int,
               rest_probability: float = 0.0) -> SystemState:
    """
    Create all servers for one run.

    Parameters
    ----------
    human : int
        Number of human servers, each with a private queue.
    self_checkout : int
        Number of self-checkout servers sharing a single queue.
    capacity : int
        Queue capacity, used for every private queue and the shared queue.
    rest_probability : float
        Probability that a human server rests after finishing a customer.

    Returns
    -------
    SystemState
    """
    humans = tuple(HumanServer(i + 1, capacity, rest_probability) for i in range(human))
    shared = BoundedQueue(capacity)
    checkouts = tuple(SelfCheckoutServer(human + i + 1, shared) for i in range(self_checkout))
    return SystemState(humans, checkouts, shared)
