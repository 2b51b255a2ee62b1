# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# policies.py
# -----------------------------------------------------------------------------
# Purpose:
#   Server selection policies used when routing an arriving customer:
#   first servable server, first server with queue space (ordinary
#   customers) and shortest queue (greedy customers).
#
# Design notes:
#   - Keep pure functions to ease testing (policy -> decision). They only
#     read server state.
#   - Self-checkouts are represented by the FIRST self-checkout server when a
#     customer is sent to the shared queue.
#
# Usage:
#   from queuesim.policies import first_servable, first_waitable, shortest_queue
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import Optional, Sequence
from .queues import BoundedQueue, Server

def first_servable(humans: Sequence[Server], self_checkouts: Sequence[Server]) -> Optional[Server]:
    """First server able to start service right now, humans before self-checkouts."""
    for srv in humans:
        if srv.can_serve():
            return srv
    for srv in self_checkouts:
        if srv.can_serve():
            return srv
    return None

def first_waitable(humans: Sequence[Server], self_checkouts: Sequence[Server],
                   shared_queue: BoundedQueue) -> Optional[Server]:
    """First human with queue space, else the shared self-checkout queue."""
    for srv in humans:
        if srv.has_queue_space():
            return srv
    if self_checkouts and shared_queue.has_space():
        return self_checkouts[0]
    return None

def shortest_queue(humans: Sequence[Server], self_checkouts: Sequence[Server],
                   shared_queue: BoundedQueue) -> Optional[Server]:
    """
    Server with the shortest queue, or None when every queue is full.

    The first human achieving the minimum length wins among humans. The shared
    queue only wins when it is strictly shorter, so an exact tie goes to the
    human server.
    """
    best: Optional[Server] = None
    best_len = shared_queue.capacity
    for srv in humans:
        if best is None or srv.queue_length() < best_len:
            best, best_len = srv, srv.queue_length()
    if self_checkouts and len(shared_queue) < best_len:
        best, best_len = self_checkouts[0], len(shared_queue)
    if best is None or best_len >= best.capacity:
        return None
    return best
