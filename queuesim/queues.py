# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# queues.py
# -----------------------------------------------------------------------------
# Purpose:
#   Queue and server primitives: a bounded FIFO waiting line and the server
#   state machine (Idle / Serving / Resting) for human and self-checkout
#   servers.
#
# Design notes:
#   - Self-checkout servers all hold a reference to ONE BoundedQueue owned by
#     the SystemState; never give them copies.
#   - Only HumanServer has resting operations, so a self-checkout server can
#     not be asked to rest.
#   - Every precondition failure raises InvariantViolation.
#
# Usage:
#   from queuesim.queues import BoundedQueue, HumanServer, SelfCheckoutServer
# -----------------------------------------------------------------------------

from __future__ import annotations
from collections import deque
from typing import Deque, Optional
from .entities import Customer
from .errors import InvariantViolation

class BoundedQueue:
    """FIFO waiting line holding at most `capacity` customers.

    Parameters
    ----------
    capacity : int
        Maximum number of waiting customers (0 disables waiting).

    Notes
    -----
    - A slot can be reserved when a customer is routed here and filled when
      the customer actually joins. Reserved slots count towards len() and
      has_space(), but peek()/pop() only see customers that joined.
    """
    def __init__(self, capacity: int):
        if capacity < 0:
            raise InvariantViolation(f"queue capacity must be >= 0, got {capacity}")
        self.capacity = capacity
        self._items: Deque[Customer] = deque()
        self._reserved = 0

    def __len__(self) -> int:
        return len(self._items) + self._reserved

    @property
    def reserved(self) -> int:
        return self._reserved

    def has_space(self) -> bool:
        return len(self) < self.capacity

    def reserve(self):
        """Hold one slot for a customer who is about to join."""
        if not self.has_space():
            raise InvariantViolation(f"queue full ({len(self)}/{self.capacity}), cannot reserve a slot")
        self._reserved += 1

    def push(self, customer: Customer, reserved: bool = False):
        """Append `customer`, filling a previously reserved slot if `reserved`."""
        if reserved:
            if self._reserved <= 0:
                raise InvariantViolation(f"no reserved slot for customer {customer}")
            self._reserved -= 1
        elif not self.has_space():
            raise InvariantViolation(
                f"queue full ({len(self)}/{self.capacity}), cannot add customer {customer}"
            )
        self._items.append(customer)

    def peek(self) -> Optional[Customer]:
        return self._items[0] if self._items else None

    def pop(self) -> Optional[Customer]:
        return self._items.popleft() if self._items else None


class Server:
    """Single-customer server with a bounded FIFO queue.

    Parameters
    ----------
    sid : int
        Server id, unique across human and self-checkout servers.
    queue : BoundedQueue
        Waiting line drained by this server (private or shared).

    Notes
    -----
    - `current` is the customer in service. A customer pulled from the queue
      holds the server from the Done/Back event until its Served event.
    """
    label = "server"

    def __init__(self, sid: int, queue: BoundedQueue):
        self.sid = sid
        self.queue = queue
        self.current: Optional[Customer] = None

    @property
    def resting(self) -> bool:
        return False

    @property
    def is_self_checkout(self) -> bool:
        return False

    @property
    def capacity(self) -> int:
        return self.queue.capacity

    def queue_length(self) -> int:
        return len(self.queue)

    def can_serve(self) -> bool:
        return self.current is None and not self.resting

    def has_queue_space(self) -> bool:
        return self.queue.has_space()

    def serve(self, customer: Customer):
        """Start serving `customer` (Idle -> Serving)."""
        if self.resting:
            raise InvariantViolation(f"{self} is resting, cannot serve customer {customer}")
        if self.current is not None and self.current != customer:
            raise InvariantViolation(f"{self} is busy with customer {self.current}, cannot serve {customer}")
        self.current = customer

    def finish(self):
        """Release the customer in service (Serving -> Idle)."""
        if self.current is None:
            raise InvariantViolation(f"{self} finished while idle")
        self.current = None

    def pull_next(self) -> Optional[Customer]:
        """Take the head of the queue into service; None leaves the server idle."""
        if self.current is not None or self.resting:
            raise InvariantViolation(f"{self} cannot pull from its queue while busy or resting")
        self.current = self.queue.pop()
        return self.current

    def finish_and_pull_next(self) -> Optional[Customer]:
        self.finish()
        return self.pull_next()

    def reserve_slot(self):
        self.queue.reserve()

    def enqueue(self, customer: Customer, reserved: bool = False):
        self.queue.push(customer, reserved=reserved)

    def __str__(self) -> str:
        return f"{self.label} {self.sid}"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.sid} q={len(self.queue)}/{self.capacity} current={self.current}>"


class HumanServer(Server):
    """
    Human server with a private queue and a probabilistic rest cycle.

    After each completed service the server draws a rest decision; when the
    draw is below `rest_probability` it stays unavailable until the matching
    Back event toggles it again.
    """
    def __init__(self, sid: int, capacity: int, rest_probability: float = 0.0):
        super().__init__(sid, BoundedQueue(capacity))
        self.rest_probability = rest_probability
        self._resting = False

    @property
    def resting(self) -> bool:
        return self._resting

    def decide_rest(self, rng) -> bool:
        # Always draws, also when rest_probability is 0.
        return rng.rest_decision() < self.rest_probability

    def toggle_rest(self):
        """Idle <-> Resting."""
        if self.rest_probability <= 0:
            raise InvariantViolation(f"{self} has no rest probability configured")
        if self.current is not None:
            raise InvariantViolation(f"{self} cannot toggle rest while serving {self.current}")
        self._resting = not self._resting


class SelfCheckoutServer(Server):
    """Self-checkout terminal; drains the queue shared by all self-checkouts."""
    label = "self-check"

    def __init__(self, sid: int, shared_queue: BoundedQueue):
        super().__init__(sid, shared_queue)

    @property
    def is_self_checkout(self) -> bool:
        return True
