# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# events.py
# -----------------------------------------------------------------------------
# Purpose:
#   Event kinds of the checkout DES and their transition function.
#
# Design notes:
#   - One frozen dataclass per event kind, carrying only what that kind needs.
#   - decide() is the pure part: it reads SystemState, draws from the random
#     source and returns a Transition (optional successor + effects). It never
#     mutates servers or statistics. apply() runs the effects in order.
#   - Simultaneous events are ordered by EventType value:
#     DONE < SERVED < REST < BACK < ARRIVAL < WAIT < LEAVE.
#   - An ARRIVAL routed to a queue reserves the slot; the WAIT fills it.
#
# Usage:
#   from queuesim.events import Arrival, decide, apply
#   tr = decide(ev, state, rng); apply(tr, metrics)
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Optional, Tuple, Union
from .entities import Customer
from .errors import InvariantViolation
from .queues import HumanServer, Server

class EventType(IntEnum):
    DONE = 0
    SERVED = 1
    REST = 2
    BACK = 3
    ARRIVAL = 4
    WAIT = 5
    LEAVE = 6


class _EventBase:
    kind: ClassVar[EventType]
    visible: ClassVar[bool] = True
    time: float

    def sort_key(self) -> Tuple[float, int]:
        return (self.time, int(self.kind))

    def __lt__(self, other: "_EventBase") -> bool:
        return self.sort_key() < other.sort_key()

@dataclass(frozen=True)
class Arrival(_EventBase):
    time: float
    customer: Customer
    kind: ClassVar[EventType] = EventType.ARRIVAL

    def __str__(self) -> str:
        return f"{self.time:.3f} {self.customer} arrives"

@dataclass(frozen=True)
class Served(_EventBase):
    time: float
    customer: Customer
    server: Server
    kind: ClassVar[EventType] = EventType.SERVED

    def __str__(self) -> str:
        return f"{self.time:.3f} {self.customer} served by {self.server}"

@dataclass(frozen=True)
class Done(_EventBase):
    time: float
    customer: Customer
    server: Server
    kind: ClassVar[EventType] = EventType.DONE

    def __str__(self) -> str:
        return f"{self.time:.3f} {self.customer} done serving by {self.server}"

@dataclass(frozen=True)
class Rest(_EventBase):
    time: float
    server: HumanServer
    kind: ClassVar[EventType] = EventType.REST
    visible: ClassVar[bool] = False

    def __str__(self) -> str:
        return f"{self.time:.3f} {self.server} rest"

@dataclass(frozen=True)
class Back(_EventBase):
    time: float
    server: HumanServer
    kind: ClassVar[EventType] = EventType.BACK
    visible: ClassVar[bool] = False

    def __str__(self) -> str:
        return f"{self.time:.3f} {self.server} back"

@dataclass(frozen=True)
class Wait(_EventBase):
    time: float
    customer: Customer
    server: Server
    kind: ClassVar[EventType] = EventType.WAIT

    def __str__(self) -> str:
        return f"{self.time:.3f} {self.customer} waits to be served by {self.server}"

@dataclass(frozen=True)
class Leave(_EventBase):
    time: float
    customer: Customer
    kind: ClassVar[EventType] = EventType.LEAVE

    def __str__(self) -> str:
        return f"{self.time:.3f} {self.customer} leaves"

Event = Union[Arrival, Served, Done, Rest, Back, Wait, Leave]

# -----------------------------------------------------------------------------
# Effects: the mutations an event requires, applied after decide().
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class StartService:
    server: Server
    customer: Customer

    def apply(self, metrics):
        self.server.serve(self.customer)

@dataclass(frozen=True)
class RecordServed:
    server: Server
    wait: float

    def apply(self, metrics):
        metrics.note_served(self.server, self.wait)

@dataclass(frozen=True)
class FinishService:
    server: Server

    def apply(self, metrics):
        self.server.finish()

@dataclass(frozen=True)
class PullNext:
    server: Server

    def apply(self, metrics):
        self.server.pull_next()

@dataclass(frozen=True)
class StartRest:
    server: HumanServer

    def apply(self, metrics):
        self.server.toggle_rest()
        metrics.note_rest(self.server)

@dataclass(frozen=True)
class EndRest:
    server: HumanServer

    def apply(self, metrics):
        if not self.server.resting:
            raise InvariantViolation(f"{self.server} came back without resting")
        self.server.toggle_rest()

@dataclass(frozen=True)
class ReserveSlot:
    server: Server

    def apply(self, metrics):
        self.server.reserve_slot()

@dataclass(frozen=True)
class Enqueue:
    server: Server
    customer: Customer

    def apply(self, metrics):
        self.server.enqueue(self.customer, reserved=True)

@dataclass(frozen=True)
class RecordLeave:
    customer: Customer

    def apply(self, metrics):
        metrics.note_leave(self.customer)


@dataclass(frozen=True)
class Transition:
    successor: Optional[Event] = None
    effects: Tuple = ()

# -----------------------------------------------------------------------------
# Transition function
# -----------------------------------------------------------------------------

def _on_arrival(ev: Arrival, state) -> Transition:
    srv = state.first_servable_server()
    if srv is not None:
        return Transition(Served(ev.time, ev.customer, srv))
    if ev.customer.greedy:
        srv = state.shortest_queue_server()
    else:
        srv = state.first_waitable_server()
    if srv is not None:
        # The slot is held from now on so later arrivals at the same instant
        # see it as taken; the Wait event fills it.
        return Transition(Wait(ev.time, ev.customer, srv), (ReserveSlot(srv),))
    return Transition(Leave(ev.time, ev.customer))

def _on_served(ev: Served, rng) -> Transition:
    duration = rng.service_time()
    return Transition(
        Done(ev.time + duration, ev.customer, ev.server),
        (StartService(ev.server, ev.customer),
         RecordServed(ev.server, ev.customer.wait_until(ev.time))),
    )

def _next_from_queue(t: float, srv: Server) -> Optional[Served]:
    head = srv.queue.peek()
    return Served(t, head, srv) if head is not None else None

def _on_done(ev: Done, rng) -> Transition:
    srv = ev.server
    if isinstance(srv, HumanServer) and srv.decide_rest(rng):
        return Transition(Rest(ev.time, srv), (FinishService(srv), StartRest(srv)))
    return Transition(_next_from_queue(ev.time, srv), (FinishService(srv), PullNext(srv)))

def _on_rest(ev: Rest, rng) -> Transition:
    if not ev.server.resting:
        raise InvariantViolation(f"{ev.server} has a rest event but is not resting")
    return Transition(Back(ev.time + rng.rest_period(), ev.server))

def _on_back(ev: Back) -> Transition:
    return Transition(_next_from_queue(ev.time, ev.server), (EndRest(ev.server), PullNext(ev.server)))

def decide(ev: Event, state, rng) -> Transition:
    """
    Compute the successor of `ev` and the effects it requires.

    Parameters
    ----------
    ev : Event
        The event being processed.
    state : SystemState
        Servers and shared queue as of ev.time (read only here).
    rng : RandomGenerator
        Random source; SERVED draws a service time, DONE on a human server
        draws a rest decision and REST draws a rest period.

    Returns
    -------
    Transition
    """
    kind = ev.kind
    if kind == EventType.ARRIVAL:
        return _on_arrival(ev, state)
    elif kind == EventType.SERVED:
        return _on_served(ev, rng)
    elif kind == EventType.DONE:
        return _on_done(ev, rng)
    elif kind == EventType.REST:
        return _on_rest(ev, rng)
    elif kind == EventType.BACK:
        return _on_back(ev)
    elif kind == EventType.WAIT:
        return Transition(None, (Enqueue(ev.server, ev.customer),))
    elif kind == EventType.LEAVE:
        return Transition(None, (RecordLeave(ev.customer),))
    raise InvariantViolation(f"unhandled event kind {kind!r}")

def apply(tr: Transition, metrics):
    """Run the effects of a transition in order."""
    for effect in tr.effects:
        effect.apply(metrics)
