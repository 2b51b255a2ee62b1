import pytest

from queuesim.entities import Customer
from queuesim.errors import InvariantViolation
from queuesim.events import (
    Arrival, Back, Done, EventType, Leave, Rest, Served, Wait, apply, decide,
)
from queuesim.metrics import Metrics
from queuesim.stations import make_state


def test_type_priority_order():
    assert [e.name for e in sorted(EventType)] == [
        "DONE", "SERVED", "REST", "BACK", "ARRIVAL", "WAIT", "LEAVE",
    ]


def test_events_order_by_time_then_kind():
    state = make_state(human=1, self_checkout=0, capacity=1)
    srv = state.human_servers[0]
    c = Customer(1, 0.0)
    events = [Leave(1.0, c), Arrival(1.0, c), Done(1.0, c, srv), Served(0.5, c, srv), Wait(1.0, c, srv)]
    assert [type(e).__name__ for e in sorted(events)] == ["Served", "Done", "Arrival", "Wait", "Leave"]


def test_rendering_and_visibility():
    state = make_state(human=1, self_checkout=1, capacity=1, rest_probability=0.5)
    srv, sc = state.human_servers[0], state.self_checkouts[0]
    c = Customer(3, 1.25, greedy=True)
    assert str(Arrival(1.25, c)) == "1.250 3(greedy) arrives"
    assert str(Served(1.25, c, srv)) == "1.250 3(greedy) served by server 1"
    assert str(Done(2.5, c, srv)) == "2.500 3(greedy) done serving by server 1"
    assert str(Wait(1.25, c, sc)) == "1.250 3(greedy) waits to be served by self-check 2"
    assert str(Leave(1.25, c)) == "1.250 3(greedy) leaves"
    assert not Rest(2.5, srv).visible
    assert not Back(3.0, srv).visible
    assert Arrival(1.25, c).visible


def test_arrival_with_free_server_is_served_at_same_time(scripted):
    state = make_state(human=1, self_checkout=0, capacity=1)
    tr = decide(Arrival(2.0, Customer(1, 2.0)), state, scripted())
    assert tr.successor == Served(2.0, Customer(1, 2.0), state.human_servers[0])
    assert tr.effects == ()


def test_arrival_routes_ordinary_and_greedy_differently(scripted):
    state = make_state(human=2, self_checkout=0, capacity=2)
    h1, h2 = state.human_servers
    h1.serve(Customer(1, 0.0))
    h2.serve(Customer(2, 0.0))
    h1.enqueue(Customer(3, 0.0))
    ordinary = decide(Arrival(1.0, Customer(4, 1.0)), state, scripted()).successor
    greedy = decide(Arrival(1.0, Customer(5, 1.0, True)), state, scripted()).successor
    assert isinstance(ordinary, Wait) and ordinary.server is h1
    assert isinstance(greedy, Wait) and greedy.server is h2


def test_arrival_with_no_room_leaves(scripted):
    state = make_state(human=1, self_checkout=0, capacity=0)
    state.human_servers[0].serve(Customer(1, 0.0))
    tr = decide(Arrival(0.5, Customer(2, 0.5)), state, scripted())
    assert isinstance(tr.successor, Leave)


def test_decide_does_not_mutate_state(scripted):
    state = make_state(human=1, self_checkout=0, capacity=1)
    srv = state.human_servers[0]
    c = Customer(1, 0.0)
    tr = decide(Served(0.0, c, srv), state, scripted(service=[2.0]))
    assert srv.current is None
    assert tr.successor == Done(2.0, c, srv)
    m = Metrics()
    apply(tr, m)
    assert srv.current == c
    assert m.served == 1


def test_served_records_wait(scripted):
    state = make_state(human=1, self_checkout=0, capacity=1)
    srv = state.human_servers[0]
    m = Metrics()
    apply(decide(Served(3.0, Customer(1, 1.0), srv), state, scripted()), m)
    assert m.total_wait == pytest.approx(2.0)
    assert m.served_by_server == {"server 1": 1}


def test_done_on_self_checkout_never_draws_rest(scripted):
    state = make_state(human=0, self_checkout=1, capacity=1)
    sc = state.self_checkouts[0]
    c = Customer(1, 0.0)
    sc.serve(c)
    rng = scripted()
    tr = decide(Done(1.0, c, sc), state, rng)
    assert rng.rest_decisions_drawn == 0
    assert tr.successor is None


def test_done_draws_rest_decision_even_without_rest_probability(scripted):
    state = make_state(human=1, self_checkout=0, capacity=1, rest_probability=0.0)
    srv = state.human_servers[0]
    c = Customer(1, 0.0)
    srv.serve(c)
    rng = scripted(rest_decision=[0.0])
    tr = decide(Done(1.0, c, srv), state, rng)
    assert rng.rest_decisions_drawn == 1
    assert tr.successor is None


def test_done_pulls_waiting_customer(scripted):
    state = make_state(human=1, self_checkout=0, capacity=1)
    srv = state.human_servers[0]
    first, waiting = Customer(1, 0.0), Customer(2, 0.5)
    srv.serve(first)
    srv.enqueue(waiting)
    tr = decide(Done(1.0, first, srv), state, scripted())
    assert tr.successor == Served(1.0, waiting, srv)
    apply(tr, Metrics())
    assert srv.current == waiting
    assert srv.queue_length() == 0


def test_done_then_rest_then_back_cycle(scripted):
    state = make_state(human=1, self_checkout=0, capacity=1, rest_probability=0.5)
    srv = state.human_servers[0]
    c, waiting = Customer(1, 0.0), Customer(2, 0.5)
    srv.serve(c)
    srv.enqueue(waiting)
    m = Metrics()
    rng = scripted(rest_decision=[0.2], rest_period=[4.0])

    tr = decide(Done(1.0, c, srv), state, rng)
    assert tr.successor == Rest(1.0, srv)
    apply(tr, m)
    assert srv.resting and srv.current is None
    assert m.rests == 1

    tr = decide(Rest(1.0, srv), state, rng)
    assert tr.successor == Back(5.0, srv)
    apply(tr, m)
    assert srv.resting

    tr = decide(Back(5.0, srv), state, rng)
    assert tr.successor == Served(5.0, waiting, srv)
    apply(tr, m)
    assert not srv.resting
    assert srv.current == waiting


def test_rest_event_for_working_server_fails_fast(scripted):
    state = make_state(human=1, self_checkout=0, capacity=1, rest_probability=0.5)
    with pytest.raises(InvariantViolation):
        decide(Rest(1.0, state.human_servers[0]), state, scripted())


def test_arrival_routed_to_queue_reserves_slot_and_wait_fills_it(scripted):
    state = make_state(human=0, self_checkout=2, capacity=2)
    sc1, sc2 = state.self_checkouts
    sc1.serve(Customer(1, 0.0))
    sc2.serve(Customer(2, 0.0))
    c = Customer(3, 0.0)
    m = Metrics()

    tr = decide(Arrival(0.0, c), state, scripted())
    assert tr.successor == Wait(0.0, c, sc1)
    apply(tr, m)
    assert len(state.shared_queue) == 1
    assert state.shared_queue.reserved == 1
    assert state.shared_queue.peek() is None

    tr = decide(tr.successor, state, scripted())
    assert tr.successor is None
    apply(tr, m)
    assert len(state.shared_queue) == 1
    assert state.shared_queue.reserved == 0
    assert sc2.queue.peek() == c


def test_simultaneous_arrivals_see_reserved_slots(scripted):
    state = make_state(human=1, self_checkout=0, capacity=1)
    state.human_servers[0].serve(Customer(1, 0.0))
    m = Metrics()
    first = decide(Arrival(0.0, Customer(2, 0.0)), state, scripted())
    apply(first, m)
    second = decide(Arrival(0.0, Customer(3, 0.0)), state, scripted())
    assert isinstance(first.successor, Wait)
    assert isinstance(second.successor, Leave)


def test_wait_without_reserved_slot_fails_fast(scripted):
    state = make_state(human=1, self_checkout=0, capacity=1)
    tr = decide(Wait(0.0, Customer(1, 0.0), state.human_servers[0]), state, scripted())
    with pytest.raises(InvariantViolation):
        apply(tr, Metrics())


def test_leave_counts(scripted):
    state = make_state(human=1, self_checkout=0, capacity=0)
    m = Metrics()
    tr = decide(Leave(0.0, Customer(1, 0.0)), state, scripted())
    assert tr.successor is None
    apply(tr, m)
    assert m.left == 1
