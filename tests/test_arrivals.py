import pytest

from queuesim.arrivals import generate_customers
from queuesim.rng import RandomGenerator


def test_generate_customers_times_and_types(scripted):
    rng = scripted(interarrival=[0.5, 1.25, 2.0], customer_type=[0.1, 0.9, 0.3])
    customers = generate_customers(3, rng, greedy_probability=0.5)
    assert [c.cid for c in customers] == [1, 2, 3]
    assert [c.arrival_time for c in customers] == [0.0, 0.5, 1.75]
    assert [c.greedy for c in customers] == [True, False, True]


def test_random_generator_is_deterministic_per_seed():
    a = RandomGenerator(5, 1.0, 2.0, 0.5)
    b = RandomGenerator(5, 1.0, 2.0, 0.5)
    draws_a = [a.interarrival(), a.service_time(), a.rest_period(), a.rest_decision(), a.customer_type()]
    draws_b = [b.interarrival(), b.service_time(), b.rest_period(), b.rest_decision(), b.customer_type()]
    assert draws_a == draws_b
    assert all(d >= 0 for d in draws_a)
    assert 0.0 <= draws_a[3] < 1.0


def test_random_streams_are_independent():
    a = RandomGenerator(5, 1.0, 1.0, 1.0)
    b = RandomGenerator(5, 1.0, 1.0, 1.0)
    # Extra service draws on one generator must not shift its arrival stream.
    for _ in range(10):
        a.service_time()
    assert a.interarrival() == b.interarrival()


def test_zero_greedy_probability_gives_ordinary_customers():
    rng = RandomGenerator(1, 1.0, 1.0)
    assert not any(c.greedy for c in generate_customers(50, rng, greedy_probability=0.0))
    rng = RandomGenerator(1, 1.0, 1.0)
    assert all(c.greedy for c in generate_customers(50, rng, greedy_probability=1.0))


def test_arrival_times_increase():
    times = [c.arrival_time for c in generate_customers(30, RandomGenerator(3, 2.0, 1.0))]
    assert times[0] == pytest.approx(0.0)
    assert times == sorted(times)
