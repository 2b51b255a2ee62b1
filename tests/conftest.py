import pytest

from queuesim.entities import Customer
from queuesim.simulation import Simulator
from queuesim.stations import make_state


class ScriptedRandom:
    """Random source returning scripted values, then a fixed default per stream."""

    def __init__(self, service=(), rest_period=(), rest_decision=(), interarrival=(), customer_type=(),
                 default_service=1.0, default_rest_period=1.0):
        self._service = list(service)
        self._rest_period = list(rest_period)
        self._rest_decision = list(rest_decision)
        self._interarrival = list(interarrival)
        self._customer_type = list(customer_type)
        self.default_service = default_service
        self.default_rest_period = default_rest_period
        self.rest_decisions_drawn = 0

    @staticmethod
    def _next(values, default):
        return values.pop(0) if values else default

    def service_time(self):
        return self._next(self._service, self.default_service)

    def rest_period(self):
        return self._next(self._rest_period, self.default_rest_period)

    def rest_decision(self):
        self.rest_decisions_drawn += 1
        # 1.0 never falls below a probability, so servers do not rest by default.
        return self._next(self._rest_decision, 1.0)

    def interarrival(self):
        return self._next(self._interarrival, 1.0)

    def customer_type(self):
        return self._next(self._customer_type, 1.0)


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def make_sim():
    """Build a Simulator over fresh servers with customers given as (time, greedy) pairs."""

    def _make(arrivals, rng, human=1, self_checkout=0, capacity=1, rest_probability=0.0):
        state = make_state(human, self_checkout, capacity, rest_probability)
        sim = Simulator(state, rng)
        customers = [Customer(i + 1, t, greedy) for i, (t, greedy) in enumerate(arrivals)]
        sim.schedule_arrivals(customers)
        return sim

    return _make
