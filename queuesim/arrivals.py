# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# arrivals.py
# -----------------------------------------------------------------------------
# Purpose:
#   Generate exogenous arrivals: a fixed number of customers with Poisson
#   arrival times, each greedy with a configured probability.
#
# Design notes:
#   - The first customer arrives at t=0; each later one after an
#     exponential inter-arrival gap.
#   - Per customer the type sample is drawn before the inter-arrival gap.
#
# Usage:
#   customers = generate_customers(20, rng, greedy_probability=0.2)
#   sim.schedule_arrivals(customers)
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import List
from .entities import Customer

def generate_customers(count: int, rng, greedy_probability: float = 0.0) -> List[Customer]:
    """
    Create `count` customers with ids 1..count in arrival order.

    Parameters
    ----------
    count : int
        Number of customers to create.
    rng : RandomGenerator
        Source of customer-type samples and inter-arrival gaps.
    greedy_probability : float
        A customer is greedy when its type sample is below this threshold.
    """
    customers: List[Customer] = []
    t = 0.0
    for cid in range(1, count + 1):
        greedy = rng.customer_type() < greedy_probability
        customers.append(Customer(cid, arrival_time=t, greedy=greedy))
        t += rng.interarrival()
    return customers
