"""
queuesim package initializer.

This package contains the discrete-event engine (events, servers, queues),
routing policies, configuration and statistics for the checkout-queue
simulation with human servers and self-checkouts.
"""
__all__ = [
    "entities", "queues", "stations", "policies", "events",
    "arrivals", "rng", "metrics", "config", "simulation", "errors",
]
