"""Replication experiments over the checkout queue simulation."""
