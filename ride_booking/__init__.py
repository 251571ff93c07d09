"""Ride booking intake service (Lotus Cabs)."""
