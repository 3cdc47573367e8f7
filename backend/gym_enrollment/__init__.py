"""Gym membership, batch scheduling and monthly fee API."""

__version__ = "0.1.0"
