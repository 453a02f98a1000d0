"""Damper parameter optimisation on a half-car road simulation."""

__version__ = "0.1.0"