"""Adaptive and hyperbolic chess engines with a game session driver."""

__version__ = "0.1.0"
