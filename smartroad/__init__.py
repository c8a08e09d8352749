"""Simulation of autonomous vehicles crossing a four-way intersection."""

__version__ = "0.1.0"

__all__ = ["__version__"]