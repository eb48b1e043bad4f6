"""Tick-driven evolutionary sandbox: entities running tiny mutating programs."""

__version__ = "0.1.0"
