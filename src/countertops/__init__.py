"""Countertop slab cutting optimizer."""

__version__ = "0.1.0"
