"""Domain layer for CivicConnect.

Models, errors and pure domain services. Nothing in this package performs
I/O or reads the clock directly.
"""
