"""
CivicConnect - citizen issue reporting core.

Citizens submit reports about civic issues, the core routes each report to
the responsible authority by category, tracks its status through a
timeline, and keeps everything in a local snapshot that survives restarts.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
