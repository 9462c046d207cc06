"""Infrastructure layer for CivicConnect.

Adapters and stubs implementing the application ports, plus
observability (structured logging and correlation ids).
"""
