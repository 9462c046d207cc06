"""Application layer for CivicConnect.

Ports define the contracts the services depend on; services orchestrate
the domain against those ports.
"""
