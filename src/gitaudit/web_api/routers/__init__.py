"""
API Routers
===========
Each router handles a specific domain of the API.
"""
from . import audit, health

__all__ = ["audit", "health"]
