"""
TARIFF RAIL - API Module

FastAPI server exposing the billing engine:
- Bill calculation (current and legacy request bodies)
- Tariff schedule lookup
- Health check
"""

from .server import app, create_app

__all__ = ["app", "create_app"]
