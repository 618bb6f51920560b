"""
FastAPI Backend for the Fabric Ledger

Provides REST API endpoints for the ledger dashboard.
"""

from .main import app

__all__ = ["app"]
