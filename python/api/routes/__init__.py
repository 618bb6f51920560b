"""
API Routes Package

Contains the route modules for the ledger API.
"""

from .bills import router as bills_router
from .khatas import router as khatas_router

__all__ = [
    "bills_router",
    "khatas_router",
]
