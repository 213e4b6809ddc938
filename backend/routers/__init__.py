"""
FastAPI routers for Triage Backend API.
"""

from . import health
from . import process
from . import memory
from . import logs

__all__ = [
    "health",
    "process",
    "memory",
    "logs",
]
