"""
Pydantic schemas for Triage Backend API.
"""

from .process import ProcessRequest

__all__ = [
    "ProcessRequest",
]
