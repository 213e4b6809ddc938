"""
Health check endpoints.
"""

from fastapi import APIRouter

from backend.dependencies import get_memory

router = APIRouter(tags=["Health"])


@router.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "Triage API"}


@router.get("/health")
async def health():
    """Health check with a storage round trip."""
    memory = get_memory()
    result = await memory.read_logs(limit=1)
    return {
        "status": "degraded" if result.degraded else "healthy",
        "storage": memory.backend_name,
        "fallback_active": result.degraded,
    }
