"""
Shared memory endpoints.
"""

from fastapi import APIRouter, HTTPException

from backend.dependencies import get_memory

router = APIRouter(prefix="/memory", tags=["Memory"])


@router.get("")
async def list_memory():
    """Get all shared memory entries, newest first."""
    result = await get_memory().read_all()
    entries = [record.to_dict() for record in result.value]
    return {
        "entries": entries,
        "count": len(entries),
        "degraded": result.degraded,
    }


@router.get("/{session_id}")
async def get_memory_entry(session_id: str):
    """Get the accumulated data for one session."""
    result = await get_memory().read(session_id)
    if result.value is None:
        raise HTTPException(status_code=404, detail=f"No memory for {session_id}")
    return {
        "id": session_id,
        "data": result.value,
        "degraded": result.degraded,
    }
