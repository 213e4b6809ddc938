"""
Agent activity log endpoints.
"""

import logging

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from backend.backend_config import MAX_LOG_LIMIT
from backend.dependencies import get_memory
from triage_agent.config import DEFAULT_LOG_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/logs", tags=["Logs"])


@router.get("")
async def get_logs(limit: int = Query(DEFAULT_LOG_LIMIT, ge=1, le=MAX_LOG_LIMIT)):
    """Get the most recent agent activity, newest first."""
    try:
        result = await get_memory().read_logs(limit)
    except Exception:
        logger.exception("Logs API error")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Failed to retrieve agent logs",
                "logs": [],
                "success": False,
            },
        )

    logs = [entry.to_dict() for entry in result.value]
    return {
        "logs": logs,
        "success": True,
        "count": len(logs),
        "degraded": result.degraded,
    }
