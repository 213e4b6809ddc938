"""
Document processing endpoints.
"""

import logging

from fastapi import APIRouter, HTTPException

from backend.dependencies import get_manager
from backend.schemas.process import ProcessRequest
from triage_agent.errors import ProcessingError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Process"])


@router.post("/process")
async def process_document(request: ProcessRequest):
    """
    Classify a document and route it to the matching agent.

    Returns the detected format and intent, the agent it was routed to, the
    shared memory id of the session, and the agent's extraction details.
    """
    manager = get_manager()

    try:
        result = await manager.process_input(request.content)
    except ProcessingError as e:
        raise HTTPException(status_code=422, detail=str(e))

    logger.info(f"Processed {result.session_id} via {result.routed_to}")
    return result.to_dict()
