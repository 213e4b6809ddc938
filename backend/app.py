"""
Triage Backend API
FastAPI server for document classification, routing and shared memory
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend import dependencies
from backend.backend_config import API_TITLE, API_VERSION, CORS_ORIGINS
from backend.routers import health, logs, memory, process
from triage_agent.config import LOG_FORMAT, LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage shared memory lifecycle."""
    shared_memory = dependencies.init_services()
    if not await shared_memory.initialize():
        logger.warning("Storage unavailable at startup, serving from in-memory fallback")
    yield
    await dependencies.close_services()


app = FastAPI(
    title=API_TITLE,
    description="Backend API for multi-agent document triage",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(process.router)
app.include_router(memory.router)
app.include_router(logs.router)


# =============================================================================
# MAIN
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    from backend.backend_config import HOST, PORT

    uvicorn.run(app, host=HOST, port=PORT)
