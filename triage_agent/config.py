"""
Configuration module for the Triage agent system.

Loads environment variables from .env file and exposes them as module-level constants.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# OpenAI Configuration
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "").strip()
MODEL = os.getenv("MODEL", "gpt-4o").strip()
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))
LLM_MAX_RETRIES = int(os.getenv("LLM_MAX_RETRIES", "0"))

# Postgres Configuration (first non-empty wins)
POSTGRES_URL = next(
    (
        os.getenv(name, "").strip()
        for name in ("POSTGRES_URL", "POSTGRES_PRISMA_URL", "POSTGRES_URL_NON_POOLING")
        if os.getenv(name, "").strip()
    ),
    "",
)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Pipeline constants
CLASSIFIER_MAX_CHARS = 1500
LOG_BUFFER_SIZE = 100
SNAPSHOT_CACHE_SIZE = 1000
DEFAULT_LOG_LIMIT = 50
SESSION_PREFIX = "conversation_"
