"""
Configuration module for Triage Backend API.
Loads environment variables and defines constants.
"""

import os

from dotenv import load_dotenv

# Load environment on import
load_dotenv()

API_TITLE = "Triage API"
API_VERSION = "1.0.0"

# Comma-separated list of allowed origins
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8000"))

MAX_LOG_LIMIT = 500
