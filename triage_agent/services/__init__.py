from .llm_client import LLMClient
from .shared_memory import SharedMemory
from .storage import InMemoryBackend, PostgresBackend, StorageBackend, select_backend

__all__ = [
    "LLMClient",
    "SharedMemory",
    "StorageBackend",
    "InMemoryBackend",
    "PostgresBackend",
    "select_backend",
]
