from .base_agent import BaseAgent
from .manager import ManagerAgent, ProcessResult
from .services import LLMClient, SharedMemory, select_backend

__all__ = [
    "BaseAgent",
    "ManagerAgent",
    "ProcessResult",
    "LLMClient",
    "SharedMemory",
    "select_backend",
]
