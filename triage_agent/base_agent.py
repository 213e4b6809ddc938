"""
Base class for the Triage agents.

Each agent works against the session memory and LLM client handed to it by
the manager and exposes one entry point through execute().
"""

from abc import ABC, abstractmethod

from .services.llm_client import LLMClient
from .services.shared_memory import SharedMemory


class BaseAgent(ABC):
    """Abstract base class for the classifier and the format agents."""

    name: str = "Agent"

    def __init__(self, memory: SharedMemory, llm_client: LLMClient = None):
        self.memory = memory
        self.llm = llm_client or LLMClient()

    async def record(self, action: str, details: str) -> None:
        """Append one activity log entry under this agent's name."""
        await self.memory.log_activity(self.name, action, details)

    @abstractmethod
    async def execute(self, *args, **kwargs):
        """Run the agent on one document."""
        pass
