"""
Shared services for Triage Backend API.
Holds the process-wide SharedMemory and ManagerAgent.
"""

from typing import Optional

from triage_agent.manager import ManagerAgent
from triage_agent.services import LLMClient, SharedMemory, select_backend


# Global services (initialized in app lifespan)
shared_memory: Optional[SharedMemory] = None
manager_agent: Optional[ManagerAgent] = None


def get_memory() -> SharedMemory:
    """Get the global shared memory."""
    if shared_memory is None:
        raise RuntimeError("Shared memory not initialized")
    return shared_memory


def get_manager() -> ManagerAgent:
    """Get the global manager agent."""
    if manager_agent is None:
        raise RuntimeError("Manager agent not initialized")
    return manager_agent


def init_services(memory: SharedMemory = None, llm_client: LLMClient = None) -> SharedMemory:
    """Build the shared services once. Called during app startup (or by tests, earlier)."""
    global shared_memory, manager_agent
    if shared_memory is None:
        shared_memory = memory or SharedMemory(select_backend())
    if manager_agent is None:
        manager_agent = ManagerAgent(shared_memory, llm_client)
    return shared_memory


async def close_services():
    """Close storage and drop the shared services. Called during app shutdown."""
    global shared_memory, manager_agent
    if shared_memory:
        await shared_memory.close()
    shared_memory = None
    manager_agent = None
