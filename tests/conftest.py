"""Shared fixtures: a scripted LLM and a storage backend that can be taken down."""

from __future__ import annotations

import json

import pytest

from triage_agent.errors import ServiceUnavailableError, StorageUnavailableError
from triage_agent.services import InMemoryBackend, LLMClient, SharedMemory


class ScriptedLLM(LLMClient):
    """LLMClient that answers from a table keyed by response schema name.

    A dict value is returned as JSON, a str is returned raw, an exception is
    raised. Unknown schemas behave like an unreachable provider.
    """

    def __init__(self, responses: dict | None = None):
        super().__init__(api_key="test-key")
        self.responses = responses or {}
        self.calls: list[dict] = []

    async def complete(self, system_prompt, user_prompt, response_format=None):
        name = (response_format or {}).get("json_schema", {}).get("name", "")
        self.calls.append({"schema": name, "system": system_prompt, "user": user_prompt})
        if name not in self.responses:
            raise ServiceUnavailableError("provider offline")
        answer = self.responses[name]
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, str):
            return answer
        return json.dumps(answer)


class FlakyBackend(InMemoryBackend):
    """In-memory backend whose every call fails while `down` is set."""

    name = "flaky"

    def __init__(self):
        super().__init__()
        self.down = False

    def _check(self):
        if self.down:
            raise StorageUnavailableError("backend is down")

    async def initialize(self):
        self._check()

    async def put_record(self, record):
        self._check()
        await super().put_record(record)

    async def get_record(self, record_id):
        self._check()
        return await super().get_record(record_id)

    async def list_records(self):
        self._check()
        return await super().list_records()

    async def append_log(self, entry):
        self._check()
        await super().append_log(entry)

    async def list_logs(self, limit):
        self._check()
        return await super().list_logs(limit)


@pytest.fixture
def offline_llm() -> ScriptedLLM:
    return ScriptedLLM()


@pytest.fixture
def memory() -> SharedMemory:
    return SharedMemory()


@pytest.fixture
def flaky_backend() -> FlakyBackend:
    return FlakyBackend()


@pytest.fixture
def tiered_memory(flaky_backend) -> SharedMemory:
    return SharedMemory(flaky_backend, fallback=InMemoryBackend())
