import asyncio
from types import SimpleNamespace

import pytest
from openai import OpenAIError

from triage_agent.errors import ServiceUnavailableError
from triage_agent.models import ClassificationResult
from triage_agent.schemas import CLASSIFICATION_SCHEMA
from triage_agent.services import LLMClient


class FakeCompletions:
    def __init__(self, content=None, error=None, delay=0.0):
        self.content = content
        self.error = error
        self.delay = delay
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def client_with(completions: FakeCompletions, timeout: float = 5.0) -> LLMClient:
    fake = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return LLMClient(api_key="test-key", timeout=timeout, client=fake)


async def test_complete_sends_prompts_and_schema():
    completions = FakeCompletions(content="  hello  ")
    llm = client_with(completions)

    text = await llm.complete("system", "user", CLASSIFICATION_SCHEMA)

    assert text == "hello"
    assert completions.kwargs["messages"] == [
        {"role": "system", "content": "system"},
        {"role": "user", "content": "user"},
    ]
    assert completions.kwargs["response_format"] is CLASSIFICATION_SCHEMA
    assert completions.kwargs["temperature"] == 0


async def test_missing_api_key_is_unavailable():
    llm = LLMClient(api_key="")
    with pytest.raises(ServiceUnavailableError):
        await llm.complete("system", "user")


async def test_provider_error_is_unavailable():
    llm = client_with(FakeCompletions(error=OpenAIError("rate limited")))
    with pytest.raises(ServiceUnavailableError, match="rate limited"):
        await llm.complete("system", "user")


async def test_timeout_is_unavailable():
    llm = client_with(FakeCompletions(content="{}", delay=1.0), timeout=0.01)
    with pytest.raises(ServiceUnavailableError, match="timed out"):
        await llm.complete("system", "user")


async def test_empty_response_is_unavailable():
    llm = client_with(FakeCompletions(content=""))
    with pytest.raises(ServiceUnavailableError):
        await llm.complete("system", "user")


@pytest.mark.parametrize(
    "content",
    [
        '{"a": 1}',
        '```json\n{"a": 1}\n```',
        'Here you go: {"a": 1} hope that helps',
    ],
)
async def test_complete_json_cleans_up_wrapping(content):
    llm = client_with(FakeCompletions(content=content))
    assert await llm.complete_json("system", "user") == {"a": 1}


@pytest.mark.parametrize("content", ["not json at all", "[1, 2, 3]"])
async def test_complete_json_rejects_non_objects(content):
    llm = client_with(FakeCompletions(content=content))
    with pytest.raises(ServiceUnavailableError):
        await llm.complete_json("system", "user")


async def test_infer_validates_against_model():
    content = '{"format": "Email", "intent": "RFQ", "confidence": 0.8, "reasoning": "headers"}'
    llm = client_with(FakeCompletions(content=content))

    result = await llm.infer("system", "user", CLASSIFICATION_SCHEMA, ClassificationResult)

    assert result.format.value == "Email"
    assert result.confidence == 0.8


@pytest.mark.parametrize(
    "content",
    [
        '{"format": "Email", "intent": "RFQ", "confidence": 0.8}',
        '{"format": "Fax", "intent": "RFQ", "confidence": 0.8, "reasoning": "x"}',
        '{"format": "Email", "intent": "RFQ", "confidence": 1.7, "reasoning": "x"}',
    ],
)
async def test_infer_rejects_schema_mismatch(content):
    llm = client_with(FakeCompletions(content=content))
    with pytest.raises(ServiceUnavailableError, match="validation"):
        await llm.infer("system", "user", CLASSIFICATION_SCHEMA, ClassificationResult)


async def test_complete_json_rejects_nan():
    llm = client_with(FakeCompletions(content='{"amount": NaN}'))
    with pytest.raises(ServiceUnavailableError):
        await llm.complete_json("system", "user")
