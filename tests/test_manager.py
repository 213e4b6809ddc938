import asyncio
import re

import pytest

from triage_agent import ManagerAgent
from triage_agent.errors import MalformedInputError, ProcessingError, UnsupportedFormatError
from triage_agent.models import DocumentFormat, Intent

from .conftest import ScriptedLLM

INVOICE = '{"type":"invoice","amount":1250.00,"customer":"Acme Corp"}'
RFQ_EMAIL = "From: buyer@acme.com\nSubject: RFQ for 500 units\n\nPlease quote."


def classified_as(doc_format: str, intent: str) -> ScriptedLLM:
    return ScriptedLLM(
        {
            "document_classification": {
                "format": doc_format,
                "intent": intent,
                "confidence": 0.9,
                "reasoning": "test",
            }
        }
    )


async def test_json_invoice_session(memory):
    manager = ManagerAgent(memory, classified_as("JSON", "Invoice"))

    result = await manager.process_input(INVOICE)

    assert result.format == DocumentFormat.JSON
    assert result.intent == Intent.INVOICE
    assert result.routed_to == "JSONAgent"
    assert result.details.extracted_fields["amount"] == 1250.0
    assert result.details.extracted_fields["customer"] == "Acme Corp"

    stored = (await memory.read(result.session_id)).value
    assert stored["classification"] == {"format": "JSON", "intent": "Invoice", "confidence": 0.9}
    assert stored["agent"] == "JSON"
    assert "timestamp" in stored

    actions = [(log.agent, log.action) for log in (await memory.read_logs()).value]
    assert actions == [("JSON", "Fallback Processing"), ("Classifier", "Classification")]


async def test_email_session(memory):
    manager = ManagerAgent(memory, classified_as("Email", "RFQ"))

    result = await manager.process_input(RFQ_EMAIL)

    assert result.routed_to == "EmailAgent"
    assert result.details.sender == "buyer@acme.com"
    stored = (await memory.read(result.session_id)).value
    assert stored["sender"] == "buyer@acme.com"
    assert stored["classification"]["intent"] == "RFQ"


async def test_fully_offline_pipeline(memory, offline_llm):
    manager = ManagerAgent(memory, offline_llm)

    result = await manager.process_input("Notes from Tuesday's call.")

    assert result.format == DocumentFormat.PLAIN_TEXT
    assert result.intent == Intent.OTHER
    assert result.routed_to == "EmailAgent"
    assert result.details.sender == "unknown@example.com"


async def test_malformed_json_keeps_classification(memory):
    manager = ManagerAgent(memory, classified_as("JSON", "Invoice"))

    with pytest.raises(ProcessingError) as excinfo:
        await manager.process_input('{"type": invoice,}')

    assert isinstance(excinfo.value.cause, MalformedInputError)
    assert "Invalid JSON format" in str(excinfo.value)

    records = (await memory.read_all()).value
    assert len(records) == 1
    assert records[0].data["classification"]["format"] == "JSON"
    assert "agent" not in records[0].data
    assert "extractedFields" not in records[0].data


async def test_unsupported_format(memory):
    manager = ManagerAgent(memory, classified_as("PDF", "Regulation"))

    with pytest.raises(ProcessingError, match="Unsupported format: PDF") as excinfo:
        await manager.process_input("%PDF-1.4 ...")

    assert isinstance(excinfo.value.cause, UnsupportedFormatError)
    records = (await memory.read_all()).value
    assert records[0].data["classification"]["format"] == "PDF"


async def test_concurrent_sessions_are_isolated(memory, offline_llm):
    manager = ManagerAgent(memory, offline_llm)

    json_result, email_result = await asyncio.gather(
        manager.process_input(INVOICE),
        manager.process_input(RFQ_EMAIL),
    )

    assert json_result.session_id != email_result.session_id
    json_record = (await memory.read(json_result.session_id)).value
    email_record = (await memory.read(email_result.session_id)).value
    assert json_record["agent"] == "JSON"
    assert "sender" not in json_record
    assert email_record["agent"] == "Email"
    assert "extractedFields" not in email_record


async def test_session_id_format(memory, offline_llm):
    result = await ManagerAgent(memory, offline_llm).process_input("hello")
    assert re.fullmatch(r"conversation_[0-9a-f]{8}", result.session_id)


async def test_result_to_dict(memory, offline_llm):
    result = await ManagerAgent(memory, offline_llm).process_input(RFQ_EMAIL)

    payload = result.to_dict()

    assert payload["format"] == "Email"
    assert payload["intent"] == "Query"
    assert payload["routed_to"] == "EmailAgent"
    assert payload["memory_id"] == result.session_id
    assert payload["details"]["keyPoints"] == ["Email content analysis"]
    assert payload["details"]["crmFormat"]["priority"] == "medium"
