import pytest
from fastapi.testclient import TestClient

from backend import dependencies
from backend.app import app
from triage_agent.services import SharedMemory

from .conftest import ScriptedLLM

RFQ_EMAIL = "From: buyer@acme.com\nSubject: RFQ for 500 units\n\nPlease quote."


@pytest.fixture
def client():
    dependencies.init_services(SharedMemory(), ScriptedLLM())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def json_client():
    llm = ScriptedLLM(
        {
            "document_classification": {
                "format": "JSON",
                "intent": "Invoice",
                "confidence": 0.9,
                "reasoning": "test",
            }
        }
    )
    dependencies.init_services(SharedMemory(), llm)
    with TestClient(app) as test_client:
        yield test_client


def test_root(client):
    assert client.get("/").json()["status"] == "ok"


def test_health(client):
    body = client.get("/health").json()
    assert body == {"status": "healthy", "storage": "memory", "fallback_active": False}


def test_process_email(client):
    response = client.post("/process", json={"content": RFQ_EMAIL})

    assert response.status_code == 200
    body = response.json()
    assert body["format"] == "Email"
    assert body["routed_to"] == "EmailAgent"
    assert body["details"]["sender"] == "buyer@acme.com"

    memory = client.get(f"/memory/{body['memory_id']}").json()
    assert memory["data"]["sender"] == "buyer@acme.com"
    assert memory["data"]["classification"]["format"] == "Email"


def test_process_rejects_empty_content(client):
    assert client.post("/process", json={"content": ""}).status_code == 422


def test_process_malformed_json(json_client):
    response = json_client.post("/process", json={"content": '{"type": invoice,}'})

    assert response.status_code == 422
    assert "Invalid JSON format" in response.json()["detail"]
    assert json_client.get("/memory").json()["count"] == 1


def test_memory_list(client):
    client.post("/process", json={"content": "first"})
    client.post("/process", json={"content": "second"})

    body = client.get("/memory").json()
    assert body["count"] == 2
    assert body["degraded"] is False
    assert all(entry["id"].startswith("conversation_") for entry in body["entries"])


def test_unknown_memory_id(client):
    assert client.get("/memory/conversation_missing").status_code == 404


def test_logs(client):
    client.post("/process", json={"content": RFQ_EMAIL})

    body = client.get("/logs").json()
    assert body["success"] is True
    assert body["count"] == 2
    assert [log["agent"] for log in body["logs"]] == ["Email", "Classifier"]

    limited = client.get("/logs", params={"limit": 1}).json()
    assert limited["count"] == 1


def test_logs_limit_is_validated(client):
    assert client.get("/logs", params={"limit": 0}).status_code == 422
