"""Tests for the HTTP API."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from procflow.adapters.flow_analyzer import FlowAnalyzer
from procflow.adapters.flow_generator import FlowGenerator
from procflow.adapters.openai_client import JsonChatClient
from procflow.library import FlowLibrary
from procflow.session import FlowSession
from procflow.storage.memory import MemoryFlowStorage
from server.ai_routes import get_analyzer, get_generator
from server.app import app
from server.db import get_library


def _chat(content=None, error=None) -> JsonChatClient:
    if error is not None:
        create = AsyncMock(side_effect=error)
    else:
        message = SimpleNamespace(content=content)
        create = AsyncMock(return_value=SimpleNamespace(choices=[SimpleNamespace(message=message)]))
    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    return JsonChatClient(client=client, model="test-model")


NODE = {"id": "a", "position": {"x": 0, "y": 0}, "data": {"label": "入力", "nodeType": "task", "duration": 60}}


@pytest.fixture
def library():
    library = FlowLibrary(MemoryFlowStorage())
    app.dependency_overrides[get_library] = lambda: library
    yield library
    app.dependency_overrides.clear()


@pytest.fixture
def client(library):
    return TestClient(app)


class TestHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestFlowRoutes:
    def test_save_list_get(self, client):
        response = client.put("/api/flows", json={"name": "受注", "nodes": [NODE], "edges": []})
        assert response.status_code == 200
        saved = response.json()
        assert saved["nodes"][0]["data"]["nodeType"] == "task"
        assert "createdAt" in saved

        listing = client.get("/api/flows").json()
        assert listing == [
            {
                "id": saved["id"],
                "name": "受注",
                "nodeCount": 1,
                "versionCount": 0,
                "createdAt": saved["createdAt"],
                "updatedAt": saved["updatedAt"],
            }
        ]

        fetched = client.get(f"/api/flows/{saved['id']}").json()
        assert fetched["name"] == "受注"

    def test_save_same_name_upserts(self, client):
        first = client.put("/api/flows", json={"name": "F", "nodes": [], "edges": []}).json()
        second = client.put("/api/flows", json={"name": "F", "nodes": [NODE], "edges": []}).json()
        assert first["id"] == second["id"]
        assert len(client.get("/api/flows").json()) == 1

    def test_missing_flow(self, client):
        assert client.get("/api/flows/nope").status_code == 404
        assert client.delete("/api/flows/nope").status_code == 404
        assert client.get("/api/flows/nope/export").status_code == 404

    def test_delete(self, client, library):
        saved = client.put("/api/flows", json={"name": "F"}).json()
        response = client.delete(f"/api/flows/{saved['id']}")
        assert response.status_code == 200
        assert library.list_flows() == []

    def test_export_then_import(self, client, library):
        saved = client.put("/api/flows", json={"name": "往復", "nodes": [NODE], "edges": []}).json()

        exported = client.get(f"/api/flows/{saved['id']}/export")
        assert exported.status_code == 200
        assert exported.headers["content-type"].startswith("application/json")
        assert "attachment" in exported.headers["content-disposition"]

        imported = client.post("/api/flows/import", content=exported.content)
        assert imported.status_code == 200
        assert imported.json()["nodes"] == saved["nodes"]
        assert len(library.list_flows()) == 1

        client.delete(f"/api/flows/{saved['id']}")
        stored = client.post("/api/flows/import?save=true", content=exported.content)
        assert stored.status_code == 200
        assert [f.name for f in library.list_flows()] == ["往復"]

    def test_import_rejects_bad_text(self, client):
        response = client.post("/api/flows/import", content=b"{not json")
        assert response.status_code == 400
        assert response.json()["detail"] == "JSONの形式が正しくありません"

    def test_import_session_export(self, client):
        session = FlowSession()
        session.set_flow_name("from session")
        session.add_node("wait")
        response = client.post("/api/flows/import", content=session.export_flow().encode("utf-8"))
        assert response.json()["name"] == "from session"


class TestSettingsAndSimulation:
    def test_settings_round_trip(self, client):
        assert client.get("/api/settings").json() == {"hourlyRate": 3000, "annualFrequency": 250}
        response = client.put("/api/settings", json={"hourlyRate": 6000, "annualFrequency": 10})
        assert response.status_code == 200
        assert client.get("/api/settings").json() == {"hourlyRate": 6000, "annualFrequency": 10}

    def test_negative_rate_rejected(self, client):
        response = client.put("/api/settings", json={"hourlyRate": -1, "annualFrequency": 10})
        assert response.status_code == 422

    def test_simulate_with_stored_settings(self, client):
        result = client.post("/api/simulate", json={"nodes": [NODE]}).json()
        assert result["currentTotal"]["annualCost"] == 750000
        assert result["savings"]["threeYearCost"] == 0

    def test_simulate_with_explicit_params(self, client):
        node = json.loads(json.dumps(NODE))
        node["data"]["simulation"] = {"improvementType": "eliminate"}
        result = client.post(
            "/api/simulate",
            json={"nodes": [node], "hourlyRate": 1000, "annualFrequency": 1},
        ).json()
        assert result["currentTotal"]["annualCost"] == 1000
        assert result["savings"]["annualCost"] == 1000
        assert result["savings"]["threeYearCost"] == 3000


class TestAiRoutes:
    @pytest.fixture(autouse=True)
    def _clear_overrides(self):
        yield
        app.dependency_overrides.pop(get_generator, None)
        app.dependency_overrides.pop(get_analyzer, None)

    def test_generate_flow(self, client):
        payload = {"flowName": "生成", "nodes": [NODE], "edges": []}
        app.dependency_overrides[get_generator] = lambda: FlowGenerator(_chat(json.dumps(payload)))
        response = client.post("/api/generate-flow", json={"text": "入力する"})
        assert response.status_code == 200
        assert response.json()["flowName"] == "生成"

    def test_generate_flow_requires_text(self, client):
        app.dependency_overrides[get_generator] = lambda: FlowGenerator(_chat("{}"))
        assert client.post("/api/generate-flow", json={"text": " "}).status_code == 400

    def test_generate_flow_upstream_failure(self, client):
        app.dependency_overrides[get_generator] = lambda: FlowGenerator(_chat(error=ConnectionError("down")))
        response = client.post("/api/generate-flow", json={"text": "x"})
        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to generate flow"

    def test_generate_flow_without_api_key(self, client, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        app.dependency_overrides[get_generator] = lambda: FlowGenerator(JsonChatClient())
        assert client.post("/api/generate-flow", json={"text": "x"}).status_code == 500

    def test_analyze(self, client):
        report = {"summary": "ok", "totalDuration": 60, "bottlenecks": [{"nodeId": "a"}], "improvements": []}
        app.dependency_overrides[get_analyzer] = lambda: FlowAnalyzer(_chat(json.dumps(report)))
        response = client.post("/api/analyze", json={"nodes": [NODE], "edges": [], "flowName": "F"})
        assert response.status_code == 200
        assert response.json()["bottlenecks"][0]["nodeId"] == "a"

    def test_analyze_requires_nodes(self, client):
        app.dependency_overrides[get_analyzer] = lambda: FlowAnalyzer(_chat("{}"))
        response = client.post("/api/analyze", json={"nodes": [], "edges": []})
        assert response.status_code == 400

    def test_analyze_upstream_failure(self, client):
        app.dependency_overrides[get_analyzer] = lambda: FlowAnalyzer(_chat("not json"))
        response = client.post("/api/analyze", json={"nodes": [NODE], "edges": []})
        assert response.status_code == 502
