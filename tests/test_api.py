"""Integration tests for the search API endpoints."""
import asyncio
import pytest
from fastapi.testclient import TestClient
import sys
import os

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'backend'))

from models.document import DocumentIndex, PageRecord
from services.interaction_controller import InteractionController
from services.text_extractor import ExtractionError


class FakeExtractor:
    """Serves a fixed three-page document; any other source fails."""
    
    async def load(self, source):
        if source != "handbuch.pdf":
            raise ExtractionError(f"Failed to open {source}", source=source)
        return DocumentIndex(
            source=source,
            pages=(
                PageRecord(page_number=1, text="Einleitung"),
                PageRecord(page_number=2, text="Die Frequenz \nwird gemessen"),
                PageRecord(page_number=3, text="Anhang"),
            )
        )


@pytest.fixture
def client(monkeypatch):
    """Create a test client backed by a fake extractor."""
    # Import after path is set
    import main
    
    monkeypatch.setattr(main, "controller", InteractionController(text_extractor=FakeExtractor()))
    return TestClient(main.app)


@pytest.fixture
def loaded_client(client):
    response = client.post("/document", json={"source": "handbuch.pdf"})
    assert response.status_code == 202
    return client


def test_health(client):
    assert client.get("/").json()["status"] == "ok"
    assert client.get("/health").json()["status"] == "healthy"


def test_status_before_load(client):
    data = client.get("/status").json()
    
    assert data["page_count"] == 0
    assert data["loading"] is False
    assert data["source"] is None


def test_load_document(loaded_client):
    data = loaded_client.get("/status").json()
    
    assert data["source"] == "handbuch.pdf"
    assert data["loading"] is False
    assert data["page_count"] == 3
    assert data["error"] is None


def test_load_blank_source(client):
    response = client.post("/document", json={"source": "  "})
    assert response.status_code == 400


def test_load_failure_is_reported_in_status(client):
    client.post("/document", json={"source": "kaputt.pdf"})
    
    data = client.get("/status").json()
    
    assert data["loading"] is False
    assert data["page_count"] == 0
    assert "kaputt.pdf" in data["error"]


def test_query_returns_matching_page(loaded_client):
    response = loaded_client.post("/query", json={"query": "frequenz"})
    
    assert response.status_code == 200
    data = response.json()
    assert data["match_count"] == 1
    assert data["no_results"] is False
    result = data["results"][0]
    assert result["page_number"] == 2
    assert result["expanded"] is False
    assert result["leading_ellipsis"] is False
    assert result["trailing_ellipsis"] is False
    assert {"text": "Frequenz", "highlighted": True} in result["segments"]


def test_empty_query(loaded_client):
    data = loaded_client.post("/query", json={"query": ""}).json()
    
    assert data["results"] == []
    assert data["no_results"] is False


def test_query_without_match(loaded_client):
    data = loaded_client.post("/query", json={"query": "Spannung"}).json()
    
    assert data["match_count"] == 0
    assert data["no_results"] is True


def test_results_reflect_current_query(loaded_client):
    loaded_client.post("/query", json={"query": "anhang"})
    
    data = loaded_client.get("/results").json()
    
    assert data["query"] == "anhang"
    assert [r["page_number"] for r in data["results"]] == [3]


def test_toggle_page(loaded_client):
    loaded_client.post("/query", json={"query": "frequenz"})
    
    data = loaded_client.post("/pages/2/toggle").json()
    assert data["results"][0]["expanded"] is True
    assert data["results"][0]["text"] == "Die Frequenz \nwird gemessen"
    
    data = loaded_client.post("/pages/2/toggle").json()
    assert data["results"][0]["expanded"] is False


def test_toggle_unknown_page(loaded_client):
    response = loaded_client.post("/pages/99/toggle")
    assert response.status_code == 404


def test_load_document_switches_status_before_indexing(loaded_client):
    import main
    from fastapi import BackgroundTasks
    from models.api import LoadRequest
    
    background_tasks = BackgroundTasks()
    response = asyncio.run(main.load_document(LoadRequest(source="neu.pdf"), background_tasks))
    
    # Extraction has not run yet, but the old document is already gone
    assert response.source == "neu.pdf"
    assert response.loading is True
    assert response.page_count == 0
    assert len(background_tasks.tasks) == 1
    
    data = loaded_client.get("/status").json()
    assert data["source"] == "neu.pdf"
    assert data["loading"] is True
    assert data["page_count"] == 0
