"""
End-to-end tests for the HTTP API using the in-memory stores, the hash
embedding and the echo model.
"""

import asyncio
from unittest.mock import AsyncMock

from rag_notes.errors import GenerationError, NotFoundError, SearchError


def add_note(client, text, **extra):
    response = client.post("/notes", json={"text": text, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def test_create_then_search(client):
    created = add_note(client, "Pepperoni is the best pizza topping")

    assert created["success"] is True
    assert created["recordId"]
    assert created["workflowId"]
    assert created["text"] == "Pepperoni is the best pizza topping"
    assert created["metadata"] == {
        "workflowEnabled": False,
        "characterCount": 35,
        "processingStatus": "completed",
    }
    assert created["noteMetadata"]["text"] == "Pepperoni is the best pizza topping"

    response = client.get("/search", params={"q": "pizza toppings"})

    assert response.status_code == 200
    body = response.json()
    assert body["query"] == "pizza toppings"
    assert body["count"] == 1
    result = body["results"][0]
    assert result["id"] == created["recordId"]
    assert result["score"] >= 0.5
    assert result["text"] == "Pepperoni is the best pizza topping"
    assert "created_at" in result["metadata"]
    assert body["metadata"] == {
        "vectorSearchEnabled": True,
        "similarityThreshold": 0.5,
        "totalMatches": 1,
        "filteredMatches": 1,
    }


def test_query_with_no_notes(client):
    response = client.get("/", params={"text": "Hello"})

    assert response.status_code == 200
    body = response.json()
    assert body["context"] == []
    assert body["matchCount"] == 0
    assert body["question"] == "Hello"
    assert response.headers["x-model-used"] == "llama3.2:1b"
    assert body["metadata"]["contextFound"] is False
    assert body["metadata"]["matchCount"] == 0


def test_deleted_note_no_longer_found(client):
    created = add_note(client, "Pepperoni is the best pizza topping")

    response = client.delete(f"/notes/{created['recordId']}")
    assert response.status_code == 204

    results = client.get("/search", params={"q": "pizza toppings"}).json()["results"]
    assert created["recordId"] not in [r["id"] for r in results]


def test_query_uses_matching_notes(client):
    add_note(client, "Pepperoni is the best pizza topping")
    add_note(client, "The capital of France is Paris")

    response = client.get("/", params={"text": "best pizza topping", "model": "llama-70b"})

    body = response.json()
    assert body["context"] == ["Pepperoni is the best pizza topping"]
    assert body["matchCount"] == 1
    assert "Pepperoni is the best pizza topping" in body["answer"]
    assert response.headers["x-model-used"] == "llama3.1:70b"
    assert body["model"] == "llama3.1:70b"
    assert body["metadata"] == {
        "modelUsed": "llama3.1:70b",
        "vectorSearchEnabled": True,
        "matchCount": 1,
        "contextFound": True,
        "similarityThreshold": 0.5,
    }


def test_query_default_question(client):
    body = client.get("/").json()

    assert body["question"] == "describe Machine Learning ?"


def test_unknown_model_falls_back_to_fast(client):
    response = client.get("/", params={"text": "Hello", "model": "gpt-9"})

    assert response.headers["x-model-used"] == "llama3.2:1b"


def test_create_note_validation(client):
    for payload in ({}, {"text": ""}, {"text": "   "}, {"text": 42}):
        response = client.post("/notes", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Valid text content is required"


def test_create_note_malformed_body(client):
    response = client.post(
        "/notes", content="not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400


def test_search_requires_query(client):
    for params in ({}, {"q": "  "}):
        response = client.get("/search", params=params)

        assert response.status_code == 400
        assert "timestamp" in response.json()


def test_search_failure_returns_503(client, container):
    container.service.search_strategy.search = AsyncMock(side_effect=SearchError("index down"))

    response = client.get("/search", params={"q": "pizza"})

    assert response.status_code == 503
    body = response.json()
    assert body["error"] == "Search service unavailable"
    assert "details" not in body
    assert set(body) == {"error", "timestamp"}


def test_generation_failure_returns_500(client, container):
    container.service.generator.generate = AsyncMock(side_effect=GenerationError("no text"))

    response = client.get("/", params={"text": "Hello"})

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to process query"


def test_error_details_only_in_debug(make_client):
    client = make_client(debug=True)
    client.app.state.container.service.generator.generate = AsyncMock(
        side_effect=GenerationError("no text")
    )

    body = client.get("/", params={"text": "Hello"}).json()

    assert body["details"] == "no text"


def test_delete_failure_returns_500(client, container):
    container.vector_index.delete = AsyncMock(side_effect=ConnectionError("index down"))

    response = client.delete("/notes/1")

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to delete note"


def test_delete_blank_id(client):
    response = client.delete("/notes/%20")

    assert response.status_code == 400


def test_background_ingestion(make_client):
    client = make_client(ingestion_mode="background")

    response = client.post("/notes", json={"text": "Pepperoni is the best pizza topping"})

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Note processing started"
    assert body["recordId"] is None
    assert body["metadata"]["processingStatus"] == "initiated"
    assert body["metadata"]["workflowEnabled"] is True
    assert body["noteMetadata"] == {}

    status = client.get(f"/notes/workflows/{body['workflowId']}").json()
    assert status["completedSteps"] == ["persist", "embed", "index"]
    assert status["finished"] is True

    results = client.get("/search", params={"q": "pizza toppings"}).json()["results"]
    assert len(results) == 1


def test_unknown_route(client):
    response = client.get("/does-not-exist")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Not found"
    assert body["message"] == "The requested endpoint does not exist"
    assert "timestamp" in body
    assert "/search" in body["availableEndpoints"]


def test_timestamp_header(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert "X-Timestamp" in response.headers
    body = response.json()
    assert body["status"] == "healthy"
    assert body["services"]["vector_store"] == "memory"


def test_help_and_commands(client):
    commands = client.get("/commands").json()
    help_info = client.get("/help").json()

    assert commands["count"] == len(commands["commands"])
    assert commands["categories"] == ["AI", "Knowledge", "Search", "System"]
    assert "GET /search" in help_info["endpoints"]


def test_search_counts_orphaned_matches(client, container):
    created = add_note(client, "Pepperoni is the best pizza topping")
    asyncio.run(container.note_store.delete(created["recordId"]))

    body = client.get("/search", params={"q": "pizza toppings"}).json()

    assert body["count"] == 0
    assert body["metadata"]["totalMatches"] == 1
    assert body["metadata"]["filteredMatches"] == 0


def test_not_found_error_lists_endpoints(client):
    async def missing_note():
        raise NotFoundError("Note 9 does not exist")

    client.app.add_api_route("/missing-note", missing_note)

    response = client.get("/missing-note")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Not found"
    assert body["message"] == "Note 9 does not exist"
    assert "/notes" in body["availableEndpoints"]
