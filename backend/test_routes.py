from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from block_canvas.main import app

from conftest import make_response, tool_call_body

POST = "block_canvas.inference.chat_completions_client.requests.post"


@pytest.fixture
def http():
    return TestClient(app)


def test_generate_success(http, api_key, speaker_payload):
    with patch(POST, return_value=make_response(200, tool_call_body(speaker_payload))):
        response = http.post("/generate-diagram", json={"description": "Bluetooth speaker with RGB lighting effects"})

    assert response.status_code == 200
    diagram = response.json()["diagram"]
    assert len(diagram["blocks"]) == 5
    assert {b["type"] for b in diagram["blocks"]} == {
        "power", "inputs", "processing", "outputs", "peripherals"
    }
    assert diagram == speaker_payload


@pytest.mark.parametrize("body", [{"description": ""}, {"description": 7}, {}, {"text": "hi"}])
def test_generate_requires_description(http, api_key, body):
    with patch(POST) as post:
        response = http.post("/generate-diagram", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Description is required"}
    post.assert_not_called()


def test_generate_unparsable_body(http, api_key):
    response = http.post(
        "/generate-diagram",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Description is required"}


def test_generate_without_api_key(http, monkeypatch):
    monkeypatch.delenv("AI_API_KEY", raising=False)

    response = http.post("/generate-diagram", json={"description": "Smart doorbell"})

    assert response.status_code == 500
    assert response.json() == {"error": "AI service not configured"}


@pytest.mark.parametrize(
    "upstream, status, text",
    [
        (429, 429, "Rate limit"),
        (402, 402, "Usage limit reached"),
        (500, 500, "Failed to generate diagram"),
        (503, 500, "Failed to generate diagram"),
    ],
)
def test_generate_maps_upstream_errors(http, api_key, upstream, status, text):
    with patch(POST, return_value=make_response(upstream, {"error": {"message": "boom"}})):
        response = http.post("/generate-diagram", json={"description": "Smart doorbell"})

    assert response.status_code == status
    assert text in response.json()["error"]
    assert "boom" not in response.json()["error"]


def test_generate_rejects_bad_model_output(http, api_key, speaker_payload):
    speaker_payload["blocks"].pop()

    with patch(POST, return_value=make_response(200, tool_call_body(speaker_payload))):
        response = http.post("/generate-diagram", json={"description": "Smart doorbell"})

    assert response.status_code == 500
    assert response.json() == {"error": "AI did not generate exactly 5 blocks"}


def test_generate_rejects_missing_tool_call(http, api_key):
    body = {"choices": [{"message": {"content": "sorry"}}]}

    with patch(POST, return_value=make_response(200, body)):
        response = http.post("/generate-diagram", json={"description": "Smart doorbell"})

    assert response.status_code == 500
    assert response.json() == {"error": "Invalid response from AI"}


def test_cors_preflight(http):
    response = http.options(
        "/generate-diagram",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.content == b""
    assert "post" in response.headers["access-control-allow-methods"].lower()


def test_cors_header_on_error(http, api_key):
    response = http.post(
        "/generate-diagram",
        json={"description": ""},
        headers={"Origin": "https://example.com"},
    )

    assert response.status_code == 400
    assert response.headers["access-control-allow-origin"] == "*"


# ----------------------------------------------------------
# Helper endpoints
# ----------------------------------------------------------

def test_default_template(http):
    response = http.get("/templates/default")

    diagram = response.json()["diagram"]
    assert [b["id"] for b in diagram["blocks"]] == [
        "power-1", "inputs-1", "processing-1", "outputs-1", "peripherals-1"
    ]
    assert [(c["source"], c["target"]) for c in diagram["connections"]] == [
        ("power-1", "processing-1"),
        ("inputs-1", "processing-1"),
        ("processing-1", "outputs-1"),
        ("processing-1", "peripherals-1"),
    ]


def test_block_types(http):
    body = http.get("/block-types").json()

    assert [t["type"] for t in body["block_types"]] == [
        "power", "inputs", "processing", "outputs", "peripherals"
    ]
    assert len(body["examples"]) == 5


def test_presentation(http, diagram_payload):
    response = http.post("/diagram/presentation", json={"diagram": diagram_payload})

    assert response.status_code == 200
    body = response.json()
    assert body["nodes"][2]["position"] == {"x": 650, "y": 200}
    assert body["edges"][0]["markerEnd"]["type"] == "arrowclosed"


def test_presentation_schema_error(http, diagram_payload):
    diagram_payload["blocks"] = diagram_payload["blocks"][:2]

    response = http.post("/diagram/presentation", json={"diagram": diagram_payload})

    assert response.status_code == 400
    assert response.json() == {"error": "expected 5 blocks, got 2"}


def test_export_round_trip(http, diagram_payload):
    canvas = http.post("/diagram/presentation", json={"diagram": diagram_payload}).json()

    response = http.post("/export", json={**canvas, "description": "Template"})

    assert response.status_code == 200
    document = response.json()
    assert document["version"] == "1.0"
    assert document["description"] == "Template"
    assert document["diagram"] == diagram_payload
    assert len(document["reactFlowData"]["nodes"]) == 5


def test_export_empty_canvas(http):
    response = http.post("/export", json={"nodes": [], "edges": []})

    assert response.status_code == 400
    assert "No diagram to export" in response.json()["error"]


def test_health(http):
    assert http.get("/health").json() == {"status": "ok"}


def test_export_rejects_unknown_block_category(http, diagram_payload):
    canvas = http.post("/diagram/presentation", json={"diagram": diagram_payload}).json()
    canvas["nodes"][0]["data"]["type"] = "antenna"

    response = http.post("/export", json=canvas)

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}


def test_error_bodies_documented():
    responses = app.openapi()["paths"]["/generate-diagram"]["post"]["responses"]

    for status in ("400", "402", "429", "500"):
        schema = responses[status]["content"]["application/json"]["schema"]
        assert schema == {"$ref": "#/components/schemas/ErrorResponse"}


# ----------------------------------------------------------
# Request ids
# ----------------------------------------------------------

def test_request_id_generated(http):
    first = http.get("/health").headers["x-request-id"]
    second = http.get("/health").headers["x-request-id"]

    assert first and second and first != second


def test_request_id_echoed(http, api_key):
    response = http.post(
        "/generate-diagram",
        json={"description": ""},
        headers={"X-Request-ID": "req-42"},
    )

    assert response.status_code == 400
    assert response.headers["x-request-id"] == "req-42"
