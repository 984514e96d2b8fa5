import logging

import pytest

from scholarship_ai.dispatch import PROMPT_PREVIEW_CHARS
from scholarship_ai.errors import RATE_LIMIT_MESSAGE
from scholarship_ai.main import create_app
from fastapi.testclient import TestClient

from conftest import StubGateway

ACTIONS = [
    ("/api/generate", "generatedText"),
    ("/api/improve", "improvedText"),
    ("/api/feedback", "feedbackText"),
]
FULL_CONTEXT = {"name": "Ann", "existingText": "My first draft."}


def test_generate_scenario(client, gateway):
    gateway.text = "Thank you."

    resp = client.post("/api/generate", json={"section": "Conclusion", "context": {"name": "Lee"}})

    assert resp.status_code == 200
    assert resp.json() == {"generatedText": "Thank you."}
    prompt = gateway.prompts[0]
    assert "'Conclusion' section" in prompt
    assert "Student Name: Lee" in prompt


@pytest.mark.parametrize("path,key", ACTIONS)
def test_success_body_has_one_key_named_for_action(client, gateway, path, key):
    gateway.text = "ok"

    resp = client.post(path, json={"section": "Introduction", "context": FULL_CONTEXT})

    assert resp.status_code == 200
    assert resp.json() == {key: "ok"}


@pytest.mark.parametrize("path,_", ACTIONS)
@pytest.mark.parametrize(
    "body",
    [
        {"context": {"name": "Ann"}},
        {"section": "Introduction"},
        {"section": "", "context": {"name": "Ann"}},
        {"section": "Introduction", "context": None},
        {},
    ],
)
def test_missing_section_or_context_is_400(client, gateway, path, _, body):
    resp = client.post(path, json=body)

    assert resp.status_code == 400
    assert list(resp.json()) == ["error"]
    assert gateway.prompts == []


@pytest.mark.parametrize("path", ["/api/improve", "/api/feedback"])
def test_rewrite_actions_need_existing_text(client, gateway, path):
    resp = client.post(path, json={"section": "Introduction", "context": {"name": "Ann"}})

    assert resp.status_code == 400
    assert "existingText" in resp.json()["error"]
    assert gateway.prompts == []


def test_generate_does_not_need_existing_text(client):
    resp = client.post("/api/generate", json={"section": "Introduction", "context": {"name": "Ann"}})
    assert resp.status_code == 200


def test_empty_context_object_is_accepted_for_generate(client):
    resp = client.post("/api/generate", json={"section": "Introduction", "context": {}})
    assert resp.status_code == 200


def test_numeric_fields_are_treated_as_text(client, gateway):
    resp = client.post("/api/generate", json={"section": "Academic Achievements", "context": {"gpa": 3.9}})

    assert resp.status_code == 200
    assert "- GPA: 3.9\n" in gateway.prompts[0]


def test_improve_sends_existing_text(client, gateway):
    client.post("/api/improve", json={"section": "Career Goals", "context": {"existingText": "I like code."}})

    assert '"I like code."' in gateway.prompts[0]
    assert gateway.prompts[0].endswith("Improved text for the 'Career Goals' section:")


def test_non_object_body_is_400(client):
    resp = client.post("/api/generate", json=["not", "an", "object"])

    assert resp.status_code == 400
    assert "error" in resp.json()


def test_context_of_wrong_type_is_400(client):
    resp = client.post("/api/generate", json={"section": "Introduction", "context": "Ann"})
    assert resp.status_code == 400


@pytest.mark.parametrize("path,_", ACTIONS)
def test_rate_limit_message_maps_to_429(path, _):
    gateway = StubGateway(error=RuntimeError("[429 Too Many Requests] quota exhausted"))
    client = TestClient(create_app(gateway=gateway))

    resp = client.post(path, json={"section": "Introduction", "context": FULL_CONTEXT})

    assert resp.status_code == 429
    assert resp.json() == {"error": RATE_LIMIT_MESSAGE}


@pytest.mark.parametrize("path,key", ACTIONS)
def test_other_failures_map_to_500_without_detail(path, key):
    gateway = StubGateway(error=RuntimeError("secret provider detail"))
    client = TestClient(create_app(gateway=gateway))

    resp = client.post(path, json={"section": "Introduction", "context": FULL_CONTEXT})

    assert resp.status_code == 500
    assert resp.json() == {"error": f"Failed to generate {key} from AI model."}
    assert len(gateway.prompts) == 1


def test_cors_allows_any_origin(client):
    resp = client.options(
        "/api/generate",
        headers={"Origin": "https://letters.example.org", "Access-Control-Request-Method": "POST"},
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": True}


@pytest.mark.parametrize("path", ["/api/improve", "/api/feedback"])
def test_empty_existing_text_counts_as_missing(client, gateway, path):
    resp = client.post(path, json={"section": "Introduction", "context": {"existingText": ""}})

    assert resp.status_code == 400
    assert "existingText" in resp.json()["error"]
    assert gateway.prompts == []


def test_index_lists_letter_routes(client):
    body = client.get("/").json()

    assert body["ok"] is True
    assert {"/api/generate", "/api/improve", "/api/feedback"} <= set(body["routes"])


def test_error_shape_is_documented(client):
    responses = client.get("/openapi.json").json()["paths"]["/api/generate"]["post"]["responses"]

    for status in ("400", "429", "500"):
        schema = responses[status]["content"]["application/json"]["schema"]
        assert schema["$ref"].endswith("/ErrorOut")


def _messages(caplog, level=None):
    return [
        r.getMessage()
        for r in caplog.records
        if r.name == "uvicorn.error" and (level is None or r.levelno == level)
    ]


def test_prompt_preview_is_truncated(client, gateway, caplog):
    caplog.set_level(logging.INFO, logger="uvicorn.error")
    prefix = "Generated Prompt: "

    resp = client.post("/api/generate", json={"section": "Introduction", "context": {"name": "A" * 500}})

    assert resp.status_code == 200
    previews = [m for m in _messages(caplog) if m.startswith(prefix)]
    assert len(previews) == 1
    shown = previews[0][len(prefix):-len("...")]
    assert len(shown) == PROMPT_PREVIEW_CHARS
    assert shown == gateway.prompts[0][:PROMPT_PREVIEW_CHARS]
    assert len(gateway.prompts[0]) > PROMPT_PREVIEW_CHARS


def test_request_log_names_action_and_section(client, caplog):
    caplog.set_level(logging.INFO, logger="uvicorn.error")

    client.post("/api/feedback", json={"section": "Career Goals", "context": FULL_CONTEXT})

    messages = _messages(caplog, logging.INFO)
    assert "Received request for action 'feedbackText' on section: Career Goals" in messages
    assert "Successfully generated feedbackText for section: Career Goals" in messages


def test_failure_log_names_action_and_section(caplog):
    caplog.set_level(logging.INFO, logger="uvicorn.error")
    gateway = StubGateway(error=RuntimeError("secret provider detail"))
    client = TestClient(create_app(gateway=gateway))

    resp = client.post("/api/improve", json={"section": "Financial Need", "context": FULL_CONTEXT})

    assert resp.status_code == 500
    errors = [r for r in caplog.records if r.name == "uvicorn.error" and r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert errors[0].getMessage() == "Model call failed for action 'improve' on section: Financial Need"
    assert errors[0].exc_info is not None
    assert "secret provider detail" not in resp.text
