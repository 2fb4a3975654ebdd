from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from guest_assistant.config.settings import AppSettings
from guest_assistant.domain.errors import SnapshotError, ValidationError
from guest_assistant.domain.models import Answered, Clarify, Failed, Refuse, SourceRef
from guest_assistant.interface.http.api import create_app


class _StubPolicy:
    def __init__(self, outcome):
        self.outcome = outcome
        self.questions = []
        self.retriever = SimpleNamespace(vector_store=SimpleNamespace(count=lambda: 5))

    async def execute(self, req):
        if not req.normalized:
            raise ValidationError("question must not be empty")
        self.questions.append(req.normalized)
        return self.outcome


def _client(outcome):
    policy = _StubPolicy(outcome)

    async def factory():
        return policy

    app = create_app(answer_factory=factory, settings=AppSettings(cors_origins=("*",)))
    return app, policy


def test_answered_response_shape():
    app, policy = _client(
        Answered(text="We open at 9 [1].", sources=(SourceRef(id=1, source="hours.txt"),))
    )
    with TestClient(app) as client:
        r = client.post("/ask", json={"question": "  When do you open?  "})
    assert r.status_code == 200
    assert r.json() == {"answer": "We open at 9 [1].", "sources": [{"id": 1, "source": "hours.txt"}]}
    assert policy.questions == ["When do you open?"]


@pytest.mark.parametrize(
    "outcome",
    [Refuse(text="I don't know based on the provided documents."), Clarify(text="Could you clarify?")],
)
def test_refuse_and_clarify_return_200_without_sources(outcome):
    app, _ = _client(outcome)
    with TestClient(app) as client:
        r = client.post("/ask", json={"question": "Something specific?"})
    assert r.status_code == 200
    assert r.json() == {"answer": outcome.text, "sources": []}


@pytest.mark.parametrize("body", [{"question": ""}, {"question": "   "}, {}])
def test_missing_question_is_400(body):
    app, _ = _client(Answered(text="x"))
    with TestClient(app) as client:
        r = client.post("/ask", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Missing question"}


def test_no_body_is_400():
    app, _ = _client(Answered(text="x"))
    with TestClient(app) as client:
        r = client.post("/ask")
    assert r.status_code == 400


def test_numeric_question_is_asked_as_text():
    app, policy = _client(Answered(text="x"))
    with TestClient(app) as client:
        r = client.post("/ask", json={"question": 12345678})
    assert r.status_code == 200
    assert policy.questions == ["12345678"]


@pytest.mark.parametrize("body", [{"question": None}, {"question": 0}, {"question": False}])
def test_falsy_question_is_400(body):
    app, policy = _client(Answered(text="x"))
    with TestClient(app) as client:
        r = client.post("/ask", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Missing question"}
    assert policy.questions == []


def test_non_object_body_is_400_not_422():
    app, _ = _client(Answered(text="x"))
    with TestClient(app) as client:
        r = client.post("/ask", json=["When do you open?"])
        bad_json = client.post(
            "/ask", content="{not json", headers={"Content-Type": "application/json"}
        )
    assert r.status_code == 400
    assert r.json() == {"error": "Missing question"}
    assert bad_json.status_code == 400
    assert bad_json.json() == {"error": "Missing question"}


def test_error_outcome_is_generic_500():
    app, _ = _client(Failed(text="Server error"))
    with TestClient(app) as client:
        r = client.post("/ask", json={"question": "When do you open?"})
    assert r.status_code == 500
    assert r.json() == {"error": "Server error"}


def test_health_reports_index_size():
    app, _ = _client(Answered(text="x"))
    with TestClient(app) as client:
        r = client.get("/health")
    assert r.json() == {"status": "healthy", "service": "guest-assistant", "chunks": 5}


def test_requests_before_startup_get_503():
    app, _ = _client(Answered(text="x"))
    client = TestClient(app)  # no context manager: lifespan does not run
    r = client.post("/ask", json={"question": "When do you open?"})
    assert r.status_code == 503


def test_startup_failure_propagates():
    async def broken():
        raise SnapshotError("index.json not found - run ingest first.")

    app = create_app(answer_factory=broken, settings=AppSettings(cors_origins=("*",)))
    with pytest.raises(SnapshotError):
        with TestClient(app):
            pass
