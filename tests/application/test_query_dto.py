from guest_assistant.application.dto.query_dto import AskRequest, AskResponse
from guest_assistant.domain.models import Answered, OutcomeKind, Refuse, SourceRef


def test_request_normalization():
    assert AskRequest(question="  hours?  ").normalized == "hours?"
    assert AskRequest(question=None).normalized == ""  # type: ignore[arg-type]


def test_response_from_answered():
    resp = AskResponse.from_outcome(
        Answered(text="ok [1]", sources=(SourceRef(id=1, source="a.txt"),))
    )
    assert resp.outcome is OutcomeKind.ANSWERED
    assert resp.to_dict() == {"answer": "ok [1]", "sources": [{"id": 1, "source": "a.txt"}]}


def test_response_from_refusal_has_empty_sources():
    resp = AskResponse.from_outcome(Refuse(text="I don't know based on the provided documents."))
    assert resp.outcome is OutcomeKind.REFUSE
    assert resp.to_dict()["sources"] == []
