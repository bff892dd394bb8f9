"""Unit tests for case lifecycle events."""

import json
from datetime import datetime, timezone

from casevault.domain.events import (
    CASE_CREATED_EVENT_TYPE,
    DIAGNOSIS_VERIFIED_EVENT_TYPE,
    CaseCreatedEvent,
    DiagnosisVerifiedEvent,
)

OCCURRED_AT = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestCaseCreatedEvent:
    def test_to_dict(self) -> None:
        event = CaseCreatedEvent(case_id="case1", author="doctorX", occurred_at=OCCURRED_AT)

        assert event.event_type == CASE_CREATED_EVENT_TYPE
        assert event.to_dict() == {
            "event_type": "case.created",
            "case_id": "case1",
            "author": "doctorX",
            "occurred_at": "2026-01-01T12:00:00+00:00",
        }

    def test_signable_content_is_canonical_json(self) -> None:
        event = CaseCreatedEvent(case_id="case1", author="doctorX", occurred_at=OCCURRED_AT)

        content = event.signable_content()

        assert json.loads(content) == event.to_dict()
        assert content == json.dumps(event.to_dict(), sort_keys=True).encode("utf-8")


class TestDiagnosisVerifiedEvent:
    def test_to_dict(self) -> None:
        event = DiagnosisVerifiedEvent(
            case_id="case1", decrypted_value=7, occurred_at=OCCURRED_AT
        )

        assert event.event_type == DIAGNOSIS_VERIFIED_EVENT_TYPE
        assert event.to_dict()["decrypted_value"] == 7

    def test_events_compare_by_value(self) -> None:
        first = DiagnosisVerifiedEvent(case_id="case1", decrypted_value=7, occurred_at=OCCURRED_AT)
        second = DiagnosisVerifiedEvent(case_id="case1", decrypted_value=7, occurred_at=OCCURRED_AT)

        assert first == second
