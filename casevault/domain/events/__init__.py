"""Domain events published by the case registry."""

from casevault.domain.events.case import (
    CASE_CREATED_EVENT_TYPE,
    DIAGNOSIS_VERIFIED_EVENT_TYPE,
    CaseCreatedEvent,
    CaseEvent,
    DiagnosisVerifiedEvent,
)

__all__: list[str] = [
    "CASE_CREATED_EVENT_TYPE",
    "DIAGNOSIS_VERIFIED_EVENT_TYPE",
    "CaseCreatedEvent",
    "CaseEvent",
    "DiagnosisVerifiedEvent",
]
