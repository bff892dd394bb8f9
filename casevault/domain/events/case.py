"""Case lifecycle event payloads.

This module defines the events published by the registry after a committed
transition:
- CaseCreatedEvent: a case was admitted and stored
- DiagnosisVerifiedEvent: a case's diagnosis was attested and disclosed

Events are published only after the store write lands. Subscribers observe
them; they never take part in the transition itself.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Union

# Event type constants for case events
CASE_CREATED_EVENT_TYPE: str = "case.created"
DIAGNOSIS_VERIFIED_EVENT_TYPE: str = "case.diagnosis_verified"


@dataclass(frozen=True, eq=True)
class CaseCreatedEvent:
    """Published when a new case is stored.

    Attributes:
        case_id: The created case.
        author: Caller identity that created the case.
        occurred_at: When the case was created (UTC).
    """

    event_type: ClassVar[str] = CASE_CREATED_EVENT_TYPE

    case_id: str
    author: str
    occurred_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "event_type": self.event_type,
            "case_id": self.case_id,
            "author": self.author,
            "occurred_at": self.occurred_at.isoformat(),
        }

    def signable_content(self) -> bytes:
        """Return canonical JSON bytes (sorted keys) for audit trails."""
        return json.dumps(self.to_dict(), sort_keys=True).encode("utf-8")


@dataclass(frozen=True, eq=True)
class DiagnosisVerifiedEvent:
    """Published when a case's diagnosis is verified.

    Attributes:
        case_id: The verified case.
        decrypted_value: The attested diagnosis value.
        occurred_at: When verification committed (UTC).
    """

    event_type: ClassVar[str] = DIAGNOSIS_VERIFIED_EVENT_TYPE

    case_id: str
    decrypted_value: int
    occurred_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "event_type": self.event_type,
            "case_id": self.case_id,
            "decrypted_value": self.decrypted_value,
            "occurred_at": self.occurred_at.isoformat(),
        }

    def signable_content(self) -> bytes:
        """Return canonical JSON bytes (sorted keys) for audit trails."""
        return json.dumps(self.to_dict(), sort_keys=True).encode("utf-8")


CaseEvent = Union[CaseCreatedEvent, DiagnosisVerifiedEvent]
