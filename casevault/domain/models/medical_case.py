"""Medical case domain model.

This module defines the confidential case record held by the registry.

Registry Rules:
- case_id is the primary key; it is never reused or deleted
- All fields except decrypted_value and is_verified are immutable
- is_verified moves from False to True exactly once (CREATED -> VERIFIED)
- decrypted_value is meaningful only when is_verified is True
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from casevault.domain.errors.case import CaseAlreadyVerifiedError, MalformedInputError
from casevault.domain.models.cleartext import UINT32_MAX


class CaseState(Enum):
    """State in the case lifecycle.

    State Machine:
        CREATED -> VERIFIED (attested disclosure of the diagnosis)

    VERIFIED is terminal. There is no deletion and no re-entry.
    """

    CREATED = "CREATED"
    VERIFIED = "VERIFIED"

    def is_terminal(self) -> bool:
        """Check if this state allows no further transitions."""
        return self is CaseState.VERIFIED


@dataclass(frozen=True, eq=True)
class CiphertextHandle:
    """Opaque reference to an admitted encrypted 32-bit value.

    Usable in later authority operations without exposing the plaintext.

    Attributes:
        value: Raw handle bytes as issued by the ciphertext authority.
    """

    value: bytes

    def __post_init__(self) -> None:
        """Validate handle bytes."""
        if not isinstance(self.value, bytes):
            raise TypeError(f"handle must be bytes, got {type(self.value).__name__}")
        if not self.value:
            raise ValueError("handle must not be empty")

    def hex(self) -> str:
        """Return the handle as lowercase hex."""
        return self.value.hex()

    def __str__(self) -> str:
        return f"0x{self.value.hex()}"


@dataclass(frozen=True, eq=True)
class MedicalCase:
    """A confidential medical case.

    Frozen: the registry never mutates a record in place; a transition
    produces a new record that replaces the stored one.

    Attributes:
        case_id: Unique, caller-assigned primary key.
        patient_id: Opaque patient identifier.
        ciphertext_handle: Handle to the encrypted diagnosis value.
        numeric_case_identifier: Caller-supplied secondary id.
        medical_history: Free text.
        author: Caller identity recorded at creation.
        created_at: Creation timestamp (UTC).
        decrypted_value: Attested diagnosis value, 0 until verified.
        is_verified: Whether the diagnosis has been attested.
    """

    case_id: str
    patient_id: str
    ciphertext_handle: CiphertextHandle
    numeric_case_identifier: int
    medical_history: str
    author: str
    created_at: datetime
    decrypted_value: int = 0
    is_verified: bool = False

    @property
    def state(self) -> CaseState:
        """Current lifecycle state derived from is_verified."""
        return CaseState.VERIFIED if self.is_verified else CaseState.CREATED

    def mark_verified(self, decrypted_value: int) -> MedicalCase:
        """Return the VERIFIED successor of this case.

        Args:
            decrypted_value: The attested, decoded diagnosis value.

        Returns:
            A new MedicalCase with is_verified=True and the value set.
            Every other field is carried over unchanged.

        Raises:
            CaseAlreadyVerifiedError: If this case is already verified.
            MalformedInputError: If the value is outside the uint32 range.
        """
        if self.is_verified:
            raise CaseAlreadyVerifiedError(self.case_id)
        if not 0 <= decrypted_value <= UINT32_MAX:
            raise MalformedInputError(
                f"decrypted value {decrypted_value} is outside uint32 range"
            )
        return replace(self, decrypted_value=decrypted_value, is_verified=True)

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on patient id or history.

        An empty term matches every case.
        """
        needle = term.lower()
        return needle in self.patient_id.lower() or needle in self.medical_history.lower()
