"""Case registry domain errors.

This module provides exception classes for failures of the case lifecycle:
creating a case, verifying its diagnosis, and querying it.

Registry Rules:
- A case id is unique for the lifetime of the registry
- A verified case is terminal; it is never verified again
- Every failure is reported synchronously; nothing is retried internally
"""

from __future__ import annotations

from casevault.domain.exceptions import CaseVaultError


class CaseRegistryError(CaseVaultError):
    """Base error for case registry operations.

    All registry errors are caller-visible and leave the registry exactly as
    it was before the failed call.
    """

    pass


class CaseAlreadyExistsError(CaseRegistryError):
    """Raised when a case id is already present in the store.

    Attributes:
        case_id: The case id that was already taken.
    """

    def __init__(self, case_id: str) -> None:
        """Initialize the error.

        Args:
            case_id: The case id that was already taken.
        """
        self.case_id = case_id
        super().__init__(f"Case already exists: {case_id}")


class CaseNotFoundError(CaseRegistryError):
    """Raised when a case id has never been created.

    Attributes:
        case_id: The case id that was looked up.
    """

    def __init__(self, case_id: str) -> None:
        """Initialize the error.

        Args:
            case_id: The case id that was looked up.
        """
        self.case_id = case_id
        super().__init__(f"Case not found: {case_id}")


class CaseAlreadyVerifiedError(CaseRegistryError):
    """Raised when verification is attempted on an already verified case.

    The stored decrypted value is never overwritten.

    Attributes:
        case_id: The case that is already verified.
    """

    def __init__(self, case_id: str) -> None:
        """Initialize the error.

        Args:
            case_id: The case that is already verified.
        """
        self.case_id = case_id
        super().__init__(f"Case already verified: {case_id}")


class MalformedInputError(CaseRegistryError):
    """Raised when caller input cannot be decoded.

    Used for cleartext encodings that are not exactly four bytes and for
    values outside the unsigned 32-bit range.

    Attributes:
        reason: Why the input was rejected.
    """

    def __init__(self, reason: str) -> None:
        """Initialize the error.

        Args:
            reason: Why the input was rejected.
        """
        self.reason = reason
        super().__init__(f"Malformed input: {reason}")
