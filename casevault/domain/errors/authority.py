"""External authority rejection errors.

Raised by ciphertext and attestation authority implementations when an
externally produced payload fails validation. The registry propagates these
unchanged and performs no state change.
"""

from __future__ import annotations

from casevault.domain.exceptions import CaseVaultError


class AuthorityRejectionError(CaseVaultError):
    """Base error for payloads rejected by an external authority.

    Attributes:
        reason: Why the authority rejected the payload.
    """

    def __init__(self, reason: str, message: str) -> None:
        self.reason = reason
        super().__init__(message)


class InvalidCiphertextError(AuthorityRejectionError):
    """Raised when a ciphertext and its input proof fail admission.

    Covers malformed ciphertexts, proofs not bound to the submitting
    context, and operations on handles the authority never admitted.
    """

    def __init__(self, reason: str) -> None:
        """Initialize the error.

        Args:
            reason: Why the ciphertext was rejected.
        """
        super().__init__(reason, f"Invalid ciphertext: {reason}")


class InvalidAttestationError(AuthorityRejectionError):
    """Raised when a decryption attestation does not verify.

    Any mismatch between the handle, the cleartext encoding, or the
    signature set rejects the attestation.
    """

    def __init__(self, reason: str) -> None:
        """Initialize the error.

        Args:
            reason: Why the attestation was rejected.
        """
        super().__init__(reason, f"Invalid attestation: {reason}")
