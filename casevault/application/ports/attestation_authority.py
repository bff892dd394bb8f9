"""Attestation authority port.

This module defines the contract for checking signed decryption
attestations produced by the external decryption co-processor.

Attestation Rules:
1. EXACT HANDLE - the attestation covers precisely the stored handle
2. EXACT BYTES - the attestation covers exactly the claimed cleartext bytes
3. FAIL LOUD - any mismatch raises InvalidAttestationError
"""

from __future__ import annotations

from typing import Protocol

from casevault.domain.models.medical_case import CiphertextHandle


class AttestationAuthorityProtocol(Protocol):
    """Protocol for decryption attestation verification."""

    async def verify(
        self,
        handle: CiphertextHandle,
        claimed_cleartext: bytes,
        proof: bytes,
    ) -> None:
        """Verify that decrypting handle yields exactly claimed_cleartext.

        Args:
            handle: The ciphertext handle stored on the case.
            claimed_cleartext: The cleartext bytes as attested.
            proof: The signed attestation.

        Raises:
            InvalidAttestationError: If the proof does not attest this
                exact handle and cleartext.
        """
        ...
