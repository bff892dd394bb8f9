"""Attestation authority stub implementation.

Provides a configurable AttestationAuthorityProtocol for testing:
- accept_all=True: accept every attestation
- accept_all=False (default): accept only attestations registered with
  register_attestation(); any other handle, cleartext or proof is rejected
"""

from __future__ import annotations

from dataclasses import dataclass

from casevault.application.ports.attestation_authority import (
    AttestationAuthorityProtocol,
)
from casevault.domain.errors.authority import InvalidAttestationError
from casevault.domain.models.medical_case import CiphertextHandle


@dataclass(frozen=True)
class VerifyCall:
    """Record of a verify() call for test assertions."""

    handle: CiphertextHandle
    claimed_cleartext: bytes
    proof: bytes


class AttestationAuthorityStub(AttestationAuthorityProtocol):
    """Stub implementation of AttestationAuthorityProtocol.

    NOT suitable for production use.

    Attributes:
        verify_calls: Every verify() call, in order.
    """

    def __init__(self, accept_all: bool = False) -> None:
        """Initialize the stub.

        Args:
            accept_all: If True, every attestation is accepted.
        """
        self._accept_all = accept_all
        self._valid: set[tuple[CiphertextHandle, bytes, bytes]] = set()
        self.verify_calls: list[VerifyCall] = []

    async def verify(
        self,
        handle: CiphertextHandle,
        claimed_cleartext: bytes,
        proof: bytes,
    ) -> None:
        self.verify_calls.append(
            VerifyCall(handle=handle, claimed_cleartext=claimed_cleartext, proof=proof)
        )
        if self._accept_all:
            return
        if (handle, bytes(claimed_cleartext), proof) not in self._valid:
            raise InvalidAttestationError("attestation not registered with stub")

    def register_attestation(
        self, handle: CiphertextHandle, claimed_cleartext: bytes, proof: bytes
    ) -> None:
        """Accept exactly this (handle, cleartext, proof) triple."""
        self._valid.add((handle, bytes(claimed_cleartext), proof))

    def set_accept_all(self, accept_all: bool) -> None:
        """Configure whether to accept every attestation."""
        self._accept_all = accept_all
