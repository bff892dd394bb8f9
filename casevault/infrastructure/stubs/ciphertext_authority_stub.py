"""Ciphertext authority stub implementation.

Provides a configurable in-memory CiphertextAuthorityProtocol for
development and testing:
- accept_all=True: admit every non-empty ciphertext (default)
- accept_all=False: reject every ciphertext
- reject_ciphertext(): reject one specific ciphertext

Handles are deterministic (SHA-256 over ciphertext, registry id and author).
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from casevault.application.ports.ciphertext_authority import (
    CiphertextAuthorityProtocol,
    OwnerContext,
)
from casevault.domain.errors.authority import InvalidCiphertextError
from casevault.domain.models.medical_case import CiphertextHandle


@dataclass(frozen=True)
class AdmitCall:
    """Record of an admit() call for test assertions."""

    ciphertext: bytes
    proof: bytes
    owner: OwnerContext


class CiphertextAuthorityStub(CiphertextAuthorityProtocol):
    """Stub implementation of CiphertextAuthorityProtocol.

    NOT suitable for production use.

    Attributes:
        admit_calls: Every admit() call, in order.
        registry_access: Handles granted to the registry.
        publicly_decryptable: Handles marked for public disclosure.
    """

    def __init__(self, accept_all: bool = True) -> None:
        """Initialize the stub.

        Args:
            accept_all: If True, non-empty ciphertexts are admitted.
                       If False, all ciphertexts are rejected.
        """
        self._accept_all = accept_all
        self._rejected: set[bytes] = set()
        self._admitted: set[CiphertextHandle] = set()
        self.admit_calls: list[AdmitCall] = []
        self.registry_access: set[CiphertextHandle] = set()
        self.publicly_decryptable: set[CiphertextHandle] = set()

    async def admit(
        self,
        ciphertext: bytes,
        proof: bytes,
        owner: OwnerContext,
    ) -> CiphertextHandle:
        self.admit_calls.append(AdmitCall(ciphertext=ciphertext, proof=proof, owner=owner))
        if not self._accept_all:
            raise InvalidCiphertextError("stub configured to reject all ciphertexts")
        if not ciphertext:
            raise InvalidCiphertextError("ciphertext is empty")
        if ciphertext in self._rejected:
            raise InvalidCiphertextError("stub configured to reject this ciphertext")
        handle = self.handle_for(ciphertext, owner)
        self._admitted.add(handle)
        return handle

    async def grant_registry_access(self, handle: CiphertextHandle) -> None:
        self._require_admitted(handle)
        self.registry_access.add(handle)

    async def allow_public_disclosure(self, handle: CiphertextHandle) -> None:
        self._require_admitted(handle)
        self.publicly_decryptable.add(handle)

    @staticmethod
    def handle_for(ciphertext: bytes, owner: OwnerContext) -> CiphertextHandle:
        """Deterministic handle the stub issues for ciphertext under owner."""
        digest = hashlib.sha256(
            ciphertext
            + b"\x00"
            + owner.registry_id.encode("utf-8")
            + b"\x00"
            + owner.author.encode("utf-8")
        ).digest()
        return CiphertextHandle(digest)

    def set_accept_all(self, accept_all: bool) -> None:
        """Configure whether to admit ciphertexts."""
        self._accept_all = accept_all

    def reject_ciphertext(self, ciphertext: bytes) -> None:
        """Reject one specific ciphertext on admission."""
        self._rejected.add(ciphertext)

    def _require_admitted(self, handle: CiphertextHandle) -> None:
        if handle not in self._admitted:
            raise InvalidCiphertextError(f"handle {handle} was never admitted")
