"""Ciphertext authority port.

This module defines the contract of the external encryption co-processor
that admits untrusted ciphertexts into the registry.

Admission Rules:
1. VALIDATE FIRST - a ciphertext must be well-formed and bound to the
   submitting context before a handle is issued
2. FAIL LOUD - rejections raise InvalidCiphertextError
3. REGISTRY ACCESS - the registry must be granted rights on every handle
   it stores
4. TIME-BOUNDED SECRECY - every stored handle is marked eligible for
   disclosure to any requester
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from casevault.domain.models.medical_case import CiphertextHandle


@dataclass(frozen=True, eq=True)
class OwnerContext:
    """Context a ciphertext must be bound to for admission.

    Attributes:
        registry_id: Identity of the registry submitting the ciphertext.
        author: Caller identity that produced the ciphertext.
    """

    registry_id: str
    author: str


class CiphertextAuthorityProtocol(Protocol):
    """Protocol for ciphertext admission and access control.

    Methods:
        admit: Validate a ciphertext and input proof, returning a handle
        grant_registry_access: Allow the registry to operate on a handle
        allow_public_disclosure: Mark a handle decryptable by any requester
    """

    async def admit(
        self,
        ciphertext: bytes,
        proof: bytes,
        owner: OwnerContext,
    ) -> CiphertextHandle:
        """Validate a raw ciphertext and its input proof.

        Args:
            ciphertext: The encrypted 32-bit value as submitted.
            proof: Proof binding the ciphertext to the owner context.
            owner: The submitting context.

        Returns:
            Handle usable in later authority operations.

        Raises:
            InvalidCiphertextError: If the pair is malformed or unbound.
        """
        ...

    async def grant_registry_access(self, handle: CiphertextHandle) -> None:
        """Grant the registry permission to operate on handle.

        Raises:
            InvalidCiphertextError: If the handle was never admitted.
        """
        ...

    async def allow_public_disclosure(self, handle: CiphertextHandle) -> None:
        """Mark handle as eligible for future disclosure to any requester.

        Raises:
            InvalidCiphertextError: If the handle was never admitted.
        """
        ...
