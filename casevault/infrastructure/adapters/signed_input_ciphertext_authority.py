"""Signed-input ciphertext authority adapter.

Admits ciphertexts whose input proof is an Ed25519 signature by the
configured input verifier. The signed message binds the ciphertext digest
to the submitting registry and author, so a proof produced for one context
cannot be replayed in another.

Message layout:
    b"casevault.input.v1" || LP(blake3(ciphertext)) || LP(registry_id) || LP(author)

where LP(x) is x preceded by its 4-byte big-endian length. The issued
handle is blake3 over LP(ciphertext) || LP(registry_id) || LP(author).
"""

from __future__ import annotations

import blake3
from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

from casevault.application.ports.ciphertext_authority import (
    CiphertextAuthorityProtocol,
    OwnerContext,
)
from casevault.domain.errors.authority import InvalidCiphertextError
from casevault.domain.models.medical_case import CiphertextHandle
from casevault.infrastructure.adapters.ed25519_keys import (
    SIGNATURE_SIZE,
    length_prefixed,
)
from casevault.infrastructure.observability.logging import get_logger_for_component

INPUT_PROOF_DOMAIN: bytes = b"casevault.input.v1"


def input_proof_message(ciphertext: bytes, owner: OwnerContext) -> bytes:
    """Build the bytes an input proof signs."""
    return INPUT_PROOF_DOMAIN + length_prefixed(
        blake3.blake3(ciphertext).digest(),
        owner.registry_id.encode("utf-8"),
        owner.author.encode("utf-8"),
    )


def sign_input_proof(
    signing_key: SigningKey, ciphertext: bytes, owner: OwnerContext
) -> bytes:
    """Produce an input proof for ciphertext under owner (encryption side)."""
    return signing_key.sign(input_proof_message(ciphertext, owner)).signature


def derive_handle(ciphertext: bytes, owner: OwnerContext) -> CiphertextHandle:
    """Derive the handle issued for an admitted ciphertext."""
    digest = blake3.blake3(
        length_prefixed(
            ciphertext,
            owner.registry_id.encode("utf-8"),
            owner.author.encode("utf-8"),
        )
    ).digest()
    return CiphertextHandle(digest)


class SignedInputCiphertextAuthority(CiphertextAuthorityProtocol):
    """Ciphertext authority verifying Ed25519 input proofs.

    Tracks, per handle, admission, registry access and public disclosure
    eligibility.

    Attributes:
        _verify_key: Public key of the trusted input verifier.
        _admitted: Handles issued by admit().
        _registry_access: Handles the registry may operate on.
        _publicly_decryptable: Handles eligible for disclosure to anyone.
    """

    def __init__(self, input_verifier_key: VerifyKey) -> None:
        """Initialize the authority.

        Args:
            input_verifier_key: Public key whose signatures are accepted as
                input proofs.
        """
        self._verify_key = input_verifier_key
        self._admitted: set[CiphertextHandle] = set()
        self._registry_access: set[CiphertextHandle] = set()
        self._publicly_decryptable: set[CiphertextHandle] = set()
        self._log = get_logger_for_component(self.__class__.__name__, component="authority")

    async def admit(
        self,
        ciphertext: bytes,
        proof: bytes,
        owner: OwnerContext,
    ) -> CiphertextHandle:
        """Validate ciphertext and proof; return the bound handle.

        Raises:
            InvalidCiphertextError: On empty ciphertext, wrong proof length,
                or a signature that does not cover this ciphertext and owner.
        """
        if not ciphertext:
            raise InvalidCiphertextError("ciphertext is empty")
        if len(proof) != SIGNATURE_SIZE:
            raise InvalidCiphertextError(
                f"input proof must be {SIGNATURE_SIZE} bytes, got {len(proof)}"
            )
        try:
            self._verify_key.verify(input_proof_message(ciphertext, owner), proof)
        except BadSignatureError:
            self._log.warning(
                "input_proof_rejected",
                registry_id=owner.registry_id,
                author=owner.author,
            )
            raise InvalidCiphertextError(
                "input proof does not bind ciphertext to submitting context"
            ) from None

        handle = derive_handle(ciphertext, owner)
        self._admitted.add(handle)
        self._log.debug("ciphertext_admitted", handle_prefix=handle.hex()[:16])
        return handle

    async def grant_registry_access(self, handle: CiphertextHandle) -> None:
        """Grant the registry rights on an admitted handle."""
        self._require_admitted(handle)
        self._registry_access.add(handle)

    async def allow_public_disclosure(self, handle: CiphertextHandle) -> None:
        """Mark an admitted handle publicly decryptable."""
        self._require_admitted(handle)
        self._publicly_decryptable.add(handle)

    def has_registry_access(self, handle: CiphertextHandle) -> bool:
        return handle in self._registry_access

    def is_publicly_decryptable(self, handle: CiphertextHandle) -> bool:
        return handle in self._publicly_decryptable

    def _require_admitted(self, handle: CiphertextHandle) -> None:
        if handle not in self._admitted:
            raise InvalidCiphertextError(f"handle {handle} was never admitted")
