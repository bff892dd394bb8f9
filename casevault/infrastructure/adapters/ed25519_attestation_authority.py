"""Ed25519 attestation authority adapter.

Verifies decryption attestations signed by a threshold of trusted
decryption signers.

Message layout (what every signer signs):
    b"casevault.attestation.v1" || len(handle) (2 bytes BE) || handle || cleartext

The message covers the exact handle bytes and the exact cleartext bytes, so
an attestation for one handle never verifies for another and a re-encoded
cleartext (different width or byte order) invalidates every signature.

Proof layout: one or more raw 64-byte Ed25519 signatures, concatenated.
Every signature must come from a distinct trusted signer, and at least
`threshold` signatures are required.
"""

from __future__ import annotations

from collections.abc import Sequence

from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

from casevault.application.ports.attestation_authority import (
    AttestationAuthorityProtocol,
)
from casevault.domain.errors.authority import InvalidAttestationError
from casevault.domain.models.medical_case import CiphertextHandle
from casevault.infrastructure.adapters.ed25519_keys import SIGNATURE_SIZE
from casevault.infrastructure.observability.logging import get_logger_for_component

ATTESTATION_DOMAIN: bytes = b"casevault.attestation.v1"


def attestation_message(handle: CiphertextHandle, cleartext: bytes) -> bytes:
    """Build the bytes an attestation signer signs."""
    return (
        ATTESTATION_DOMAIN
        + len(handle.value).to_bytes(2, "big")
        + handle.value
        + cleartext
    )


def sign_attestation(
    signing_key: SigningKey, handle: CiphertextHandle, cleartext: bytes
) -> bytes:
    """Produce one attestation signature (decryption side)."""
    return signing_key.sign(attestation_message(handle, cleartext)).signature


class Ed25519AttestationAuthority(AttestationAuthorityProtocol):
    """Threshold Ed25519 attestation verifier.

    Attributes:
        _signers: Trusted signer keys, keyed by raw public key bytes.
        _threshold: Minimum number of distinct valid signers.
    """

    def __init__(self, trusted_signers: Sequence[VerifyKey], threshold: int = 1) -> None:
        """Initialize the authority.

        Args:
            trusted_signers: Public keys of the decryption signers.
            threshold: Minimum number of distinct signers per attestation.

        Raises:
            ValueError: If no signers are given or threshold is out of range.
        """
        signers = {bytes(key): key for key in trusted_signers}
        if not signers:
            raise ValueError("at least one trusted signer is required")
        if not 1 <= threshold <= len(signers):
            raise ValueError(
                f"threshold must be between 1 and {len(signers)}, got {threshold}"
            )
        self._signers = signers
        self._threshold = threshold
        self._log = get_logger_for_component(self.__class__.__name__, component="authority")

    @property
    def threshold(self) -> int:
        return self._threshold

    async def verify(
        self,
        handle: CiphertextHandle,
        claimed_cleartext: bytes,
        proof: bytes,
    ) -> None:
        """Verify a threshold attestation over handle and cleartext.

        Raises:
            InvalidAttestationError: On malformed proofs, signatures from
                unknown or repeated signers, or too few signers.
        """
        if not isinstance(claimed_cleartext, (bytes, bytearray)):
            raise InvalidAttestationError("claimed cleartext must be bytes")
        if not proof or len(proof) % SIGNATURE_SIZE != 0:
            raise InvalidAttestationError(
                f"proof must be a non-empty multiple of {SIGNATURE_SIZE} bytes, "
                f"got {len(proof)}"
            )

        message = attestation_message(handle, bytes(claimed_cleartext))
        used: set[bytes] = set()
        for offset in range(0, len(proof), SIGNATURE_SIZE):
            signature = proof[offset : offset + SIGNATURE_SIZE]
            signer = self._match_signer(message, signature, used)
            if signer is None:
                self._log.warning(
                    "attestation_rejected",
                    handle_prefix=handle.hex()[:16],
                    signature_index=offset // SIGNATURE_SIZE,
                )
                raise InvalidAttestationError(
                    "signature does not match handle and cleartext for any unused trusted signer"
                )
            used.add(signer)

        if len(used) < self._threshold:
            raise InvalidAttestationError(
                f"{len(used)} valid signers, {self._threshold} required"
            )

    def _match_signer(
        self, message: bytes, signature: bytes, used: set[bytes]
    ) -> bytes | None:
        for key_bytes, key in self._signers.items():
            if key_bytes in used:
                continue
            try:
                key.verify(message, signature)
            except BadSignatureError:
                continue
            return key_bytes
        return None
