"""Ed25519 key helpers shared by the authority adapters.

Uses PyNaCl (libsodium) for all Ed25519 operations.
"""

from __future__ import annotations

from nacl.encoding import HexEncoder
from nacl.exceptions import CryptoError
from nacl.signing import VerifyKey

# Raw Ed25519 signature length in bytes (RFC 8032)
SIGNATURE_SIZE: int = 64


def load_verify_key(hex_key: str) -> VerifyKey:
    """Load an Ed25519 verify key from its hex encoding.

    Raises:
        ValueError: If the hex is invalid or not a 32-byte key.
    """
    try:
        return VerifyKey(hex_key.strip().encode("ascii"), encoder=HexEncoder)
    except (CryptoError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid Ed25519 verify key: {e}") from e


def length_prefixed(*parts: bytes) -> bytes:
    """Concatenate parts, each preceded by its 4-byte big-endian length."""
    return b"".join(len(part).to_bytes(4, "big") + part for part in parts)
