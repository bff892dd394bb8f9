"""Cleartext codec for attested diagnosis values.

A disclosed diagnosis is a 32-bit unsigned integer. On the wire it is carried
as exactly four bytes, big-endian. Attestations sign these exact bytes, so no
other width or byte order is accepted.
"""

from __future__ import annotations

from casevault.domain.errors.case import MalformedInputError

CLEARTEXT_SIZE: int = 4
UINT32_MAX: int = 2**32 - 1


def decode_uint32(encoded: bytes) -> int:
    """Decode a four-byte big-endian cleartext into an integer.

    Args:
        encoded: The cleartext bytes as attested.

    Returns:
        The decoded value in the range 0..2**32-1.

    Raises:
        MalformedInputError: If the input is not bytes or not exactly four bytes.
    """
    if not isinstance(encoded, (bytes, bytearray)):
        raise MalformedInputError(
            f"cleartext must be bytes, got {type(encoded).__name__}"
        )
    if len(encoded) != CLEARTEXT_SIZE:
        raise MalformedInputError(
            f"cleartext must be exactly {CLEARTEXT_SIZE} bytes, got {len(encoded)}"
        )
    return int.from_bytes(encoded, byteorder="big", signed=False)


def encode_uint32(value: int) -> bytes:
    """Encode an integer as a four-byte big-endian cleartext.

    Args:
        value: The value to encode.

    Returns:
        Four bytes, big-endian.

    Raises:
        MalformedInputError: If value is not an int in the uint32 range.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedInputError(
            f"cleartext value must be an int, got {type(value).__name__}"
        )
    if not 0 <= value <= UINT32_MAX:
        raise MalformedInputError(f"cleartext value {value} is outside uint32 range")
    return value.to_bytes(CLEARTEXT_SIZE, byteorder="big", signed=False)
