"""Unit tests for Ed25519 key helpers."""

import pytest
from nacl.encoding import HexEncoder
from nacl.signing import SigningKey

from casevault.infrastructure.adapters.ed25519_keys import (
    length_prefixed,
    load_verify_key,
)


class TestLoadVerifyKey:
    def test_loads_hex_key(self) -> None:
        signing_key = SigningKey.generate()
        hex_key = signing_key.verify_key.encode(encoder=HexEncoder).decode("ascii")

        assert load_verify_key(f"  {hex_key}\n") == signing_key.verify_key

    @pytest.mark.parametrize("bad_key", ["", "zz", "ab" * 16])
    def test_invalid_key_raises_value_error(self, bad_key: str) -> None:
        with pytest.raises(ValueError, match="Invalid Ed25519 verify key"):
            load_verify_key(bad_key)


class TestLengthPrefixed:
    def test_prefixes_each_part(self) -> None:
        assert length_prefixed(b"ab", b"") == b"\x00\x00\x00\x02ab\x00\x00\x00\x00"
