"""Infrastructure stubs for development and testing.

Available stubs:
- CiphertextAuthorityStub: Admits every ciphertext, or rejects on demand
- AttestationAuthorityStub: Accepts registered attestations only, or all
- EventSinkStub: Records published events, optionally fails on publish

WARNING: These stubs are NOT for production use.
Production implementations are in casevault/infrastructure/adapters/.
"""

from casevault.infrastructure.stubs.attestation_authority_stub import (
    AttestationAuthorityStub,
)
from casevault.infrastructure.stubs.ciphertext_authority_stub import (
    CiphertextAuthorityStub,
)
from casevault.infrastructure.stubs.event_sink_stub import EventSinkStub

__all__: list[str] = [
    "AttestationAuthorityStub",
    "CiphertextAuthorityStub",
    "EventSinkStub",
]
