"""
Pytest configuration and shared fixtures for casevault tests.

Testing Standards:
- Async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async collaborator mocking
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from __future__ import annotations

import pytest
from nacl.signing import SigningKey

from casevault.application.services.case_registry_service import CaseRegistryService
from casevault.config.registry_config import TEST_REGISTRY_CONFIG
from casevault.infrastructure.adapters.in_memory_case_store import InMemoryCaseStore
from casevault.infrastructure.stubs.attestation_authority_stub import (
    AttestationAuthorityStub,
)
from casevault.infrastructure.stubs.ciphertext_authority_stub import (
    CiphertextAuthorityStub,
)
from casevault.infrastructure.stubs.event_sink_stub import EventSinkStub
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from casevault import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Time authority frozen at 2026-01-01T00:00:00Z."""
    return FakeTimeAuthority()


@pytest.fixture
def case_store() -> InMemoryCaseStore:
    """Create a fresh in-memory case store."""
    return InMemoryCaseStore()


@pytest.fixture
def ciphertext_authority() -> CiphertextAuthorityStub:
    """Ciphertext authority stub admitting every non-empty ciphertext."""
    return CiphertextAuthorityStub(accept_all=True)


@pytest.fixture
def attestation_authority() -> AttestationAuthorityStub:
    """Attestation authority stub accepting only registered attestations."""
    return AttestationAuthorityStub(accept_all=False)


@pytest.fixture
def event_sink() -> EventSinkStub:
    """Event sink stub recording published events."""
    return EventSinkStub()


@pytest.fixture
def registry(
    case_store: InMemoryCaseStore,
    ciphertext_authority: CiphertextAuthorityStub,
    attestation_authority: AttestationAuthorityStub,
    event_sink: EventSinkStub,
    fake_time_authority: FakeTimeAuthority,
) -> CaseRegistryService:
    """Registry wired to the in-memory store and stub authorities."""
    return CaseRegistryService(
        store=case_store,
        ciphertext_authority=ciphertext_authority,
        attestation_authority=attestation_authority,
        event_sink=event_sink,
        time_authority=fake_time_authority,
        registry_id=TEST_REGISTRY_CONFIG.registry_id,
    )


@pytest.fixture
def input_verifier_key() -> SigningKey:
    """Ed25519 key acting as the encryption-side input verifier."""
    return SigningKey.generate()


@pytest.fixture
def attestation_signer_keys() -> list[SigningKey]:
    """Three Ed25519 keys acting as decryption signers."""
    return [SigningKey.generate() for _ in range(3)]
