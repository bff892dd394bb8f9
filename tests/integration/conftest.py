"""
Integration test configuration.

Wires a full registry through build_case_registry() with real Ed25519 keys:
- SignedInputCiphertextAuthority verifying input proofs
- Ed25519AttestationAuthority with a 2-of-3 signer threshold
- InProcessEventBus delivering to a recording subscriber

Usage:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_example(components: RegistryComponents) -> None:
        ...
"""

from __future__ import annotations

import pytest
from nacl.encoding import HexEncoder
from nacl.signing import SigningKey
from prometheus_client import CollectorRegistry

from casevault.bootstrap import RegistryComponents, build_case_registry
from casevault.config.registry_config import RegistryConfig
from casevault.domain.events.case import CaseEvent
from casevault.infrastructure.monitoring.registry_metrics import (
    RegistryMetricsCollector,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority


def _hex(key: SigningKey) -> str:
    return key.verify_key.encode(encoder=HexEncoder).decode("ascii")


@pytest.fixture
def registry_config(
    input_verifier_key: SigningKey,
    attestation_signer_keys: list[SigningKey],
) -> RegistryConfig:
    """Config trusting the fixture keys with a 2-of-3 attestation threshold."""
    return RegistryConfig(
        registry_id="casevault-integration",
        subscriber_timeout_seconds=0.1,
        attestation_threshold=2,
        attestation_signer_keys=tuple(_hex(key) for key in attestation_signer_keys),
        input_verifier_key=_hex(input_verifier_key),
    )


@pytest.fixture
def metrics_collector() -> RegistryMetricsCollector:
    return RegistryMetricsCollector(
        registry=CollectorRegistry(),
        environment="test",
        service_name="casevault",
    )


@pytest.fixture
def components(
    registry_config: RegistryConfig,
    metrics_collector: RegistryMetricsCollector,
    fake_time_authority: FakeTimeAuthority,
) -> RegistryComponents:
    return build_case_registry(
        registry_config,
        metrics=metrics_collector,
        time_authority=fake_time_authority,
    )


@pytest.fixture
def received_events(components: RegistryComponents) -> list[CaseEvent]:
    """Events delivered to a subscriber on the wired bus."""
    received: list[CaseEvent] = []

    async def record(event: CaseEvent) -> None:
        received.append(event)

    components.event_bus.subscribe(record)
    return received
