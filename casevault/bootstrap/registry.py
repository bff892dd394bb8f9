"""Bootstrap wiring for the case registry.

Builds the store, authorities, event bus, metrics and time authority once
and injects them into a CaseRegistryService. Nothing here is held at module
level; each call produces an independent registry.
"""

from __future__ import annotations

from dataclasses import dataclass

from casevault.application.ports.registry_metrics import RegistryMetricsPort
from casevault.application.ports.time_authority import TimeAuthorityProtocol
from casevault.application.services.case_registry_service import CaseRegistryService
from casevault.config.registry_config import RegistryConfig
from casevault.infrastructure.adapters.ed25519_attestation_authority import (
    Ed25519AttestationAuthority,
)
from casevault.infrastructure.adapters.ed25519_keys import load_verify_key
from casevault.infrastructure.adapters.in_memory_case_store import InMemoryCaseStore
from casevault.infrastructure.adapters.in_process_event_bus import InProcessEventBus
from casevault.infrastructure.adapters.signed_input_ciphertext_authority import (
    SignedInputCiphertextAuthority,
)
from casevault.infrastructure.adapters.system_time_authority import SystemTimeAuthority
from casevault.infrastructure.monitoring.registry_metrics import RegistryMetricsCollector
from casevault.infrastructure.observability.logging import configure_structlog


@dataclass(frozen=True)
class RegistryComponents:
    """A wired registry and the collaborators callers interact with directly.

    Attributes:
        registry: The case registry service.
        event_bus: Bus to subscribe audit or UI listeners on.
        store: The case store backing the registry.
        ciphertext_authority: Authority holding access and disclosure state.
        attestation_authority: Authority checking decryption attestations.
        metrics: Metrics recorder the registry reports to.
    """

    registry: CaseRegistryService
    event_bus: InProcessEventBus
    store: InMemoryCaseStore
    ciphertext_authority: SignedInputCiphertextAuthority
    attestation_authority: Ed25519AttestationAuthority
    metrics: RegistryMetricsPort


def build_case_registry(
    config: RegistryConfig,
    metrics: RegistryMetricsPort | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
) -> RegistryComponents:
    """Wire a case registry from configuration.

    Args:
        config: Registry configuration; must carry the input verifier key
            and at least one attestation signer key.
        metrics: Optional metrics recorder. Defaults to a Prometheus
            collector labelled with config.environment.
        time_authority: Optional time source (defaults to the system clock).

    Returns:
        The wired registry and its collaborators.

    Raises:
        ValueError: If authority keys are missing or malformed.
    """
    if config.input_verifier_key is None:
        raise ValueError("input_verifier_key is required to admit ciphertexts")
    if not config.attestation_signer_keys:
        raise ValueError("at least one attestation signer key is required")

    ciphertext_authority = SignedInputCiphertextAuthority(
        load_verify_key(config.input_verifier_key)
    )
    attestation_authority = Ed25519AttestationAuthority(
        [load_verify_key(key) for key in config.attestation_signer_keys],
        threshold=config.attestation_threshold,
    )
    event_bus = InProcessEventBus(
        subscriber_timeout_seconds=config.subscriber_timeout_seconds
    )
    store = InMemoryCaseStore()
    if metrics is None:
        metrics = RegistryMetricsCollector(environment=config.environment)

    registry = CaseRegistryService(
        store=store,
        ciphertext_authority=ciphertext_authority,
        attestation_authority=attestation_authority,
        event_sink=event_bus,
        time_authority=time_authority or SystemTimeAuthority(),
        registry_id=config.registry_id,
        metrics=metrics,
    )
    return RegistryComponents(
        registry=registry,
        event_bus=event_bus,
        store=store,
        ciphertext_authority=ciphertext_authority,
        attestation_authority=attestation_authority,
        metrics=metrics,
    )


def start_case_registry(
    config: RegistryConfig | None = None,
    env_file: str | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
) -> RegistryComponents:
    """Configure logging for the environment and wire a registry.

    Args:
        config: Registry configuration; loaded from the environment
            (and env_file, if given) when omitted.
        env_file: Optional .env file read when config is omitted.
        time_authority: Optional time source (defaults to the system clock).

    Returns:
        The wired registry and its collaborators.
    """
    if config is None:
        config = RegistryConfig.from_environment(env_file)
    configure_structlog(environment=config.environment)
    return build_case_registry(config, time_authority=time_authority)
