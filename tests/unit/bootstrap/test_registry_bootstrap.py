"""Unit tests for build_case_registry() and start_case_registry()."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import replace

import pytest
import structlog
from nacl.encoding import HexEncoder
from nacl.signing import SigningKey

from casevault.bootstrap import build_case_registry, start_case_registry
from casevault.config.registry_config import RegistryConfig
from casevault.infrastructure.adapters import (
    Ed25519AttestationAuthority,
    InMemoryCaseStore,
    InProcessEventBus,
    SignedInputCiphertextAuthority,
)
from casevault.infrastructure.monitoring import RegistryMetricsCollector


def _hex(key: SigningKey) -> str:
    return key.verify_key.encode(encoder=HexEncoder).decode("ascii")


@pytest.fixture
def config(
    input_verifier_key: SigningKey, attestation_signer_keys: list[SigningKey]
) -> RegistryConfig:
    return RegistryConfig(
        registry_id="clinic-7",
        attestation_threshold=2,
        attestation_signer_keys=tuple(_hex(k) for k in attestation_signer_keys),
        input_verifier_key=_hex(input_verifier_key),
    )


@pytest.fixture
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


class TestBuildCaseRegistry:
    def test_wires_real_adapters(self, config: RegistryConfig) -> None:
        components = build_case_registry(config)

        assert components.registry.registry_id == "clinic-7"
        assert components.registry.is_available() is True
        assert isinstance(components.store, InMemoryCaseStore)
        assert isinstance(components.event_bus, InProcessEventBus)
        assert isinstance(components.ciphertext_authority, SignedInputCiphertextAuthority)
        assert isinstance(components.attestation_authority, Ed25519AttestationAuthority)
        assert components.attestation_authority.threshold == 2

    def test_each_call_builds_independent_registry(self, config: RegistryConfig) -> None:
        first = build_case_registry(config)
        second = build_case_registry(config)

        assert first.store is not second.store
        assert first.registry is not second.registry

    def test_missing_input_verifier_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="input_verifier_key"):
            build_case_registry(RegistryConfig(attestation_signer_keys=("aa",)))

    def test_missing_signer_keys_rejected(self, input_verifier_key: SigningKey) -> None:
        with pytest.raises(ValueError, match="signer key"):
            build_case_registry(RegistryConfig(input_verifier_key=_hex(input_verifier_key)))

    def test_malformed_key_rejected(self, input_verifier_key: SigningKey) -> None:
        config = RegistryConfig(
            attestation_signer_keys=("not-hex",),
            input_verifier_key=_hex(input_verifier_key),
        )

        with pytest.raises(ValueError, match="Invalid Ed25519 verify key"):
            build_case_registry(config)

    def test_default_metrics_labelled_with_config_environment(
        self, config: RegistryConfig, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "development")
        components = build_case_registry(replace(config, environment="staging"))

        assert isinstance(components.metrics, RegistryMetricsCollector)
        components.metrics.record_case_created()
        registry = components.metrics.get_registry()
        assert (
            registry.get_sample_value(
                "casevault_cases_created_total",
                {"service": "casevault", "environment": "staging"},
            )
            == 1.0
        )

    def test_supplied_metrics_are_used(self, config: RegistryConfig) -> None:
        metrics = RegistryMetricsCollector(environment="test")

        assert build_case_registry(config, metrics=metrics).metrics is metrics


@pytest.mark.usefixtures("reset_structlog")
class TestStartCaseRegistry:
    def test_production_environment_renders_json(self, config: RegistryConfig) -> None:
        components = start_case_registry(replace(config, environment="production"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert components.registry.registry_id == "clinic-7"

    def test_development_environment_renders_console(
        self, config: RegistryConfig
    ) -> None:
        start_case_registry(replace(config, environment="development"))

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_config_loaded_from_environment_when_omitted(
        self,
        config: RegistryConfig,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("CASEVAULT_REGISTRY_ID", "clinic-9")
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("CASEVAULT_ATTESTATION_THRESHOLD", "2")
        monkeypatch.setenv(
            "CASEVAULT_ATTESTATION_KEYS", ",".join(config.attestation_signer_keys)
        )
        monkeypatch.setenv("CASEVAULT_INPUT_VERIFIER_KEY", config.input_verifier_key or "")

        components = start_case_registry()

        assert components.registry.registry_id == "clinic-9"
        assert components.attestation_authority.threshold == 2
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
