"""Unit tests for RegistryConfig.

Tests for registry configuration including:
- Default value validation
- Environment variable loading
- .env file loading
- Input validation
"""

from __future__ import annotations

from pathlib import Path

import pytest

from casevault.config.registry_config import (
    DEFAULT_REGISTRY_CONFIG,
    TEST_REGISTRY_CONFIG,
    RegistryConfig,
)

ENV_KEYS = (
    "CASEVAULT_REGISTRY_ID",
    "CASEVAULT_SUBSCRIBER_TIMEOUT",
    "CASEVAULT_ATTESTATION_THRESHOLD",
    "CASEVAULT_ATTESTATION_KEYS",
    "CASEVAULT_INPUT_VERIFIER_KEY",
    "ENVIRONMENT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start from an empty registry environment; undo anything a test loads."""
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


class TestRegistryConfig:
    """Tests for RegistryConfig dataclass."""

    class TestDefaults:
        """Tests for default configuration values."""

        def test_defaults(self) -> None:
            config = RegistryConfig()

            assert config.registry_id == "casevault-registry"
            assert config.environment == "development"
            assert config.subscriber_timeout_seconds == 5.0
            assert config.attestation_threshold == 1
            assert config.attestation_signer_keys == ()
            assert config.input_verifier_key is None

        def test_predefined_configs(self) -> None:
            assert DEFAULT_REGISTRY_CONFIG == RegistryConfig()
            assert TEST_REGISTRY_CONFIG.registry_id == "casevault-test-registry"
            assert TEST_REGISTRY_CONFIG.subscriber_timeout_seconds == 0.1

    class TestValidation:
        """Tests for input validation."""

        def test_empty_registry_id_rejected(self) -> None:
            with pytest.raises(ValueError, match="registry_id"):
                RegistryConfig(registry_id="")

        @pytest.mark.parametrize("timeout", [0, -1.0])
        def test_non_positive_timeout_rejected(self, timeout: float) -> None:
            with pytest.raises(ValueError, match="subscriber_timeout_seconds"):
                RegistryConfig(subscriber_timeout_seconds=timeout)

        def test_zero_threshold_rejected(self) -> None:
            with pytest.raises(ValueError, match="at least 1"):
                RegistryConfig(attestation_threshold=0)

        def test_threshold_above_key_count_rejected(self) -> None:
            with pytest.raises(ValueError, match="exceeds"):
                RegistryConfig(attestation_threshold=3, attestation_signer_keys=("aa", "bb"))

        def test_config_is_frozen(self) -> None:
            config = RegistryConfig()

            with pytest.raises(AttributeError):
                config.registry_id = "other"  # type: ignore[misc]

    class TestFromEnvironment:
        """Tests for environment variable loading."""

        def test_defaults_when_unset(self) -> None:
            assert RegistryConfig.from_environment() == RegistryConfig()

        def test_reads_all_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
            monkeypatch.setenv("CASEVAULT_REGISTRY_ID", "clinic-7")
            monkeypatch.setenv("ENVIRONMENT", "production")
            monkeypatch.setenv("CASEVAULT_SUBSCRIBER_TIMEOUT", "2.5")
            monkeypatch.setenv("CASEVAULT_ATTESTATION_THRESHOLD", "2")
            monkeypatch.setenv("CASEVAULT_ATTESTATION_KEYS", "aa, bb ,,cc")
            monkeypatch.setenv("CASEVAULT_INPUT_VERIFIER_KEY", "dd")

            config = RegistryConfig.from_environment()

            assert config.registry_id == "clinic-7"
            assert config.environment == "production"
            assert config.subscriber_timeout_seconds == 2.5
            assert config.attestation_threshold == 2
            assert config.attestation_signer_keys == ("aa", "bb", "cc")
            assert config.input_verifier_key == "dd"

        def test_invalid_numbers_fall_back_to_defaults(
            self, monkeypatch: pytest.MonkeyPatch
        ) -> None:
            monkeypatch.setenv("CASEVAULT_SUBSCRIBER_TIMEOUT", "soon")
            monkeypatch.setenv("CASEVAULT_ATTESTATION_THRESHOLD", "many")

            config = RegistryConfig.from_environment()

            assert config.subscriber_timeout_seconds == 5.0
            assert config.attestation_threshold == 1

        def test_empty_verifier_key_is_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
            monkeypatch.setenv("CASEVAULT_INPUT_VERIFIER_KEY", "")

            assert RegistryConfig.from_environment().input_verifier_key is None

        def test_loads_env_file(self, tmp_path: Path) -> None:
            env_file = tmp_path / ".env"
            env_file.write_text(
                "CASEVAULT_REGISTRY_ID=from-file\nCASEVAULT_ATTESTATION_KEYS=aa,bb\n"
            )

            config = RegistryConfig.from_environment(env_file=str(env_file))

            assert config.registry_id == "from-file"
            assert config.attestation_signer_keys == ("aa", "bb")

        def test_process_environment_wins_over_env_file(
            self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
        ) -> None:
            env_file = tmp_path / ".env"
            env_file.write_text("CASEVAULT_REGISTRY_ID=from-file\n")
            monkeypatch.setenv("CASEVAULT_REGISTRY_ID", "from-process")

            config = RegistryConfig.from_environment(env_file=str(env_file))

            assert config.registry_id == "from-process"
