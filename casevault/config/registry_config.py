"""Case registry configuration.

This module defines configuration for the registry, its authorities and its
event bus, with environment variable overrides for deployment.

Environment Variables:
- CASEVAULT_REGISTRY_ID: Identity ciphertexts are bound to (default: casevault-registry)
- CASEVAULT_SUBSCRIBER_TIMEOUT: Per-subscriber event budget in seconds (default: 5.0)
- CASEVAULT_ATTESTATION_THRESHOLD: Signers required per attestation (default: 1)
- CASEVAULT_ATTESTATION_KEYS: Comma-separated hex Ed25519 signer keys (default: none)
- CASEVAULT_INPUT_VERIFIER_KEY: Hex Ed25519 input verifier key (default: none)
- ENVIRONMENT: production or development (default: development)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_list_env(key: str) -> tuple[str, ...]:
    """Get comma-separated environment variable as a tuple of non-empty items."""
    value = os.environ.get(key, "")
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class RegistryConfig:
    """Configuration for the case registry.

    Attributes:
        registry_id: Identity every admitted ciphertext is bound to.
        environment: production (JSON logs) or development (console logs).
        subscriber_timeout_seconds: Time budget per event subscriber.
        attestation_threshold: Distinct signers required per attestation.
        attestation_signer_keys: Hex Ed25519 public keys of decryption signers.
        input_verifier_key: Hex Ed25519 public key of the input verifier.
    """

    registry_id: str = "casevault-registry"
    environment: str = "development"
    subscriber_timeout_seconds: float = 5.0
    attestation_threshold: int = 1
    attestation_signer_keys: tuple[str, ...] = ()
    input_verifier_key: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.registry_id:
            raise ValueError("registry_id must not be empty")
        if self.subscriber_timeout_seconds <= 0:
            raise ValueError(
                "subscriber_timeout_seconds must be positive, "
                f"got {self.subscriber_timeout_seconds}"
            )
        if self.attestation_threshold < 1:
            raise ValueError(
                f"attestation_threshold must be at least 1, got {self.attestation_threshold}"
            )
        if (
            self.attestation_signer_keys
            and self.attestation_threshold > len(self.attestation_signer_keys)
        ):
            raise ValueError(
                f"attestation_threshold ({self.attestation_threshold}) exceeds "
                f"number of signer keys ({len(self.attestation_signer_keys)})"
            )

    @classmethod
    def from_environment(cls, env_file: str | None = None) -> "RegistryConfig":
        """Create config from environment variables with defaults.

        Args:
            env_file: Optional .env file loaded first. Variables already
                set in the process environment take precedence.
        """
        if env_file is not None:
            load_dotenv(env_file, override=False)
        return cls(
            registry_id=os.environ.get("CASEVAULT_REGISTRY_ID", "casevault-registry"),
            environment=os.environ.get("ENVIRONMENT", "development"),
            subscriber_timeout_seconds=_get_float_env("CASEVAULT_SUBSCRIBER_TIMEOUT", 5.0),
            attestation_threshold=_get_int_env("CASEVAULT_ATTESTATION_THRESHOLD", 1),
            attestation_signer_keys=_get_list_env("CASEVAULT_ATTESTATION_KEYS"),
            input_verifier_key=os.environ.get("CASEVAULT_INPUT_VERIFIER_KEY") or None,
        )


# Pre-defined configurations for common use cases

# Default config (no authority keys; bootstrap requires them for real adapters)
DEFAULT_REGISTRY_CONFIG = RegistryConfig()

# Testing config with a short subscriber budget
TEST_REGISTRY_CONFIG = RegistryConfig(
    registry_id="casevault-test-registry",
    subscriber_timeout_seconds=0.1,
)
