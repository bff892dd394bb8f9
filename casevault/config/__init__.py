"""Configuration module for casevault.

Available Configurations:
- RegistryConfig: Registry identity, authority keys, event bus budget
"""

from casevault.config.registry_config import (
    DEFAULT_REGISTRY_CONFIG,
    TEST_REGISTRY_CONFIG,
    RegistryConfig,
)

__all__ = [
    "RegistryConfig",
    "DEFAULT_REGISTRY_CONFIG",
    "TEST_REGISTRY_CONFIG",
]
