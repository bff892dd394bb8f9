"""Composition root for casevault."""

from casevault.bootstrap.registry import (
    RegistryComponents,
    build_case_registry,
    start_case_registry,
)

__all__: list[str] = ["RegistryComponents", "build_case_registry", "start_case_registry"]
