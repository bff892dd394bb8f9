"""
Domain layer - Pure business logic for the case registry.

This layer contains:
- Domain models (MedicalCase, CaseState, CiphertextHandle)
- Domain events (case.created, case.diagnosis_verified)
- Domain exceptions

CRITICAL: This layer must NOT import from application or infrastructure.
Only stdlib and typing imports are allowed.
"""

from casevault.domain.exceptions import CaseVaultError
from casevault.domain.models import CaseState, CiphertextHandle, MedicalCase

__all__: list[str] = [
    "CaseVaultError",
    "CaseState",
    "CiphertextHandle",
    "MedicalCase",
]
