"""Domain errors for casevault.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from CaseVaultError.
"""

from casevault.domain.errors.authority import (
    AuthorityRejectionError,
    InvalidAttestationError,
    InvalidCiphertextError,
)
from casevault.domain.errors.case import (
    CaseAlreadyExistsError,
    CaseAlreadyVerifiedError,
    CaseNotFoundError,
    CaseRegistryError,
    MalformedInputError,
)

__all__: list[str] = [
    "AuthorityRejectionError",
    "CaseAlreadyExistsError",
    "CaseAlreadyVerifiedError",
    "CaseNotFoundError",
    "CaseRegistryError",
    "InvalidAttestationError",
    "InvalidCiphertextError",
    "MalformedInputError",
]
