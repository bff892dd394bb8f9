"""Domain models for casevault.

Contains value objects and domain models that represent core registry
concepts. These models are immutable and contain no infrastructure
dependencies.
"""

from casevault.domain.models.case_statistics import CaseStatistics
from casevault.domain.models.cleartext import (
    CLEARTEXT_SIZE,
    UINT32_MAX,
    decode_uint32,
    encode_uint32,
)
from casevault.domain.models.medical_case import (
    CaseState,
    CiphertextHandle,
    MedicalCase,
)

__all__: list[str] = [
    "CLEARTEXT_SIZE",
    "UINT32_MAX",
    "CaseState",
    "CaseStatistics",
    "CiphertextHandle",
    "MedicalCase",
    "decode_uint32",
    "encode_uint32",
]
