"""Production adapters for the case registry ports."""

from casevault.infrastructure.adapters.ed25519_attestation_authority import (
    Ed25519AttestationAuthority,
    sign_attestation,
)
from casevault.infrastructure.adapters.in_memory_case_store import InMemoryCaseStore
from casevault.infrastructure.adapters.in_process_event_bus import InProcessEventBus
from casevault.infrastructure.adapters.signed_input_ciphertext_authority import (
    SignedInputCiphertextAuthority,
    sign_input_proof,
)
from casevault.infrastructure.adapters.system_time_authority import SystemTimeAuthority

__all__: list[str] = [
    "Ed25519AttestationAuthority",
    "InMemoryCaseStore",
    "InProcessEventBus",
    "SignedInputCiphertextAuthority",
    "SystemTimeAuthority",
    "sign_attestation",
    "sign_input_proof",
]
