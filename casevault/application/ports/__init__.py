"""Application ports - abstract interfaces for infrastructure.

Ports define the contracts the registry consumes. Infrastructure provides
adapters (production) and stubs (tests) that implement them.
"""

from casevault.application.ports.attestation_authority import (
    AttestationAuthorityProtocol,
)
from casevault.application.ports.case_store import CaseMutator, CaseStoreProtocol
from casevault.application.ports.ciphertext_authority import (
    CiphertextAuthorityProtocol,
    OwnerContext,
)
from casevault.application.ports.event_sink import EventSinkProtocol, EventSubscriber
from casevault.application.ports.registry_metrics import RegistryMetricsPort
from casevault.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "AttestationAuthorityProtocol",
    "CaseMutator",
    "CaseStoreProtocol",
    "CiphertextAuthorityProtocol",
    "EventSinkProtocol",
    "EventSubscriber",
    "OwnerContext",
    "RegistryMetricsPort",
    "TimeAuthorityProtocol",
]
