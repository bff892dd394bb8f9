"""Application services for the case registry."""

from casevault.application.services.case_registry_service import CaseRegistryService
from casevault.application.services.keyed_lock import KeyedLock

__all__: list[str] = ["CaseRegistryService", "KeyedLock"]
