"""Case store port.

This module defines the abstract interface for the registry's durable keyed
map of case_id -> MedicalCase plus its append-only ordered index of case ids.

Store Rules:
1. NO REUSE - insert() rejects any case_id ever inserted
2. ATOMIC INSERT - map entry and index entry land together or not at all
3. NO DELETION - there is no remove operation
4. FAIL LOUD - missing keys raise, they never return None
5. LEGALITY IS THE CALLER'S JOB - update() applies what it is given; the
   registry establishes the transition is legal before calling it
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from casevault.domain.models.medical_case import MedicalCase

CaseMutator = Callable[[MedicalCase], MedicalCase]


class CaseStoreProtocol(Protocol):
    """Protocol for case storage operations.

    Implementations may use in-memory storage, a database, or other
    backends. The store is the only mutable state shared by registry
    operations.

    Methods:
        insert: Store a new case and append its id to the index
        get: Retrieve a case by id
        contains: Check whether a case id was ever inserted
        update: Replace a stored case with the mutator's result
        list_ids: Ordered case ids in insertion order
    """

    async def insert(self, case_id: str, record: MedicalCase) -> None:
        """Store a new case.

        Args:
            case_id: Primary key; must equal record.case_id.
            record: The case to store.

        Raises:
            CaseAlreadyExistsError: If case_id is already present.
        """
        ...

    async def get(self, case_id: str) -> MedicalCase:
        """Retrieve a case by id.

        Args:
            case_id: The case to fetch.

        Returns:
            The stored case.

        Raises:
            CaseNotFoundError: If case_id is absent.
        """
        ...

    async def contains(self, case_id: str) -> bool:
        """Check whether case_id is present."""
        ...

    async def update(self, case_id: str, mutator: CaseMutator) -> MedicalCase:
        """Apply a mutation to a stored case.

        The mutator receives the current record and returns its successor,
        which replaces the stored record in a single step.

        Args:
            case_id: The case to update.
            mutator: Function producing the successor record.

        Returns:
            The stored successor record.

        Raises:
            CaseNotFoundError: If case_id is absent.
        """
        ...

    async def list_ids(self) -> list[str]:
        """Return the case ids in insertion order.

        Returns:
            A fresh list; mutating it does not affect the store.
        """
        ...
