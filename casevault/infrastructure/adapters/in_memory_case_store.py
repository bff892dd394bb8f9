"""In-memory case store adapter.

Implements CaseStoreProtocol with a dict keyed by case_id plus an
append-only list of ids in insertion order.

Store Rules:
- insert() lands the map entry and the index entry in one step
- The index never holds duplicates and never shrinks
- update() refuses successors that touch immutable fields or un-verify
"""

from __future__ import annotations

import asyncio
from dataclasses import fields

from casevault.application.ports.case_store import CaseMutator, CaseStoreProtocol
from casevault.domain.errors.case import CaseAlreadyExistsError, CaseNotFoundError
from casevault.domain.models.medical_case import MedicalCase

# Fields a committed transition may change
MUTABLE_FIELDS: frozenset[str] = frozenset({"decrypted_value", "is_verified"})


class InMemoryCaseStore(CaseStoreProtocol):
    """In-memory implementation of CaseStoreProtocol.

    Suitable for single-process deployments and tests. Durability beyond the
    process lifetime is out of scope for this adapter.

    Attributes:
        _cases: Mapping of case_id to the current MedicalCase.
        _order: Case ids in insertion order.
        _write_lock: Serializes writes so map and index move together.
    """

    def __init__(self) -> None:
        """Initialize the store with empty storage."""
        self._cases: dict[str, MedicalCase] = {}
        self._order: list[str] = []
        self._write_lock = asyncio.Lock()

    async def insert(self, case_id: str, record: MedicalCase) -> None:
        """Store a new case and append its id to the index.

        Raises:
            CaseAlreadyExistsError: If case_id is already present.
            ValueError: If case_id does not match record.case_id.
        """
        if record.case_id != case_id:
            raise ValueError(
                f"Record case_id {record.case_id!r} does not match key {case_id!r}"
            )
        async with self._write_lock:
            if case_id in self._cases:
                raise CaseAlreadyExistsError(case_id)
            self._cases[case_id] = record
            self._order.append(case_id)

    async def get(self, case_id: str) -> MedicalCase:
        """Retrieve a case by id.

        Raises:
            CaseNotFoundError: If case_id is absent.
        """
        record = self._cases.get(case_id)
        if record is None:
            raise CaseNotFoundError(case_id)
        return record

    async def contains(self, case_id: str) -> bool:
        """Check whether case_id is present."""
        return case_id in self._cases

    async def update(self, case_id: str, mutator: CaseMutator) -> MedicalCase:
        """Replace a stored case with the mutator's successor.

        Exceptions raised by the mutator propagate and leave the stored
        record untouched.

        Raises:
            CaseNotFoundError: If case_id is absent.
            ValueError: If the successor changes an immutable field or
                resets is_verified.
        """
        async with self._write_lock:
            current = self._cases.get(case_id)
            if current is None:
                raise CaseNotFoundError(case_id)
            successor = mutator(current)
            _check_successor(current, successor)
            self._cases[case_id] = successor
            return successor

    async def list_ids(self) -> list[str]:
        """Return the case ids in insertion order (a fresh list)."""
        return list(self._order)

    def __len__(self) -> int:
        return len(self._order)


def _check_successor(current: MedicalCase, successor: MedicalCase) -> None:
    for field in fields(MedicalCase):
        if field.name in MUTABLE_FIELDS:
            continue
        if getattr(current, field.name) != getattr(successor, field.name):
            raise ValueError(f"Field {field.name!r} of case {current.case_id} is immutable")
    if current.is_verified and not successor.is_verified:
        raise ValueError(f"Case {current.case_id} cannot leave VERIFIED state")
    if current.is_verified and successor.decrypted_value != current.decrypted_value:
        raise ValueError(f"Verified value of case {current.case_id} is immutable")
