"""Case Registry Service.

This service orchestrates the confidential case lifecycle against the
ciphertext authority, the attestation authority and the case store.

Registry Rules:
- A case id is admitted once; duplicates fail before any external call
- CREATED -> VERIFIED is the only transition; VERIFIED is terminal
- Authority calls run outside the per-case lock; guards are re-checked
  under the lock before committing
- Validate before mutating: a failed call leaves no observable change
- Events are published only after the store write lands

Developer Golden Rules:
1. GUARD FIRST - cheap local checks before slow authority calls
2. FAIL LOUD - raise domain errors, never return sentinel values
3. LOG EVERYTHING - all operations have structured logging
4. EVENT AFTER SAVE - emit only after successful persistence
5. SUBSCRIBERS NEVER FAIL A TRANSITION - emission errors are logged

Verification is permissionless: any caller holding a valid attestation may
verify any case, not only its author. Handles are made publicly decryptable
at creation, so disclosure can happen before any review step.
"""

from __future__ import annotations

import structlog

from casevault.application.ports.attestation_authority import (
    AttestationAuthorityProtocol,
)
from casevault.application.ports.case_store import CaseStoreProtocol
from casevault.application.ports.ciphertext_authority import (
    CiphertextAuthorityProtocol,
    OwnerContext,
)
from casevault.application.ports.event_sink import EventSinkProtocol
from casevault.application.ports.registry_metrics import RegistryMetricsPort
from casevault.application.ports.time_authority import TimeAuthorityProtocol
from casevault.application.services.base import LoggingMixin
from casevault.application.services.keyed_lock import KeyedLock
from casevault.domain.errors import (
    CaseAlreadyExistsError,
    CaseAlreadyVerifiedError,
    CaseNotFoundError,
    InvalidAttestationError,
    InvalidCiphertextError,
    MalformedInputError,
)
from casevault.domain.events.case import (
    CaseCreatedEvent,
    CaseEvent,
    DiagnosisVerifiedEvent,
)
from casevault.domain.models.case_statistics import CaseStatistics
from casevault.domain.models.cleartext import decode_uint32
from casevault.domain.models.medical_case import CiphertextHandle, MedicalCase

OPERATION_CREATE = "create"
OPERATION_VERIFY = "verify"


class CaseRegistryService(LoggingMixin):
    """Registry of confidential medical cases.

    Create flow:
    1. Reject duplicate case_id (before any external call)
    2. Admit the ciphertext; grant registry access; allow public disclosure
    3. Under the case lock: build the CREATED record and insert it
       (insert re-checks uniqueness against concurrent creators)
    4. Publish CaseCreatedEvent

    Verify flow:
    1. Fetch the case; reject if absent or already VERIFIED
    2. Verify the attestation against the stored handle
    3. Decode the cleartext as uint32
    4. Under the case lock: re-check not-yet-verified and commit
    5. Publish DiagnosisVerifiedEvent

    Attributes:
        _store: Case store (sole shared mutable state).
        _ciphertext_authority: Admits ciphertexts and manages access.
        _attestation_authority: Checks decryption attestations.
        _event_sink: Receives case lifecycle events.
        _time: Time authority for created_at and event timestamps.
        _registry_id: Identity the ciphertexts are bound to.
        _metrics: Optional operational metrics.
        _locks: Per-case-id write locks.
    """

    def __init__(
        self,
        store: CaseStoreProtocol,
        ciphertext_authority: CiphertextAuthorityProtocol,
        attestation_authority: AttestationAuthorityProtocol,
        event_sink: EventSinkProtocol,
        time_authority: TimeAuthorityProtocol,
        registry_id: str,
        metrics: RegistryMetricsPort | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            store: Case store shared by all registry operations.
            ciphertext_authority: Ciphertext admission capability.
            attestation_authority: Attestation verification capability.
            event_sink: Event publication target.
            time_authority: Source of UTC timestamps.
            registry_id: Identity ciphertexts must be bound to.
            metrics: Optional metrics recorder. If None, metrics are skipped.
        """
        self._store = store
        self._ciphertext_authority = ciphertext_authority
        self._attestation_authority = attestation_authority
        self._event_sink = event_sink
        self._time = time_authority
        self._registry_id = registry_id
        self._metrics = metrics
        self._locks = KeyedLock()
        self._init_logger(component="registry", registry_id=registry_id)

    @property
    def registry_id(self) -> str:
        """Identity ciphertexts are bound to on admission."""
        return self._registry_id

    async def create_case(
        self,
        case_id: str,
        patient_id: str,
        ciphertext: bytes,
        proof: bytes,
        numeric_case_identifier: int,
        medical_history: str,
        author: str,
    ) -> MedicalCase:
        """Create a new case holding an encrypted diagnosis.

        Args:
            case_id: Unique caller-assigned id.
            patient_id: Opaque patient identifier.
            ciphertext: Encrypted 32-bit diagnosis value.
            proof: Input proof binding the ciphertext to this registry and author.
            numeric_case_identifier: Caller-supplied secondary id.
            medical_history: Free text.
            author: Caller identity of this request.

        Returns:
            The stored case in CREATED state.

        Raises:
            CaseAlreadyExistsError: If case_id is taken (before or after admission).
            InvalidCiphertextError: If the authority rejects the ciphertext.
        """
        log = self._log_operation(
            "create_case",
            case_id=case_id,
            author=author,
            ciphertext_length=len(ciphertext),
            proof_length=len(proof),
        )
        log.info("create_started")
        started = self._time.monotonic()

        # GUARD FIRST: avoid wasted admission work on a taken id
        if await self._store.contains(case_id):
            log.warning("create_rejected", reason="already_exists")
            self._record_rejection(OPERATION_CREATE, CaseAlreadyExistsError)
            raise CaseAlreadyExistsError(case_id)

        owner = OwnerContext(registry_id=self._registry_id, author=author)
        try:
            handle = await self._ciphertext_authority.admit(ciphertext, proof, owner)
            await self._ciphertext_authority.grant_registry_access(handle)
            await self._ciphertext_authority.allow_public_disclosure(handle)
        except InvalidCiphertextError as e:
            log.warning("create_rejected", reason="invalid_ciphertext", detail=e.reason)
            self._record_rejection(OPERATION_CREATE, InvalidCiphertextError)
            raise
        log.debug("ciphertext_admitted", handle_prefix=handle.hex()[:16])

        async with self._locks.hold(case_id):
            record = MedicalCase(
                case_id=case_id,
                patient_id=patient_id,
                ciphertext_handle=handle,
                numeric_case_identifier=numeric_case_identifier,
                medical_history=medical_history,
                author=author,
                created_at=self._time.utcnow(),
            )
            try:
                await self._store.insert(case_id, record)
            except CaseAlreadyExistsError:
                log.warning("create_rejected", reason="already_exists_after_admission")
                self._record_rejection(OPERATION_CREATE, CaseAlreadyExistsError)
                raise

        if self._metrics is not None:
            self._metrics.record_case_created()
        log.info("create_completed", duration_ms=self._elapsed_ms(started))

        await self._emit(
            CaseCreatedEvent(
                case_id=case_id,
                author=author,
                occurred_at=record.created_at,
            ),
            log,
        )
        return record

    async def verify_diagnosis(
        self,
        case_id: str,
        claimed_cleartext: bytes,
        proof: bytes,
    ) -> MedicalCase:
        """Verify and disclose a case's diagnosis value.

        Any caller may verify any case; there is no ownership check.

        Args:
            case_id: The case to verify.
            claimed_cleartext: Four-byte big-endian uint32 as attested.
            proof: Signed attestation over the case handle and cleartext.

        Returns:
            The stored case in VERIFIED state.

        Raises:
            CaseNotFoundError: If case_id was never created.
            CaseAlreadyVerifiedError: If the case is already verified
                (before or after attestation).
            InvalidAttestationError: If the attestation does not verify.
            MalformedInputError: If the cleartext is not a uint32 encoding.
        """
        log = self._log_operation(
            "verify_diagnosis",
            case_id=case_id,
            proof_length=len(proof),
        )
        log.info("verify_started")
        started = self._time.monotonic()

        try:
            record = await self._store.get(case_id)
        except CaseNotFoundError:
            log.warning("verify_rejected", reason="not_found")
            self._record_rejection(OPERATION_VERIFY, CaseNotFoundError)
            raise

        if record.is_verified:
            log.warning("verify_rejected", reason="already_verified")
            self._record_rejection(OPERATION_VERIFY, CaseAlreadyVerifiedError)
            raise CaseAlreadyVerifiedError(case_id)

        try:
            await self._attestation_authority.verify(
                record.ciphertext_handle, claimed_cleartext, proof
            )
        except InvalidAttestationError as e:
            log.warning("verify_rejected", reason="invalid_attestation", detail=e.reason)
            self._record_rejection(OPERATION_VERIFY, InvalidAttestationError)
            raise

        try:
            value = decode_uint32(claimed_cleartext)
        except MalformedInputError as e:
            log.warning("verify_rejected", reason="malformed_cleartext", detail=e.reason)
            self._record_rejection(OPERATION_VERIFY, MalformedInputError)
            raise

        async with self._locks.hold(case_id):
            try:
                # mark_verified re-checks the guard against concurrent verifiers
                updated = await self._store.update(
                    case_id, lambda current: current.mark_verified(value)
                )
            except CaseAlreadyVerifiedError:
                log.warning("verify_rejected", reason="already_verified_after_attestation")
                self._record_rejection(OPERATION_VERIFY, CaseAlreadyVerifiedError)
                raise

        if self._metrics is not None:
            self._metrics.record_verification("verified")
        log.info(
            "verify_completed",
            decrypted_value=value,
            duration_ms=self._elapsed_ms(started),
        )

        await self._emit(
            DiagnosisVerifiedEvent(
                case_id=case_id,
                decrypted_value=value,
                occurred_at=self._time.utcnow(),
            ),
            log,
        )
        return updated

    async def get_case(self, case_id: str) -> MedicalCase:
        """Return a case by id.

        Raises:
            CaseNotFoundError: If case_id was never created.
        """
        return await self._store.get(case_id)

    async def get_ciphertext_handle(self, case_id: str) -> CiphertextHandle:
        """Return the encrypted diagnosis handle of a case.

        Raises:
            CaseNotFoundError: If case_id was never created.
        """
        record = await self._store.get(case_id)
        return record.ciphertext_handle

    async def list_case_ids(self) -> list[str]:
        """Return every case id in creation order (empty if none)."""
        return await self._store.list_ids()

    async def get_statistics(self) -> CaseStatistics:
        """Return total and verified case counts."""
        cases = await self._all_cases()
        return CaseStatistics(
            total_cases=len(cases),
            verified_cases=sum(1 for case in cases if case.is_verified),
        )

    async def search_cases(self, term: str) -> list[MedicalCase]:
        """Return cases whose patient id or history contains term.

        Matching is case-insensitive; results keep creation order.
        """
        return [case for case in await self._all_cases() if case.matches(term)]

    def is_available(self) -> bool:
        """Liveness check. Always True; no side effects."""
        return True

    async def _all_cases(self) -> list[MedicalCase]:
        return [await self._store.get(case_id) for case_id in await self._store.list_ids()]

    async def _emit(self, event: CaseEvent, log: structlog.BoundLogger) -> None:
        """Publish an event; failures are logged and never undo the commit."""
        try:
            await self._event_sink.publish(event)
        except Exception as e:
            log.error(
                "event_emission_failed",
                event_type=event.event_type,
                error=str(e),
                error_type=type(e).__name__,
            )
            return
        log.debug("event_emitted", event_type=event.event_type)

    def _record_rejection(self, operation: str, error: type[Exception]) -> None:
        if self._metrics is None:
            return
        self._metrics.record_rejection(operation, error.__name__)
        if operation == OPERATION_VERIFY:
            self._metrics.record_verification("rejected")

    def _elapsed_ms(self, started: float) -> float:
        return round((self._time.monotonic() - started) * 1000, 3)
