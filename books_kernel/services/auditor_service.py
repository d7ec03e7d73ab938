"""
AuditorService -- tamper-evident audit trail for company workflows.

Responsibility:
    Creates hash-chained audit rows for every mutation performed by the
    company management workflows (create, edit, delete, restore, split
    year, add year) and by user/role/master maintenance.  Provides chain
    validation for tamper detection.

Architecture position:
    Kernel > Services -- imperative shell.  The report generators never
    call this service; reporting is read-only.

Invariants enforced:
    - Append-only: rows are inserted, never updated or deleted.
    - Chain integrity: ``hash = H(entity_type | entity_name | action |
      payload_hash | prev_hash)``.  Each row links to its predecessor.
    - ``seq`` increases by one per row.

Failure modes:
    - AuditChainBrokenError: a recomputed payload hash or row hash does
      not match the stored value, or prev_hash does not match the
      predecessor's hash.
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from books_kernel.domain.clock import Clock, SystemClock
from books_kernel.exceptions import AuditChainBrokenError
from books_kernel.logging_config import get_logger
from books_kernel.models.audit_event import AuditAction, AuditEntityType, AuditEvent
from books_kernel.utils.hashing import hash_audit_event, hash_payload

logger = get_logger("services.auditor")

DEFAULT_ACTOR = "System Admin"


def _enum_value(value: Any) -> str:
    return value.value if hasattr(value, "value") else str(value)


def _as_utc(moment: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are always UTC.
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _payload_hash(details: str, actor: str, occurred_at: datetime) -> str:
    return hash_payload(
        {
            "details": details,
            "actor": actor,
            "occurred_at": _as_utc(occurred_at),
        }
    )


class AuditorService:
    """
    Service for creating and validating tamper-evident audit entries.

    Non-goals:
        - Does NOT call ``session.commit()`` -- caller controls boundaries.
        - Does NOT interpret audit entries (that is review tooling).
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()

    def _get_last_event(self) -> AuditEvent | None:
        return self._session.execute(
            select(AuditEvent)
            .order_by(AuditEvent.seq.desc())
            .limit(1)
        ).scalar_one_or_none()

    def _next_seq(self) -> int:
        current = self._session.execute(
            select(func.max(AuditEvent.seq))
        ).scalar_one_or_none()
        return (current or 0) + 1

    def record(
        self,
        action: AuditAction | str,
        entity_type: AuditEntityType | str,
        entity_name: str,
        details: str = "",
        actor: str = DEFAULT_ACTOR,
    ) -> AuditEvent:
        """
        Append one audit entry with hash chain linkage.

        Postconditions:
            - A new ``AuditEvent`` row is flushed to the session with
              ``seq`` one above the current maximum.
            - ``event.hash == H(entity_type, entity_name, action,
              payload_hash, prev_hash)``.

        Returns:
            The created AuditEvent.
        """
        action_value = _enum_value(action)
        entity_type_value = _enum_value(entity_type)

        last_event = self._get_last_event()
        prev_hash = last_event.hash if last_event else None
        seq = self._next_seq()
        occurred_at = _as_utc(self._clock.now())

        payload_hash = _payload_hash(details, actor, occurred_at)
        event_hash = hash_audit_event(
            entity_type=entity_type_value,
            entity_name=entity_name,
            action=action_value,
            payload_hash=payload_hash,
            prev_hash=prev_hash,
        )

        audit_event = AuditEvent(
            seq=seq,
            action=action_value,
            entity_type=entity_type_value,
            entity_name=entity_name,
            details=details,
            actor=actor,
            occurred_at=occurred_at,
            payload_hash=payload_hash,
            prev_hash=prev_hash,
            hash=event_hash,
        )
        self._session.add(audit_event)
        self._session.flush()

        logger.info(
            "audit_event_created",
            extra={
                "seq": seq,
                "action": action_value,
                "entity_type": entity_type_value,
                "entity_name": entity_name,
                "actor": actor,
            },
        )
        return audit_event

    # Company workflow helpers

    def record_company_created(
        self, company_name: str, actor: str = DEFAULT_ACTOR,
    ) -> AuditEvent:
        return self.record(
            AuditAction.CREATE,
            AuditEntityType.COMPANY,
            company_name,
            f"Created company profile {company_name}",
            actor,
        )

    def record_company_updated(
        self, company_name: str, details: str = "", actor: str = DEFAULT_ACTOR,
    ) -> AuditEvent:
        return self.record(
            AuditAction.UPDATE,
            AuditEntityType.COMPANY,
            company_name,
            details or f"Updated company profile {company_name}",
            actor,
        )

    def record_company_deleted(
        self, company_name: str, actor: str = DEFAULT_ACTOR,
    ) -> AuditEvent:
        return self.record(
            AuditAction.DELETE,
            AuditEntityType.COMPANY,
            company_name,
            f"Deleted company profile {company_name}",
            actor,
        )

    def record_company_restored(
        self, company_name: str, source: str = "", actor: str = DEFAULT_ACTOR,
    ) -> AuditEvent:
        details = f"Restored company {company_name}"
        if source:
            details = f"{details} from {source}"
        return self.record(
            AuditAction.STATUS_CHANGE,
            AuditEntityType.COMPANY,
            company_name,
            details,
            actor,
        )

    def record_year_split(
        self,
        company_name: str,
        split_date: str,
        new_company_name: str,
        actor: str = DEFAULT_ACTOR,
    ) -> AuditEvent:
        """Split a company's books at ``split_date`` into a new company."""
        return self.record(
            AuditAction.CREATE,
            AuditEntityType.COMPANY,
            new_company_name,
            f"Split {company_name} at {split_date} into {new_company_name}",
            actor,
        )

    def record_year_added(
        self, company_name: str, financial_year: str, actor: str = DEFAULT_ACTOR,
    ) -> AuditEvent:
        return self.record(
            AuditAction.UPDATE,
            AuditEntityType.COMPANY,
            company_name,
            f"Added financial year {financial_year}",
            actor,
        )

    # Queries and validation

    def list_entries(self, limit: int | None = None) -> list[AuditEvent]:
        """
        Audit entries, most recent first.

        Args:
            limit: Maximum number of entries to return; None returns all.
        """
        query = select(AuditEvent).order_by(AuditEvent.seq.desc())
        if limit is not None:
            query = query.limit(limit)
        return list(self._session.execute(query).scalars().all())

    def validate_chain(self) -> bool:
        """
        Validate the entire audit hash chain.

        Returns:
            True if the chain is valid.

        Raises:
            AuditChainBrokenError: If any hash or linkage is invalid.
        """
        events = self._session.execute(
            select(AuditEvent).order_by(AuditEvent.seq)
        ).scalars().all()

        for i, event in enumerate(events):
            expected_payload = _payload_hash(
                event.details, event.actor, event.occurred_at
            )
            if event.payload_hash != expected_payload:
                logger.critical("audit_chain_broken", extra={"seq": event.seq})
                raise AuditChainBrokenError(
                    event.seq, expected_payload, event.payload_hash
                )

            expected_hash = hash_audit_event(
                entity_type=event.entity_type,
                entity_name=event.entity_name,
                action=event.action,
                payload_hash=event.payload_hash,
                prev_hash=event.prev_hash,
            )
            if event.hash != expected_hash:
                logger.critical("audit_chain_broken", extra={"seq": event.seq})
                raise AuditChainBrokenError(event.seq, expected_hash, event.hash)

            if i > 0:
                expected_prev = events[i - 1].hash
                if event.prev_hash != expected_prev:
                    logger.critical("audit_chain_broken", extra={"seq": event.seq})
                    raise AuditChainBrokenError(
                        event.seq,
                        expected_prev,
                        event.prev_hash or "None",
                    )
            elif event.prev_hash is not None:
                logger.critical("audit_chain_broken", extra={"seq": event.seq})
                raise AuditChainBrokenError(event.seq, "GENESIS", event.prev_hash)

        logger.info(
            "audit_chain_valid",
            extra={"event_count": len(events)},
        )
        return True
