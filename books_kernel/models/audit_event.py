"""
Module: books_kernel.models.audit_event
Responsibility: ORM persistence for the company-workflow audit trail.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - Audit rows are append-only; AuditorService only ever inserts.
    - Hash chain: hash = H(entity_type | entity_name | action | payload_hash
      | prev_hash).  Validated by AuditorService.validate_chain().
    - seq increases by one per row.

The reporting core never writes audit rows.  They are produced by the
company workflows (create, edit, delete, restore, split year, add year)
and by user/role/master maintenance.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import BigInteger, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from books_kernel.db.base import Base


class AuditAction(str, Enum):
    """Kind of change being recorded."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    STATUS_CHANGE = "STATUS_CHANGE"


class AuditEntityType(str, Enum):
    """Kind of entity the change applies to."""

    USER = "USER"
    ROLE = "ROLE"
    SYSTEM = "SYSTEM"
    COMPANY = "COMPANY"
    VOUCHER = "VOUCHER"
    MASTER = "MASTER"


class AuditEvent(Base):
    """
    One audit trail entry with hash chain linkage.

    Non-goals:
        - This model does NOT enforce hash correctness at INSERT time;
          that is the responsibility of AuditorService.
    """

    __tablename__ = "audit_events"

    __table_args__ = (
        Index("idx_audit_entity", "entity_type", "entity_name"),
        Index("idx_audit_action", "action"),
        Index("idx_audit_seq", "seq"),
    )

    seq: Mapped[int] = mapped_column(BigInteger, nullable=False, unique=True)

    action: Mapped[str] = mapped_column(String(20), nullable=False)

    entity_type: Mapped[str] = mapped_column(String(20), nullable=False)

    entity_name: Mapped[str] = mapped_column(String(255), nullable=False)

    details: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Who performed the action (display identity, e.g. "System Admin")
    actor: Mapped[str] = mapped_column(String(255), nullable=False)

    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    payload_hash: Mapped[str] = mapped_column(String(64), nullable=False)

    # Hash of the previous audit event (null for the first event)
    prev_hash: Mapped[str | None] = mapped_column(String(64), nullable=True)

    hash: Mapped[str] = mapped_column(String(64), nullable=False)

    def __repr__(self) -> str:
        return f"<AuditEvent {self.action} on {self.entity_type}:{self.entity_name}>"

    @property
    def is_genesis(self) -> bool:
        """True for the first event in the hash chain."""
        return self.prev_hash is None
