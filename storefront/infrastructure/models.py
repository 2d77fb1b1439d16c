"""SQLAlchemy models for infrastructure tables.

Provides the ORM model for the admin audit trail.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, String

from storefront.infrastructure.database import Base


class AuditLog(Base):
    """Audit trail entry for an admin mutation.

    One row per create/update/delete on a catalog entity, written in the
    same session as the mutation itself.
    """

    __tablename__ = "audit_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    actor = Column(String(255), nullable=True, index=True)
    entity = Column(String(50), nullable=False, index=True)
    entity_id = Column(String(36), nullable=False, index=True)
    action = Column(String(20), nullable=False)
    diff = Column(JSON, nullable=True)
    ip = Column(String(100), nullable=False, default="")
    user_agent = Column(String(500), nullable=False, default="")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
