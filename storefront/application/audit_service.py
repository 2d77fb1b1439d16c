"""Audit trail application service.

Records who changed which catalog entity, from where, and what changed.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.infrastructure.models import AuditLog

logger = structlog.get_logger()


@dataclass(frozen=True)
class AuditActor:
    """Who performed a mutation, captured once at the request boundary.

    Attributes:
        subject: Authenticated subject (e.g. admin email), if any.
        ip: Client address from ``X-Forwarded-For`` / ``X-Real-IP``.
        user_agent: Client ``User-Agent`` header.
    """

    subject: str | None = None
    ip: str = ""
    user_agent: str = ""

    @classmethod
    def system(cls) -> "AuditActor":
        """Actor for scripts and tests running outside a request."""
        return cls(subject="system")


def _jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


class AuditService:
    """Writes audit entries in the caller's session."""

    def __init__(self, session: AsyncSession, actor: AuditActor | None = None) -> None:
        """Initialize service.

        Args:
            session: Session shared with the mutation being recorded.
            actor: Who is performing mutations in this request.
        """
        self.session = session
        self.actor = actor or AuditActor()

    async def record(
        self,
        entity: str,
        entity_id: str,
        action: str,
        diff: dict[str, Any] | None = None,
    ) -> AuditLog:
        """Record one audit entry.

        Args:
            entity: Entity type ("product" or "category").
            entity_id: ID of the changed row.
            action: "create", "update" or "delete".
            diff: Changed fields and their new values.

        Returns:
            The pending audit row.
        """
        entry = AuditLog(
            actor=self.actor.subject,
            entity=entity,
            entity_id=entity_id,
            action=action,
            diff=_jsonable(diff) if diff is not None else None,
            ip=self.actor.ip,
            user_agent=self.actor.user_agent,
        )
        self.session.add(entry)
        await self.session.flush()

        logger.info(
            "Audit entry recorded",
            entity=entity,
            entity_id=entity_id,
            action=action,
            actor=self.actor.subject,
        )
        return entry
