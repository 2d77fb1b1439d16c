"""Application layer module.

Contains application services shared across the catalog use cases.
"""

from storefront.application.audit_service import AuditActor, AuditService

__all__ = [
    "AuditActor",
    "AuditService",
]
