"""Shared FastAPI dependencies and error translation."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.auth import AuthContext, get_auth_context
from storefront.application.audit_service import AuditActor
from storefront.catalog.exceptions import (
    CatalogError,
    CatalogValidationError,
    ConflictError,
    NotFoundError,
)
from storefront.catalog.service import CatalogService
from storefront.infrastructure.database import get_session


def client_ip(request: Request) -> str:
    """Client address, preferring proxy headers."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else ""


def get_audit_actor(
    request: Request,
    auth: Annotated[AuthContext, Depends(get_auth_context)],
) -> AuditActor:
    """Build the audit actor for this request."""
    return AuditActor(
        subject=auth.subject,
        ip=client_ip(request),
        user_agent=request.headers.get("user-agent", ""),
    )


def get_catalog_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    actor: Annotated[AuditActor, Depends(get_audit_actor)],
) -> CatalogService:
    """Get catalog service bound to the request session."""
    return CatalogService(session, actor)


def catalog_http_error(exc: CatalogError) -> HTTPException:
    """Translate a catalog exception into an HTTP error.

    Args:
        exc: Raised catalog error.

    Returns:
        HTTPException with the standard error detail.
    """
    if isinstance(exc, NotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ConflictError):
        status_code = status.HTTP_409_CONFLICT
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    details = []
    if isinstance(exc, CatalogValidationError) and exc.field:
        details.append({"field": exc.field, "message": exc.message})

    return HTTPException(
        status_code=status_code,
        detail={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": details,
        },
    )
