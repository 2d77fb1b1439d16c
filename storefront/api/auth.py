"""Request authentication context and role gate.

The auth middleware resolves the ``Authorization`` header once per
request into an immutable :class:`AuthContext`; handlers receive it
through :func:`get_auth_context` and never look at headers themselves.
"""

from dataclasses import dataclass
from enum import Enum

from fastapi import HTTPException, Request, status

from storefront.infrastructure.config import settings


class Role(str, Enum):
    """Roles carried by an authenticated subject."""

    VIEWER = "viewer"
    EDITOR = "editor"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


ADMIN_ROLES = frozenset({Role.ADMIN, Role.SUPERADMIN})


@dataclass(frozen=True)
class AuthContext:
    """Who is calling, resolved at the request boundary.

    Attributes:
        subject: Authenticated subject, None for anonymous callers.
        role: Role granted to the subject.
        failure: Error code when credentials were supplied but rejected.
    """

    subject: str | None = None
    role: Role | None = None
    failure: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.subject is not None and self.role is not None

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    @classmethod
    def anonymous(cls, failure: str | None = None) -> "AuthContext":
        return cls(failure=failure)


def resolve_auth_context(authorization: str | None) -> AuthContext:
    """Resolve an ``Authorization`` header into an auth context.

    Supports ``Authorization: Bearer <api_key>`` with keys configured in
    ``settings.api_keys``.

    Args:
        authorization: Raw header value.

    Returns:
        Authenticated context, or an anonymous one carrying the failure code.
    """
    if not authorization:
        return AuthContext.anonymous()

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return AuthContext.anonymous(failure="UNAUTHORIZED")

    grant = settings.api_keys.get(parts[1].strip())
    if grant is None:
        return AuthContext.anonymous(failure="INVALID_API_KEY")

    try:
        role = Role(grant.role)
    except ValueError:
        return AuthContext.anonymous(failure="INVALID_API_KEY")

    return AuthContext(subject=grant.subject, role=role)


def get_auth_context(request: Request) -> AuthContext:
    """Get the auth context populated by the auth middleware."""
    context = getattr(request.state, "auth", None)
    if context is None:
        # Outside the middleware stack (e.g. a bare router under test).
        context = resolve_auth_context(request.headers.get("Authorization"))
    return context


def require_admin(request: Request) -> AuthContext:
    """Dependency gating the admin surface to admin and superadmin roles.

    Raises:
        HTTPException: 401 without valid credentials, 403 for other roles.
    """
    context = get_auth_context(request)

    if not context.is_authenticated:
        error_code = context.failure or "UNAUTHORIZED"
        message = (
            "Invalid API key"
            if error_code == "INVALID_API_KEY"
            else "Missing or malformed Authorization header. Use 'Bearer <api_key>'"
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error_code": error_code, "message": message},
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not context.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error_code": "FORBIDDEN",
                "message": f"Role '{context.role.value}' cannot access the admin API",
            },
        )

    return context
