from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from src.application.errors import AuthError, PermissionDenied
from src.domain.value_objects.role import Role


@dataclass(slots=True)
class AuthContext:
    user_id: UUID
    role: Role
    claims: dict[str, Any]


def context_from_claims(claims: dict[str, Any]) -> AuthContext:
    subject = claims.get("sub")
    if not subject:
        raise AuthError("Token missing subject")
    try:
        user_id = UUID(str(subject))
    except ValueError as exc:
        raise AuthError("Token subject is not a valid UUID") from exc
    if claims.get("typ", "access") != "access":
        raise AuthError("Token is not an access token")
    try:
        role = Role(str(claims.get("role", "")).upper())
    except ValueError as exc:
        raise PermissionDenied("Token carries no recognised role") from exc
    return AuthContext(user_id=user_id, role=role, claims=claims)
