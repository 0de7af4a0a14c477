"""Bearer token verification and role-claim handling.

Tokens are minted by the external identity service; this module only
verifies them and turns their claims into a :class:`Principal`.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from salarywatch.core.settings import settings
from salarywatch.services.errors import UnauthenticatedError

PRIVILEGED_ROLES = frozenset({"ADMIN", "MODERATOR"})

# Claim names that may carry the caller's id, in lookup order.
USER_ID_CLAIMS = ("id", "sub")


@dataclass(frozen=True)
class Principal:
    """Authenticated caller resolved from a bearer token."""

    user_id: uuid.UUID
    roles: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_moderator(self) -> bool:
        """Return True when the caller may use moderator-only endpoints."""
        return is_admin_or_moderator(self.roles)


def parse_role_claim(raw: str | None) -> set[str]:
    """Normalize one role claim value into a set of uppercase tokens.

    Accepts ``"ADMIN"``, ``"ADMIN,MODERATOR"`` and ``'["ADMIN","MODERATOR"]'``
    (a JSON array serialized into a string); all three yield the same set.
    """
    if raw is None or not raw.strip():
        return set()
    cleaned = raw.replace("[", "").replace("]", "").replace('"', "").replace("'", "")
    return {token.strip().upper() for token in cleaned.split(",") if token.strip()}


def _is_role_claim(name: str) -> bool:
    lowered = name.lower()
    return lowered in {"role", "roles"} or lowered.endswith("/role")


def extract_roles(claims: Mapping[str, Any]) -> frozenset[str]:
    """Collect every role token from a decoded claim set."""
    roles: set[str] = set()
    for name, value in claims.items():
        if not _is_role_claim(name):
            continue
        values: Iterable[Any] = value if isinstance(value, list | tuple) else [value]
        for item in values:
            if isinstance(item, str):
                roles |= parse_role_claim(item)
    return frozenset(roles)


def is_admin_or_moderator(roles: Iterable[str]) -> bool:
    """Return True iff ``roles`` contains ADMIN or MODERATOR (case-insensitive)."""
    return any(role.upper() in PRIVILEGED_ROLES for role in roles)


def extract_user_id(claims: Mapping[str, Any]) -> uuid.UUID | None:
    """Return the caller's UUID from the ``id`` or ``sub`` claim, if parseable."""
    for name in USER_ID_CLAIMS:
        value = claims.get(name)
        if value is None:
            continue
        try:
            return uuid.UUID(str(value))
        except ValueError:
            return None
    return None


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify a bearer token's signature, expiry, issuer and audience.

    Raises:
        UnauthenticatedError: If the token fails verification.
    """
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={
                "require_exp": True,
                "require_aud": bool(settings.jwt_audience),
                "require_iss": bool(settings.jwt_issuer),
            },
        )
    except JWTError as err:
        raise UnauthenticatedError("Could not validate credentials") from err


def principal_from_token(token: str) -> Principal:
    """Decode ``token`` and resolve the caller it identifies."""
    claims = decode_access_token(token)
    user_id = extract_user_id(claims)
    if user_id is None:
        raise UnauthenticatedError("Invalid token: missing user id claim")
    return Principal(user_id=user_id, roles=extract_roles(claims))


def create_access_token(
    user_id: uuid.UUID | str,
    roles: Iterable[str] | str | None = None,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """Create a signed access token in the identity service's format.

    Used by tooling and tests; production tokens come from the issuer.
    """
    to_encode: dict[str, Any] = {"sub": str(user_id), "id": str(user_id)}
    if roles is not None:
        to_encode["role"] = roles if isinstance(roles, str) else list(roles)
    if settings.jwt_issuer:
        to_encode["iss"] = settings.jwt_issuer
    if settings.jwt_audience:
        to_encode["aud"] = settings.jwt_audience
    if extra_claims:
        to_encode.update(extra_claims)
    to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt
