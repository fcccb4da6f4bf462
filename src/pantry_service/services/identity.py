"""Caller identity resolution."""

from typing import Protocol

from pantry_service.domain.errors import UnauthenticatedError
from pantry_service.domain.profiles import Identity


class IdentityClient(Protocol):
    """Interface for resolving access tokens to identities."""

    async def get_identity(self, access_token: str) -> Identity | None:
        """Return the identity for a token, or None if it is not valid."""


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an Authorization header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def authenticate(client: IdentityClient, authorization: str | None) -> Identity:
    """Resolve the caller identity or raise UnauthenticatedError."""
    token = bearer_token(authorization)
    if token is None:
        raise UnauthenticatedError("User must be logged in")
    identity = await client.get_identity(token)
    if identity is None or not identity.id:
        raise UnauthenticatedError("User must be logged in")
    return identity
