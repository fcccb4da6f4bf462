"""Supabase Auth client used to resolve caller identities."""

import logging
from dataclasses import dataclass

import httpx

from pantry_service.domain.profiles import Identity
from pantry_service.services.identity import IdentityClient

logger = logging.getLogger(__name__)


@dataclass
class HttpxIdentityClient(IdentityClient):
    """Resolve access tokens through the Supabase Auth user endpoint."""

    supabase_url: str
    api_key: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, supabase_url: str, api_key: str) -> "HttpxIdentityClient":
        """Create an identity client with a managed httpx session."""
        return cls(
            supabase_url=supabase_url.rstrip("/"),
            api_key=api_key,
            http_client=httpx.AsyncClient(),
        )

    async def get_identity(self, access_token: str) -> Identity | None:
        """Return the user behind an access token, or None if rejected."""
        response = await self.http_client.get(
            f"{self.supabase_url}/auth/v1/user",
            headers={
                "apikey": self.api_key,
                "Authorization": f"Bearer {access_token}",
            },
            timeout=10,
        )
        if response.status_code in {401, 403}:
            logger.info("Access token rejected by identity provider")
            return None
        response.raise_for_status()
        payload = response.json()
        user_id = payload.get("id")
        if not user_id:
            return None
        return Identity(id=str(user_id), email=payload.get("email"))

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
