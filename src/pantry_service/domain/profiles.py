"""Domain models for identities and user profiles."""

from dataclasses import dataclass, field
from datetime import datetime

from pantry_service.domain.documents import Document, parse_timestamp


@dataclass(frozen=True)
class Identity:
    """An authenticated principal as reported by the identity provider."""

    id: str
    email: str | None = None


@dataclass(frozen=True)
class UserProfile:
    """Root profile document stored per identity."""

    id: str
    email: str | None
    onboard_date: datetime | None
    onboarded: bool = False
    preferred_providers: dict[str, object] = field(default_factory=dict)


def parse_profile(document: Document) -> UserProfile:
    """Parse a profile document into a domain model."""
    data = document.data
    providers = data.get("preferredProviders")
    return UserProfile(
        id=document.id,
        email=data.get("email"),
        onboard_date=parse_timestamp(data.get("onboardDate")),
        onboarded=bool(data.get("onboarded", False)),
        preferred_providers=dict(providers) if isinstance(providers, dict) else {},
    )
