"""Provision user profiles when identities are created."""

import logging
from dataclasses import dataclass

from pantry_service.domain.documents import SERVER_TIMESTAMP, user_path
from pantry_service.domain.errors import InvalidArgumentError
from pantry_service.domain.profiles import Identity
from pantry_service.services.documents import DocumentStore
from pantry_service.services.events import IDENTITY_CREATED, EventChannel

logger = logging.getLogger(__name__)


@dataclass
class ProvisioningHook:
    """Create the root profile document for a new identity."""

    store: DocumentStore

    def register(self, channel: EventChannel) -> None:
        """Subscribe this hook to identity creation events."""
        channel.subscribe(IDENTITY_CREATED, self.handle_identity_created)

    def handle_identity_created(self, identity: Identity) -> bool:
        """Create the profile if absent and return whether it was created.

        Duplicate deliveries for the same identity leave the existing profile
        untouched, including its original ``onboardDate``.
        """
        if not identity.id:
            raise InvalidArgumentError("Identity id is required")
        created = self.store.create(
            user_path(identity.id),
            {
                "email": identity.email,
                "onboardDate": SERVER_TIMESTAMP,
                "onboarded": False,
                "preferredProviders": {},
            },
        )
        if created:
            logger.info("User profile created for UID: %s", identity.id)
        else:
            logger.info("User profile already exists for UID: %s", identity.id)
        return created
