"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from pantry_service.adapters.supabase_document_store import SupabaseDocumentStore
from pantry_service.adapters.supabase_identity_client import HttpxIdentityClient
from pantry_service.config import Settings
from pantry_service.services.documents import DocumentStore
from pantry_service.services.events import EventChannel
from pantry_service.services.identity import IdentityClient
from pantry_service.services.pantry import PantryService
from pantry_service.services.provisioning import ProvisioningHook
from pantry_service.services.shopping_lists import ShoppingListService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    document_store: DocumentStore
    identity_client: IdentityClient
    event_channel: EventChannel
    provisioning_hook: ProvisioningHook
    pantry_service: PantryService
    shopping_list_service: ShoppingListService
    close_resources: Callable[[], Awaitable[None]]


def build_services(
    settings: Settings,
    document_store: DocumentStore,
    identity_client: IdentityClient,
    close_resources: Callable[[], Awaitable[None]],
) -> AppContainer:
    """Wire services around an already-built store and identity client."""
    event_channel = EventChannel()
    provisioning_hook = ProvisioningHook(document_store)
    provisioning_hook.register(event_channel)
    return AppContainer(
        settings=settings,
        document_store=document_store,
        identity_client=identity_client,
        event_channel=event_channel,
        provisioning_hook=provisioning_hook,
        pantry_service=PantryService(document_store),
        shopping_list_service=ShoppingListService(
            document_store, remove_max_attempts=settings.remove_max_attempts
        ),
        close_resources=close_resources,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    document_store = SupabaseDocumentStore(supabase_client)
    identity_client = HttpxIdentityClient.create(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )

    async def close_resources() -> None:
        await identity_client.close()

    return build_services(
        resolved_settings, document_store, identity_client, close_resources
    )
