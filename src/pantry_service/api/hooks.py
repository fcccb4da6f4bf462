"""Identity lifecycle webhook endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from pantry_service.api.rpc_models import IdentityWebhookPayload
from pantry_service.domain.profiles import Identity
from pantry_service.services.events import IDENTITY_CREATED

if TYPE_CHECKING:
    from pantry_service.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hooks", tags=["hooks"])

IDENTITY_SCHEMA = "auth"
IDENTITY_TABLE = "users"


def _get_webhook_secret(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.identity_webhook_secret


async def require_webhook_secret(
    x_webhook_secret: str | None = Header(default=None),
    webhook_secret: str = Depends(_get_webhook_secret),
) -> None:
    """Ensure requests come from the identity provider."""
    if not x_webhook_secret or x_webhook_secret != webhook_secret:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def _is_identity_insert(payload: IdentityWebhookPayload) -> bool:
    return (
        payload.type.upper() == "INSERT"
        and payload.db_schema == IDENTITY_SCHEMA
        and payload.table == IDENTITY_TABLE
        and payload.record is not None
        and bool(payload.record.id)
    )


@router.post("/identity-created", dependencies=[Depends(require_webhook_secret)])
async def identity_created(
    payload: IdentityWebhookPayload, request: Request
) -> dict[str, str]:
    """Publish an identity creation event for a newly inserted auth user."""
    if not _is_identity_insert(payload):
        logger.info(
            "Ignoring %s event on %s.%s", payload.type, payload.db_schema, payload.table
        )
        return {"status": "ignored"}
    container: AppContainer = request.app.state.container
    identity = Identity(id=payload.record.id, email=payload.record.email)
    try:
        container.event_channel.publish(IDENTITY_CREATED, identity)
    except Exception:
        logger.exception("Provisioning failed for UID: %s", identity.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        ) from None
    return {"status": "ok"}
