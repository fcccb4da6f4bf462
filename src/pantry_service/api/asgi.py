"""ASGI entrypoint for the pantry service API."""

from pantry_service.api.app import create_app
from pantry_service.containers import build_container

app = create_app(build_container())
