"""ASGI entrypoint for the damage detector API."""

from damage_detector.api.app import create_app
from damage_detector.containers import build_container

app = create_app(build_container())
