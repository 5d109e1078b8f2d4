"""ASGI entrypoint for the nutrition scoring API."""

from nutrition_scoring.api.app import create_app
from nutrition_scoring.containers import build_container

app = create_app(build_container())
