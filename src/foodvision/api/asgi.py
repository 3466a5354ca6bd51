"""ASGI entrypoint for the FoodVision API."""

from foodvision.api.app import create_app
from foodvision.containers import build_container

app = create_app(build_container())
