"""ASGI entrypoint for the daily menu API."""

from daily_menu.api.app import create_app
from daily_menu.containers import build_container

app = create_app(build_container())
