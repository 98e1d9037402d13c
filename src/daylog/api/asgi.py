"""ASGI entrypoint for the daylog API."""

from daylog.api.app import create_app
from daylog.containers import build_container

app = create_app(build_container())
