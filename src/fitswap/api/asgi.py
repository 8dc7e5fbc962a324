"""ASGI entrypoint for the FitSwap API."""

from fitswap.api.app import create_app
from fitswap.containers import build_container

app = create_app(build_container())
