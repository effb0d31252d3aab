"""ASGI entrypoint for the FareFit API."""

from farefit.api.app import create_app
from farefit.containers import build_container

app = create_app(build_container())
