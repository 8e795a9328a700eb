"""ASGI entrypoint for the site ledger API."""

from site_ledger.api.app import create_app
from site_ledger.containers import build_container

app = create_app(build_container())
