"""ASGI entrypoint: ``uvicorn lostpet.asgi:app``."""

from lostpet.main import create_app

app = create_app()
