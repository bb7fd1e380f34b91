"""ASGI target for uvicorn: ``uvicorn backend.main:app``.

Serving options (host, port, reload) are handled by ``main.py`` at the
repository root.
"""

from backend.app_factory import create_app

app = create_app()
