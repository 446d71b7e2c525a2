"""
FastAPI dependency providers.

The application builds one ``Storage`` in ``create_app`` and keeps it
on ``app.state``; handlers receive it through ``get_storage`` so tests
can run against their own isolated instance.
"""

from fastapi import Request

from ..services.storage import Storage


def get_storage(request: Request) -> Storage:
    """Return the storage attached to the running application."""
    return request.app.state.storage
