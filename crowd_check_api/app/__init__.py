"""
Application package initializer.

The project is split into a storage core (``core.store``), the crowd,
location, review and favorite services built on top of it
(``services``), pydantic shapes for every entity (``schemas``) and a
thin versioned HTTP layer (``api/v1``).  The services never reach for
a global store; the application builds one ``Storage`` instance and
hands it to the request layer through ``app.state``.
"""

from .main import app  # noqa: F401
