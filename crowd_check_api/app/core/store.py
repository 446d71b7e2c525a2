"""
Entity store: keyed collections and identifier generation.

``EntityStore`` is the capability set every backend must provide for
the six entity kinds (users, locations, crowd-level samples, check-ins,
reviews and favorites).  ``MemoryEntityStore`` keeps everything in
process memory; a durable backend (SQLite, Postgres, a document store)
can implement the same methods without touching the services above it.

Backends must honour two guarantees:

* identifiers are positive integers assigned in strictly increasing
  order per kind, starting at 1 and never reused, even under
  concurrent inserts;
* ``transaction(kind)`` serialises check-then-insert sequences on a
  kind, so that services can keep uniqueness invariants (one favorite
  per user/location pair, one location per place) without races.
"""

import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel

from ..schemas.check_in import CheckIn
from ..schemas.crowd_level import CrowdLevel
from ..schemas.favorite import Favorite
from ..schemas.location import Location
from ..schemas.review import Review
from ..schemas.user import User


logger = logging.getLogger(__name__)


class EntityKind(str, Enum):
    """The entity kinds held by the store."""

    USER = "users"
    LOCATION = "locations"
    CROWD_LEVEL = "crowd_levels"
    CHECK_IN = "check_ins"
    REVIEW = "reviews"
    FAVORITE = "favorites"


# Stored record model for each kind.
RECORD_MODELS: Dict[EntityKind, Type[BaseModel]] = {
    EntityKind.USER: User,
    EntityKind.LOCATION: Location,
    EntityKind.CROWD_LEVEL: CrowdLevel,
    EntityKind.CHECK_IN: CheckIn,
    EntityKind.REVIEW: Review,
    EntityKind.FAVORITE: Favorite,
}


class EntityStore(ABC):
    """Abstract keyed storage for every entity kind."""

    @abstractmethod
    async def insert(self, kind: EntityKind, values: Mapping[str, Any]) -> Any:
        """Assign the next identifier for ``kind``, store and return the record.

        ``values`` holds the insertable fields by name; an ``id`` key,
        if present, is ignored.
        """

    @abstractmethod
    async def get(self, kind: EntityKind, entity_id: int) -> Optional[Any]:
        """Return the record with ``entity_id`` or ``None``."""

    @abstractmethod
    async def list_all(self, kind: EntityKind) -> List[Any]:
        """Return every record of ``kind``.  Order is not guaranteed."""

    @abstractmethod
    async def delete(self, kind: EntityKind, entity_id: int) -> bool:
        """Remove a record; return ``False`` if it did not exist."""

    @abstractmethod
    def transaction(self, kind: EntityKind):
        """Async context manager serialising a check-then-insert on ``kind``."""

    async def count(self, kind: EntityKind) -> int:
        return len(await self.list_all(kind))


class _Table:
    """One in-memory collection with its own identifier counter."""

    def __init__(self, model: Type[BaseModel]) -> None:
        self.model = model
        self.records: Dict[int, BaseModel] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def insert(self, values: Mapping[str, Any]) -> BaseModel:
        fields = {key: value for key, value in values.items() if key != "id"}
        with self._lock:
            entity_id = self._next_id
            record = self.model(id=entity_id, **fields)
            # Only consume the identifier once the record is valid.
            self._next_id = entity_id + 1
            self.records[entity_id] = record
        return record

    def delete(self, entity_id: int) -> bool:
        with self._lock:
            return self.records.pop(entity_id, None) is not None

    def snapshot(self) -> List[BaseModel]:
        with self._lock:
            return list(self.records.values())


class MemoryEntityStore(EntityStore):
    """Process-lifetime store backed by dictionaries.

    Each instance is independent, so tests and multiple app instances
    never share state.
    """

    def __init__(self) -> None:
        self._tables: Dict[EntityKind, _Table] = {
            kind: _Table(model) for kind, model in RECORD_MODELS.items()
        }
        self._tx_locks: Dict[EntityKind, asyncio.Lock] = {
            kind: asyncio.Lock() for kind in EntityKind
        }

    async def insert(self, kind: EntityKind, values: Mapping[str, Any]) -> Any:
        record = self._tables[kind].insert(values)
        logger.debug("Stored %s %s", kind.value, record.id)
        return record

    async def get(self, kind: EntityKind, entity_id: int) -> Optional[Any]:
        return self._tables[kind].records.get(entity_id)

    async def list_all(self, kind: EntityKind) -> List[Any]:
        return self._tables[kind].snapshot()

    async def delete(self, kind: EntityKind, entity_id: int) -> bool:
        return self._tables[kind].delete(entity_id)

    @asynccontextmanager
    async def transaction(self, kind: EntityKind) -> AsyncIterator[None]:
        async with self._tx_locks[kind]:
            yield
