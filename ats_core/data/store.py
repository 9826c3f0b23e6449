"""
In-memory entity store for ats-core.

Holds the keyed collections for candidates, jobs, applications and
assessments. One store instance is created per service and handed to every
repository and engine; there is no module-level store.

Locking:
- the store lock guards the collection dicts, so list reads take a snapshot
  and never see a half-applied write
- each stored entity has its own write lock, created on insert, so writers to different applications
  do not block each other
- the note-id counter has its own lock and never issues an id twice
"""

import threading
from collections.abc import Callable
from typing import Optional, TypeVar

from ats_core.data.models.base import EntityModel
from ats_core.utils.exceptions import InvalidArgumentError
from ats_core.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=EntityModel)

# Collection names
CANDIDATES = "candidates"
JOBS = "jobs"
APPLICATIONS = "applications"
ASSESSMENTS = "assessments"

COLLECTIONS: tuple[str, ...] = (CANDIDATES, JOBS, APPLICATIONS, ASSESSMENTS)

# Note ids are issued as N101, N102, ...
NOTE_ID_PREFIX = "N"
NOTE_ID_START = 100


class EntityStore:
    """Thread-safe in-memory store of immutable entities keyed by id."""

    def __init__(self, note_id_start: int = NOTE_ID_START) -> None:
        self._lock = threading.RLock()
        self._collections: dict[str, dict[str, EntityModel]] = {name: {} for name in COLLECTIONS}
        self._entity_locks: dict[tuple[str, str], threading.Lock] = {}
        self._note_seq = note_id_start
        self._note_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get(self, collection: str, entity_id: str) -> Optional[EntityModel]:
        """Return the entity with the given id, or None."""
        with self._lock:
            return self._collection(collection).get(entity_id)

    def snapshot(self, collection: str) -> list[EntityModel]:
        """Return the entities of a collection ordered by id."""
        with self._lock:
            items = list(self._collection(collection).items())
        return [entity for _, entity in sorted(items, key=lambda item: item[0])]

    def contains(self, collection: str, entity_id: str) -> bool:
        with self._lock:
            return entity_id in self._collection(collection)

    def count(self, collection: str) -> int:
        with self._lock:
            return len(self._collection(collection))

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert(self, collection: str, entity: T) -> T:
        """Add a new entity; an existing id is rejected."""
        with self._lock:
            items = self._collection(collection)
            if entity.id in items:
                raise InvalidArgumentError(
                    f"{collection} already contains id {entity.id}",
                    argument="id",
                    value=entity.id,
                )
            items[entity.id] = entity
            self._entity_locks.setdefault((collection, entity.id), threading.Lock())
        logger.debug(f"Inserted into {collection}: {entity.id}")
        return entity

    def put(self, collection: str, entity: T) -> T:
        """Insert or replace an entity wholesale."""
        with self._lock:
            self._collection(collection)[entity.id] = entity
            self._entity_locks.setdefault((collection, entity.id), threading.Lock())
        return entity

    def update(
        self,
        collection: str,
        entity_id: str,
        change: Callable[[T], T],
    ) -> Optional[T]:
        """
        Apply a copy-on-write change to one entity.

        ``change`` receives the current entity and returns its replacement.
        The call holds the entity's write lock, so concurrent updates to the
        same entity are applied one after another. Returns None when the id
        is absent; absent ids never get a lock.
        """
        with self._lock:
            self._collection(collection)  # unknown collection names raise
            lock = self._entity_locks.get((collection, entity_id))
        if lock is None:
            return None
        with lock:
            current = self.get(collection, entity_id)
            if current is None:
                return None
            updated = change(current)  # type: ignore[arg-type]
            if updated.id != entity_id:
                raise InvalidArgumentError(
                    f"update may not change the id of {entity_id}",
                    argument="id",
                    value=updated.id,
                )
            self.put(collection, updated)
            return updated

    def next_note_id(self) -> str:
        """Issue the next recruiter-note id."""
        with self._note_lock:
            self._note_seq += 1
            return f"{NOTE_ID_PREFIX}{self._note_seq}"

    def _collection(self, name: str) -> dict[str, EntityModel]:
        try:
            return self._collections[name]
        except KeyError:
            raise InvalidArgumentError(f"Unknown collection: {name}", argument="collection", value=name) from None
