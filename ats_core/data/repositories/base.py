"""
Base repository class providing common read and write operations.

All entity-specific repositories inherit from this base class. Repositories
are thin views over one collection of an EntityStore; lookups of absent ids
return None rather than raising.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, Optional, TypeVar

from ats_core.data.models.base import EntityModel
from ats_core.data.store import EntityStore
from ats_core.utils.config import get_settings
from ats_core.utils.exceptions import InvalidArgumentError
from ats_core.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for entity models
T = TypeVar("T", bound=EntityModel)


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository over one store collection.

    Subclasses must define the collection name and model class.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the store collection."""
        pass

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""
        pass

    def __init__(self, store: EntityStore, max_page_size: Optional[int] = None) -> None:
        """Initialize repository with the store it reads and writes."""
        self._store = store
        self._max_page_size = max_page_size or get_settings().store.max_page_size

    @property
    def store(self) -> EntityStore:
        return self._store

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    def get_by_id(self, id_value: str) -> Optional[T]:
        """Get an entity by its id."""
        return self._store.get(self.collection_name, id_value)  # type: ignore[return-value]

    def get_all(self) -> list[T]:
        """Get all entities ordered by id."""
        return self._store.snapshot(self.collection_name)  # type: ignore[return-value]

    def find(
        self,
        predicate: Callable[[T], bool],
        sort_key: Optional[Callable[[T], Any]] = None,
        reverse: bool = False,
    ) -> list[T]:
        """
        Find entities matching a predicate.

        Results are ordered by id unless ``sort_key`` is given; the id order
        is kept for ties.
        """
        matches = [entity for entity in self.get_all() if predicate(entity)]
        if sort_key is not None:
            matches.sort(key=sort_key, reverse=reverse)
        return matches

    def find_page(self, after_id: Optional[str] = None, page_size: Optional[int] = None) -> list[T]:
        """
        Get one page of entities ordered by id.

        Args:
            after_id: Cursor; the page starts with the first id greater than
                this one. None or blank starts from the beginning.
            page_size: Number of entities to return, bounded by the
                configured maximum page size.

        Returns:
            Up to ``page_size`` entities
        """
        if page_size is None:
            page_size = min(get_settings().store.default_page_size, self._max_page_size)
        if page_size < 1 or page_size > self._max_page_size:
            raise InvalidArgumentError(
                f"page_size must be between 1 and {self._max_page_size}",
                argument="page_size",
                value=page_size,
            )

        entities = self.get_all()
        if after_id and after_id.strip():
            cursor = after_id.strip()
            entities = [e for e in entities if e.id > cursor]
        return entities[:page_size]

    def count(self, predicate: Optional[Callable[[T], bool]] = None) -> int:
        """Count entities, optionally only those matching a predicate."""
        if predicate is None:
            return self._store.count(self.collection_name)
        return len(self.find(predicate))

    def exists(self, id_value: str) -> bool:
        """Check if an entity with this id exists."""
        return self._store.contains(self.collection_name, id_value)

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    def create(self, model: T) -> T:
        """Add a new entity; duplicate ids are rejected."""
        self._check_type(model)
        created = self._store.insert(self.collection_name, model)
        logger.debug(f"Created {self.collection_name} entity: {model.id}")
        return created

    def replace(self, model: T) -> Optional[T]:
        """Replace an existing entity wholesale. Returns None if it does not exist."""
        self._check_type(model)
        return self._store.update(self.collection_name, model.id, lambda _current: model)

    def update(self, id_value: str, change: Callable[[T], T]) -> Optional[T]:
        """Apply a copy-on-write change to one entity under its write lock."""
        updated = self._store.update(self.collection_name, id_value, change)
        if updated is not None:
            logger.debug(f"Updated {self.collection_name} entity: {id_value}")
        return updated

    def _check_type(self, model: Any) -> None:
        if not isinstance(model, self.model_class):
            raise InvalidArgumentError(
                f"{self.collection_name} expects {self.model_class.__name__}, "
                f"got {type(model).__name__}",
                argument="model",
            )
