from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from threading import Condition, Lock
from typing import Dict, Generic, Iterator, List, TypeVar

from .errors import NotFoundError, UsernameDuplicateError
from .models import TodoEntity, UserEntity

E = TypeVar("E", TodoEntity, UserEntity)


class ReadWriteLock:
    """
    Reader/writer exclusion for a single store.

    Any number of readers may hold the lock together; a writer holds it alone.
    Waiting writers block new readers so writes are not starved.
    """

    def __init__(self) -> None:
        self._cond = Condition(Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


# PUBLIC_INTERFACE
class TodoRepository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def create(self, todo: TodoEntity) -> None:
        """Assign a new id to the todo (mutating it) and store it."""

    @abstractmethod
    def get_by_id(self, todo_id: int) -> TodoEntity:
        """Return a TodoEntity by id. Raise NotFoundError if absent."""

    @abstractmethod
    def list(self) -> List[TodoEntity]:
        """Return all TodoEntities in no particular order."""

    @abstractmethod
    def update(self, todo: TodoEntity) -> None:
        """Replace the stored todo with the same id. Raise NotFoundError if absent."""

    @abstractmethod
    def delete(self, todo_id: int) -> None:
        """Delete a TodoEntity by id. Raise NotFoundError if absent."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored todos."""


# PUBLIC_INTERFACE
class UserRepository(ABC):
    """Abstract repository contract for user storage backends, with lookup by username."""

    @abstractmethod
    def create(self, user: UserEntity) -> None:
        """Assign a new id to the user (mutating it) and store it."""

    @abstractmethod
    def get_by_id(self, user_id: int) -> UserEntity:
        """Return a UserEntity by id. Raise NotFoundError if absent."""

    @abstractmethod
    def get_by_username(self, username: str) -> UserEntity:
        """Return a UserEntity by username. Raise NotFoundError if absent."""

    @abstractmethod
    def list(self) -> List[UserEntity]:
        """Return all UserEntities in no particular order."""

    @abstractmethod
    def update(self, user: UserEntity) -> None:
        """Replace the stored user with the same id. Raise NotFoundError if absent."""

    @abstractmethod
    def delete(self, user_id: int) -> None:
        """Delete a UserEntity by id. Raise NotFoundError if absent."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored users."""


class _InMemoryStore(Generic[E]):
    """
    Thread-safe keyed store shared by the in-memory repositories.

    Ids come from a monotonic counter and are never reused, even after deletion.
    Records are copied on the way in and out so callers never alias stored state.
    Subclasses keep secondary indexes in sync through the _index_* hooks, which
    always run under the write lock.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._items: Dict[int, E] = {}
        self._next_id = 1

    def _index_check(self, entity: E) -> None:
        pass

    def _index_add(self, entity: E) -> None:
        pass

    def _index_remove(self, entity: E) -> None:
        pass

    def create(self, entity: E) -> None:
        with self._lock.write():
            self._index_check(entity)
            entity["id"] = self._next_id
            self._next_id += 1
            stored = entity.copy()
            self._items[stored["id"]] = stored
            self._index_add(stored)

    def get_by_id(self, entity_id: int) -> E:
        with self._lock.read():
            item = self._items.get(entity_id)
            if item is None:
                raise NotFoundError()
            return item.copy()

    def list(self) -> List[E]:
        with self._lock.read():
            return [item.copy() for item in self._items.values()]

    def update(self, entity: E) -> None:
        with self._lock.write():
            existing = self._items.get(entity["id"])
            if existing is None:
                raise NotFoundError()
            self._index_check(entity)
            stored = entity.copy()
            self._index_remove(existing)
            self._items[stored["id"]] = stored
            self._index_add(stored)

    def delete(self, entity_id: int) -> None:
        with self._lock.write():
            existing = self._items.pop(entity_id, None)
            if existing is None:
                raise NotFoundError()
            self._index_remove(existing)

    def count(self) -> int:
        with self._lock.read():
            return len(self._items)


class InMemoryTodoRepository(_InMemoryStore[TodoEntity], TodoRepository):
    """
    Thread-safe in-memory todo repository; the default runtime backend.
    """


class InMemoryUserRepository(_InMemoryStore[UserEntity], UserRepository):
    """
    Thread-safe in-memory user repository with a username index.
    """

    def __init__(self) -> None:
        super().__init__()
        self._by_username: Dict[str, int] = {}

    def _index_check(self, entity: UserEntity) -> None:
        holder = self._by_username.get(entity["username"])
        if holder is not None and holder != entity["id"]:
            raise UsernameDuplicateError()

    def _index_add(self, entity: UserEntity) -> None:
        self._by_username[entity["username"]] = entity["id"]

    def _index_remove(self, entity: UserEntity) -> None:
        # Only drop the key if it still points at this record
        if self._by_username.get(entity["username"]) == entity["id"]:
            del self._by_username[entity["username"]]

    def get_by_username(self, username: str) -> UserEntity:
        with self._lock.read():
            user_id = self._by_username.get(username)
            if user_id is None:
                raise NotFoundError()
            return self._items[user_id].copy()
