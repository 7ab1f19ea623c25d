import copy
import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator

from photoalbum.errors import StoreUnavailable
from photoalbum.utils.config import settings


logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "photos", "albums", "shares")

Document = Dict[str, Any]


def empty_document() -> Document:
    return {name: [] for name in COLLECTIONS}


def _check_schema(document: Any) -> Document:
    if not isinstance(document, dict):
        raise StoreUnavailable("Store document is not a JSON object")
    for name in COLLECTIONS:
        if not isinstance(document.get(name), list):
            raise StoreUnavailable(f"Store document has no '{name}' collection")
    return document


class BaseStore(ABC):
    """Load/save access to the single document holding every collection.

    Mutations go through ``transaction()``: the lock is held across the
    whole read-modify-write cycle, so id assignment and both sides of a
    photo/album link are applied together or not at all.
    """

    def __init__(self):
        self._lock = threading.RLock()

    @abstractmethod
    def load(self) -> Document:
        ...

    @abstractmethod
    def save(self, document: Document) -> None:
        ...

    def read(self) -> Document:
        with self._lock:
            return self.load()

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        with self._lock:
            document = self.load()
            yield document
            self.save(document)


class JsonFileStore(BaseStore):
    def __init__(self, path: str | os.PathLike):
        super().__init__()
        self.path = Path(path)

    def initialize(self) -> bool:
        """Create an empty document if none exists. Returns True if created."""
        with self._lock:
            if self.path.exists():
                return False
            self.save(empty_document())
            logger.info("Initialized empty store at %s", self.path)
            return True

    def load(self) -> Document:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Store %s unreadable: %s", self.path, exc)
            raise StoreUnavailable(f"Store file {self.path} is unreadable") from exc
        try:
            document = json.loads(raw)
        except ValueError as exc:
            logger.warning("Store %s is not valid JSON: %s", self.path, exc)
            raise StoreUnavailable(f"Store file {self.path} is corrupt") from exc
        return _check_schema(document)

    def save(self, document: Document) -> None:
        _check_schema(document)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(
            json.dumps(document, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        os.replace(tmp_path, self.path)


class MemoryStore(BaseStore):
    """In-process store with the same copy-in/copy-out semantics as the file store."""

    def __init__(self, document: Document | None = None):
        super().__init__()
        self._document = _check_schema(copy.deepcopy(document or empty_document()))

    def load(self) -> Document:
        return copy.deepcopy(self._document)

    def save(self, document: Document) -> None:
        self._document = copy.deepcopy(_check_schema(document))


_store: BaseStore | None = None
_store_lock = threading.Lock()


def get_store() -> BaseStore:
    global _store
    with _store_lock:
        if _store is None:
            store = JsonFileStore(settings.DB_PATH)
            store.initialize()
            _store = store
        return _store
