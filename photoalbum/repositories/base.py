import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from photoalbum.db import BaseStore, Document
from photoalbum.errors import NotFound


logger = logging.getLogger(__name__)

Record = Dict[str, Any]


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def next_id(collection: List[Record]) -> int:
    return max((r["id"] for r in collection), default=0) + 1


def find_index(collection: List[Record], record_id: Any) -> int:
    for index, record in enumerate(collection):
        if record.get("id") == record_id:
            return index
    return -1


class Repository:
    """Linear-scan access to one collection of the store document."""

    collection: str = ""
    label: str = "Record"

    def __init__(self, store: BaseStore):
        self.store = store

    def _present(self, record: Record) -> Record:
        return dict(record)

    def _locate(self, document: Document, record_id: Any) -> int:
        index = find_index(document[self.collection], record_id)
        if index == -1:
            raise NotFound(f"{self.label} not found")
        return index

    def list(self, predicate: Optional[Callable[[Record], bool]] = None) -> List[Record]:
        document = self.store.read()
        return [
            self._present(r) for r in document[self.collection]
            if predicate is None or predicate(r)
        ]

    def get(self, record_id: Any) -> Record:
        document = self.store.read()
        return self._present(document[self.collection][self._locate(document, record_id)])

    def _delete(self, document: Document, record_id: Any) -> Record:
        index = self._locate(document, record_id)
        record = document[self.collection].pop(index)
        logger.info("Deleted %s %s", self.label.lower(), record_id)
        return record
