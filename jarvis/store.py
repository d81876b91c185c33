"""
In-memory keyed entity store

One generic store class is shared by tasks, reminders, schedule events and
smart devices. Records are immutable models; update() validates a merged copy
and swaps it in, so a reader holding an old record never sees a half-applied
change.
"""

import itertools
import logging
import threading
from typing import Any, Callable, Dict, Generic, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel

from jarvis.errors import NotFoundError

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)


def merge_fields(current: Dict[str, Any], partial: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of partial into current

    Fields present in partial overwrite; absent fields are kept. Mapping-valued
    fields (device settings) are merged one level deep, so existing keys
    survive unless explicitly overridden.
    """
    merged = dict(current)
    for key, value in partial.items():
        existing = merged.get(key)
        if isinstance(existing, dict) and isinstance(value, Mapping):
            merged[key] = {**existing, **value}
        else:
            merged[key] = value
    return merged


class EntityStore(Generic[T]):
    """
    Keyed collection of one entity kind

    Args:
        model: pydantic model class of the stored records (must have an `id` field)
        kind: human readable name used in NotFound messages (e.g. "Task")
        id_prefix: prefix for generated ids (e.g. "task" -> "task-1")
        immutable_fields: fields update() refuses to change
        casefold_fields: fields compared case-insensitively by filter()
    """

    def __init__(
        self,
        model: Type[T],
        kind: str,
        id_prefix: str,
        immutable_fields: Iterable[str] = (),
        casefold_fields: Iterable[str] = (),
    ):
        self.model = model
        self.kind = kind
        self.id_prefix = id_prefix
        self.immutable_fields = frozenset({"id", *immutable_fields})
        self.casefold_fields = frozenset(casefold_fields)
        self._records: Dict[str, T] = {}
        self._counter = itertools.count(1)
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._records

    def _next_id(self) -> str:
        # Seeded records may already occupy a generated-looking id
        while True:
            candidate = f"{self.id_prefix}-{next(self._counter)}"
            if candidate not in self._records:
                return candidate

    def create(self, fields: Mapping[str, Any]) -> str:
        """Validate a new record from fields, assign it a fresh id and store it"""
        with self._lock:
            entity_id = self._next_id()
            record = self.model.model_validate({**fields, "id": entity_id})
            self._records[entity_id] = record
        logger.debug(f"Created {self.kind} {entity_id}")
        return entity_id

    def add(self, record: T) -> str:
        """Store a record that already carries its id"""
        with self._lock:
            if record.id in self._records:
                raise ValueError(f"{self.kind} with ID {record.id} already exists")
            self._records[record.id] = record
        return record.id

    def get(self, entity_id: str) -> T:
        try:
            return self._records[entity_id]
        except KeyError:
            raise NotFoundError(self.kind, entity_id) from None

    def list(self, predicate: Optional[Callable[[T], bool]] = None) -> List[T]:
        """Return records in insertion order, optionally filtered by predicate"""
        with self._lock:
            records = list(self._records.values())
        if predicate is None:
            return records
        return [record for record in records if predicate(record)]

    def filter(self, **criteria: Any) -> List[T]:
        """
        Return records matching every given criterion

        Criteria with value None are ignored, so optional filters can be passed
        straight through. Fields listed in casefold_fields match regardless of
        case; everything else must be equal.

        Examples:
            tasks.filter(status="pending", priority=None)
            devices.filter(room="living room", type="light")
        """
        active = {name: value for name, value in criteria.items() if value is not None}
        for name in active:
            if name not in self.model.model_fields:
                raise ValueError(f"{self.kind} has no field '{name}'")

        def matches(record: T) -> bool:
            for name, expected in active.items():
                actual = getattr(record, name)
                if name in self.casefold_fields:
                    if str(actual).casefold() != str(expected).casefold():
                        return False
                elif actual != expected:
                    return False
            return True

        return self.list(matches)

    def update(self, entity_id: str, partial: Mapping[str, Any]) -> T:
        """
        Merge partial fields into a record and return the updated record

        Raises:
            NotFoundError: entity_id is not in the store
            ValueError: partial touches an immutable field
            pydantic.ValidationError: the merged record is invalid
        """
        locked = self.immutable_fields.intersection(partial)
        if locked:
            raise ValueError(f"Cannot modify immutable {self.kind} fields: {', '.join(sorted(locked))}")
        with self._lock:
            current = self.get(entity_id)
            merged = merge_fields(current.model_dump(), partial)
            record = self.model.model_validate(merged)
            self._records[entity_id] = record
        return record

    def update_with(self, entity_id: str, compute: Callable[[T], Mapping[str, Any]]) -> Tuple[T, T]:
        """
        Read a record, derive a partial from it and apply it as one atomic step

        Returns:
            The record before and after the update
        """
        with self._lock:
            current = self.get(entity_id)
            return current, self.update(entity_id, compute(current))
