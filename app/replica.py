"""
Replica holder for a GrowOnlySet.

GrowOnlySet has no synchronization of its own. A Replica owns one instance
behind a lock so several threads of the same process can insert into it and
fold in states received from other replicas.
"""

import logging
import threading
from typing import Any, Optional, Union

from crdt import GrowOnlySet
from error_handling import ErrorHandler, with_error_handling
from serialization.canonical import GSetSerializer

logger = logging.getLogger(__name__)


class Replica:
    def __init__(self, replica_id: str, serializer: Optional[GSetSerializer] = None,
                 error_handler: Optional[ErrorHandler] = None):
        self.replica_id = replica_id
        self.serializer = serializer or GSetSerializer()
        self.error_handler = error_handler or ErrorHandler(logger)
        self._state = GrowOnlySet()
        self.lock = threading.Lock()

    def insert(self, element: Any) -> None:
        with self.lock:
            self._state.insert(element)

    def contains(self, element: Any) -> bool:
        with self.lock:
            return self._state.contains(element)

    def merge(self, other: GrowOnlySet) -> None:
        """Fold another replica's state into this one."""
        if not isinstance(other, GrowOnlySet):
            raise TypeError(f"Cannot merge {type(other).__name__} into Replica")
        # Copy outside the lock; other may be a snapshot of this replica.
        incoming = other.copy()
        with self.lock:
            before = len(self._state)
            self._state.merge(incoming)
            after = len(self._state)
        logger.debug(f"Replica {self.replica_id} merged {len(incoming)} elements ({before} -> {after})")

    def snapshot(self) -> GrowOnlySet:
        """Independent copy of the current state."""
        with self.lock:
            return self._state.copy()

    def export_state(self) -> str:
        """Encoded snapshot, ready to hand to a transport."""
        return self.serializer.serialize(self.snapshot())

    @with_error_handling(reraise=True)
    def receive_state(self, payload: Union[str, bytes]) -> None:
        """
        Decode a state sent by another replica and merge it.

        A payload that fails to decode raises DecodeError and leaves this
        replica untouched.
        """
        self.merge(self.serializer.deserialize(payload))

    def __len__(self) -> int:
        with self.lock:
            return len(self._state)

    def __repr__(self) -> str:
        return f"Replica({self.replica_id!r}, {self.snapshot()!r})"
