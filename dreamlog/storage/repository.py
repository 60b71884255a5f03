"""Dream repositories: where the dream store keeps its entries."""

import logging
import random
import string
import threading
from copy import deepcopy
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..models.dream import DreamEntry

logger = logging.getLogger(__name__)


def generate_dream_id(prefix: str = "dream") -> str:
    """Timestamp-based id with a random suffix, e.g. dream_20261018_071502_k3x9."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    random_suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=4))
    return f"{prefix}_{timestamp}_{random_suffix}"


class DreamRepository(ABC):
    """Keyed storage for dream entries, listed newest first."""

    @abstractmethod
    def add(self, entry: DreamEntry) -> None:
        """Store a new entry. Raises ValueError if the id already exists."""
        pass

    @abstractmethod
    def get(self, dream_id: str) -> Optional[DreamEntry]:
        pass

    @abstractmethod
    def replace(self, entry: DreamEntry) -> None:
        """Replace the entry with the same id. Raises KeyError if it is missing."""
        pass

    @abstractmethod
    def delete(self, dream_id: str) -> bool:
        """Delete an entry. Returns True if it existed."""
        pass

    @abstractmethod
    def list(self) -> List[DreamEntry]:
        """All entries, most recently added first."""
        pass

    def __len__(self) -> int:
        return len(self.list())


class InMemoryDreamRepository(DreamRepository):
    """Keeps entries in a list for the lifetime of the process.

    Entries are copied on the way in and out, so callers never hold the
    stored objects.
    """

    def __init__(self):
        self._dreams: List[DreamEntry] = []
        self._lock = threading.RLock()

    def add(self, entry: DreamEntry) -> None:
        with self._lock:
            if self._index(entry.id) is not None:
                raise ValueError(f"Dream already exists: {entry.id}")
            self._dreams.insert(0, deepcopy(entry))

    def get(self, dream_id: str) -> Optional[DreamEntry]:
        with self._lock:
            index = self._index(dream_id)
            return deepcopy(self._dreams[index]) if index is not None else None

    def replace(self, entry: DreamEntry) -> None:
        with self._lock:
            index = self._index(entry.id)
            if index is None:
                raise KeyError(entry.id)
            self._dreams[index] = deepcopy(entry)

    def delete(self, dream_id: str) -> bool:
        with self._lock:
            index = self._index(dream_id)
            if index is None:
                return False
            del self._dreams[index]
            return True

    def list(self) -> List[DreamEntry]:
        with self._lock:
            return deepcopy(self._dreams)

    def _index(self, dream_id: str) -> Optional[int]:
        for i, dream in enumerate(self._dreams):
            if dream.id == dream_id:
                return i
        return None
