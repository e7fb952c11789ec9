import itertools
import threading
import uuid
from typing import Callable

IdGenerator = Callable[[], str]


def generate_uuid() -> str:
    """Default id source for new records."""
    return str(uuid.uuid4())


class CounterIdGenerator:
    """Sequential string ids ("1", "2", ...), unique for the life of the object."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            return str(next(self._counter))
