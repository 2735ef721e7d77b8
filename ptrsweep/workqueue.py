"""
Bounded, closable work queue shared by the producer and the workers
"""

import threading
from collections import deque
from typing import Optional


class QueueClosed(Exception):
    """Raised by WorkQueue.get() once the queue is closed and drained"""


class WorkQueue:
    """
    Bounded FIFO with close semantics.

    put() blocks while the queue is full, get() blocks while it is empty
    and open. Closing wakes every waiter; consumers keep receiving the
    remaining items and then get QueueClosed.
    """

    def __init__(self, maxsize: int):
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        self.maxsize = maxsize
        self._items: deque[str] = deque()
        self._closed = False
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)

    def put(self, item: str):
        """Enqueue an item, blocking while the queue is full"""
        with self._not_full:
            while len(self._items) >= self.maxsize and not self._closed:
                self._not_full.wait()
            if self._closed:
                raise QueueClosed("put() on a closed queue")
            self._items.append(item)
            self._not_empty.notify()

    def get(self, timeout: Optional[float] = None) -> str:
        """
        Dequeue the next item.

        Args:
            timeout: Optional wait limit in seconds

        Returns:
            The oldest item

        Raises:
            QueueClosed: Queue is closed and nothing is left
            TimeoutError: Nothing arrived within timeout
        """
        with self._not_empty:
            while not self._items:
                if self._closed:
                    raise QueueClosed()
                if not self._not_empty.wait(timeout):
                    raise TimeoutError("work queue get() timed out")
            item = self._items.popleft()
            self._not_full.notify()
            return item

    def close(self, discard_pending: bool = False) -> int:
        """
        Signal that no more items will be added.

        Args:
            discard_pending: Also drop items nobody has taken yet

        Returns:
            Number of items discarded
        """
        with self._lock:
            self._closed = True
            discarded = 0
            if discard_pending:
                discarded = len(self._items)
                self._items.clear()
            self._not_empty.notify_all()
            self._not_full.notify_all()
            return discarded

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self):
        """Yield items until the queue is closed and drained"""
        while True:
            try:
                yield self.get()
            except QueueClosed:
                return
