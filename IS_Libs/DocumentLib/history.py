"""
Bounded edit history for the document model.

A History is a stack of raster snapshots. Every push stores a deep copy,
so entries never share pixel buffers with the caller or with each other.
When a capacity is set, pushing onto a full stack drops the oldest entry.
"""

from collections import deque
from typing import Any, Optional
import logging

from IS_Libs.OperationsLib.raster import copy_raster

logger = logging.getLogger(__name__)


class History:
    """Snapshot stack with an optional capacity.

    Example:
        >>> undo = History(capacity=20)
        >>> undo.push(raster)
        >>> previous = undo.pop()
    """

    def __init__(self, capacity: Optional[int] = None):
        """
        Args:
            capacity: Maximum number of snapshots kept, or None for unbounded

        Raises:
            ValueError: If capacity is not positive
        """
        if capacity is not None and capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._entries: deque = deque()

    @property
    def capacity(self) -> Optional[int]:
        return self._capacity

    def push(self, raster: Any) -> None:
        """Store a deep copy of raster, evicting the oldest entry when full."""
        self._entries.append(copy_raster(raster))
        if self._capacity is not None:
            while len(self._entries) > self._capacity:
                self._entries.popleft()
                logger.debug(f"History full ({self._capacity}), dropped oldest snapshot")

    def pop(self) -> Any:
        """
        Remove and return the most recent snapshot.

        Raises:
            IndexError: If the history is empty
        """
        if not self._entries:
            raise IndexError("pop from empty history")
        return self._entries.pop()

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
