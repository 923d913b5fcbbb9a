"""
Document model: the image being edited and its history.

A Document owns the current raster, a pristine copy of the raster as it was
loaded, and two history stacks. Every raster that goes into history, and the
original, is an independent copy, so nothing handed out by the document can
be used to alter another snapshot.

Document methods are not safe to call concurrently; run at most one of
load/apply/undo/redo/revert at a time (ApplyWorker does this for apply).

Example:
    >>> from IS_Libs.OperationsLib import invert
    >>> document = Document()
    >>> document.load(raster, "photo.png")
    >>> document.apply(invert())
    >>> document.undo()
"""

from typing import Any, Callable, Optional
import logging

from IS_Libs.constants import APP_TITLE, HISTORY_CAPACITY, UNTITLED_LABEL
from IS_Libs.DocumentLib.history import History
from IS_Libs.OperationsLib.raster import copy_raster, to_raster

logger = logging.getLogger(__name__)


class Document:
    """Current/original rasters plus bounded undo and unbounded redo history."""

    def __init__(self, history_capacity: int = HISTORY_CAPACITY):
        self._current: Optional[Any] = None
        self._original: Optional[Any] = None
        self._label: Optional[str] = None
        self._undo = History(capacity=history_capacity)
        self._redo = History()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def current(self) -> Optional[Any]:
        """The raster being edited, or None before the first load."""
        return self._current

    @property
    def original(self) -> Optional[Any]:
        """A copy of the raster as loaded. Do not modify it."""
        return self._original

    @property
    def label(self) -> Optional[str]:
        return self._label

    @property
    def is_loaded(self) -> bool:
        return self._current is not None

    @property
    def undo_count(self) -> int:
        return len(self._undo)

    @property
    def redo_count(self) -> int:
        return len(self._redo)

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def label_or(self, fallback: str) -> str:
        """The document label, or fallback when there is none."""
        return self._label if self._label else fallback

    def window_title(self) -> str:
        return f"{APP_TITLE} - {self.label_or(UNTITLED_LABEL)}"

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def load(self, raster: Any, label: Optional[str] = None) -> None:
        """
        Replace the document contents and reset history.

        Args:
            raster: PIL Image (converted to RGBA if needed)
            label: Optional display name, e.g. the file name

        Raises:
            TypeError: If raster is not a PIL Image
        """
        self._current = to_raster(raster)
        self._original = to_raster(raster)
        self._label = label
        self._undo.clear()
        self._redo.clear()
        logger.debug(f"Loaded {self._current.size[0]}x{self._current.size[1]} raster: {self.label_or(UNTITLED_LABEL)}")

    def apply(self, operation: Callable[[Any], Any]) -> Optional[Any]:
        """
        Run an operation (or pipeline) on the current raster.

        The previous raster is pushed onto the undo history and the redo
        history is cleared.

        Args:
            operation: Callable taking a raster and returning a raster

        Returns:
            The new current raster, or None if nothing is loaded
        """
        if self._current is None:
            logger.debug("apply() ignored: no image loaded")
            return None

        snapshot = copy_raster(self._current)
        result = operation(self._current)

        self._undo.push(snapshot)
        self._current = result
        self._redo.clear()
        return self._current

    def undo(self) -> None:
        """Step back one edit. Does nothing when there is nothing to undo."""
        if not self._undo:
            return
        self._redo.push(self._current)
        self._current = self._undo.pop()

    def redo(self) -> None:
        """Step forward one undone edit. Does nothing when there is nothing to redo."""
        if not self._redo:
            return
        self._undo.push(self._current)
        self._current = self._redo.pop()

    def revert(self) -> None:
        """
        Go back to the raster as loaded.

        Revert is itself an edit: it can be undone, and it clears redo.
        """
        if self._original is None:
            return
        self._undo.push(self._current)
        self._current = copy_raster(self._original)
        self._redo.clear()
