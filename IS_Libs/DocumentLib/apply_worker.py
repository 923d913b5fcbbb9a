"""
Background execution of Document.apply.

Filters such as blur and rotation can take a while on large images, so an
interactive caller runs them off its main thread. ApplyWorker owns a single
worker thread and accepts one job at a time: while a job is running, further
submissions are refused instead of queued, which keeps document edits
serialized. There is no cancellation; a started job always runs to the end.

Example:
    >>> worker = ApplyWorker(document)
    >>> future = worker.submit(lambda: adjustment_pipeline("Sepia", 0.1, 0.0, 2), on_done=refresh)
    >>> if future is None:
    ...     pass  # still busy with the previous edit
"""

import concurrent.futures
import logging
import threading
from typing import Any, Callable, Optional

from IS_Libs.DocumentLib.document import Document

logger = logging.getLogger(__name__)

OperationFactory = Callable[[], Callable[[Any], Any]]
DoneCallback = Callable[[Optional[Any]], None]


class ApplyWorker:
    """Runs document edits on one background thread, one at a time."""

    def __init__(self, document: Document):
        self._document = document
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="apply-worker"
        )
        self._lock = threading.Lock()
        self._busy = False

    @property
    def document(self) -> Document:
        return self._document

    @property
    def busy(self) -> bool:
        """True while a submitted edit is running."""
        with self._lock:
            return self._busy

    def submit(
        self,
        operation_factory: OperationFactory,
        on_done: Optional[DoneCallback] = None,
    ) -> Optional[concurrent.futures.Future]:
        """
        Build an operation and apply it to the document in the background.

        Args:
            operation_factory: Zero-argument callable returning the operation;
                called on the worker thread
            on_done: Optional callback receiving the new current raster (or
                None when no image is loaded); called on the worker thread
                after the busy flag is cleared, only when the edit succeeded

        Returns:
            Future resolving to the apply() result, or None if another edit
            is still running
        """
        with self._lock:
            if self._busy:
                logger.debug("Edit rejected: another edit is still running")
                return None
            self._busy = True

        try:
            future = self._executor.submit(self._run, operation_factory)
        except RuntimeError:
            with self._lock:
                self._busy = False
            raise

        future.add_done_callback(lambda done: self._finish(done, on_done))
        return future

    def _run(self, operation_factory: OperationFactory) -> Optional[Any]:
        operation = operation_factory()
        return self._document.apply(operation)

    def _finish(
        self,
        future: concurrent.futures.Future,
        on_done: Optional[DoneCallback],
    ) -> None:
        with self._lock:
            self._busy = False

        error = future.exception()
        if error is not None:
            logger.error(f"Edit failed: {error}")
            return

        if on_done is not None:
            on_done(future.result())

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work; optionally wait for the running edit."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "ApplyWorker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)
