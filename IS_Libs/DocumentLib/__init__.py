"""
DocumentLib - Document model and edit history

This module provides the Document (current and original rasters with
bounded undo/redo), its History stacks, and the ApplyWorker that runs
edits on a background thread.
"""

from IS_Libs.DocumentLib.history import History
from IS_Libs.DocumentLib.document import Document
from IS_Libs.DocumentLib.apply_worker import ApplyWorker

__all__ = [
    "History",
    "Document",
    "ApplyWorker",
]
