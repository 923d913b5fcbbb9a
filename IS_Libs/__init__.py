"""
IS_Libs - Image Studio Library Modules

This package contains core functionality for the Image Studio editor,
organized into specialized sub-packages:

- OperationsLib: Raster operations, pipelines and the operation registry
- DocumentLib: Document model with bounded undo/redo history
- ImageIOLib: Reading and writing rasters (PNG/JPEG)
"""

__version__ = "0.1.0"
