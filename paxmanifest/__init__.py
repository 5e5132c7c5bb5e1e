"""
paxmanifest: Passenger manifest state engine.

Scans travel documents through a recognition service and keeps an editable,
sortable, filterable passenger roster with full undo/redo history.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
