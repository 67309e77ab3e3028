"""Core utilities shared by the document and localization layers.

    core <- document <- localization

Exports:
    DepthGuard: Context manager for recursion depth limiting
    DepthLimitExceededError: Raised when a document nests too deeply
    RWLock: Readers-writer lock guarding the active table

Python 3.13+.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError
from .rwlock import RWLock

__all__ = ["DepthGuard", "DepthLimitExceededError", "RWLock"]
