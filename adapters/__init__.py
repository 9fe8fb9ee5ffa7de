"""
Adapters package - External service connections.
Avatar file storage and the realtime message feed.
"""

from adapters import storage_adapter, realtime_adapter

__all__ = [
    "storage_adapter",
    "realtime_adapter",
]
