"""Test utilities for bucketserve applications.

Provides an in-process ASGI test client and re-exports the in-memory
storage backend::

    from bucketserve.testing import MemoryBackend, TestClient
"""

from bucketserve.storage.memory import MemoryBackend
from bucketserve.testing.client import TestClient

__all__ = ["MemoryBackend", "TestClient"]
