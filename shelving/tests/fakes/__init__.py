"""Fake implementations of core ports for testing.

These in-memory implementations allow core command logic to be tested
without external dependencies:

- FakeShelfStorePort: In-memory shelves with call recording
- FakeDiffStatPort: Canned diff-statistics output
"""

from .diffstat import FakeDiffStatPort
from .store import FakeShelfStorePort

__all__ = [
    "FakeDiffStatPort",
    "FakeShelfStorePort",
]
