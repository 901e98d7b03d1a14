"""Test suite for the shelving commands.

Organized into three categories:

1. core/: Unit tests for core command logic
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Tests for adapter implementations
   - Working-copy store against a temporary directory, svn mocked
   - Diffstat, notification and CLI adapters

3. fakes/: Port implementations for testing
   - In-memory implementations of ShelfStorePort and DiffStatPort
   - Used by core unit tests
"""
