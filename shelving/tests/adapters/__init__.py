"""Tests for adapter implementations.

Subprocess calls are mocked; filesystem behaviour runs against pytest's
tmp_path.
"""
