"""Integration tests for git-integrate.

These tests drive the real git executable against throwaway repositories
under pytest's tmp_path. No network access is needed.

Run with: pytest tests/integration/ -v -m integration
"""
