"""Shared test fixtures package.

Provides document builders reused by the unit and integration suites.
Pytest fixtures themselves live in the conftest.py files.
"""
