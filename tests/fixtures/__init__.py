"""Test fixtures for the composer.

This package provides reusable test fixtures:
- messages: Factories for reference messages, identities and attachments
- api: TestClient fixtures with injected dependencies
"""
