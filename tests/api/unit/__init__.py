"""Unit tests for API components.

This package contains isolated unit tests for:
- Request model validation
- Dependency injection
- Error handling
"""
