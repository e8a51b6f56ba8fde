"""
Integration tests for the Lesson Assistant.

Require external services:
- Redis store (real server, marked with @pytest.mark.integration)
"""
