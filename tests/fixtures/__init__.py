"""Shared test data for unit and integration tests."""
