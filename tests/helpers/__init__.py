"""Test helpers: in-memory tracker and git utilities."""
