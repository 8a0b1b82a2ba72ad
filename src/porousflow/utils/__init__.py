"""Utility functions, keywords, types and logging."""
