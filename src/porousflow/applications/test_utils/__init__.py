"""Utilities for testing kernels and material laws."""

from . import finite_differences, random_fields
