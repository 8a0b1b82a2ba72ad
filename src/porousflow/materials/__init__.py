"""Nodal material laws providing field snapshots with derivatives."""
