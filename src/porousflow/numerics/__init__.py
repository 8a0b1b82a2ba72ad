"""Variable registry, nodal field snapshots and kernels."""
