"""Applications of PorousFlow."""
