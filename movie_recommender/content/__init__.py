"""Content-based recommendation: a per-user preference vector in attribute space."""
