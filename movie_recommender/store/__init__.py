"""In-memory tables built once at load time: movie attributes and user ratings."""
