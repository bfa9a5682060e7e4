"""Domain layer: the immutable store, option names, and the error taxonomy."""
