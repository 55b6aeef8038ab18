"""Output layer — chat reply rendering and CLI formatting."""
