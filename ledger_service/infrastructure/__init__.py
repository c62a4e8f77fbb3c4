"""Infrastructure adapters (database)."""
