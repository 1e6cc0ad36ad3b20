"""Core policy model: capability types, interfaces, and the repository."""
