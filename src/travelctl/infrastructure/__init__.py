"""Infrastructure layer — SQLite key-value persistence."""
