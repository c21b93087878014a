"""SQLite persistence for user configuration."""
