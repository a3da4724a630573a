"""Infrastructure layer: SQLite storage, remote API access, config files."""
