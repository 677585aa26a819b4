"""Infrastructure adapters: database, repositories, logging, settings."""
