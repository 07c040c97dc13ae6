"""Shared infrastructure: settings, database, auth, errors."""
