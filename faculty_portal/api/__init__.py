"""HTTP API for the faculty activity portal."""
