"""HTTP API for the motivational message service."""
