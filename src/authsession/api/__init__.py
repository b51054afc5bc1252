"""HTTP API for the session lifecycle."""
