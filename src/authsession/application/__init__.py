"""Application layer - session use cases."""
