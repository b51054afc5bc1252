"""authsession - session and token lifecycle for a remote credential endpoint."""

__version__ = "0.1.0"
