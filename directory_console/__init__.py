"""User Directory Console: in-memory state layer for a remote user store."""

__version__ = "1.0.0"
