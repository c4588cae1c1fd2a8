"""Process-level services backing the HTTP API."""
from .sessions import SessionRegistry

__all__ = ["SessionRegistry"]
