"""Generated question suggestions for recruiters."""
from .client import ProxyClient
from .dedup import RequestDeduplicator
from .schema import Suggestion, SuggestionList, validate_payload, validate_suggestions
from .service import SuggestionService

__all__ = [
    "ProxyClient",
    "RequestDeduplicator",
    "Suggestion",
    "SuggestionList",
    "SuggestionService",
    "validate_payload",
    "validate_suggestions",
]
