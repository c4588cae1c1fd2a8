"""Dependency providers shared by the routers."""
from __future__ import annotations

from functools import lru_cache

from config.settings import settings
from services.sessions import SessionRegistry
from storage import Repository, ResourceStore, RestStore, SqliteStore
from suggestions import ProxyClient, SuggestionService
from take_interview import StatusGate


def build_store() -> ResourceStore:
    if settings.STORE_BACKEND == "rest":
        return RestStore(
            settings.STORE_BASE_URL,
            token=settings.STORE_TOKEN,
            username=settings.STORE_USERNAME,
            timeout_s=settings.STORE_TIMEOUT_S,
        )
    return SqliteStore(settings.DB_PATH, username=settings.STORE_USERNAME)


@lru_cache
def get_repository() -> Repository:
    return Repository(build_store())


@lru_cache
def get_status_gate() -> StatusGate:
    return StatusGate(get_repository())


@lru_cache
def get_session_registry() -> SessionRegistry:
    return SessionRegistry()


@lru_cache
def get_suggestion_service() -> SuggestionService:
    client = ProxyClient()
    return SuggestionService(
        client.generate_questions,
        get_repository(),
        max_workers=settings.SUGGESTION_WORKERS,
        timeout_s=settings.PROXY_TIMEOUT_S,
    )


def reset_providers() -> None:
    """Drop cached singletons so the next request picks up current settings."""

    if get_suggestion_service.cache_info().currsize:
        get_suggestion_service().shutdown()
    for provider in (get_repository, get_status_gate, get_session_registry, get_suggestion_service):
        provider.cache_clear()


__all__ = [
    "build_store",
    "get_repository",
    "get_session_registry",
    "get_status_gate",
    "get_suggestion_service",
    "reset_providers",
]
