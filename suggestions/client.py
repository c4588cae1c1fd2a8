from __future__ import annotations  # HTTP client for the question proxy service

import logging
from typing import List, Optional

import httpx

from config.settings import settings
from errors import NetworkError, SchemaValidationError

from .schema import Suggestion, validate_payload


logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate-question"


class ProxyClient:  # Posts a job role to the proxy and validates what comes back
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout_s: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._base_url = (base_url or settings.PROXY_BASE_URL).rstrip("/")
        timeout = settings.PROXY_TIMEOUT_S if timeout_s is None else timeout_s
        self._client = client or httpx.Client(timeout=timeout)

    def generate_questions(self, job_role: str) -> List[Suggestion]:
        try:
            response = self._client.post(f"{self._base_url}{GENERATE_PATH}", json={"job_role": job_role})
        except httpx.HTTPError as exc:
            logger.error("Question proxy transport failure: %s", exc)
            raise NetworkError(f"Failed to generate questions: {exc}") from exc
        if response.status_code >= 400:
            message = _error_message(response) or "Failed to generate questions"
            logger.error("Question proxy status=%s message=%s", response.status_code, message)
            raise NetworkError(message, detail={"status": response.status_code})
        try:
            data = response.json()
        except ValueError as exc:
            raise SchemaValidationError("Questions did not match expected schema", detail="body was not JSON") from exc
        return validate_payload(data)

    def close(self) -> None:
        self._client.close()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return response.text.strip()


__all__ = ["GENERATE_PATH", "ProxyClient"]
