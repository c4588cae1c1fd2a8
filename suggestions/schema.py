from __future__ import annotations  # Trust boundary for model-generated question suggestions

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, StrictStr, TypeAdapter, ValidationError

from errors import SchemaValidationError
from storage.models import Difficulty


class Suggestion(BaseModel):  # One generated question offered to the recruiter
    model_config = ConfigDict(frozen=True, extra="ignore")

    question: StrictStr
    difficulty: Difficulty


class SuggestionList(BaseModel):  # Envelope returned by the question proxy
    questions: List[Suggestion] = Field(min_length=1)


_LIST_ADAPTER = TypeAdapter(List[Suggestion])


def validate_suggestions(value: Any) -> List[Suggestion]:
    """Accept a non-empty list of suggestions or reject the whole value.

    Item count is not enforced; only the shape of each item is.
    """

    if not isinstance(value, list):
        raise SchemaValidationError(
            "Questions did not match expected schema",
            detail=f"expected a list, got {type(value).__name__}",
        )
    if not value:
        raise SchemaValidationError("Questions did not match expected schema", detail="list is empty")
    try:
        return _LIST_ADAPTER.validate_python(value)
    except ValidationError as exc:
        raise SchemaValidationError(
            "Questions did not match expected schema",
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc


def validate_payload(data: Any) -> List[Suggestion]:  # Unwrap the proxy envelope before validating
    if not isinstance(data, dict) or "questions" not in data:
        raise SchemaValidationError("Questions did not match expected schema", detail="missing 'questions'")
    return validate_suggestions(data["questions"])


__all__ = ["Suggestion", "SuggestionList", "validate_payload", "validate_suggestions"]
