"""Schema validation for generated question suggestions."""
from __future__ import annotations

import pytest

from errors import SchemaValidationError
from storage import Difficulty
from suggestions import Suggestion, validate_payload, validate_suggestions


def test_valid_list_is_accepted():
    result = validate_suggestions(
        [
            {"question": "What is a closure?", "difficulty": "Easy"},
            {"question": "Explain the GIL.", "difficulty": "Advanced", "extra": "ignored"},
        ]
    )
    assert result == [
        Suggestion(question="What is a closure?", difficulty=Difficulty.EASY),
        Suggestion(question="Explain the GIL.", difficulty=Difficulty.ADVANCED),
    ]


@pytest.mark.parametrize(
    "value",
    [
        None,
        "not a list",
        {"question": "Q", "difficulty": "Easy"},
        [],
        [{"question": "Q", "difficulty": "Hard"}],
        [{"question": 42, "difficulty": "Easy"}],
        [{"difficulty": "Easy"}],
        [{"question": "ok", "difficulty": "Easy"}, {"question": "bad", "difficulty": "easy"}],
    ],
)
def test_invalid_values_are_rejected_whole(value):
    with pytest.raises(SchemaValidationError) as excinfo:
        validate_suggestions(value)
    assert excinfo.value.message == "Questions did not match expected schema"


def test_item_count_is_not_enforced():
    items = [{"question": f"Q{i}", "difficulty": "Intermediate"} for i in range(3)]
    assert len(validate_suggestions(items)) == 3


def test_payload_requires_questions_key():
    with pytest.raises(SchemaValidationError):
        validate_payload({"items": []})
    assert validate_payload({"questions": [{"question": "Q", "difficulty": "Easy"}]})[0].question == "Q"
