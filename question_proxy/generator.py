from __future__ import annotations  # Prompt and chain for role-based question generation

from pathlib import Path
from typing import Optional

from langchain_core.prompts import ChatPromptTemplate

from config import LlmRoute, load_app_registry
from llm_gateway import runnable
from suggestions.schema import SuggestionList


REGISTRY_KEY = "question_proxy.generate_questions"

PROMPT = ChatPromptTemplate.from_messages(
    [
        (
            "system",
            "You are a recruiter. Generate 10 interview questions (three Easy, three Intermediate, "
            "four Advanced) based on the provided role description. Return only JSON with a "
            "'questions' array whose items have 'question' and 'difficulty' fields.",
        ),
        (
            "human",
            "Role Description: {roledescription}\nGenerate 10 interview questions with varying difficulty levels.",
        ),
    ]
)


def generate_questions(role_description: str, *, route: LlmRoute) -> SuggestionList:  # Run prompt through the gateway
    chain = PROMPT | runnable(route, SuggestionList)
    return chain.invoke({"roledescription": role_description})


def route_from_config(config_path: Path) -> LlmRoute:  # Resolve the model route for question generation
    registry = load_app_registry(config_path, {REGISTRY_KEY: SuggestionList})
    route, _ = registry[REGISTRY_KEY]
    return route


def generate_with_config(role_description: str, *, config_path: Path, route: Optional[LlmRoute] = None) -> SuggestionList:
    return generate_questions(role_description, route=route or route_from_config(config_path))
