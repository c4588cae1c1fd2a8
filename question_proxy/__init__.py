"""Question generation proxy service."""
from .generator import PROMPT, REGISTRY_KEY, generate_questions, generate_with_config, route_from_config

__all__ = ["PROMPT", "REGISTRY_KEY", "generate_questions", "generate_with_config", "route_from_config"]
