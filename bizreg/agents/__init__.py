"""LLM collaborators"""

from .purpose_agent import PrimaryPurposeAgent, PurposeGenerationError, PRIMARY_PURPOSE_PROMPT

__all__ = [
    'PrimaryPurposeAgent',
    'PurposeGenerationError',
    'PRIMARY_PURPOSE_PROMPT',
]
