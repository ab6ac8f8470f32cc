"""PrimaryPurposeAgent: drafts the primary purpose statement with Claude

The LLM only writes prose. It never decides validity or fees; the caller
treats it as an opaque text-in, text-out collaborator.
"""

import asyncio
import logging
from typing import Optional

from anthropic import Anthropic

from ..config import Config


logger = logging.getLogger(__name__)


PRIMARY_PURPOSE_PROMPT = """You are an expert in business registration in the Philippines. Based on the provided industry description, generate a formal "Primary Purpose" statement for a corporation. This statement should be suitable for legal documents and align with the Philippine Standard Industrial Classification (PSIC).

Industry Description: {industry_description}

Generate a primary purpose statement that is concise, clear, and accurately reflects the core business activities. Reply with the statement only."""


class PurposeGenerationError(RuntimeError):
    """Primary purpose could not be generated"""


class PrimaryPurposeAgent:
    """Primary purpose generator

    Attributes:
        claude: Anthropic client (None when no API key is configured)
        model: model name
    """

    def __init__(
        self,
        claude_api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = 1024,
        temperature: float = 0.7
    ):
        """
        Args:
            claude_api_key: Claude API key (None reads ANTHROPIC_API_KEY)
            model: model name (None reads BIZREG_PURPOSE_MODEL)
            max_tokens: response token limit
            temperature: sampling temperature
        """
        self.model = model or Config.PURPOSE_MODEL
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.claude = None

        api_key = claude_api_key or Config.ANTHROPIC_API_KEY
        if api_key:
            self.claude = Anthropic(api_key=api_key)
        else:
            logger.warning("ANTHROPIC_API_KEY not set; primary purpose generation is disabled")

    @property
    def is_enabled(self) -> bool:
        return self.claude is not None

    async def generate(self, industry_description: str) -> str:
        """Draft a primary purpose statement

        Args:
            industry_description: free-text industry description

        Returns:
            the generated statement

        Raises:
            PurposeGenerationError: no client, API failure or empty answer
        """
        if not industry_description or not industry_description.strip():
            raise PurposeGenerationError("Industry description is empty")
        if not self.claude:
            raise PurposeGenerationError("Text generation is not configured")

        prompt = PRIMARY_PURPOSE_PROMPT.format(industry_description=industry_description.strip())

        try:
            message = await asyncio.to_thread(
                self.claude.messages.create,
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                messages=[{
                    "role": "user",
                    "content": prompt
                }]
            )
        except Exception as e:
            logger.error("Claude primary purpose generation failed: %s", e)
            raise PurposeGenerationError("There was an error generating the primary purpose.") from e

        text = message.content[0].text.strip() if message.content else ""
        if not text:
            raise PurposeGenerationError("The model returned an empty primary purpose.")
        return text

    def __repr__(self) -> str:
        return f"PrimaryPurposeAgent(model={self.model!r}, enabled={self.is_enabled})"
