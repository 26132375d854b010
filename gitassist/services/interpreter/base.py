"""Base class for LLM-backed text interpreters.

The base handles the Anthropic call and error wrapping; subclasses define
prompts and parsing.
"""

import logging
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

import anthropic

from gitassist.config import settings

logger = logging.getLogger(__name__)

TInput = TypeVar("TInput")
TOutput = TypeVar("TOutput")


class RefinementError(Exception):
    """The LLM call failed or returned nothing usable."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BaseInterpreter(ABC, Generic[TInput, TOutput]):
    """Abstract base for all interpreters."""

    # Override in subclasses
    model: str = settings.refine_model
    max_tokens: int = settings.refine_max_tokens

    def __init__(self, api_key: str | None = None):
        self.api_key = api_key or settings.anthropic_api_key
        self._client: anthropic.AsyncAnthropic | None = None

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key)
        return self._client

    @abstractmethod
    def get_system_prompt(self, input_data: TInput) -> str:
        """Return the system prompt for this interpreter."""
        ...

    @abstractmethod
    def format_input(self, input_data: TInput) -> str:
        """Convert typed input to prompt string."""
        ...

    @abstractmethod
    def parse_output(self, response_text: str) -> TOutput:
        """Parse LLM response into typed output."""
        ...

    async def interpret(self, input_data: TInput) -> TOutput:
        """
        Main entry point: interpret input and return structured output.

        Raises:
            RefinementError: If the API key is missing or the Anthropic call fails
        """
        if not self.api_key:
            raise RefinementError("AI refinement is not configured")

        user_message = self.format_input(input_data)

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=self.get_system_prompt(input_data),
                messages=[{"role": "user", "content": user_message}],
            )
        except anthropic.APIError as e:
            logger.error(f"{type(self).__name__} call failed: {e}")
            raise RefinementError(f"AI refinement failed: {e}") from e

        if not response.content:
            raise RefinementError("AI refinement returned an empty response")

        # Extract text from the first content block
        first_block = response.content[0]
        response_text = first_block.text if hasattr(first_block, "text") else str(first_block)
        return self.parse_output(response_text)
