"""Anthropic Claude provider implementation."""

from anthropic import Anthropic

import smartcommit.config as _config
from smartcommit.config import LLMProvider
from smartcommit.llm.base import BaseLLMProvider, clean_response_text
from smartcommit.llm.exceptions import LLMError, MissingAPIKeyError


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude LLM provider."""

    provider = LLMProvider.ANTHROPIC
    display_name = "Anthropic"

    def invoke(self, prompt: str) -> str:
        """Generate a commit message using Anthropic Claude.

        Args:
            prompt: The complete prompt.

        Returns:
            The message text.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: For other LLM-related errors.
        """
        api_key = self.get_api_key()

        try:
            client = Anthropic(api_key=api_key, timeout=_config.REQUEST_TIMEOUT)
            message = client.messages.create(
                model=self.model,
                max_tokens=_config.MAX_TOKENS,
                messages=[{"role": "user", "content": prompt}],
            )
        except MissingAPIKeyError:
            raise
        except Exception as e:
            raise LLMError(f"Anthropic API call failed: {e}")

        # Use the first text block of the response
        text_blocks = [block.text for block in (message.content or []) if hasattr(block, "text")]
        if not text_blocks:
            raise LLMError("No text content received from Claude")

        return clean_response_text(text_blocks[0])
