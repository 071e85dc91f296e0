"""OpenAI GPT provider implementation."""

from openai import OpenAI

import smartcommit.config as _config
from smartcommit.config import LLMProvider
from smartcommit.llm.base import BaseLLMProvider, clean_response_text
from smartcommit.llm.exceptions import LLMError, MissingAPIKeyError


class OpenAIProvider(BaseLLMProvider):
    """OpenAI GPT LLM provider."""

    provider = LLMProvider.OPENAI
    display_name = "OpenAI"

    def invoke(self, prompt: str) -> str:
        """Generate a commit message using OpenAI GPT.

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
            client = OpenAI(api_key=api_key, timeout=_config.REQUEST_TIMEOUT)
            response = client.chat.completions.create(
                model=self.model,
                max_tokens=_config.MAX_TOKENS,
                temperature=_config.TEMPERATURE,
                messages=[{"role": "user", "content": prompt}],
            )
        except MissingAPIKeyError:
            raise
        except Exception as e:
            raise LLMError(f"OpenAI API call failed: {e}")

        if not response.choices or not response.choices[0].message.content:
            raise LLMError("No content received from OpenAI")

        return clean_response_text(response.choices[0].message.content)
