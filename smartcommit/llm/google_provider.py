"""Google Gemini provider implementation."""

from google import genai
from google.genai import types

import smartcommit.config as _config
from smartcommit.config import LLMProvider
from smartcommit.llm.base import BaseLLMProvider, clean_response_text
from smartcommit.llm.exceptions import LLMError, MissingAPIKeyError


class GoogleProvider(BaseLLMProvider):
    """Google Gemini LLM provider."""

    provider = LLMProvider.GOOGLE
    display_name = "Google"

    def invoke(self, prompt: str) -> str:
        """Generate a commit message using Google Gemini.

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
            client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=int(_config.REQUEST_TIMEOUT * 1000)),
            )
            response = client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    max_output_tokens=_config.MAX_TOKENS,
                    temperature=_config.TEMPERATURE,
                ),
            )
        except MissingAPIKeyError:
            raise
        except Exception as e:
            raise LLMError(f"Google Gemini API call failed: {e}")

        if not response.candidates:
            raise LLMError("Google Gemini returned no candidates in response")

        finish_reason = str(getattr(response.candidates[0], "finish_reason", "") or "")
        if "SAFETY" in finish_reason:
            raise LLMError(f"Google Gemini blocked response due to safety filters: {finish_reason}")

        return clean_response_text(response.text)
