"""Base class and shared utilities for LLM providers."""

from abc import ABC, abstractmethod

from smartcommit.config import API_KEY_ENV_VARS, LLMProvider
from smartcommit.llm.exceptions import LLMError, MissingAPIKeyError


def clean_response_text(raw_response: str | None) -> str:
    """Normalize a raw model response into commit message text.

    Removes surrounding whitespace and a wrapping markdown code fence if the
    model added one despite instructions.

    Raises:
        LLMError: If the response is empty.
    """
    cleaned = (raw_response or "").strip()

    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        # Remove first line (``` or ```text)
        lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines).strip()

    if not cleaned:
        raise LLMError("No content received from the model")

    return cleaned


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    A provider is one backend capability: it takes a finished prompt and
    returns message text. Two providers for different models (or accounts)
    of the same family are independent backends.
    """

    provider: LLMProvider
    display_name: str = ""

    def __init__(self, model: str, api_key: str | None = None):
        """Initialize the provider.

        Args:
            model: Concrete model name.
            api_key: Explicit API key; looked up lazily when None.
        """
        self.model = model
        self._api_key = api_key

    @property
    def backend_id(self) -> str:
        """Identity used to label candidates, e.g. "anthropic:claude-3-haiku-20240307"."""
        return f"{self.provider.value}:{self.model}"

    @abstractmethod
    def invoke(self, prompt: str) -> str:
        """Send a prompt to the model and return the message text.

        Args:
            prompt: The complete prompt.

        Returns:
            The generated commit message text.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: For any API or response failure.
        """
        pass

    def has_api_key(self) -> bool:
        """Check whether an API key is available without raising."""
        try:
            self.get_api_key()
        except MissingAPIKeyError:
            return False
        return True

    def get_api_key(self) -> str:
        """Get the API key from the constructor, environment or credentials file.

        Checks in order:
        1. Key passed to the constructor
        2. Environment variables, primary name before legacy names
        3. ~/.smartcommit/credentials, in the same name order

        Raises:
            MissingAPIKeyError: If the API key is not found.
        """
        if self._api_key:
            return self._api_key

        from smartcommit.global_config import lookup_api_key
        api_key = lookup_api_key(self.provider)
        if api_key:
            return api_key

        env_var_name = API_KEY_ENV_VARS[self.provider]

        raise MissingAPIKeyError(
            f"{self.display_name} API key not found. Set it using:\n"
            f"  1. Environment variable: export {env_var_name}=your_key_here\n"
            f"  2. Run: smartcommit config set-key {self.provider.value}\n"
            f"  3. Manually add to ~/.smartcommit/credentials"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model!r})"
