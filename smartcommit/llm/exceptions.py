"""LLM-related exception classes.

Contains all exception classes for LLM operations:
- LLMError: A single backend failed to produce a message
- MissingAPIKeyError: Raised when API key is not set
- AllBackendsFailedError: Raised when every ensemble backend failed
"""


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    pass


class MissingAPIKeyError(LLMError):
    """Raised when the required API key is not set."""

    pass


class AllBackendsFailedError(LLMError):
    """Raised when every backend of an ensemble failed.

    Attributes:
        failures: BackendFailure entries in configured backend order.
    """

    def __init__(self, failures):
        self.failures = list(failures)
        reasons = "; ".join(f"{f.backend_id}: {f.reason}" for f in self.failures)
        super().__init__(f"All ensemble models failed to generate commit messages ({reasons})")
