"""Data models shared by prompt construction and generation.

Contains:
- GenerationContext: Immutable input to every backend call of one generation
- Candidate: A message produced by one backend
- BackendFailure: A backend that failed during ensemble generation
- GenerationOutcome: The final message plus every candidate and failure
"""

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True)
class GenerationContext:
    """Everything a backend needs to write one commit message.

    Attributes:
        diff_text: The unified diff to describe.
        style: Style profile name (plain, conventional, emoji, gitmoji,
            semantic, summary-body).
        language: Message language; "en" adds no language instruction.
        scope: Scope label, user-supplied or inferred.
        custom_instructions: Replaces the whole instruction block.
        template_prompt: A resolved template replacing the default prompt.
    """

    diff_text: str
    style: str = "plain"
    language: str = DEFAULT_LANGUAGE
    scope: Optional[str] = None
    custom_instructions: Optional[str] = None
    template_prompt: Optional[str] = None


@dataclass(frozen=True)
class Candidate:
    """A commit message produced by one backend."""

    backend_id: str
    text: str


@dataclass(frozen=True)
class BackendFailure:
    """A backend call that failed, with the reason."""

    backend_id: str
    reason: str


@dataclass(frozen=True)
class GenerationOutcome:
    """Result of one orchestration call.

    Attributes:
        message: The final, post-processed commit message.
        backend_id: The backend whose candidate was selected.
        candidates: Every successful candidate, in configured backend order.
        failures: Every failed backend, in configured backend order.
    """

    message: str
    backend_id: str
    candidates: list[Candidate] = field(default_factory=list)
    failures: list[BackendFailure] = field(default_factory=list)
