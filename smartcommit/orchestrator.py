"""Commit message generation across one or more LLM backends.

Single-backend generation calls the first backend and lets its error
propagate. Ensemble generation calls every backend concurrently, waits for
all of them, drops the failures and hands the successes (in configured
backend order) to a SelectionPolicy.

Contains:
- SelectionPolicy / FirstSuccessPolicy: Choose the final candidate
- generate_message: The orchestration entry point
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from smartcommit.llm.base import BaseLLMProvider
from smartcommit.llm.exceptions import AllBackendsFailedError, LLMError
from smartcommit.llm.prompts import build_prompt
from smartcommit.models import (
    BackendFailure,
    Candidate,
    GenerationContext,
    GenerationOutcome,
)
from smartcommit.styles import get_style_policy

logger = logging.getLogger(__name__)


class SelectionPolicy(ABC):
    """Chooses the final candidate among successful ensemble candidates."""

    @abstractmethod
    def select(self, candidates: Sequence[Candidate]) -> Candidate:
        """Pick one candidate.

        Args:
            candidates: Non-empty successes in configured backend order.
        """
        pass


class FirstSuccessPolicy(SelectionPolicy):
    """Pick the first successful candidate in configured backend order."""

    def select(self, candidates: Sequence[Candidate]) -> Candidate:
        return candidates[0]


def _invoke_backend(backend: BaseLLMProvider, context: GenerationContext) -> str:
    prompt = build_prompt(context, model=backend.model)
    return backend.invoke(prompt)


def _finalize(
    candidate: Candidate,
    context: GenerationContext,
    candidates: list[Candidate],
    failures: list[BackendFailure],
) -> GenerationOutcome:
    policy = get_style_policy(context.style)
    return GenerationOutcome(
        message=policy.post_process(candidate.text, context),
        backend_id=candidate.backend_id,
        candidates=candidates,
        failures=failures,
    )


def generate_single(backend: BaseLLMProvider, context: GenerationContext) -> GenerationOutcome:
    """Generate with exactly one backend.

    Raises:
        LLMError: Propagated unchanged from the backend.
    """
    candidate = Candidate(backend_id=backend.backend_id, text=_invoke_backend(backend, context))
    return _finalize(candidate, context, [candidate], [])


def _fan_out(
    backends: Sequence[BaseLLMProvider],
    context: GenerationContext,
) -> tuple[list[Candidate], list[BackendFailure]]:
    """Invoke all backends concurrently and join results by configured index."""
    with ThreadPoolExecutor(max_workers=len(backends)) as executor:
        futures = [executor.submit(_invoke_backend, backend, context) for backend in backends]

        candidates: list[Candidate] = []
        failures: list[BackendFailure] = []
        # Iterating in submission order waits for every call, whatever
        # order they finish in
        for backend, future in zip(backends, futures):
            try:
                text = future.result()
            except LLMError as e:
                logger.warning("Failed to generate message with %s: %s", backend.backend_id, e)
                failures.append(BackendFailure(backend_id=backend.backend_id, reason=str(e)))
                continue
            candidates.append(Candidate(backend_id=backend.backend_id, text=text))

    return candidates, failures


def generate_ensemble(
    backends: Sequence[BaseLLMProvider],
    context: GenerationContext,
    policy: Optional[SelectionPolicy] = None,
) -> GenerationOutcome:
    """Generate with every backend and select one candidate.

    Raises:
        AllBackendsFailedError: If no backend produced a message.
    """
    policy = policy or FirstSuccessPolicy()
    candidates, failures = _fan_out(backends, context)

    if not candidates:
        raise AllBackendsFailedError(failures)

    if len(candidates) == 1:
        return _finalize(candidates[0], context, candidates, failures)

    return _finalize(policy.select(candidates), context, candidates, failures)


def generate_message(
    context: GenerationContext,
    backends: Sequence[BaseLLMProvider],
    ensemble: bool = False,
    policy: Optional[SelectionPolicy] = None,
) -> GenerationOutcome:
    """Generate the final commit message.

    Args:
        context: The generation context shared by every backend call.
        backends: Backends in configured order; the first is the primary.
        ensemble: Use every backend (only effective with more than one).
        policy: Candidate selection policy; first success by default.

    Returns:
        The GenerationOutcome with the final message and all candidates.

    Raises:
        ValueError: If no backend is configured.
        LLMError: From the primary backend in single-backend mode, or from
            the fallback call after an unexpected ensemble failure.
        AllBackendsFailedError: If every ensemble backend failed.
    """
    if not backends:
        raise ValueError("At least one backend is required")

    primary = backends[0]

    if not ensemble or len(backends) < 2:
        return generate_single(primary, context)

    try:
        return generate_ensemble(backends, context, policy)
    except AllBackendsFailedError:
        raise
    except Exception as e:
        logger.error("Ensemble generation failed: %s", e)
        return generate_single(primary, context)
