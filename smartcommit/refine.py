"""Interactive refinement of a generated commit message.

A RefinementSession is a small state machine over one message:

    PROPOSED --accept-----> ACCEPTED
    PROPOSED --edit-------> EDITING --> ACCEPTED (message replaced, stripped)
    PROPOSED --regenerate-> REGENERATING --> PROPOSED (new message)
    PROPOSED --cancel-----> CANCELLED

Decisions come from a DecisionSource, so the loop can be driven by a
terminal prompt or by a scripted sequence. Regeneration is unbounded.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional


class RefineState(Enum):
    """States of a refinement session."""

    PROPOSED = "proposed"
    ACCEPTED = "accepted"
    EDITING = "editing"
    REGENERATING = "regenerating"
    CANCELLED = "cancelled"


class DecisionKind(Enum):
    """User decisions on a proposed message."""

    ACCEPT = "accept"
    EDIT = "edit"
    REGENERATE = "regenerate"
    CANCEL = "cancel"


TERMINAL_STATES = {RefineState.ACCEPTED, RefineState.CANCELLED}


@dataclass(frozen=True)
class Decision:
    """A user decision; `text` carries the edited message for EDIT."""

    kind: DecisionKind
    text: Optional[str] = None

    @classmethod
    def accept(cls) -> "Decision":
        return cls(DecisionKind.ACCEPT)

    @classmethod
    def edit(cls, text: str) -> "Decision":
        return cls(DecisionKind.EDIT, text)

    @classmethod
    def regenerate(cls) -> "Decision":
        return cls(DecisionKind.REGENERATE)

    @classmethod
    def cancel(cls) -> "Decision":
        return cls(DecisionKind.CANCEL)


class DecisionSource(ABC):
    """Supplies the next decision for a proposed message."""

    @abstractmethod
    def next_decision(self, message: str) -> Decision:
        pass


class ScriptedDecisionSource(DecisionSource):
    """Replays a fixed sequence of decisions."""

    def __init__(self, decisions: Iterable[Decision]):
        self._decisions = iter(decisions)

    def next_decision(self, message: str) -> Decision:
        try:
            return next(self._decisions)
        except StopIteration:
            raise RuntimeError("Decision script exhausted before the session finished")


class RefinementSession:
    """Mediates between a generated message and the commit step.

    Args:
        message: The initially proposed message.
        regenerate: Produces a new message for the same generation context.
        on_state_change: Optional callback receiving (state, message) after
            every transition, e.g. to print progress.
    """

    def __init__(
        self,
        message: str,
        regenerate: Callable[[], str],
        on_state_change: Optional[Callable[[RefineState, str], None]] = None,
    ):
        self.message = message
        self.state = RefineState.PROPOSED
        self.regenerations = 0
        self._regenerate = regenerate
        self._on_state_change = on_state_change

    @property
    def is_finished(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def can_commit(self) -> bool:
        """Only an accepted message may be committed."""
        return self.state == RefineState.ACCEPTED

    def _transition(self, state: RefineState) -> None:
        self.state = state
        if self._on_state_change:
            self._on_state_change(state, self.message)

    def apply(self, decision: Decision) -> RefineState:
        """Apply one decision to a proposed message.

        Returns:
            The state after the decision has been fully processed
            (ACCEPTED, CANCELLED, or PROPOSED after a regeneration).

        Raises:
            RuntimeError: If the session is not in the PROPOSED state.
            ValueError: If an edit decision carries no text.
        """
        if self.state != RefineState.PROPOSED:
            raise RuntimeError(f"Cannot apply {decision.kind.value} in state {self.state.value}")

        if decision.kind == DecisionKind.ACCEPT:
            self._transition(RefineState.ACCEPTED)

        elif decision.kind == DecisionKind.EDIT:
            if decision.text is None:
                raise ValueError("Edit decision requires the edited message")
            self._transition(RefineState.EDITING)
            self.message = decision.text.strip()
            self._transition(RefineState.ACCEPTED)

        elif decision.kind == DecisionKind.REGENERATE:
            self._transition(RefineState.REGENERATING)
            try:
                new_message = self._regenerate()
            except Exception:
                # Keep the previous proposal so the caller may retry or cancel
                self.state = RefineState.PROPOSED
                raise
            self.message = new_message
            self.regenerations += 1
            self._transition(RefineState.PROPOSED)

        elif decision.kind == DecisionKind.CANCEL:
            self._transition(RefineState.CANCELLED)

        return self.state

    def run(self, source: DecisionSource) -> str:
        """Drive the session until it reaches ACCEPTED or CANCELLED.

        Args:
            source: Where decisions come from.

        Returns:
            The final message (the last proposed one if cancelled).
        """
        while not self.is_finished:
            self.apply(source.next_decision(self.message))
        return self.message
