"""Per-invocation notification session."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


class NotificationState(str, Enum):
    """Stage a notification has reached in the verification pipeline."""

    RECEIVED = "received"
    SIGNATURE_CHECKED = "signature_checked"
    STATUS_CHECKED = "status_checked"
    PROVIDER_VALIDATED = "provider_validated"
    FORWARDED = "forwarded"
    ACKNOWLEDGED = "acknowledged"
    REJECTED = "rejected"


TERMINAL_STATES = {
    NotificationState.FORWARDED,
    NotificationState.ACKNOWLEDGED,
    NotificationState.REJECTED,
}

VALID_TRANSITIONS: dict[NotificationState, set[NotificationState]] = {
    NotificationState.RECEIVED: {NotificationState.SIGNATURE_CHECKED, NotificationState.REJECTED},
    NotificationState.SIGNATURE_CHECKED: {
        NotificationState.STATUS_CHECKED,
        # Non-COMPLETE payments stop here with a 200
        NotificationState.ACKNOWLEDGED,
        NotificationState.REJECTED,
    },
    NotificationState.STATUS_CHECKED: {
        NotificationState.PROVIDER_VALIDATED,
        NotificationState.REJECTED,
    },
    NotificationState.PROVIDER_VALIDATED: {NotificationState.FORWARDED, NotificationState.REJECTED},
    NotificationState.FORWARDED: set(),
    NotificationState.ACKNOWLEDGED: set(),
    NotificationState.REJECTED: set(),
}


@dataclass
class NotificationSession:
    """Tracks one notification through the pipeline.

    In-memory only; nothing is persisted between invocations.
    """

    reference_id: str | None = None
    state: NotificationState = NotificationState.RECEIVED
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None
    error: str | None = None

    def transition_to(self, new_state: NotificationState) -> None:
        """Move to a new state.

        Args:
            new_state: The state to transition to.

        Raises:
            ValueError: If the transition is not allowed from the current state.
        """
        valid_next_states = VALID_TRANSITIONS.get(self.state, set())

        if new_state not in valid_next_states:
            raise ValueError(
                f"Invalid transition: {self.state.value} -> {new_state.value}. "
                f"Valid transitions: {sorted(s.value for s in valid_next_states)}"
            )

        self.state = new_state

        if new_state in TERMINAL_STATES:
            self.completed_at = datetime.now(UTC)

    def reject(self, error: str) -> None:
        """Mark the notification rejected from any non-terminal state."""
        self.error = error
        if not self.is_terminal:
            self.state = NotificationState.REJECTED
            self.completed_at = datetime.now(UTC)

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def duration_seconds(self) -> float | None:
        """Elapsed time until the terminal state, if reached."""
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()
