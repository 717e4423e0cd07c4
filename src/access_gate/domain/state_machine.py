"""Role Transfer State Machine Guard.

Uses python-statemachine to enforce legal transitions of the two-phase
invite/accept protocol. One machine tracks one role (Administrator or
Recipient); the gate builds a machine from the stored status, fires the
event, and only then writes the new status back to the RoleStore.

Transition table:
    STABLE    -> INVITED    (invite)
    INVITED   -> INVITED    (invite; overwrites the pending candidate)
    ACCEPTED  -> INVITED    (invite)
    INVITED   -> ACCEPTED   (accept; holder := pending)
    ACCEPTED  -> ACCEPTED   (accept; stale pending re-asserts the same holder)
    ACCEPTED  -> STABLE     (settle; pending slot cleared)

The acceptance step leaves the pending slot populated (ACCEPTED). Clearing
it is a separate, opt-in ``settle`` event.
"""

from __future__ import annotations

from statemachine import State, StateMachine

TRANSFER_EVENTS = ("invite", "accept", "settle")


class RoleTransferStateMachine(StateMachine):
    """State machine that guards a single role's transfer lifecycle.

    Usage:
        sm = RoleTransferStateMachine(current_status="INVITED")
        sm.accept()          # transitions to ACCEPTED
        sm.status            # "ACCEPTED"
    """

    # --- States ---
    STABLE = State("STABLE", initial=True)
    INVITED = State("INVITED")
    ACCEPTED = State("ACCEPTED")

    # --- Events / Transitions ---
    invite = STABLE.to(INVITED) | INVITED.to.itself() | ACCEPTED.to(INVITED)
    accept = INVITED.to(ACCEPTED) | ACCEPTED.to.itself()
    settle = ACCEPTED.to(STABLE)

    def __init__(self, current_status: str = "STABLE") -> None:
        """Initialize the state machine at a given status.

        Args:
            current_status: The current TransferStatus value (e.g., "INVITED").
        """
        valid_values = {s.value for s in self.states}
        if current_status not in valid_values:
            valid = ", ".join(sorted(valid_values))
            raise ValueError(
                f"Unknown status '{current_status}'. Valid states: {valid}"
            )
        super().__init__(start_value=current_status)

    @property
    def status(self) -> str:
        """Return the current state value as a string (matches TransferStatus)."""
        return str(self.current_state.value)

    def get_allowed_events(self) -> list[str]:
        """Return a list of event names that can fire from the current state."""
        return [event.id for event in self.allowed_events]


def validate_transition(current_status: str, event_name: str) -> str:
    """Validate a role transfer transition and return the new status.

    Creates a temporary state machine, fires the named event, and returns
    the resulting status string.

    Raises:
        TransitionNotAllowed: If the transition is illegal.
        ValueError: If the status or event name is invalid.
    """
    sm = RoleTransferStateMachine(current_status=current_status)

    event_method = getattr(sm, event_name, None)
    if event_name not in TRANSFER_EVENTS or not callable(event_method):
        raise ValueError(
            f"Unknown event '{event_name}'. "
            f"Allowed events from {current_status}: {sm.get_allowed_events()}"
        )

    event_method()
    return sm.status
