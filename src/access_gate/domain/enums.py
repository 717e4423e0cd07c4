"""Domain enumerations for the Access Gate.

These enums define the canonical roles, variants and transfer states used
throughout the system. They are framework-agnostic (no FastAPI imports).
"""

import enum


class Role(enum.StrEnum):
    """Privileged roles held in the RoleStore."""

    ADMINISTRATOR = "administrator"
    RECIPIENT = "recipient"


class GateVariant(enum.StrEnum):
    """Which role-change protocol a gate exposes.

    SECURE uses the two-phase invite/accept handshake.
    SIMPLE lets the Administrator reassign either role in one step.
    """

    SECURE = "secure"
    SIMPLE = "simple"


class TransferStatus(enum.StrEnum):
    """Per-role states of the two-phase transfer protocol.

    Transitions are enforced by the RoleTransferStateMachine guard.
    See domain/state_machine.py for the transition table.
    """

    STABLE = "STABLE"
    INVITED = "INVITED"
    # Invite accepted, pending slot still holds the (now active) holder.
    ACCEPTED = "ACCEPTED"
