"""Tests for the RoleTransferStateMachine domain guard.

These tests verify that:
    1. The invite/accept handshake moves through the expected states.
    2. Re-inviting overwrites from any state.
    3. Illegal transitions are blocked.
    4. The convenience function validate_transition works.
"""

from __future__ import annotations

import pytest
from statemachine.exceptions import TransitionNotAllowed

from access_gate.domain.state_machine import (
    RoleTransferStateMachine,
    validate_transition,
)


class TestHandshake:
    """STABLE -> INVITED -> ACCEPTED -> STABLE."""

    def test_full_lifecycle(self) -> None:
        sm = RoleTransferStateMachine("STABLE")
        assert sm.status == "STABLE"

        sm.invite()
        assert sm.status == "INVITED"

        sm.accept()
        assert sm.status == "ACCEPTED"

        sm.settle()
        assert sm.status == "STABLE"

    def test_default_status_is_stable(self) -> None:
        assert RoleTransferStateMachine().status == "STABLE"


class TestReinvite:
    def test_reinvite_while_invited(self) -> None:
        sm = RoleTransferStateMachine("INVITED")
        sm.invite()
        assert sm.status == "INVITED"

    def test_invite_after_acceptance(self) -> None:
        sm = RoleTransferStateMachine("ACCEPTED")
        sm.invite()
        assert sm.status == "INVITED"


class TestStaleAcceptance:
    def test_accepted_can_accept_again(self) -> None:
        sm = RoleTransferStateMachine("ACCEPTED")
        sm.accept()
        assert sm.status == "ACCEPTED"


class TestIllegalTransitions:
    def test_accept_without_invite(self) -> None:
        sm = RoleTransferStateMachine("STABLE")
        with pytest.raises(TransitionNotAllowed):
            sm.accept()

    def test_settle_before_accept(self) -> None:
        sm = RoleTransferStateMachine("INVITED")
        with pytest.raises(TransitionNotAllowed):
            sm.settle()

    def test_settle_when_stable(self) -> None:
        sm = RoleTransferStateMachine("STABLE")
        with pytest.raises(TransitionNotAllowed):
            sm.settle()


class TestAllowedEvents:
    def test_stable_allowed(self) -> None:
        sm = RoleTransferStateMachine("STABLE")
        assert sm.get_allowed_events() == ["invite"]

    def test_invited_allowed(self) -> None:
        allowed = set(RoleTransferStateMachine("INVITED").get_allowed_events())
        assert allowed == {"invite", "accept"}

    def test_accepted_allowed(self) -> None:
        allowed = set(RoleTransferStateMachine("ACCEPTED").get_allowed_events())
        assert allowed == {"invite", "accept", "settle"}


class TestValidateTransitionFunction:
    def test_valid_transition(self) -> None:
        assert validate_transition("INVITED", "accept") == "ACCEPTED"

    def test_illegal_transition(self) -> None:
        with pytest.raises(TransitionNotAllowed):
            validate_transition("STABLE", "settle")

    def test_invalid_event_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown event"):
            validate_transition("STABLE", "renounce")

    def test_invalid_status(self) -> None:
        with pytest.raises(ValueError, match="Unknown status"):
            RoleTransferStateMachine("REVOKED")
