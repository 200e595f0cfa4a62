from __future__ import annotations

import itertools

import pytest

from linkreach.core.exceptions import ConflictError, InvalidTransitionError
from linkreach.orchestration.state_machine import (
    CAMPAIGN_STATE_MACHINE,
    DISCOVERY_OPEN_STATES,
    OUTREACH_OPEN_STATES,
    StateMachine,
)

ALLOWED = {
    ("draft", "active"),
    ("active", "paused"),
    ("active", "completed"),
    ("paused", "active"),
    ("paused", "completed"),
}


def test_state_machine_allows_valid_transition():
    sm = StateMachine({"new": {"running"}, "running": {"completed"}})
    assert sm.can_transition("new", "running") is True
    sm.assert_transition("new", "running")


def test_state_machine_rejects_invalid_transition():
    sm = StateMachine({"new": {"running"}})
    with pytest.raises(InvalidTransitionError):
        sm.assert_transition("new", "completed")


def test_campaign_transitions_match_lifecycle():
    states = CAMPAIGN_STATE_MACHINE.states
    assert states == {"draft", "active", "paused", "completed"}
    for current, target in itertools.product(states, states):
        assert CAMPAIGN_STATE_MACHINE.can_transition(current, target) is ((current, target) in ALLOWED)


def test_completed_is_terminal():
    for target in ("draft", "active", "paused"):
        with pytest.raises(InvalidTransitionError):
            CAMPAIGN_STATE_MACHINE.assert_transition("completed", target)


def test_invalid_transition_maps_to_conflict():
    error = InvalidTransitionError("nope")
    assert isinstance(error, ConflictError)
    assert error.status_code == 409


def test_open_state_groups():
    assert DISCOVERY_OPEN_STATES == {"draft", "active", "paused"}
    assert OUTREACH_OPEN_STATES == {"draft", "active"}
