"""Canonical state transition helpers for campaigns."""

from __future__ import annotations

from linkreach.core.exceptions import InvalidTransitionError
from linkreach.models.enums import CampaignStatus

_DRAFT = CampaignStatus.DRAFT.value
_ACTIVE = CampaignStatus.ACTIVE.value
_PAUSED = CampaignStatus.PAUSED.value
_COMPLETED = CampaignStatus.COMPLETED.value


class StateMachine:
    """Table-driven transition checks."""

    def __init__(self, transitions: dict[str, set[str]]) -> None:
        self._transitions = transitions

    @property
    def states(self) -> set[str]:
        return set(self._transitions)

    def can_transition(self, current: str, target: str) -> bool:
        return target in self._transitions.get(current, set())

    def assert_transition(self, current: str, target: str) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidTransitionError(f"Transition not allowed: {current} -> {target}")


CAMPAIGN_STATE_MACHINE = StateMachine(
    {
        _DRAFT: {_ACTIVE},
        _ACTIVE: {_PAUSED, _COMPLETED},
        _PAUSED: {_ACTIVE, _COMPLETED},
        _COMPLETED: set(),
    }
)

# Campaign states that still accept new prospects.
DISCOVERY_OPEN_STATES = frozenset({_DRAFT, _ACTIVE, _PAUSED})
# Campaign states in which outreach may be drafted and marked as sent.
OUTREACH_OPEN_STATES = frozenset({_DRAFT, _ACTIVE})
