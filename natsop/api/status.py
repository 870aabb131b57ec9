"""Observed state of a NATS resource."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import List, Optional, Union

from natsop.api.conditions import (
    Condition,
    ConditionReason,
    ConditionStatus,
    ConditionType,
    State,
    conditions_equals,
    set_status_condition,
)

_Status = Union[ConditionStatus, str]
_Reason = Union[ConditionReason, str]


@dataclass
class NATSStatus:
    """State and conditions of a NATS resource."""

    state: str = ""
    conditions: List[Condition] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.state, State):
            self.state = self.state.value

    def is_equal(self, other: "NATSStatus") -> bool:
        """Equal when states match and conditions match, ignoring transition times."""
        return self.state == other.state and conditions_equals(self.conditions, other.conditions)

    def find_condition(self, condition_type: Union[ConditionType, str]) -> Optional[Condition]:
        """Return a copy of the condition of the given type, or None."""
        wanted = condition_type.value if isinstance(condition_type, ConditionType) else condition_type
        for condition in self.conditions:
            if condition.type == wanted:
                return dataclasses.replace(condition)
        return None

    def _update(self, ctype: ConditionType, status: _Status, reason: _Reason, message: str) -> None:
        set_status_condition(
            self.conditions,
            Condition(type=ctype, status=status, reason=reason, message=message),
        )

    def update_condition_stateful_set(self, status: _Status, reason: _Reason, message: str) -> None:
        self._update(ConditionType.STATEFUL_SET, status, reason, message)

    def update_condition_available(self, status: _Status, reason: _Reason, message: str) -> None:
        self._update(ConditionType.AVAILABLE, status, reason, message)

    def update_condition_deletion(self, status: _Status, reason: _Reason, message: str) -> None:
        self._update(ConditionType.DELETED, status, reason, message)

    def set_state_ready(self) -> None:
        self.state = State.READY.value
        self.update_condition_stateful_set(
            ConditionStatus.TRUE, ConditionReason.STATEFUL_SET_AVAILABLE, "StatefulSet is ready"
        )
        self.update_condition_available(
            ConditionStatus.TRUE, ConditionReason.DEPLOYED, "NATS is deployed"
        )

    def set_state_processing(self) -> None:
        self.state = State.PROCESSING.value

    def set_state_warning(self) -> None:
        self.state = State.WARNING.value

    def set_waiting_state_for_stateful_set(self) -> None:
        self.set_state_processing()
        self.update_condition_stateful_set(
            ConditionStatus.FALSE, ConditionReason.STATEFUL_SET_PENDING, ""
        )
        self.update_condition_available(ConditionStatus.FALSE, ConditionReason.DEPLOYING, "")

    def set_state_error(self) -> None:
        self.state = State.ERROR.value
        self.update_condition_stateful_set(
            ConditionStatus.FALSE, ConditionReason.SYNC_FAIL_ERROR, ""
        )
        self.update_condition_available(
            ConditionStatus.FALSE, ConditionReason.PROCESSING_ERROR, ""
        )

    def set_state_deleting(self) -> None:
        self.state = State.DELETING.value

    def initialize(self) -> None:
        self.set_state_processing()
        self.update_condition_stateful_set(ConditionStatus.FALSE, ConditionReason.PROCESSING, "")
        self.update_condition_available(ConditionStatus.FALSE, ConditionReason.PROCESSING, "")