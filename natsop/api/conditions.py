"""Condition vocabulary of the NATS resource and helpers for comparing and setting conditions."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Sequence


class ConditionStatus(str, Enum):
    """Status value of a condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class ConditionType(str, Enum):
    """Kinds of conditions reported on a NATS resource."""

    AVAILABLE = "Available"
    STATEFUL_SET = "StatefulSet"
    DELETED = "Deleted"


class ConditionReason(str, Enum):
    """Machine-readable reasons attached to conditions."""

    PROCESSING = "Processing"
    DEPLOYING = "Deploying"
    DEPLOYED = "Deployed"
    DELETING = "Deleting"
    PROCESSING_ERROR = "FailedProcessing"
    FORBIDDEN = "Forbidden"
    STATEFUL_SET_AVAILABLE = "Available"
    STATEFUL_SET_PENDING = "Pending"
    SYNC_FAIL_ERROR = "FailedToSyncResources"
    MANIFEST_ERROR = "InvalidManifests"
    DELETION_ERROR = "DeletionError"


class State(str, Enum):
    """Overall state of a NATS resource."""

    READY = "Ready"
    ERROR = "Error"
    PROCESSING = "Processing"
    DELETING = "Deleting"
    WARNING = "Warning"


def _text(value: object) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


@dataclass
class Condition:
    """A single observation about the resource; enum values are stored as plain strings."""

    type: str = ""
    status: str = ""
    reason: str = ""
    message: str = ""
    last_transition_time: Optional[datetime] = None
    observed_generation: int = 0

    def __post_init__(self) -> None:
        self.type = _text(self.type)
        self.status = _text(self.status)
        self.reason = _text(self.reason)
        self.message = str(self.message)


def condition_equals(existing: Condition, expected: Condition) -> bool:
    """Compare two conditions by type, status, reason and message, ignoring timestamps."""
    return (
        existing.type == expected.type
        and existing.status == expected.status
        and existing.reason == expected.reason
        and existing.message == expected.message
    )


def conditions_equals(existing: Sequence[Condition], expected: Sequence[Condition]) -> bool:
    """Check that two lists hold the same conditions, matched by type."""
    if len(existing) != len(expected):
        return False
    by_type = {condition.type: condition for condition in existing}
    return all(
        condition_equals(by_type.get(condition.type, Condition()), condition)
        for condition in expected
    )


def set_status_condition(conditions: List[Condition], new_condition: Condition) -> Condition:
    """Add or update the condition of the same type in place and return the stored condition.

    The transition time only changes when the status changes; a missing time is set to now.
    """
    existing = next((c for c in conditions if c.type == new_condition.type), None)
    if existing is None:
        stored = dataclasses.replace(new_condition)
        if stored.last_transition_time is None:
            stored.last_transition_time = _now()
        conditions.append(stored)
        return stored

    if existing.status != new_condition.status:
        existing.status = new_condition.status
        existing.last_transition_time = new_condition.last_transition_time or _now()
    existing.reason = new_condition.reason
    existing.message = new_condition.message
    existing.observed_generation = new_condition.observed_generation
    return existing