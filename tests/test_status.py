from datetime import datetime, timezone

import pytest

from natsop.api.conditions import (
    Condition,
    ConditionReason,
    ConditionStatus,
    ConditionType,
    State,
)
from natsop.api.status import NATSStatus


@pytest.mark.parametrize(
    "status1, status2, want",
    [
        (
            NATSStatus(
                conditions=[Condition(type=ConditionType.AVAILABLE, status=ConditionStatus.TRUE)],
                state=State.READY,
            ),
            NATSStatus(
                conditions=[Condition(type=ConditionType.AVAILABLE, status=ConditionStatus.FALSE)],
                state=State.READY,
            ),
            False,
        ),
        (
            NATSStatus(
                conditions=[Condition(type=ConditionType.AVAILABLE, status=ConditionStatus.TRUE)],
                state=State.READY,
            ),
            NATSStatus(
                conditions=[Condition(type=ConditionType.AVAILABLE, status=ConditionStatus.TRUE)],
                state=State.PROCESSING,
            ),
            False,
        ),
        (
            NATSStatus(
                conditions=[Condition(type=ConditionType.AVAILABLE, status=ConditionStatus.TRUE)],
                state=State.READY,
            ),
            NATSStatus(
                conditions=[Condition(type=ConditionType.AVAILABLE, status=ConditionStatus.TRUE)],
                state=State.READY,
            ),
            True,
        ),
    ],
)
def test_is_equal(status1, status2, want):
    assert status1.is_equal(status2) is want


CURRENT = datetime.now(timezone.utc)


@pytest.mark.parametrize(
    "given, find, want",
    [
        (
            [
                Condition(
                    type=ConditionType.AVAILABLE,
                    status=ConditionStatus.TRUE,
                    last_transition_time=CURRENT,
                ),
                Condition(
                    type=ConditionType.STATEFUL_SET,
                    status=ConditionStatus.TRUE,
                    last_transition_time=CURRENT,
                ),
            ],
            ConditionType.AVAILABLE,
            Condition(
                type=ConditionType.AVAILABLE,
                status=ConditionStatus.TRUE,
                last_transition_time=CURRENT,
            ),
        ),
        (
            [
                Condition(
                    type=ConditionType.STATEFUL_SET,
                    status=ConditionStatus.TRUE,
                    last_transition_time=CURRENT,
                )
            ],
            ConditionType.AVAILABLE,
            None,
        ),
    ],
)
def test_find_condition(given, find, want):
    status = NATSStatus(conditions=given)
    assert status.find_condition(find) == want


def test_find_condition_returns_copy():
    status = NATSStatus(
        conditions=[Condition(type=ConditionType.AVAILABLE, status=ConditionStatus.TRUE)]
    )
    found = status.find_condition(ConditionType.AVAILABLE)
    found.status = "False"
    assert status.conditions[0].status == "True"


@pytest.mark.parametrize(
    "ctype, method",
    [
        (ConditionType.STATEFUL_SET, "update_condition_stateful_set"),
        (ConditionType.AVAILABLE, "update_condition_available"),
        (ConditionType.DELETED, "update_condition_deletion"),
    ],
)
def test_update_condition(ctype, method):
    status = NATSStatus(
        conditions=[Condition(type=ctype, status=ConditionStatus.FALSE, reason="", message="")],
        state=State.READY,
    )
    getattr(status, method)(ConditionStatus.TRUE, ConditionReason.PROCESSING, "test123")
    got = status.conditions[0]
    assert got.type == ctype.value
    assert got.status == "True"
    assert got.reason == ConditionReason.PROCESSING.value
    assert got.message == "test123"


@pytest.mark.parametrize(
    "initial, method, want",
    [
        (State.ERROR, "set_state_ready", State.READY),
        (State.ERROR, "set_state_processing", State.PROCESSING),
        (State.PROCESSING, "set_state_error", State.ERROR),
        (State.ERROR, "set_state_deleting", State.DELETING),
        (State.READY, "set_state_warning", State.WARNING),
    ],
)
def test_set_state(initial, method, want):
    status = NATSStatus(state=initial)
    getattr(status, method)()
    assert status.state == want.value


def _assert_conditions(status, sts_reason, available_reason):
    sts = status.find_condition(ConditionType.STATEFUL_SET)
    assert sts is not None
    sts.last_transition_time = CURRENT
    assert sts == Condition(
        type=ConditionType.STATEFUL_SET,
        status=ConditionStatus.FALSE,
        reason=sts_reason,
        message="",
        last_transition_time=CURRENT,
    )
    available = status.find_condition(ConditionType.AVAILABLE)
    assert available is not None
    available.last_transition_time = CURRENT
    assert available == Condition(
        type=ConditionType.AVAILABLE,
        status=ConditionStatus.FALSE,
        reason=available_reason,
        message="",
        last_transition_time=CURRENT,
    )


def test_set_waiting_state_for_stateful_set():
    status = NATSStatus(state=State.ERROR)
    status.set_waiting_state_for_stateful_set()
    assert status.state == State.PROCESSING.value
    _assert_conditions(
        status, ConditionReason.STATEFUL_SET_PENDING, ConditionReason.DEPLOYING
    )


def test_initialize():
    status = NATSStatus(state=State.ERROR)
    status.initialize()
    assert status.state == State.PROCESSING.value
    _assert_conditions(status, ConditionReason.PROCESSING, ConditionReason.PROCESSING)


def test_set_state_ready_conditions():
    status = NATSStatus(state=State.ERROR)
    status.set_state_ready()
    sts = status.find_condition(ConditionType.STATEFUL_SET)
    available = status.find_condition(ConditionType.AVAILABLE)
    assert (sts.status, sts.reason, sts.message) == ("True", "Available", "StatefulSet is ready")
    assert (available.status, available.reason, available.message) == (
        "True",
        "Deployed",
        "NATS is deployed",
    )


def test_set_state_error_conditions():
    status = NATSStatus(state=State.PROCESSING)
    status.set_state_error()
    assert status.find_condition(ConditionType.STATEFUL_SET).reason == "FailedToSyncResources"
    assert status.find_condition(ConditionType.AVAILABLE).reason == "FailedProcessing"