# natsop

`natsop` describes a NATS cluster as a custom resource and keeps track of its
status. It also provides helpers for end-to-end checks against such a cluster.
It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The resource

`natsop.api.types` holds the resource model. `NATS` carries the metadata
(`ObjectMeta`), a `NATSSpec` and a `NATSStatus`. The spec has these parts:

- `Cluster`: the number of nodes.
- `JetStream`: a `MemStorage` part and a `FileStorage` part.
- `Logging`: the `debug` and `trace` flags.
- `ResourceRequirements`: CPU and memory `limits` and `requests`.

A spec has these defaults:

- a cluster of size 3;
- 1Gi of memory storage, enabled;
- 1Gi of file storage on the `default` storage class;
- debug and trace logging off;
- limits of `500m` CPU and `1Gi` memory;
- requests of `40m` CPU and `64Mi` memory.

`NATSSpec.validate()` raises `ValueError` in these cases:

- the cluster size is below 1 or is even;
- memory storage is enabled while its size is zero;
- any storage size, limit or request is not a valid quantity, such as `1Gi`,
  `500m` or `64Mi`.

`nats_from_dict` builds a `NATS` from its dict form and fills in defaults for
the fields that are absent. It raises `TypeError` if the input is not a
mapping. `NATS.to_dict()` and `NATSSpec.to_dict()` produce the dict form, with
camelCase keys. `NATS.is_in_deletion()` returns true when
`metadata.deletion_timestamp` is set. `NATSList` holds a list of resources.

```python
from natsop.api.types import nats_from_dict

cr = nats_from_dict({
    "metadata": {"name": "eventing-nats", "namespace": "kyma-system"},
    "spec": {"cluster": {"size": 3}},
})
cr.spec.validate()
assert not cr.is_in_deletion()
print(cr.to_dict())
```

`GROUP_VERSION` is a `GroupVersion` for the API group
`operator.kyma-project.io` at version `v1alpha1`. Its `api_version` is
`operator.kyma-project.io/v1alpha1`.

## Status and conditions

`natsop.api.conditions` holds the condition vocabulary. The enums are
`ConditionType`, `ConditionStatus`, `ConditionReason` and `State`. A
`Condition` record stores its type, status and reason as plain strings.

The module has three helpers:

- `condition_equals` compares two conditions by type, status, reason and
  message. The transition time is ignored.
- `conditions_equals` compares two lists of conditions. The conditions are
  matched by type, so order does not matter.
- `set_status_condition` adds a condition to a list, or updates the condition
  of the same type that is already there. The transition time changes only
  when the status changes.

`natsop.api.status.NATSStatus` holds a state and a list of conditions. Some of
its methods set the state only:

- `set_state_processing`
- `set_state_warning`
- `set_state_deleting`

The other methods also set the `StatefulSet` and `Available` conditions:

- `initialize`
- `set_state_ready`
- `set_state_error`
- `set_waiting_state_for_stateful_set`

To set a single condition, use `update_condition_stateful_set`,
`update_condition_available` or `update_condition_deletion`.

`find_condition` returns a copy of the condition of a given type, or `None` if
there is none. `is_equal` compares the states and the conditions of two
statuses, ignoring transition times.

```python
from natsop.api.conditions import ConditionType
from natsop.api.status import NATSStatus

status = NATSStatus()
status.initialize()
status.set_state_ready()
print(status.state, status.find_condition(ConditionType.AVAILABLE))
```

## End-to-end helpers

- `natsop.e2e.retry`: `retry(attempts, interval, fn)` and
  `retry_get(attempts, interval, fn)` call `fn` until it returns without
  raising. They wait `interval` (seconds or a `timedelta`) before each attempt.
  After the last failed attempt, the exception from that attempt is raised
  again. `retry_get` returns the result of `fn`. Both raise `ValueError` if
  `attempts` is below 1 or `interval` is negative.
- `natsop.e2e.logger`: `setup_logger(name="e2e")` returns a logger that writes
  JSON lines to stdout, formatted by `JsonFormatter`. The level comes from
  the `E2E_LOG_LEVEL` environment variable: `debug`, `info`, `warn` or
  `error`. Any other value, or none, means `debug`.
- `natsop.e2e.fixtures`: these functions return the reference resource and
  the objects that the checks use:
  - `nats_cr()` returns the reference `eventing-nats` resource in
    `kyma-system`.
  - `namespace()` returns its namespace.
  - `pod_list_opts()` and `pvc_list_opts()` return the label selectors.

  The module also defines constants such as `CR_NAME`, `SECRET_NAME` and
  `CM_NAME`.

## What this package does not do

This package has no controller or reconciler, and no Kubernetes client. It
does not render charts or deploy NATS. It does not run the end-to-end checks
themselves. It provides no command-line tool. It models the resource and its
status and supplies the helpers, but it never talks to a cluster.