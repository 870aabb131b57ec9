"""Desired-state types of the NATS resource, with defaults, validation and dict conversion."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from natsop.api.conditions import Condition
from natsop.api.status import NATSStatus


@dataclass(frozen=True)
class GroupVersion:
    """API group and version of a resource kind."""

    group: str
    version: str

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"

    def __str__(self) -> str:
        return self.api_version


GROUP_VERSION = GroupVersion(group="operator.kyma-project.io", version="v1alpha1")

_QUANTITY = re.compile(
    r"^[+-]?(?P<number>\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+|Ki|Mi|Gi|Ti|Pi|Ei|n|u|m|k|M|G|T|P|E)?$"
)


def _quantity_is_zero(quantity: str) -> bool:
    match = _QUANTITY.match(quantity)
    if match is None:
        raise ValueError(f"invalid quantity: {quantity!r}")
    return float(match.group("number")) == 0


@dataclass
class Cluster:
    """Number of NATS nodes."""

    size: int = 3


@dataclass
class MemStorage:
    enabled: bool = True
    size: str = "1Gi"


@dataclass
class FileStorage:
    storage_class_name: str = "default"
    size: str = "1Gi"


@dataclass
class Logging:
    debug: bool = False
    trace: bool = False


@dataclass
class JetStream:
    mem_storage: MemStorage = field(default_factory=MemStorage)
    file_storage: FileStorage = field(default_factory=FileStorage)


def _default_limits() -> Dict[str, str]:
    return {"cpu": "500m", "memory": "1Gi"}


def _default_requests() -> Dict[str, str]:
    return {"cpu": "40m", "memory": "64Mi"}


@dataclass
class ResourceRequirements:
    limits: Dict[str, str] = field(default_factory=_default_limits)
    requests: Dict[str, str] = field(default_factory=_default_requests)


@dataclass
class ObjectMeta:
    name: str = ""
    namespace: str = ""
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)
    deletion_timestamp: Optional[datetime] = None


@dataclass
class NATSSpec:
    """Desired state of a NATS deployment."""

    cluster: Cluster = field(default_factory=Cluster)
    jet_stream: JetStream = field(default_factory=JetStream)
    logging: Logging = field(default_factory=Logging)
    resources: ResourceRequirements = field(default_factory=ResourceRequirements)
    annotations: Dict[str, str] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)

    def validate(self) -> None:
        """Raise ValueError if the spec breaks the resource's validation rules."""
        if self.cluster.size < 1:
            raise ValueError("cluster size must be at least 1")
        if self.cluster.size % 2 == 0:
            raise ValueError("size only accepts odd numbers")
        mem = self.jet_stream.mem_storage
        if _quantity_is_zero(mem.size) and mem.enabled:
            raise ValueError("can only be enabled if size is not 0")
        _quantity_is_zero(self.jet_stream.file_storage.size)
        for values in (self.resources.limits, self.resources.requests):
            for quantity in values.values():
                _quantity_is_zero(quantity)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "cluster": {"size": self.cluster.size},
            "jetStream": {
                "memStorage": {
                    "enabled": self.jet_stream.mem_storage.enabled,
                    "size": self.jet_stream.mem_storage.size,
                },
                "fileStorage": {
                    "storageClassName": self.jet_stream.file_storage.storage_class_name,
                    "size": self.jet_stream.file_storage.size,
                },
            },
            "logging": {"debug": self.logging.debug, "trace": self.logging.trace},
            "resources": {
                "limits": dict(self.resources.limits),
                "requests": dict(self.resources.requests),
            },
        }
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.labels:
            data["labels"] = dict(self.labels)
        return data


@dataclass
class NATS:
    """A NATS custom resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: NATSSpec = field(default_factory=NATSSpec)
    status: NATSStatus = field(default_factory=NATSStatus)
    api_version: str = GROUP_VERSION.api_version
    kind: str = "NATS"

    def is_in_deletion(self) -> bool:
        return self.metadata.deletion_timestamp is not None

    def to_dict(self) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {"name": self.metadata.name}
        if self.metadata.namespace:
            metadata["namespace"] = self.metadata.namespace
        if self.metadata.labels:
            metadata["labels"] = dict(self.metadata.labels)
        if self.metadata.annotations:
            metadata["annotations"] = dict(self.metadata.annotations)
        if self.metadata.deletion_timestamp is not None:
            metadata["deletionTimestamp"] = self.metadata.deletion_timestamp.isoformat()
        status: Dict[str, Any] = {"state": self.status.state}
        if self.status.conditions:
            status["conditions"] = [_condition_to_dict(c) for c in self.status.conditions]
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": metadata,
            "spec": self.spec.to_dict(),
            "status": status,
        }


@dataclass
class NATSList:
    items: List[NATS] = field(default_factory=list)
    api_version: str = GROUP_VERSION.api_version
    kind: str = "NATSList"


def _parse_time(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _condition_to_dict(condition: Condition) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "type": condition.type,
        "status": condition.status,
        "reason": condition.reason,
        "message": condition.message,
    }
    if condition.last_transition_time is not None:
        data["lastTransitionTime"] = condition.last_transition_time.isoformat()
    if condition.observed_generation:
        data["observedGeneration"] = condition.observed_generation
    return data


def _condition_from_dict(data: Mapping[str, Any]) -> Condition:
    return Condition(
        type=data.get("type", ""),
        status=data.get("status", ""),
        reason=data.get("reason", ""),
        message=data.get("message", ""),
        last_transition_time=_parse_time(data.get("lastTransitionTime")),
        observed_generation=int(data.get("observedGeneration", 0)),
    )


def _spec_from_dict(data: Mapping[str, Any]) -> NATSSpec:
    spec = NATSSpec()
    if "cluster" in data:
        spec.cluster = Cluster(size=int(data["cluster"].get("size", 3)))
    if "jetStream" in data:
        js = data["jetStream"]
        if "memStorage" in js:
            mem = js["memStorage"]
            spec.jet_stream.mem_storage = MemStorage(
                enabled=bool(mem.get("enabled", True)), size=str(mem.get("size", "1Gi"))
            )
        if "fileStorage" in js:
            fs = js["fileStorage"]
            spec.jet_stream.file_storage = FileStorage(
                storage_class_name=str(fs.get("storageClassName", "default")),
                size=str(fs.get("size", "1Gi")),
            )
    if "logging" in data:
        log = data["logging"]
        spec.logging = Logging(debug=bool(log.get("debug", False)), trace=bool(log.get("trace", False)))
    if "resources" in data:
        res = data["resources"]
        spec.resources = ResourceRequirements(
            limits={k: str(v) for k, v in res.get("limits", {}).items()},
            requests={k: str(v) for k, v in res.get("requests", {}).items()},
        )
    spec.annotations = dict(data.get("annotations", {}))
    spec.labels = dict(data.get("labels", {}))
    return spec


def nats_from_dict(data: Mapping[str, Any]) -> NATS:
    """Build a NATS resource from its dict form, filling absent fields with defaults."""
    if not isinstance(data, Mapping):
        raise TypeError("NATS resource must be a mapping")
    meta = data.get("metadata", {})
    metadata = ObjectMeta(
        name=meta.get("name", ""),
        namespace=meta.get("namespace", ""),
        labels=dict(meta.get("labels", {})),
        annotations=dict(meta.get("annotations", {})),
        deletion_timestamp=_parse_time(meta.get("deletionTimestamp")),
    )
    status_data = data.get("status", {})
    status = NATSStatus(
        state=status_data.get("state", ""),
        conditions=[_condition_from_dict(c) for c in status_data.get("conditions", [])],
    )
    return NATS(
        metadata=metadata,
        spec=_spec_from_dict(data.get("spec", {})),
        status=status,
        api_version=data.get("apiVersion", GROUP_VERSION.api_version),
        kind=data.get("kind", "NATS"),
    )