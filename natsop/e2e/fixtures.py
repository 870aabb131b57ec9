"""Resources and selectors shared by the end-to-end checks."""

from __future__ import annotations

from typing import Any, Dict

from natsop.api.types import (
    NATS,
    Cluster,
    FileStorage,
    JetStream,
    Logging,
    MemStorage,
    NATSSpec,
    ObjectMeta,
    ResourceRequirements,
)

NAMESPACE_NAME = "kyma-system"
MANAGER_DEPLOYMENT_NAME = "nats-manager"
CR_NAME = "eventing-nats"
STS_NAME = CR_NAME
CONTAINER_NAME = "nats"
PVC_LABEL = "app.kubernetes.io/name=nats"
POD_LABEL = "nats_cluster=eventing-nats"
CLUSTER_SIZE = 3
SECRET_NAME = "eventing-nats-secret"
CM_NAME = "eventing-nats-config"
FILE_STORAGE_SIZE = "1Gi"
MEM_STORAGE_SIZE = "1Gi"
TRUE = "true"
PRIORITY_CLASS_NAME = "nats-manager-priority-class"


def nats_cr() -> NATS:
    """The NATS resource the end-to-end checks create and inspect."""
    return NATS(
        metadata=ObjectMeta(name=CR_NAME, namespace=NAMESPACE_NAME),
        spec=NATSSpec(
            cluster=Cluster(size=CLUSTER_SIZE),
            jet_stream=JetStream(
                mem_storage=MemStorage(enabled=True, size=MEM_STORAGE_SIZE),
                file_storage=FileStorage(storage_class_name="default", size=FILE_STORAGE_SIZE),
            ),
            logging=Logging(debug=True, trace=True),
            resources=ResourceRequirements(
                limits={"cpu": "20m", "memory": "2Gi"},
                requests={"cpu": "5m", "memory": "2Gi"},
            ),
        ),
    )


def namespace() -> Dict[str, Any]:
    """The namespace the NATS resource lives in."""
    return {"apiVersion": "v1", "kind": "Namespace", "metadata": {"name": NAMESPACE_NAME}}


def pod_list_opts() -> Dict[str, str]:
    """List options selecting the NATS pods."""
    return {"labelSelector": POD_LABEL}


def pvc_list_opts() -> Dict[str, str]:
    """List options selecting the NATS persistent volume claims."""
    return {"labelSelector": PVC_LABEL}