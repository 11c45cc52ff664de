from dataclasses import dataclass, fields

import pulumi

from instaclustr_kafka.acl import FIELDS, KafkaAcl
from instaclustr_kafka.errors import ConflictError, PreconditionError, TransportError
from instaclustr_kafka.identifier import decode_id, encode_id
from utils.instaclustr import ApiError, KafkaAclApiClient

STATE_FIELDS: tuple[str, ...] = ("cluster_id", *FIELDS)


@dataclass(kw_only=True)
class KafkaAclState:
    """Managed state of a single Kafka ACL resource."""

    id: str = ""
    cluster_id: str = ""
    principal: str = ""
    host: str = ""
    resource_type: str = ""
    resource_name: str = ""
    operation: str = ""
    permission_type: str = ""
    pattern_type: str = ""

    @classmethod
    def from_acl(cls, cluster_id: str, acl: KafkaAcl, resource_id: str = "") -> "KafkaAclState":
        return cls(id=resource_id, cluster_id=cluster_id, **{name: getattr(acl, name) for name in FIELDS})

    @property
    def acl(self) -> KafkaAcl:
        return KafkaAcl(**{name: getattr(self, name) for name in FIELDS})

    @property
    def is_gone(self) -> bool:
        return not self.id

    def clear(self) -> None:
        for field in fields(self):
            setattr(self, field.name, "")

    def as_outputs(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in STATE_FIELDS}


def _ensure_cluster_running(cluster_id: str, client: KafkaAclApiClient) -> None:
    try:
        cluster = client.read_cluster(cluster_id)
    except ApiError as e:
        raise TransportError("Error in getting the status of the cluster") from e
    if not cluster.is_running:
        raise PreconditionError(f"Cluster {cluster_id} is not RUNNING. Currently in {cluster.status} state")


def _find_matching_acls(cluster_id: str, payload: str, client: KafkaAclApiClient) -> list[dict]:
    try:
        return client.read_kafka_acls(cluster_id, payload)
    except ApiError as e:
        raise TransportError("Error reading kafka ACL") from e


def create(state: KafkaAclState, client: KafkaAclApiClient) -> KafkaAclState:
    acl = state.acl
    pulumi.log.info(f"Creating Kafka ACL in {state.cluster_id}.")

    _ensure_cluster_running(state.cluster_id, client)

    payload = acl.to_payload()
    # An exact-match query returns at most one ACL
    if _find_matching_acls(state.cluster_id, payload, client):
        raise ConflictError("Error creating kafka ACL: the resource already exists, import it instead of creating")

    try:
        client.create_kafka_acl(state.cluster_id, payload)
    except ApiError as e:
        raise TransportError("Error creating kafka ACL") from e

    state.id = encode_id(state.cluster_id, acl)
    pulumi.log.info(f"Kafka ACL ({acl.describe()}) has been created.")
    return state


def read(state: KafkaAclState, client: KafkaAclApiClient) -> KafkaAclState:
    pulumi.log.info(f"Reading Kafka ACL in {state.cluster_id}.")

    _ensure_cluster_running(state.cluster_id, client)

    if not _find_matching_acls(state.cluster_id, state.acl.to_payload(), client):
        pulumi.log.warn(f"Kafka ACL {state.id} not found in cluster {state.cluster_id}, removing it from state.")
        state.clear()
    return state


def delete(state: KafkaAclState, client: KafkaAclApiClient) -> KafkaAclState:
    acl = state.acl
    pulumi.log.info(f"Deleting Kafka ACL in {state.cluster_id}.")

    # Deletion does not wait for the cluster to be RUNNING
    try:
        client.delete_kafka_acl(state.cluster_id, acl.to_payload())
    except ApiError as e:
        raise TransportError("Error deleting Kafka ACL") from e

    state.clear()
    pulumi.log.info(f"Kafka ACL ({acl.describe()}) has been deleted.")
    return state


def import_state(resource_id: str) -> KafkaAclState:
    cluster_id, acl = decode_id(resource_id)
    return KafkaAclState.from_acl(cluster_id, acl, resource_id=resource_id)
