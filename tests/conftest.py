from typing import Any

import pytest

from instaclustr_kafka.acl import KafkaAcl
from instaclustr_kafka.lifecycle import KafkaAclState
from utils.instaclustr import ApiError, ClusterInfo


class FakeInstaclustrClient:
    def __init__(self, status: str = "RUNNING", remote_acls: list[dict[str, Any]] | None = None) -> None:
        self.status = status
        self.remote_acls = remote_acls if remote_acls is not None else []
        self.failing: dict[str, ApiError] = {}
        self.calls: list[tuple[str, str, str | None]] = []
        self.closed = False

    def _call(self, name: str, cluster_id: str, payload: str | None = None) -> None:
        self.calls.append((name, cluster_id, payload))
        if name in self.failing:
            raise self.failing[name]

    def read_cluster(self, cluster_id: str) -> ClusterInfo:
        self._call("read_cluster", cluster_id)
        return ClusterInfo(id=cluster_id, status=self.status)

    def read_kafka_acls(self, cluster_id: str, payload: str) -> list[dict[str, Any]]:
        self._call("read_kafka_acls", cluster_id, payload)
        return self.remote_acls

    def create_kafka_acl(self, cluster_id: str, payload: str) -> None:
        self._call("create_kafka_acl", cluster_id, payload)

    def delete_kafka_acl(self, cluster_id: str, payload: str) -> None:
        self._call("delete_kafka_acl", cluster_id, payload)

    def close(self) -> None:
        self.closed = True

    @property
    def call_names(self) -> list[str]:
        return [name for name, _, _ in self.calls]


@pytest.fixture
def acl() -> KafkaAcl:
    return KafkaAcl(
        principal="User:bob",
        host="*",
        resource_type="Topic",
        resource_name="orders",
        operation="Read",
        permission_type="Allow",
        pattern_type="LITERAL",
    )


@pytest.fixture
def state(acl: KafkaAcl) -> KafkaAclState:
    return KafkaAclState.from_acl("c1", acl)


@pytest.fixture
def client() -> FakeInstaclustrClient:
    return FakeInstaclustrClient()
