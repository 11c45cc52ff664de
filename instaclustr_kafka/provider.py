"""Pulumi dynamic provider for Instaclustr Kafka ACLs.

This is the only module that looks up resource properties by name. Everything
behind it works with ``KafkaAclState``.
"""

from collections.abc import Callable
from contextlib import closing
from typing import Any

import pulumi
from pulumi.dynamic import (
    CheckFailure,
    CheckResult,
    CreateResult,
    DiffResult,
    ReadResult,
    Resource,
    ResourceProvider,
)

from instaclustr_kafka import lifecycle
from instaclustr_kafka.acl import KafkaAcl as KafkaAclRecord
from instaclustr_kafka.errors import FormatError
from instaclustr_kafka.lifecycle import STATE_FIELDS, KafkaAclState
from utils.instaclustr import InstaclustrClient, KafkaAclApiClient


class KafkaAclProvider(ResourceProvider):
    def __init__(
        self, api_url: str | None = None, env_prefix: str = "", client_factory: Callable[[], KafkaAclApiClient] | None = None
    ) -> None:
        self.api_url = api_url
        self.env_prefix = env_prefix
        self.client_factory = client_factory

    def _client(self) -> KafkaAclApiClient:
        if self.client_factory is not None:
            return self.client_factory()
        return InstaclustrClient.from_env(api_url=self.api_url, env_prefix=self.env_prefix)

    @staticmethod
    def _state(resource_id: str, props: dict[str, Any]) -> KafkaAclState:
        return KafkaAclState.from_acl(props["cluster_id"], KafkaAclRecord.from_mapping(props), resource_id=resource_id)

    def check(self, _olds: dict[str, Any], news: dict[str, Any]) -> CheckResult:
        failures = [
            CheckFailure(name, f"{name} is required and has to be a non-empty string")
            for name in STATE_FIELDS
            if not isinstance(news.get(name), str) or not news[name]
        ]
        return CheckResult(news, failures)

    def diff(self, _id: str, olds: dict[str, Any], news: dict[str, Any]) -> DiffResult:
        # Every field forces a new ACL, nothing can be updated in place
        replaces = [name for name in STATE_FIELDS if olds.get(name) != news.get(name)]
        return DiffResult(changes=bool(replaces), replaces=replaces, stables=[], delete_before_replace=True)

    def create(self, props: dict[str, Any]) -> CreateResult:
        state = self._state("", props)
        with closing(self._client()) as client:
            lifecycle.create(state, client)
        return CreateResult(id_=state.id, outs=state.as_outputs())

    def read(self, id_: str, props: dict[str, Any]) -> ReadResult:
        # The id carries every field, props are the declared inputs on import and the outputs on refresh
        state = lifecycle.import_state(id_)
        declared = {name: props[name] for name in STATE_FIELDS if name in props}
        mismatched = sorted(name for name, value in declared.items() if value != getattr(state, name))
        if mismatched:
            raise FormatError(f"ID ({id_!r}) does not match the declared {', '.join(mismatched)}")
        with closing(self._client()) as client:
            lifecycle.read(state, client)
        if state.is_gone:
            return ReadResult(id_="", outs={})
        return ReadResult(id_=state.id, outs=state.as_outputs())

    def delete(self, id_: str, props: dict[str, Any]) -> None:
        with closing(self._client()) as client:
            lifecycle.delete(self._state(id_, props), client)


class KafkaAcl(Resource):
    cluster_id: pulumi.Output[str]
    principal: pulumi.Output[str]
    host: pulumi.Output[str]
    resource_type: pulumi.Output[str]
    resource_name: pulumi.Output[str]
    operation: pulumi.Output[str]
    permission_type: pulumi.Output[str]
    pattern_type: pulumi.Output[str]

    def __init__(
        self,
        resource_name: str,
        *,
        cluster_id: pulumi.Input[str],
        principal: pulumi.Input[str],
        host: pulumi.Input[str],
        resource_type: pulumi.Input[str],
        resource_name_: pulumi.Input[str],
        operation: pulumi.Input[str],
        permission_type: pulumi.Input[str],
        pattern_type: pulumi.Input[str],
        provider: KafkaAclProvider | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__(
            provider or KafkaAclProvider(),
            resource_name,
            {
                "cluster_id": cluster_id,
                "principal": principal,
                "host": host,
                "resource_type": resource_type,
                "resource_name": resource_name_,
                "operation": operation,
                "permission_type": permission_type,
                "pattern_type": pattern_type,
            },
            opts,
        )
