import os
from dataclasses import dataclass
from typing import Any, Protocol

import pulumi
import requests

DEFAULT_API_URL = "https://api.instaclustr.com"
RUNNING_STATUS = "RUNNING"


class ApiError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(kw_only=True)
class ClusterInfo:
    id: str
    status: str

    @property
    def is_running(self) -> bool:
        return self.status == RUNNING_STATUS


class KafkaAclApiClient(Protocol):
    """Calls the Kafka ACL lifecycle needs from the Instaclustr API.

    Implementations raise ApiError on any failure.
    """

    def read_cluster(self, cluster_id: str) -> ClusterInfo: ...

    def read_kafka_acls(self, cluster_id: str, payload: str) -> list[dict[str, Any]]: ...

    def create_kafka_acl(self, cluster_id: str, payload: str) -> None: ...

    def delete_kafka_acl(self, cluster_id: str, payload: str) -> None: ...

    def close(self) -> None: ...


class InstaclustrClient:
    # Payloads are sent as built by KafkaAcl.to_payload with snake_case keys. The live API names the
    # fields in camelCase (resourceType, permissionType, ...) and may reject these keys.
    # TODO: map payload keys to camelCase once the accepted wire names are confirmed against the live API.
    def __init__(self, api_url: str, username: str, api_key: str, timeout: int = 60) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.auth = (username, api_key)
        self.session.headers.update({"Content-Type": "application/json", "Accept": "application/json"})

    @classmethod
    def from_env(cls, api_url: str | None = None, env_prefix: str = "") -> "InstaclustrClient":
        username = os.getenv(f"{env_prefix}INSTACLUSTR_USERNAME")
        api_key = os.getenv(f"{env_prefix}INSTACLUSTR_API_KEY")
        if not username or not api_key:
            raise ApiError(f"{env_prefix}INSTACLUSTR_USERNAME and {env_prefix}INSTACLUSTR_API_KEY environment variables have to be set")
        return cls(api_url=api_url or os.getenv(f"{env_prefix}INSTACLUSTR_API_URL", DEFAULT_API_URL), username=username, api_key=api_key)

    def __enter__(self) -> "InstaclustrClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _request(self, method: str, path: str, payload: str | None = None) -> requests.Response:
        url = f"{self.api_url}/provisioning/v1/{path}"
        pulumi.log.debug(f"Instaclustr API request: {method} {url}")
        try:
            response = self.session.request(method, url, data=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise ApiError(f"{method} {url} failed: {e}") from e
        if not response.ok:
            raise ApiError(f"{method} {url} returned {response.status_code}: {response.text}", status_code=response.status_code)
        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON in response from {response.url}", status_code=response.status_code) from e

    def read_cluster(self, cluster_id: str) -> ClusterInfo:
        body = self._json(self._request("GET", cluster_id))
        try:
            return ClusterInfo(id=body.get("id", cluster_id), status=body["clusterStatus"])
        except KeyError as e:
            raise ApiError(f"Cluster {cluster_id} response has no {e} field") from e

    def read_kafka_acls(self, cluster_id: str, payload: str) -> list[dict[str, Any]]:
        return self._json(self._request("POST", f"{cluster_id}/kafka/acls/searches", payload))

    def create_kafka_acl(self, cluster_id: str, payload: str) -> None:
        self._request("POST", f"{cluster_id}/kafka/acls", payload)

    def delete_kafka_acl(self, cluster_id: str, payload: str) -> None:
        self._request("DELETE", f"{cluster_id}/kafka/acls", payload)
