from unittest.mock import Mock, patch

import pytest
import requests

from utils.instaclustr import DEFAULT_API_URL, ApiError, ClusterInfo, InstaclustrClient

PAYLOAD = '{"principal": "User:bob"}'


def make_response(status_code: int = 200, json_body=None, text: str = "") -> Mock:
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text
    response.url = "https://api.example.com"
    if isinstance(json_body, Exception):
        response.json.side_effect = json_body
    else:
        response.json.return_value = json_body
    return response


@pytest.fixture
def api_client():
    with InstaclustrClient(api_url="https://api.example.com/", username="admin", api_key="secret", timeout=5) as client:
        yield client


def test_read_cluster(api_client):
    with patch.object(api_client.session, "request", return_value=make_response(json_body={"id": "c1", "clusterStatus": "RUNNING"})) as request:
        cluster = api_client.read_cluster("c1")

    assert cluster == ClusterInfo(id="c1", status="RUNNING")
    assert cluster.is_running
    request.assert_called_once_with("GET", "https://api.example.com/provisioning/v1/c1", data=None, timeout=5)


def test_read_cluster_without_status(api_client):
    with patch.object(api_client.session, "request", return_value=make_response(json_body={"id": "c1"})):
        with pytest.raises(ApiError, match="clusterStatus"):
            api_client.read_cluster("c1")


def test_read_kafka_acls(api_client):
    acls = [{"principal": "User:bob"}]
    with patch.object(api_client.session, "request", return_value=make_response(json_body=acls)) as request:
        assert api_client.read_kafka_acls("c1", PAYLOAD) == acls

    request.assert_called_once_with("POST", "https://api.example.com/provisioning/v1/c1/kafka/acls/searches", data=PAYLOAD, timeout=5)


def test_read_kafka_acls_invalid_json(api_client):
    with patch.object(api_client.session, "request", return_value=make_response(json_body=ValueError("bad json"))):
        with pytest.raises(ApiError, match="Invalid JSON"):
            api_client.read_kafka_acls("c1", PAYLOAD)


def test_create_kafka_acl(api_client):
    with patch.object(api_client.session, "request", return_value=make_response(status_code=202)) as request:
        api_client.create_kafka_acl("c1", PAYLOAD)

    request.assert_called_once_with("POST", "https://api.example.com/provisioning/v1/c1/kafka/acls", data=PAYLOAD, timeout=5)


def test_delete_kafka_acl(api_client):
    with patch.object(api_client.session, "request", return_value=make_response()) as request:
        api_client.delete_kafka_acl("c1", PAYLOAD)

    request.assert_called_once_with("DELETE", "https://api.example.com/provisioning/v1/c1/kafka/acls", data=PAYLOAD, timeout=5)


@pytest.mark.parametrize("method", ["create_kafka_acl", "delete_kafka_acl", "read_kafka_acls"])
def test_error_status_raises_api_error(api_client, method):
    with patch.object(api_client.session, "request", return_value=make_response(status_code=409, text="conflict")):
        with pytest.raises(ApiError, match="409") as exc_info:
            getattr(api_client, method)("c1", PAYLOAD)
    assert exc_info.value.status_code == 409


def test_connection_error_raises_api_error(api_client):
    with patch.object(api_client.session, "request", side_effect=requests.ConnectionError("refused")):
        with pytest.raises(ApiError, match="refused") as exc_info:
            api_client.read_cluster("c1")
    assert exc_info.value.status_code is None


def test_session_uses_basic_auth(api_client):
    assert api_client.session.auth == ("admin", "secret")
    assert api_client.session.headers["Content-Type"] == "application/json"


def test_from_env(monkeypatch):
    monkeypatch.setenv("INSTACLUSTR_USERNAME", "admin")
    monkeypatch.setenv("INSTACLUSTR_API_KEY", "secret")
    monkeypatch.delenv("INSTACLUSTR_API_URL", raising=False)

    client = InstaclustrClient.from_env()

    assert client.api_url == DEFAULT_API_URL
    client.close()


def test_from_env_requires_credentials(monkeypatch):
    monkeypatch.delenv("PRODUCTION_INSTACLUSTR_USERNAME", raising=False)
    monkeypatch.setenv("PRODUCTION_INSTACLUSTR_API_KEY", "secret")

    with pytest.raises(ApiError, match="PRODUCTION_INSTACLUSTR_USERNAME"):
        InstaclustrClient.from_env(env_prefix="PRODUCTION_")
