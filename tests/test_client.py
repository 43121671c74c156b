from __future__ import annotations

import logging

import httpx
import pytest

from sonarqube_sdk.auth import TokenAuth
from sonarqube_sdk.client import SonarQubeClient
from sonarqube_sdk.exceptions import (
    SonarQubeAuthError,
    SonarQubeDecodeError,
    SonarQubeError,
    SonarQubeHTTPError,
    SonarQubeNotFoundError,
    SonarQubeServerError,
    SonarQubeTimeoutError,
    SonarQubeTransportError,
    SonarQubeValidationError,
)
from sonarqube_sdk.request_options import RequestOptions
from sonarqube_sdk.services.projects import ProjectsSearch
from sonarqube_sdk.streams import EventStream


def respond(status: int, **kwargs):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, request=request, **kwargs)

    return handler


def test_success_is_decoded_into_result_model(make_client, requests_seen) -> None:
    client = make_client(
        respond(
            200,
            json={
                "paging": {"pageIndex": 1, "pageSize": 100, "total": 1},
                "components": [{"key": "my-app", "name": "My App", "qualifier": "TRK", "isAiCodeFixEnabled": False}],
            },
        )
    )
    result = client.projects.search({"query": "my"})

    assert isinstance(result, ProjectsSearch)
    assert result.paging.total == 1
    assert result.components[0].key == "my-app"
    request = requests_seen[0]
    assert request.method == "GET"
    assert request.url.path == "/api/projects/search"
    assert request.url.params["q"] == "my"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["User-Agent"].startswith("sonarqube-python-sdk/")


def test_post_sends_options_as_query_parameters(make_client, requests_seen) -> None:
    client = make_client(respond(200, json={"project": {"key": "my-app", "name": "My App"}}))
    created = client.projects.create({"name": "My App", "project": "my-app", "visibility": "private"})

    assert created.project.key == "my-app"
    request = requests_seen[0]
    assert request.method == "POST"
    assert dict(request.url.params) == {"name": "My App", "project": "my-app", "visibility": "private"}
    assert request.content == b""


def test_validation_failure_sends_nothing(make_client, requests_seen) -> None:
    client = make_client()
    with pytest.raises(SonarQubeValidationError) as excinfo:
        client.projects.create({"name": "x" * 501, "project": "my-app"})

    assert excinfo.value.field == "name"
    assert excinfo.value.constraint == "max_length"
    assert excinfo.value.response is None
    assert requests_seen == []


@pytest.mark.parametrize(
    ("status", "error_type"),
    [
        (400, SonarQubeHTTPError),
        (401, SonarQubeAuthError),
        (403, SonarQubeAuthError),
        (404, SonarQubeNotFoundError),
        (409, SonarQubeHTTPError),
        (500, SonarQubeServerError),
        (503, SonarQubeServerError),
    ],
)
def test_status_classification(make_client, status, error_type) -> None:
    client = make_client(respond(status, json={"errors": [{"msg": "first"}, {"msg": "second"}]}))
    with pytest.raises(error_type) as excinfo:
        client.projects.search()

    error = excinfo.value
    assert error.status_code == status
    assert error.message == "first; second"
    assert error.body == {"errors": [{"msg": "first"}, {"msg": "second"}]}
    assert error.response is not None
    assert str(error) == f"{status}: first; second"
    assert error.is_unavailable is (status == 503)


def test_error_without_json_body_keeps_text(make_client) -> None:
    client = make_client(respond(502, text="Bad gateway from proxy"))
    with pytest.raises(SonarQubeServerError) as excinfo:
        client.system.status()
    assert excinfo.value.message == "Bad gateway from proxy"
    assert excinfo.value.body == "Bad gateway from proxy"


def test_error_without_body_uses_reason_phrase(make_client) -> None:
    client = make_client(respond(401))
    with pytest.raises(SonarQubeAuthError) as excinfo:
        client.authentication.validate()
    assert excinfo.value.message == "Unauthorized"


def test_invalid_json_is_a_decode_error(make_client) -> None:
    client = make_client(respond(200, text="<html>maintenance</html>"))
    with pytest.raises(SonarQubeDecodeError) as excinfo:
        client.projects.search()
    assert excinfo.value.status_code == 200
    assert excinfo.value.body == "<html>maintenance</html>"
    assert isinstance(excinfo.value.cause, ValueError)


def test_wrong_json_shape_is_a_decode_error(make_client) -> None:
    client = make_client(respond(200, json={"components": "not-a-list"}))
    with pytest.raises(SonarQubeDecodeError):
        client.projects.search()


def test_unknown_response_fields_are_kept(make_client) -> None:
    client = make_client(respond(200, json={"status": "UP", "version": "10.7", "newField": 1}))
    status = client.system.status()
    assert status.is_up
    assert status.model_extra["newField"] == 1


def test_empty_body_and_no_content(make_client) -> None:
    client = make_client(respond(204))
    assert client.projects.delete({"project": "my-app"}) is None

    client = make_client(respond(200, content=b""))
    assert client.projects.search() is None


def test_text_and_binary_results(make_client, requests_seen) -> None:
    client = make_client(respond(200, text="10.7.0.96327"))
    assert client.server.version() == "10.7.0.96327"
    assert requests_seen[-1].headers["Accept"] == "text/plain"

    client = make_client(respond(200, content=b"\x1f\x8b\x08binary"))
    assert client.analysis_cache.get({"project": "my-app"}) == b"\x1f\x8b\x08binary"
    assert requests_seen[-1].headers["Accept"] == "*/*"


def test_missing_resource_is_ok_for_idempotent_operations(make_client) -> None:
    client = make_client(respond(404, json={"errors": [{"msg": "Token not found"}]}))
    assert client.user_tokens.revoke({"name": "ci"}) is None
    assert client.analysis_cache.clear({"project": "gone"}) is None
    assert client.dismiss_message.dismiss({"message_type": "GLOBAL_NCD_90"}) is None

    with pytest.raises(SonarQubeNotFoundError):
        client.projects.delete({"project": "gone"})


def test_timeout_maps_to_timeout_error(make_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_client(handler)
    with pytest.raises(SonarQubeTimeoutError) as excinfo:
        client.system.ping()
    assert isinstance(excinfo.value, SonarQubeTransportError)
    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.cause, httpx.ReadTimeout)


def test_connection_failure_maps_to_transport_error(make_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    with pytest.raises(SonarQubeTransportError) as excinfo:
        client.system.ping()
    assert not isinstance(excinfo.value, SonarQubeTimeoutError)
    assert excinfo.value.response is None


def test_request_options_override_headers_and_timeout(make_client, requests_seen) -> None:
    client = make_client(respond(200, text="pong"), timeout=5)
    client.system.ping(request_options=RequestOptions(timeout=1.5, headers={"X-Request-Id": "abc"}))

    request = requests_seen[0]
    assert request.headers["X-Request-Id"] == "abc"
    assert request.extensions["timeout"]["read"] == 1.5


@pytest.mark.parametrize("timeout", [0, -1])
def test_non_positive_timeouts_are_rejected(make_client, requests_seen, timeout) -> None:
    with pytest.raises(ValueError):
        SonarQubeClient(base_url="https://sonar.example.com", timeout=timeout)

    client = make_client()
    with pytest.raises(SonarQubeValidationError) as excinfo:
        client.system.ping(request_options=RequestOptions(timeout=timeout))
    assert excinfo.value.field == "timeout"
    assert requests_seen == []


def test_session_settings_are_fixed(make_client) -> None:
    client = make_client(timeout=12, user_agent="ci-bot/1.0", auth=TokenAuth("squ_abc"))
    assert client.base_url == "https://sonar.example.com"
    assert client.timeout == 12.0
    assert client.user_agent == "ci-bot/1.0"
    with pytest.raises(AttributeError):
        client.timeout = 1
    with pytest.raises(TypeError):
        client.services["projects"] = None


def test_base_url_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("SONARQUBE_URL", "https://env.example.com/")
    with SonarQubeClient() as client:
        assert client.base_url == "https://env.example.com"


@pytest.mark.parametrize(
    "url",
    ["sonar.example.com", "ftp://sonar.example.com", "http://sonar.example.com", "https://sonar.example.com/?x=1"],
)
def test_unsafe_base_urls_are_rejected(url) -> None:
    with pytest.raises(ValueError):
        SonarQubeClient(base_url=url)


def test_plain_http_allowed_for_loopback_or_opt_in() -> None:
    with SonarQubeClient(base_url="http://localhost:9000") as client:
        assert client.base_url == "http://localhost:9000"
    with SonarQubeClient(base_url="http://sonar.internal:9000", allow_http=True) as client:
        assert client.base_url == "http://sonar.internal:9000"


def test_debug_log_redacts_credentials(make_client, caplog) -> None:
    client = make_client(respond(200, text="pong"), auth=TokenAuth("squ_secret"))
    with caplog.at_level(logging.DEBUG, logger="sonarqube_sdk.client"):
        client.system.ping(request_options=RequestOptions(headers={"Cookie": "JWT-SESSION=abc"}))

    assert "GET /api/system/ping" in caplog.text
    assert "JWT-SESSION" not in caplog.text
    assert "squ_secret" not in caplog.text


def test_stream_returns_open_event_stream(make_client, requests_seen) -> None:
    body = b"event: RuleSetChanged\ndata: {\"projects\":[\"my-app\"]}\n\n"
    client = make_client(respond(200, content=body, headers={"Content-Type": "text/event-stream"}))

    with client.push.sonarlint_events({"languages": ["java", "py"], "project_keys": ["my-app"]}) as stream:
        assert isinstance(stream, EventStream)
        assert stream.status_code == 200
        events = list(stream)
    assert stream.closed
    assert events[0].event == "RuleSetChanged"
    assert events[0].json() == {"projects": ["my-app"]}

    request = requests_seen[0]
    assert request.headers["Accept"] == "text/event-stream"
    assert request.url.params["languages"] == "java,py"
    assert request.url.params["projectKeys"] == "my-app"


def test_stream_failure_raises_and_closes(make_client) -> None:
    client = make_client(respond(403, json={"errors": [{"msg": "Insufficient privileges"}]}))
    with pytest.raises(SonarQubeAuthError) as excinfo:
        client.push.sonarlint_events({"languages": ["java"], "project_keys": ["my-app"]})
    assert excinfo.value.message == "Insufficient privileges"
    assert excinfo.value.response.is_closed


def test_every_failure_is_a_sonarqube_error(make_client) -> None:
    client = make_client(respond(500))
    with pytest.raises(SonarQubeError):
        client.system.health()
    with pytest.raises(SonarQubeError):
        client.system.change_log_level({"level": "WARN"})



def test_injected_httpx_client_uses_session_base_url() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path.endswith("/api/push/sonarlint_events"):
            return httpx.Response(200, content=b"event: RuleSetChanged\ndata: {}\n\n", request=request)
        return httpx.Response(200, text="pong", request=request)

    with httpx.Client(transport=httpx.MockTransport(handler)) as http:
        client = SonarQubeClient(base_url="https://sonar.example.com/sonar/", httpx_client=http)
        assert client.system.ping() == "pong"
        with client.push.sonarlint_events({"languages": ["java"], "project_keys": ["my-app"]}) as stream:
            assert [event.event for event in stream] == ["RuleSetChanged"]

    assert [(request.url.host, request.url.path) for request in seen] == [
        ("sonar.example.com", "/sonar/api/system/ping"),
        ("sonar.example.com", "/sonar/api/push/sonarlint_events"),
    ]


def test_package_root_exports_public_api() -> None:
    import sonarqube_sdk

    assert sonarqube_sdk.SonarQubeClient is SonarQubeClient
    for name in sonarqube_sdk.__all__:
        assert hasattr(sonarqube_sdk, name), name
