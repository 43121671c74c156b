from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

import sonarqube_sdk.cli as cli


class Recorder:
    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: dict[str, httpx.Response] = {}
        self.handler: Callable[[httpx.Request], httpx.Response] | None = None

    def answer(self, path: str, response: httpx.Response) -> None:
        self.responses[path] = response

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        canned = self.responses.get(request.url.path)
        if canned is None:
            return httpx.Response(404, json={"errors": [{"msg": "Unknown url"}]}, request=request)
        return httpx.Response(canned.status_code, content=canned.content, headers=canned.headers, request=request)


@pytest.fixture
def server(monkeypatch) -> Recorder:
    recorder = Recorder()

    class MockedClient(cli.SonarQubeClient):
        def __init__(self, **kwargs) -> None:
            super().__init__(transport=httpx.MockTransport(recorder), **kwargs)

    monkeypatch.setattr(cli, "SonarQubeClient", MockedClient)
    return recorder


def test_lists_services_and_operations(capsys) -> None:
    assert cli._main([]) == 0
    services = capsys.readouterr().out.split()
    assert "projects" in services
    assert "user_tokens" in services

    assert cli._main(["projects"]) == 0
    output = capsys.readouterr().out
    assert "search" in output
    assert "/api/projects/search" in output


def test_invokes_operation_and_prints_json(server, capsys) -> None:
    server.answer(
        "/api/projects/search",
        httpx.Response(200, json={"paging": {"pageIndex": 1, "pageSize": 100, "total": 1}, "components": [{"key": "my-app"}]}),
    )
    code = cli._main(["--url", "https://sonar.example.com", "--token", "squ_cli", "projects", "search", "q=my", "ps=100"])

    assert code == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed["components"][0]["key"] == "my-app"
    assert printed["paging"]["total"] == 1
    request = server.requests[0]
    assert request.headers["Authorization"] == "Bearer squ_cli"
    assert request.url.params["q"] == "my"
    assert request.url.params["ps"] == "100"


def test_reads_connection_settings_from_environment(monkeypatch, server, capsys) -> None:
    monkeypatch.setenv("SONAR_CLI_URL", "https://env.example.com")
    monkeypatch.setenv("SONAR_CLI_USERNAME", "admin")
    monkeypatch.setenv("SONAR_CLI_PASSWORD", "admin")
    server.answer("/api/server/version", httpx.Response(200, text="10.7.0.96327"))

    assert cli._main(["server", "version"]) == 0
    assert capsys.readouterr().out.strip() == "10.7.0.96327"
    assert server.requests[0].url.host == "env.example.com"
    assert server.requests[0].headers["Authorization"].startswith("Basic ")


def test_list_options_split_on_commas(server, capsys) -> None:
    server.answer("/api/settings/values", httpx.Response(200, json={"settings": []}))
    assert cli._main(["--url", "https://sonar.example.com", "settings", "values", "keys=a,b", "keys=c"]) == 0
    assert server.requests[0].url.params["keys"] == "a,b,c"


def test_all_merges_every_page(server, capsys) -> None:
    def pages(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params["p"])
        return httpx.Response(
            200,
            json={"paging": {"pageIndex": page, "pageSize": 500, "total": 501}, "components": [{"key": f"p{page}"}]},
            request=request,
        )

    server.handler = pages
    assert cli._main(["--url", "https://sonar.example.com", "projects", "search", "--all"]) == 0
    printed = json.loads(capsys.readouterr().out)
    assert [component["key"] for component in printed["components"]] == ["p1", "p2"]


def test_validation_error_exits_with_one(server, capsys) -> None:
    assert cli._main(["--url", "https://sonar.example.com", "projects", "create", "name=x"]) == 1
    assert "validation error for field 'project'" in capsys.readouterr().err
    assert server.requests == []


def test_http_error_exits_with_one(server, capsys) -> None:
    server.answer("/api/system/status", httpx.Response(503, json={"errors": [{"msg": "Indexing"}]}))
    assert cli._main(["--url", "https://sonar.example.com", "system", "status"]) == 1
    assert "503: Indexing" in capsys.readouterr().err


def test_streams_events_to_stdout(server, capsys) -> None:
    server.answer(
        "/api/push/sonarlint_events",
        httpx.Response(200, content=b"event: RuleSetChanged\ndata: {}\n\n"),
    )
    code = cli._main(
        ["--url", "https://sonar.example.com", "push", "sonarlint_events", "languages=java", "project_keys=my-app"]
    )
    assert code == 0
    assert capsys.readouterr().out == "event: RuleSetChanged\ndata: {}\n"


@pytest.mark.parametrize(
    "argv",
    [
        ["nope"],
        ["projects", "explode"],
        ["projects", "search", "novalue"],
        ["--token", "t", "--username", "u", "projects", "search"],
        ["system", "ping", "--all"],
    ],
)
def test_usage_errors_exit_with_two(server, argv) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli._main(["--url", "https://sonar.example.com", *argv])
    assert excinfo.value.code == 2
