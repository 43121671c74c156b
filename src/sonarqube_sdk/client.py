"""The SonarQube client session and the request pipeline every operation shares."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Mapping

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .auth import Anonymous, BasicAuth, TokenAuth
from .exceptions import (
    SonarQubeAuthError,
    SonarQubeDecodeError,
    SonarQubeHTTPError,
    SonarQubeNotFoundError,
    SonarQubeServerError,
    SonarQubeTimeoutError,
    SonarQubeTransportError,
    SonarQubeValidationError,
)
from .operations import Operation, PreparedRequest, Service
from .options import OptionModel, validate_options
from .request_options import RequestOptions
from .security import sanitize_headers, validate_base_url
from .services import (
    AlmIntegrationsService,
    AlmSettingsService,
    AnalysisCacheService,
    AuthenticationService,
    CeService,
    DismissMessageService,
    FavoritesService,
    HotspotsService,
    LanguagesService,
    MetricsService,
    NewCodePeriodsService,
    ProjectBranchesService,
    ProjectLinksService,
    ProjectsService,
    ProjectTagsService,
    PushService,
    QualityGatesService,
    ServerService,
    SettingsService,
    SystemService,
    UserGroupsService,
    UsersService,
    UserTokensService,
    WebhooksService,
)
from .streams import EventStream

logger = logging.getLogger(__name__)

__version__ = "0.1.0"


@lru_cache(maxsize=None)
def _adapter(result: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result)


def _normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    if not headers:
        return {}
    clean: dict[str, str] = {}
    for key, value in headers.items():
        clean[str(key)] = str(value)
    return clean


def _accept_for(operation: Operation) -> str:
    if operation.stream:
        return "text/event-stream"
    if operation.result is str:
        return "text/plain"
    if operation.result is bytes:
        return "*/*"
    return "application/json"


def _error_message(parsed_body: Any, raw_body: str | None, status_code: int) -> str:
    if isinstance(parsed_body, Mapping):
        errors = parsed_body.get("errors")
        if isinstance(errors, list):
            messages = [str(item["msg"]) for item in errors if isinstance(item, Mapping) and item.get("msg")]
            if messages:
                return "; ".join(messages)
        if isinstance(parsed_body.get("message"), str):
            return parsed_body["message"]
    if raw_body:
        return raw_body.strip()
    return httpx.codes.get_reason_phrase(status_code) or "request failed"


class SonarQubeClient:
    """Synchronous SonarQube Web API client.

    A session is fixed at construction: base URL, one authentication strategy,
    default timeout and user agent. There are no setters; build a new client
    to talk to another server or as another user. One instance can be shared
    across threads.

        with SonarQubeClient(base_url="https://sonar.example.com", auth=TokenAuth("squ_...")) as sonar:
            sonar.projects.search({"q": "payments"})
    """

    default_base_url = "http://localhost:9000"
    default_timeout = 30.0
    default_user_agent = f"sonarqube-python-sdk/{__version__}"

    def __init__(
        self,
        *,
        base_url: str | None = None,
        auth: Anonymous | BasicAuth | TokenAuth | None = None,
        token: str | None = None,
        timeout: float = default_timeout,
        user_agent: str | None = None,
        headers: Mapping[str, str] | None = None,
        follow_redirects: bool = True,
        httpx_client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
        allow_http: bool = False,
        token_env_var: str = "SONARQUBE_TOKEN",
        base_url_env_var: str = "SONARQUBE_URL",
    ) -> None:
        base_url = (base_url or os.getenv(base_url_env_var) or self.default_base_url).rstrip("/")
        validate_base_url(base_url, allow_http=allow_http)
        if timeout <= 0:
            raise ValueError("timeout must be greater than 0")
        if auth is not None and token is not None:
            raise ValueError("Pass either auth or token, not both")
        if auth is None:
            token = token or os.getenv(token_env_var)
            auth = TokenAuth(token) if token else Anonymous()
        if not isinstance(auth, (Anonymous, BasicAuth, TokenAuth)):
            raise TypeError(f"Unsupported authentication strategy: {type(auth).__name__}")

        self._base_url = base_url
        self._auth = auth
        self._timeout = float(timeout)
        self._user_agent = user_agent or self.default_user_agent
        self._default_headers = MappingProxyType(
            {"User-Agent": self._user_agent, **_normalize_headers(headers)}
        )
        client_kwargs: dict[str, Any] = {
            "base_url": base_url,
            "timeout": self._timeout,
            "follow_redirects": follow_redirects,
            "trust_env": False,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._httpx = httpx_client or httpx.Client(**client_kwargs)

        self.alm_integrations = AlmIntegrationsService(self)
        self.alm_settings = AlmSettingsService(self)
        self.analysis_cache = AnalysisCacheService(self)
        self.authentication = AuthenticationService(self)
        self.ce = CeService(self)
        self.dismiss_message = DismissMessageService(self)
        self.favorites = FavoritesService(self)
        self.hotspots = HotspotsService(self)
        self.languages = LanguagesService(self)
        self.metrics = MetricsService(self)
        self.new_code_periods = NewCodePeriodsService(self)
        self.project_branches = ProjectBranchesService(self)
        self.project_links = ProjectLinksService(self)
        self.project_tags = ProjectTagsService(self)
        self.projects = ProjectsService(self)
        self.push = PushService(self)
        self.qualitygates = QualityGatesService(self)
        self.server = ServerService(self)
        self.settings = SettingsService(self)
        self.system = SystemService(self)
        self.user_groups = UserGroupsService(self)
        self.user_tokens = UserTokensService(self)
        self.users = UsersService(self)
        self.webhooks = WebhooksService(self)

        services = [value for value in vars(self).values() if isinstance(value, Service)]
        self._services = MappingProxyType({service.name: service for service in services})

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def auth(self) -> Anonymous | BasicAuth | TokenAuth:
        return self._auth

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def services(self) -> Mapping[str, Service]:
        """Every service group keyed by its Web API name, e.g. ``"project_branches"``."""
        return self._services

    def __repr__(self) -> str:
        return f"SonarQubeClient(base_url={self._base_url!r}, auth={self._auth!r})"

    def __enter__(self) -> "SonarQubeClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._httpx.close()

    def _headers(self, request_options: RequestOptions, operation: Operation) -> dict[str, str]:
        merged = {"Accept": _accept_for(operation), **self._default_headers}
        if request_options.headers:
            merged.update(_normalize_headers(request_options.headers))
        return merged

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _build_request_timeout(self, request_options: RequestOptions) -> float:
        timeout = request_options.timeout if request_options.timeout is not None else self._timeout
        if timeout <= 0:
            raise SonarQubeValidationError("timeout", "must be greater than 0", constraint="range")
        return float(timeout)

    def execute(
        self,
        operation: Operation,
        options: OptionModel | Mapping[str, Any] | None = None,
        *,
        request_options: RequestOptions | None = None,
    ) -> Any:
        """Run one operation through validate, build, authenticate, send and decode.

        Validation failures are raised before anything touches the network.
        Exactly one HTTP request is sent per call.
        """
        model = validate_options(operation.options, options)
        prepared = operation.build(model)
        request_options = request_options or RequestOptions()
        timeout = self._build_request_timeout(request_options)
        headers = self._headers(request_options, operation)
        logger.debug(
            f"{prepared.method} {prepared.path} params={prepared.params} "
            f"headers={sanitize_headers(headers)}"
        )

        if operation.stream:
            return self._open_stream(prepared, headers, timeout)

        try:
            response = self._httpx.request(
                prepared.method,
                self._url(prepared.path),
                params=prepared.params or None,
                json=prepared.json,
                headers=headers,
                timeout=timeout,
                auth=self._auth,
            )
        except httpx.TimeoutException as exc:
            raise SonarQubeTimeoutError(f"Request to {prepared.path} timed out", cause=exc) from exc
        except httpx.TransportError as exc:
            raise SonarQubeTransportError(f"Request to {prepared.path} failed: {exc}", cause=exc) from exc

        logger.debug(f"{prepared.method} {prepared.path} -> {response.status_code}")
        if operation.missing_ok and response.status_code == 404:
            return None
        self._raise_for_status(response)
        return self._decode(operation, response)

    def _open_stream(self, prepared: PreparedRequest, headers: dict[str, str], timeout: float) -> EventStream:
        request = self._httpx.build_request(
            prepared.method,
            self._url(prepared.path),
            params=prepared.params or None,
            json=prepared.json,
            headers=headers,
            timeout=timeout,
        )
        try:
            response = self._httpx.send(request, auth=self._auth, stream=True)
        except httpx.TimeoutException as exc:
            raise SonarQubeTimeoutError(f"Request to {prepared.path} timed out", cause=exc) from exc
        except httpx.TransportError as exc:
            raise SonarQubeTransportError(f"Request to {prepared.path} failed: {exc}", cause=exc) from exc

        logger.debug(f"{prepared.method} {prepared.path} -> {response.status_code} (stream)")
        if not response.is_success:
            try:
                response.read()
            finally:
                response.close()
            self._raise_for_status(response)
        return EventStream(response)

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        raw_body: str | None = None
        parsed_body: Any = None
        try:
            raw_body = response.text
            if raw_body.lstrip().startswith(("{", "[")):
                parsed_body = response.json()
        except ValueError:
            parsed_body = None

        message = _error_message(parsed_body, raw_body, response.status_code)
        kwargs: dict[str, Any] = {
            "status_code": response.status_code,
            "body": parsed_body if parsed_body is not None else raw_body,
            "headers": MappingProxyType(dict(response.headers)),
            "response": response,
        }
        if response.status_code in {401, 403}:
            raise SonarQubeAuthError(message, **kwargs)
        if response.status_code == 404:
            raise SonarQubeNotFoundError(message, **kwargs)
        if response.status_code >= 500:
            raise SonarQubeServerError(message, **kwargs)
        raise SonarQubeHTTPError(message, **kwargs)

    @staticmethod
    def _decode(operation: Operation, response: httpx.Response) -> Any:
        if response.status_code == 204 or not response.content or operation.result is None:
            return None
        if operation.result is bytes:
            return response.content
        if operation.result is str:
            return response.text

        try:
            payload = response.json()
        except ValueError as exc:
            raise SonarQubeDecodeError(
                f"Response from {response.request.url.path} is not valid JSON",
                status_code=response.status_code,
                body=response.text,
                response=response,
                cause=exc,
            ) from exc
        try:
            return _adapter(operation.result).validate_python(payload)
        except PydanticValidationError as exc:
            raise SonarQubeDecodeError(
                f"Response from {response.request.url.path} does not match {getattr(operation.result, '__name__', operation.result)}",
                status_code=response.status_code,
                body=payload,
                response=response,
                cause=exc,
            ) from exc
