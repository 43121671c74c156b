"""Command line access to every registered Web API operation.

    sonarqube-cli --url https://sonar.example.com --token squ_... projects search q=payments
    sonarqube-cli projects search --all
    sonarqube-cli push sonarlint_events languages=java project_keys=my-app
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Iterable, Sequence, get_args, get_origin

from pydantic import BaseModel

from .auth import BasicAuth, TokenAuth
from .client import SonarQubeClient, __version__
from .exceptions import SonarQubeError
from .operations import Operation, Service
from .pagination import PaginationArgs, iter_pages
from .services import SERVICE_CLASSES
from .streams import EventStream

logger = logging.getLogger(__name__)

SERVICES: dict[str, type[Service]] = {service.name: service for service in SERVICE_CLASSES}


def _accepts_list(annotation: Any) -> bool:
    if get_origin(annotation) in (list, tuple, set):
        return True
    return any(_accepts_list(arg) for arg in get_args(annotation))


def _parse_assignments(operation: Operation, assignments: Iterable[str]) -> dict[str, Any]:
    """Turn ``key=value`` words into an options mapping.

    Keys may use the Python field name or the wire name. A key given twice, or
    a comma separated value for a list option, becomes a list.
    """
    fields = operation.options.model_fields if operation.options is not None else {}
    options: dict[str, Any] = {}
    for item in assignments:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"expected key=value, got {item!r}")
        info = fields.get(key) or next((f for f in fields.values() if f.alias == key), None)
        wants_list = info is not None and _accepts_list(info.annotation)
        values: Any = [part for part in value.split(",") if part] if wants_list else value
        if key in options:
            previous = options[key]
            previous = previous if isinstance(previous, list) else [previous]
            options[key] = previous + (values if isinstance(values, list) else [values])
        else:
            options[key] = values
    return options


def _jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", by_alias=True, exclude_none=True)
    return result


def _merge_pages(pages: Sequence[Any]) -> Any:
    """Concatenate the item lists of every page into the first one."""
    merged = _jsonable(pages[0])
    if not isinstance(merged, dict):
        return merged
    for page in pages[1:]:
        for key, value in _jsonable(page).items():
            if isinstance(value, list) and isinstance(merged.get(key), list):
                merged[key].extend(value)
    return merged


def _write_stream(stream: EventStream) -> None:
    with stream:
        for event in stream:
            print(f"event: {event.event}")
            print(f"data: {event.data}", flush=True)


def _print_result(result: Any) -> None:
    if result is None:
        return
    if isinstance(result, bytes):
        sys.stdout.buffer.write(result)
        sys.stdout.flush()
        return
    if isinstance(result, str):
        print(result)
        return
    print(json.dumps(_jsonable(result), indent=2, sort_keys=True))


def _list_operations(service: str | None) -> None:
    if service is None:
        for name in sorted(SERVICES):
            print(name)
        return
    for name, operation in sorted(SERVICES[service].operations().items()):
        print(f"{name:40} {operation.method:6} {operation.path}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sonarqube-cli", description="Call SonarQube Web API operations.")
    parser.add_argument("--url", default=os.getenv("SONAR_CLI_URL"), help="server URL (env SONAR_CLI_URL)")
    parser.add_argument("--token", default=os.getenv("SONAR_CLI_TOKEN"), help="user token (env SONAR_CLI_TOKEN)")
    parser.add_argument("--username", default=os.getenv("SONAR_CLI_USERNAME"), help="login (env SONAR_CLI_USERNAME)")
    parser.add_argument("--password", default=os.getenv("SONAR_CLI_PASSWORD"), help="password (env SONAR_CLI_PASSWORD)")
    parser.add_argument("--timeout", type=float, default=SonarQubeClient.default_timeout, help="seconds per request")
    parser.add_argument("--allow-http", action="store_true", help="allow plain http to non-loopback hosts")
    parser.add_argument("--all", action="store_true", help="fetch every page of a paginated operation")
    parser.add_argument("-v", "--verbose", action="store_true", help="log requests to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("service", nargs="?", help="service group, e.g. projects")
    parser.add_argument("operation", nargs="?", help="operation, e.g. search")
    parser.add_argument("options", nargs="*", metavar="key=value", help="operation options")
    return parser


def _auth_from_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> TokenAuth | BasicAuth | None:
    if args.token and args.username:
        parser.error("use either --token or --username/--password, not both")
    if args.token:
        return TokenAuth(args.token)
    if args.username:
        return BasicAuth(args.username, args.password or "")
    return None


def _main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.service is not None and args.service not in SERVICES:
        parser.error(f"unknown service {args.service!r}; run without arguments to list services")
    if args.operation is None:
        _list_operations(args.service)
        return 0
    operations = SERVICES[args.service].operations()
    if args.operation not in operations:
        parser.error(f"unknown operation {args.service} {args.operation!r}")
    operation = operations[args.operation]

    try:
        options = _parse_assignments(operation, args.options)
    except ValueError as exc:
        parser.error(str(exc))
    auth = _auth_from_args(parser, args)

    try:
        with SonarQubeClient(
            base_url=args.url,
            auth=auth,
            timeout=args.timeout,
            allow_http=args.allow_http,
        ) as client:
            method = getattr(client.services[args.service], args.operation)
            if args.all:
                if operation.options is None or not issubclass(operation.options, PaginationArgs):
                    parser.error(f"{args.service} {args.operation} is not paginated")
                pages = list(iter_pages(method, options))
                _print_result(_merge_pages(pages))
                return 0
            result = method(options or None)
            if isinstance(result, EventStream):
                _write_stream(result)
            else:
                _print_result(result)
    except SonarQubeError as exc:
        logger.debug(f"{args.service} {args.operation} failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


def main() -> None:
    raise SystemExit(_main())
