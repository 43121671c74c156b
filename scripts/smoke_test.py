#!/usr/bin/env python3
"""Smoke test against a running SonarQube: exercise one call per service group.

    SONARQUBE_URL=http://localhost:9000 SONARQUBE_USERNAME=admin SONARQUBE_PASSWORD=admin \
        python scripts/smoke_test.py
"""

from __future__ import annotations

import os
import sys
import uuid

from sonarqube_sdk import BasicAuth, SonarQubeClient, SonarQubeError, SonarQubeHTTPError, TokenAuth, iter_pages

BASE_URL = os.getenv("SONARQUBE_URL", "http://localhost:9000")
USERNAME = os.getenv("SONARQUBE_USERNAME", "admin")
PASSWORD = os.getenv("SONARQUBE_PASSWORD", "admin")

passed: list[str] = []
failed: list[tuple[str, str]] = []
skipped: list[tuple[str, str]] = []


def ok(name: str, result: object = None) -> None:
    tag = type(result).__name__ if result is not None else "None"
    print(f"  PASS  {name}  -> {tag}")
    passed.append(name)


def fail(name: str, err: Exception) -> None:
    msg = str(err)[:200]
    print(f"  FAIL  {name}  -> {msg}")
    failed.append((name, msg))


def skip(name: str, reason: str) -> None:
    print(f"  SKIP  {name}  ({reason})")
    skipped.append((name, reason))


def crash(name: str, exc: Exception) -> None:
    msg = f"{type(exc).__name__}: {exc}"[:200]
    print(f"  CRASH {name}  -> {msg}")
    failed.append((name, msg))


def run(name: str, fn, *, allowed: set[int] | None = None):
    """Run fn(), record pass/fail/expected-error."""
    try:
        result = fn()
        ok(name, result)
        return result
    except SonarQubeHTTPError as e:
        if allowed and e.status_code in allowed:
            ok(name, e)
        else:
            fail(name, e)
        return None
    except SonarQubeError as e:
        fail(name, e)
        return None
    except Exception as e:
        crash(name, e)
        return None


def main() -> None:
    client = SonarQubeClient(base_url=BASE_URL, auth=BasicAuth(USERNAME, PASSWORD), allow_http=True, timeout=15.0)
    suffix = uuid.uuid4().hex[:8]
    project_key = f"sdk-smoke-{suffix}"

    print("\n=== Server ===")
    run("server.version", lambda: client.server.version())
    run("system.status", lambda: client.system.status())
    run("system.ping", lambda: client.system.ping())
    run("system.health", lambda: client.system.health(), allowed={401, 403})
    run("authentication.validate", lambda: client.authentication.validate())

    print("\n=== Projects and branches ===")
    run("projects.create", lambda: client.projects.create({"name": f"SDK smoke {suffix}", "project": project_key}))
    run("projects.search", lambda: client.projects.search({"query": project_key}))
    run("iter_pages(projects.search)", lambda: list(iter_pages(client.projects.search, {"page_size": 50})))
    run("project_branches.list", lambda: client.project_branches.list({"project": project_key}))
    run(
        "project_branches.delete(main) is rejected",
        lambda: client.project_branches.delete({"project": project_key, "branch": "main"}),
        allowed={400},
    )
    run("project_tags.set", lambda: client.project_tags.set({"project": project_key, "tags": ["sdk", "smoke"]}))
    run("project_tags.set(clear)", lambda: client.project_tags.set({"project": project_key}))
    run(
        "project_links.create",
        lambda: client.project_links.create({"project_key": project_key, "name": "Docs", "url": "https://example.com"}),
    )
    run("new_code_periods.set", lambda: client.new_code_periods.set({"project": project_key, "type": "NUMBER_OF_DAYS", "value": "30"}))
    run("new_code_periods.show", lambda: client.new_code_periods.show({"project": project_key}))
    run("new_code_periods.unset", lambda: client.new_code_periods.unset({"project": project_key}))
    run("analysis_cache.clear", lambda: client.analysis_cache.clear({"project": project_key}))
    run("favorites.search", lambda: client.favorites.search())
    run("hotspots.search", lambda: client.hotspots.search({"project": project_key}))

    print("\n=== Quality gates and settings ===")
    run("qualitygates.list", lambda: client.qualitygates.list())
    run("qualitygates.project_status", lambda: client.qualitygates.project_status({"project_key": project_key}), allowed={404})
    run("settings.values", lambda: client.settings.values({"keys": ["sonar.core.serverBaseURL"]}))
    run("languages.list", lambda: client.languages.list())
    run("metrics.types", lambda: client.metrics.types())
    run("ce.activity", lambda: client.ce.activity({"page_size": 1000}))

    print("\n=== Users and tokens ===")
    run("users.search", lambda: client.users.search({"page_size": 10}))
    run("user_groups.search", lambda: client.user_groups.search({"query": "sonar"}))
    run("webhooks.list", lambda: client.webhooks.list())
    token_name = f"sdk-smoke-{suffix}"
    generated = run("user_tokens.generate", lambda: client.user_tokens.generate({"name": token_name}))
    if generated is not None and generated.token:
        with SonarQubeClient(base_url=BASE_URL, auth=TokenAuth(generated.token), allow_http=True) as session:
            result = run("token session authentication.validate", lambda: session.authentication.validate())
            if result is not None and not result.valid:
                fail("token session is authenticated", ValueError("validate returned valid=false"))
        run("user_tokens.revoke", lambda: client.user_tokens.revoke({"name": token_name}))
        run("user_tokens.revoke(again)", lambda: client.user_tokens.revoke({"name": token_name}))
    else:
        skip("token session authentication.validate", "no token generated")

    print("\n=== Cleanup ===")
    run("projects.delete", lambda: client.projects.delete({"project": project_key}), allowed={404})

    client.close()

    print("\n" + "=" * 60)
    print(f"PASSED: {len(passed)}   FAILED: {len(failed)}   SKIPPED: {len(skipped)}")
    if failed:
        print("\nFailed calls:")
        for name, err in failed:
            print(f"  - {name}: {err}")
    if skipped:
        print("\nSkipped calls:")
        for name, reason in skipped:
            print(f"  - {name}: {reason}")
    print("=" * 60)

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
