from __future__ import annotations

from typing import Annotated

import pytest

from sonarqube_sdk.options import OptionModel, first_error
from sonarqube_sdk.rules import (
    AnyOf,
    ForbiddenIf,
    MaxLength,
    MinLength,
    OneOf,
    Range,
    RangeIf,
    Required,
    RequiredIf,
    is_empty,
)


@pytest.mark.parametrize("value", [None, "", [], (), {}, b""])
def test_is_empty_treats_blank_values_as_unset(value) -> None:
    assert is_empty(value)


@pytest.mark.parametrize("value", [False, 0, "x", ["a"], {"k": "v"}])
def test_is_empty_keeps_false_and_zero(value) -> None:
    assert not is_empty(value)


def test_required_rejects_blank_and_names_field() -> None:
    error = Required().check("project", "")
    assert error is not None
    assert error.field == "project"
    assert error.constraint == "required"
    assert Required().check("project", "my-app") is None
    assert Required().check("value", False) is None


def test_max_length_boundary_is_inclusive() -> None:
    rule = MaxLength(400)
    assert rule.check("project", "k" * 400) is None
    error = rule.check("project", "k" * 401)
    assert error is not None
    assert error.constraint == "max_length"
    assert "400" in error.reason


def test_min_length_boundary_is_inclusive() -> None:
    rule = MinLength(12)
    assert rule.check("password", "p" * 12) is None
    error = rule.check("password", "p" * 11)
    assert error is not None
    assert error.constraint == "min_length"


def test_range_parses_numeric_strings_and_rejects_bool() -> None:
    rule = Range(minimum=1, maximum=90)
    assert rule.check("value", "30") is None
    assert rule.check("value", 90) is None
    assert rule.check("value", 91).constraint == "range"
    assert rule.check("value", "0").reason == "must be between 1 and 90"
    assert rule.check("value", "thirty").reason == "must be an integer"
    assert rule.check("value", True) is not None


def test_range_with_only_a_minimum() -> None:
    rule = Range(minimum=1)
    assert rule.check("page", 10_000) is None
    assert rule.check("page", 0).reason == "must be greater than or equal to 1"


def test_one_of_checks_every_list_element() -> None:
    rule = OneOf("TRK", "VW", "APP")
    assert rule.check("qualifiers", "TRK") is None
    assert rule.check("qualifiers", ["TRK", "APP"]) is None
    error = rule.check("qualifiers", ["TRK", "BRC"])
    assert error is not None
    assert error.constraint == "enum"
    assert "'BRC'" in error.reason


class Definition(OptionModel):
    name: Annotated[str | None, Required(), MaxLength(5)] = None
    kind: Annotated[str | None, OneOf("DAYS", "BRANCH", "PREVIOUS")] = None
    value: str | None = None
    project: str | None = None
    branch: str | None = None

    conditional_rules = (
        RequiredIf("value", "kind", ("DAYS", "BRANCH")),
        RangeIf("value", "kind", "DAYS", minimum=1, maximum=90),
        ForbiddenIf("value", "kind", "PREVIOUS"),
        AnyOf("project", "branch"),
    )


def test_field_rules_run_in_priority_order() -> None:
    error = first_error(Definition())
    assert error.field == "name"
    assert error.constraint == "required"

    error = first_error(Definition(name="toolong", kind="WEEKS"))
    assert error.field == "name"
    assert error.constraint == "max_length"


def test_optional_empty_field_skips_its_rules() -> None:
    assert first_error(Definition(name="a", kind="", project="p")) is None


def test_conditional_rules_run_after_field_rules() -> None:
    error = first_error(Definition(name="a", kind="WEEKS"))
    assert error.field == "kind"
    assert error.constraint == "enum"

    error = first_error(Definition(name="a", kind="DAYS", project="p"))
    assert error.field == "value"
    assert error.reason == "is required when kind is DAYS"


def test_range_if_only_applies_to_matching_type() -> None:
    assert first_error(Definition(name="a", kind="DAYS", value="91", project="p")).constraint == "range"
    assert first_error(Definition(name="a", kind="DAYS", value="90", project="p")) is None
    assert first_error(Definition(name="a", kind="BRANCH", value="feature/x", project="p")) is None


def test_forbidden_if_rejects_value() -> None:
    error = first_error(Definition(name="a", kind="PREVIOUS", value="3", project="p"))
    assert error.field == "value"
    assert error.constraint == "conditional"


def test_any_of_requires_one_field() -> None:
    error = first_error(Definition(name="a"))
    assert error.field == "project"
    assert "project, branch" in error.reason
    assert first_error(Definition(name="a", branch="main")) is None
