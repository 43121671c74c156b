"""Declarative field rules for option models.

Field rules are attached with ``typing.Annotated`` and checked against a single
value. Conditional rules are listed in an option model's ``conditional_rules``
and checked against the whole model once every field rule has passed.

    class ProjectsCreateOption(OptionModel):
        name: Annotated[str | None, Required(), MaxLength(500)] = None
        visibility: Annotated[str | None, OneOf("private", "public")] = None
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from .exceptions import SonarQubeValidationError


def is_empty(value: Any) -> bool:
    """Unset means ``None``, an empty string or an empty collection."""
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _describe(values: tuple[str, ...]) -> str:
    return ", ".join(values)


class FieldRule:
    """Checks one field value. Lower ``priority`` runs first."""

    priority: ClassVar[int] = 50

    def check(self, field_name: str, value: Any) -> SonarQubeValidationError | None:
        raise NotImplementedError


@dataclass(frozen=True)
class Required(FieldRule):
    priority: ClassVar[int] = 0

    def check(self, field_name: str, value: Any) -> SonarQubeValidationError | None:
        if is_empty(value):
            return SonarQubeValidationError(field_name, "is required", constraint="required")
        return None


@dataclass(frozen=True)
class MaxLength(FieldRule):
    limit: int
    priority: ClassVar[int] = 10

    def check(self, field_name: str, value: Any) -> SonarQubeValidationError | None:
        if isinstance(value, str) and len(value) > self.limit:
            return SonarQubeValidationError(
                field_name,
                f"exceeds maximum length of {self.limit} characters",
                constraint="max_length",
            )
        return None


@dataclass(frozen=True)
class MinLength(FieldRule):
    limit: int
    priority: ClassVar[int] = 10

    def check(self, field_name: str, value: Any) -> SonarQubeValidationError | None:
        if isinstance(value, str) and len(value) < self.limit:
            return SonarQubeValidationError(
                field_name,
                f"must be at least {self.limit} characters",
                constraint="min_length",
            )
        return None


@dataclass(frozen=True)
class Range(FieldRule):
    """Inclusive numeric bounds. Numeric strings are parsed as integers."""

    minimum: int | None = None
    maximum: int | None = None
    priority: ClassVar[int] = 20

    def describe(self) -> str:
        if self.minimum is not None and self.maximum is not None:
            return f"must be between {self.minimum} and {self.maximum}"
        if self.minimum is not None:
            return f"must be greater than or equal to {self.minimum}"
        return f"must be less than or equal to {self.maximum}"

    def check(self, field_name: str, value: Any) -> SonarQubeValidationError | None:
        number = _as_int(value)
        if number is None:
            return SonarQubeValidationError(field_name, "must be an integer", constraint="range")
        if self.minimum is not None and number < self.minimum:
            return SonarQubeValidationError(field_name, self.describe(), constraint="range")
        if self.maximum is not None and number > self.maximum:
            return SonarQubeValidationError(field_name, self.describe(), constraint="range")
        return None


@dataclass(frozen=True, init=False)
class OneOf(FieldRule):
    """Enum membership. List values are checked element by element."""

    allowed: tuple[str, ...]
    priority: ClassVar[int] = 30

    def __init__(self, *allowed: str) -> None:
        object.__setattr__(self, "allowed", tuple(allowed))

    def check(self, field_name: str, value: Any) -> SonarQubeValidationError | None:
        items = value if isinstance(value, (list, tuple, set, frozenset)) else (value,)
        for item in items:
            if item not in self.allowed:
                return SonarQubeValidationError(
                    field_name,
                    f"value {item!r} is not allowed. Must be one of: {_describe(self.allowed)}",
                    constraint="enum",
                )
        return None


class ModelRule:
    """Checks a rule spanning several fields of one option model."""

    def check(self, model: Any) -> SonarQubeValidationError | None:
        raise NotImplementedError


@dataclass(frozen=True)
class _WhenRule(ModelRule):
    target: str
    when: str
    values: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        if isinstance(self.values, str):
            object.__setattr__(self, "values", (self.values,))

    def triggered(self, model: Any) -> bool:
        return getattr(model, self.when, None) in self.values


@dataclass(frozen=True)
class RequiredIf(_WhenRule):
    """``target`` is required when ``when`` holds one of ``values``."""

    def check(self, model: Any) -> SonarQubeValidationError | None:
        if self.triggered(model) and is_empty(getattr(model, self.target, None)):
            return SonarQubeValidationError(
                self.target,
                f"is required when {self.when} is {getattr(model, self.when)}",
                constraint="required",
            )
        return None


@dataclass(frozen=True)
class ForbiddenIf(_WhenRule):
    """``target`` must stay unset when ``when`` holds one of ``values``."""

    def check(self, model: Any) -> SonarQubeValidationError | None:
        if self.triggered(model) and not is_empty(getattr(model, self.target, None)):
            return SonarQubeValidationError(
                self.target,
                f"should not be provided when {self.when} is {getattr(model, self.when)}",
                constraint="conditional",
            )
        return None


@dataclass(frozen=True)
class RangeIf(_WhenRule):
    """Numeric bounds on ``target`` that only apply for some ``when`` values."""

    minimum: int | None = None
    maximum: int | None = None

    def check(self, model: Any) -> SonarQubeValidationError | None:
        value = getattr(model, self.target, None)
        if not self.triggered(model) or is_empty(value):
            return None
        return Range(self.minimum, self.maximum).check(self.target, value)


@dataclass(frozen=True, init=False)
class AnyOf(ModelRule):
    """At least one of ``fields`` must be set."""

    fields: tuple[str, ...]

    def __init__(self, *fields: str) -> None:
        object.__setattr__(self, "fields", tuple(fields))

    def check(self, model: Any) -> SonarQubeValidationError | None:
        if all(is_empty(getattr(model, name, None)) for name in self.fields):
            return SonarQubeValidationError(
                self.fields[0],
                f"at least one of {_describe(self.fields)} is required",
                constraint="required",
            )
        return None
