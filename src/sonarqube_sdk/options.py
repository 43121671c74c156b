"""Option models and the generic validator that interprets their rules."""

from __future__ import annotations

from datetime import date, datetime
from functools import lru_cache
from typing import Any, ClassVar, Mapping

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .exceptions import SonarQubeValidationError
from .rules import FieldRule, ModelRule, is_empty


class PathParam:
    """Marks a field that fills a ``{placeholder}`` in the operation path."""

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return "PathParam()"


class Repeated:
    """Marks a list field sent as repeated query keys instead of a comma list."""

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return "Repeated()"


class KeepEmpty:
    """Marks a field sent as an empty value when unset, for parameters the server always expects."""

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return "KeepEmpty()"


class OptionModel(BaseModel):
    """Base class for per-operation options.

    Fields default to ``None`` (unset). Wire names are camelCase unless a field
    declares an explicit alias. Construction errors are raised as
    :class:`SonarQubeValidationError` so callers see one error type for bad input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    conditional_rules: ClassVar[tuple[ModelRule, ...]] = ()

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except PydanticValidationError as exc:
            raise _from_pydantic(type(self), exc) from exc


def _field_name_for(model_cls: type[OptionModel], loc: object) -> str:
    for name, info in model_cls.model_fields.items():
        if loc in (name, info.alias):
            return name
    return str(loc)


def _from_pydantic(model_cls: type[OptionModel], exc: PydanticValidationError) -> SonarQubeValidationError:
    first = exc.errors()[0]
    loc = first["loc"][0] if first["loc"] else "options"
    field_name = _field_name_for(model_cls, loc)
    if first["type"] == "extra_forbidden":
        return SonarQubeValidationError(field_name, "is not a recognized option", constraint="unknown")
    return SonarQubeValidationError(field_name, first["msg"], constraint="type")


@lru_cache(maxsize=None)
def field_rules(model_cls: type[OptionModel]) -> tuple[tuple[str, tuple[FieldRule, ...]], ...]:
    """Return ``(field, rules)`` pairs in declaration order, rules sorted by priority."""
    entries = []
    for name, info in model_cls.model_fields.items():
        rules = sorted(
            (item for item in info.metadata if isinstance(item, FieldRule)),
            key=lambda rule: rule.priority,
        )
        entries.append((name, tuple(rules)))
    return tuple(entries)


def first_error(model: OptionModel) -> SonarQubeValidationError | None:
    """Evaluate every rule of ``model`` and return the first failure, if any."""
    for name, rules in field_rules(type(model)):
        value = getattr(model, name)
        for rule in rules:
            if is_empty(value) and rule.priority > 0:
                break
            error = rule.check(name, value)
            if error is not None:
                return error
    for conditional in type(model).conditional_rules:
        error = conditional.check(model)
        if error is not None:
            return error
    return None


@lru_cache(maxsize=None)
def requires_options(model_cls: type[OptionModel] | None) -> bool:
    """An operation rejects ``None`` options exactly when an empty model is invalid."""
    if model_cls is None:
        return False
    return first_error(model_cls()) is not None


def validate_options(
    model_cls: type[OptionModel] | None,
    options: OptionModel | Mapping[str, Any] | None,
) -> OptionModel | None:
    """Coerce ``options`` into ``model_cls`` and check its rules.

    Raises :class:`SonarQubeValidationError` on the first failing field.
    Returns ``None`` only for operations that take no options at all.
    """
    if model_cls is None:
        if options is not None and not (isinstance(options, Mapping) and not options):
            raise SonarQubeValidationError("options", "operation takes no options", constraint="unknown")
        return None

    if options is None:
        if requires_options(model_cls):
            raise SonarQubeValidationError("options", "option struct is required", constraint="required")
        return model_cls()

    if isinstance(options, model_cls):
        model = options
    elif isinstance(options, Mapping):
        model = model_cls(**{str(key): value for key, value in options.items()})
    else:
        raise SonarQubeValidationError(
            "options",
            f"expected {model_cls.__name__} or a mapping, got {type(options).__name__}",
            constraint="type",
        )

    error = first_error(model)
    if error is not None:
        raise error
    return model


def encode_value(value: Any) -> str:
    """Render one option value the way the Web API parses query parameters."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%dT%H:%M:%S%z")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Mapping):
        return ";".join(f"{key}={encode_value(item)}" for key, item in value.items())
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(encode_value(item) for item in value)
    return str(value)


def _has_marker(metadata: list[Any], marker: type) -> bool:
    return any(isinstance(item, marker) for item in metadata)


def build_query(model: OptionModel) -> tuple[dict[str, str], dict[str, Any], dict[str, Any]]:
    """Split a model into path parameters, encoded query parameters and raw set values.

    Unset fields are dropped so server-side defaults stay in effect, except
    fields marked :class:`KeepEmpty`, which travel as an empty value.
    """
    path_params: dict[str, str] = {}
    query: dict[str, Any] = {}
    raw: dict[str, Any] = {}
    for name, info in type(model).model_fields.items():
        value = getattr(model, name)
        wire = info.alias or name
        if is_empty(value):
            if _has_marker(info.metadata, KeepEmpty):
                query[wire] = ""
            continue
        if _has_marker(info.metadata, PathParam):
            path_params[wire] = encode_value(value)
            continue
        raw[wire] = value
        if _has_marker(info.metadata, Repeated) and isinstance(value, (list, tuple)):
            query[wire] = [encode_value(item) for item in value]
        else:
            query[wire] = encode_value(value)
    return path_params, query, raw
