"""Wire encoding and decoding for Responses API payloads."""

from __future__ import annotations

from typing import Any, TypeVar, cast

from pydantic import BaseModel, TypeAdapter, ValidationError

from plinth.responses.errors import SchemaMismatch

T = TypeVar("T")


def encode(value: Any, tp: Any | None = None) -> Any:
    """Serialize a model, union member or JSON-like value to its wire form."""

    if tp is not None:
        return TypeAdapter(tp).dump_python(value, mode="json", by_alias=True)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return TypeAdapter(Any).dump_python(value, mode="json", by_alias=True)


def decode(tp: type[T] | Any, data: Any) -> T:
    """Validate ``data`` against ``tp``; untagged unions commit to the first match.

    Raises SchemaMismatch naming the target type and the first failing location.
    """

    try:
        if isinstance(tp, type) and issubclass(tp, BaseModel):
            return cast(T, tp.model_validate(data))
        return cast(T, TypeAdapter(tp).validate_python(data))
    except ValidationError as exc:
        raise SchemaMismatch(_describe(tp, exc)) from exc


def _describe(tp: Any, exc: ValidationError) -> str:
    name = getattr(tp, "__name__", None) or repr(tp)
    errors = exc.errors(include_url=False)
    if not errors:
        return f"payload does not match {name}"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    return f"payload does not match {name} at {location}: {first.get('msg', 'invalid')}"


__all__ = ["decode", "encode"]
