"""Fluent builders for request-side models.

Every setter returns a new builder, so a partially configured builder can be
shared and branched without aliasing. ``build()`` applies defaults, checks the
required fields in declaration order and validates the result.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar, Generic, Self, TypeVar

from pydantic import BaseModel, ValidationError

from plinth.responses.errors import InvalidArgument, MissingRequiredField
from plinth.responses.types import (
    ComputerTool,
    CreateResponseRequest,
    EasyInputMessage,
    EasyInputMessageRole,
    Environment,
    FileSearchTool,
    FunctionTool,
    InputContent,
    Input,
    InputMessage,
    InputMessageContent,
    InputMessageRole,
    MessageStatus,
    OutputContent,
    OutputMessage,
    RankingOptions,
    Reasoning,
    ResponseTruncation,
    SearchContextSize,
    TextResponseFormat,
    Tool,
    ToolChoice,
    ToolChoiceFunction,
    VectorStoreSearchFilter,
    WebSearchTool,
    WebSearchToolUserLocation,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

_NO_DEFAULTS: Mapping[str, Any] = MappingProxyType({})


class _Builder(Generic[ModelT]):
    target: ClassVar[type[BaseModel]]
    required: ClassVar[tuple[str, ...]] = ()
    defaults: ClassVar[Mapping[str, Any]] = _NO_DEFAULTS

    __slots__ = ("_values",)

    def __init__(self, **values: Any) -> None:
        self._values: Mapping[str, Any] = MappingProxyType(dict(values))

    def _set(self, name: str, value: Any) -> Self:
        return type(self)(**{**self._values, name: value})

    def build(self) -> ModelT:
        for name in self.required:
            if name not in self._values:
                raise MissingRequiredField(name)
        try:
            return self.target.model_validate({**self.defaults, **self._values})  # type: ignore[return-value]
        except ValidationError as exc:
            raise InvalidArgument(f"invalid {self.target.__name__}: {_first_error(exc)}") from exc

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self._values.items())
        return f"{type(self).__name__}({fields})"


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors(include_url=False)
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


class CreateResponseArgs(_Builder[CreateResponseRequest]):
    """Builder for :class:`CreateResponseRequest`; ``model`` and ``input`` are required."""

    target = CreateResponseRequest
    required = ("model", "input")

    def model(self, value: str) -> CreateResponseArgs:
        return self._set("model", value)

    def input(self, value: Input | str | Iterable[Any]) -> CreateResponseArgs:
        return self._set("input", value if isinstance(value, str) else tuple(value))

    def temperature(self, value: float) -> CreateResponseArgs:
        return self._set("temperature", value)

    def top_p(self, value: float) -> CreateResponseArgs:
        return self._set("top_p", value)

    def instructions(self, value: str) -> CreateResponseArgs:
        return self._set("instructions", value)

    def previous_response_id(self, value: str) -> CreateResponseArgs:
        return self._set("previous_response_id", value)

    def max_output_tokens(self, value: int) -> CreateResponseArgs:
        return self._set("max_output_tokens", value)

    def reasoning(self, value: Reasoning) -> CreateResponseArgs:
        return self._set("reasoning", value)

    def text(self, value: TextResponseFormat) -> CreateResponseArgs:
        return self._set("text", value)

    def tools(self, value: Iterable[Tool]) -> CreateResponseArgs:
        return self._set("tools", tuple(value))

    def tool_choice(self, value: ToolChoice) -> CreateResponseArgs:
        return self._set("tool_choice", value)

    def truncation(self, value: ResponseTruncation) -> CreateResponseArgs:
        return self._set("truncation", value)

    def user(self, value: str) -> CreateResponseArgs:
        return self._set("user", value)

    def metadata(self, value: Mapping[str, str]) -> CreateResponseArgs:
        return self._set("metadata", dict(value))

    def parallel_tool_calls(self, value: bool) -> CreateResponseArgs:
        return self._set("parallel_tool_calls", value)

    def store(self, value: bool) -> CreateResponseArgs:
        return self._set("store", value)

    def include(self, value: Iterable[str]) -> CreateResponseArgs:
        return self._set("include", tuple(value))

    def stream(self, value: bool) -> CreateResponseArgs:
        return self._set("stream", value)


class FileSearchToolArgs(_Builder[FileSearchTool]):
    target = FileSearchTool
    required = ("vector_store_ids",)

    def vector_store_ids(self, value: Iterable[str]) -> FileSearchToolArgs:
        return self._set("vector_store_ids", tuple(value))

    def max_num_results(self, value: int) -> FileSearchToolArgs:
        return self._set("max_num_results", value)

    def filters(self, value: VectorStoreSearchFilter) -> FileSearchToolArgs:
        return self._set("filters", value)

    def ranking_options(self, value: RankingOptions) -> FileSearchToolArgs:
        return self._set("ranking_options", value)


class FunctionToolArgs(_Builder[FunctionTool]):
    target = FunctionTool
    required = ("name",)

    def name(self, value: str) -> FunctionToolArgs:
        return self._set("name", value)

    def description(self, value: str) -> FunctionToolArgs:
        return self._set("description", value)

    def parameters(self, value: Mapping[str, Any]) -> FunctionToolArgs:
        return self._set("parameters", dict(value))

    def parameters_from_model(self, model: type[BaseModel]) -> FunctionToolArgs:
        """Derive strict parameters from a pydantic model's JSON schema."""

        params = model.model_json_schema()
        params.setdefault("additionalProperties", False)
        props = params.get("properties") or {}
        if isinstance(props, dict) and "required" not in params:
            params["required"] = list(props.keys())
        return self._set("parameters", params)._set("strict", True)

    def strict(self, value: bool) -> FunctionToolArgs:
        return self._set("strict", value)


class ComputerToolArgs(_Builder[ComputerTool]):
    target = ComputerTool
    required = ("display_width", "display_height", "environment")

    def display_width(self, value: int) -> ComputerToolArgs:
        return self._set("display_width", value)

    def display_height(self, value: int) -> ComputerToolArgs:
        return self._set("display_height", value)

    def environment(self, value: Environment) -> ComputerToolArgs:
        return self._set("environment", value)


class WebSearchToolArgs(_Builder[WebSearchTool]):
    target = WebSearchTool
    defaults = MappingProxyType({"type": "web_search_preview"})

    def type(self, value: str) -> WebSearchToolArgs:
        return self._set("type", value)

    def user_location(self, value: WebSearchToolUserLocation) -> WebSearchToolArgs:
        return self._set("user_location", value)

    def search_context_size(self, value: SearchContextSize) -> WebSearchToolArgs:
        return self._set("search_context_size", value)


class WebSearchToolUserLocationArgs(_Builder[WebSearchToolUserLocation]):
    target = WebSearchToolUserLocation
    defaults = MappingProxyType({"type": "approximate"})

    def type(self, value: str) -> WebSearchToolUserLocationArgs:
        return self._set("type", value)

    def country(self, value: str) -> WebSearchToolUserLocationArgs:
        return self._set("country", value)

    def region(self, value: str) -> WebSearchToolUserLocationArgs:
        return self._set("region", value)

    def city(self, value: str) -> WebSearchToolUserLocationArgs:
        return self._set("city", value)

    def timezone(self, value: str) -> WebSearchToolUserLocationArgs:
        return self._set("timezone", value)


class ToolChoiceFunctionArgs(_Builder[ToolChoiceFunction]):
    target = ToolChoiceFunction
    required = ("name",)
    defaults = MappingProxyType({"type": "function"})

    def name(self, value: str) -> ToolChoiceFunctionArgs:
        return self._set("name", value)


class EasyInputMessageArgs(_Builder[EasyInputMessage]):
    target = EasyInputMessage
    required = ("role", "content")
    defaults = MappingProxyType({"type": "message"})

    def role(self, value: EasyInputMessageRole) -> EasyInputMessageArgs:
        return self._set("role", value)

    def content(self, value: InputMessageContent | str | Iterable[InputContent]) -> EasyInputMessageArgs:
        return self._set("content", value if isinstance(value, str) else tuple(value))


class InputMessageArgs(_Builder[InputMessage]):
    target = InputMessage
    required = ("role", "status", "content")
    defaults = MappingProxyType({"type": "message"})

    def role(self, value: InputMessageRole) -> InputMessageArgs:
        return self._set("role", value)

    def status(self, value: MessageStatus) -> InputMessageArgs:
        return self._set("status", value)

    def content(self, value: Iterable[InputContent]) -> InputMessageArgs:
        return self._set("content", tuple(value))


class OutputMessageArgs(_Builder[OutputMessage]):
    target = OutputMessage
    required = ("id", "content")
    defaults = MappingProxyType({"type": "message", "role": "assistant"})

    def id(self, value: str) -> OutputMessageArgs:
        return self._set("id", value)

    def status(self, value: MessageStatus) -> OutputMessageArgs:
        return self._set("status", value)

    def content(self, value: Iterable[OutputContent]) -> OutputMessageArgs:
        return self._set("content", tuple(value))


__all__ = [
    "ComputerToolArgs",
    "CreateResponseArgs",
    "EasyInputMessageArgs",
    "FileSearchToolArgs",
    "FunctionToolArgs",
    "InputMessageArgs",
    "OutputMessageArgs",
    "ToolChoiceFunctionArgs",
    "WebSearchToolArgs",
    "WebSearchToolUserLocationArgs",
]
