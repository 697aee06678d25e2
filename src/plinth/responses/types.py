"""Request and response models for the Responses API.

Every record is an immutable pydantic model. Optional fields default to
``None`` and are dropped from the wire payload; ``type`` discriminants are
always emitted. Tagged unions use pydantic discriminators, untagged unions are
validated left to right so the first structural match wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal, TypeAlias, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
    model_validator,
)


class WireModel(BaseModel):
    """Frozen base model that omits absent optional fields when serialized."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        extra = self.__pydantic_extra__ or {}
        declared = set()
        for name, info in type(self).model_fields.items():
            declared.add(name)
            if info.alias:
                declared.add(info.alias)
        # Unmodeled keys pass through as received, nulls included.
        return {
            key: value
            for key, value in data.items()
            if value is not None or key not in declared or key in extra
        }


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class ReasoningEffort(str, Enum):
    NONE = "none"
    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ReasoningSummary(str, Enum):
    AUTO = "auto"
    CONCISE = "concise"
    DETAILED = "detailed"


class Verbosity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ResponseTruncation(str, Enum):
    """Truncation strategy; the service applies ``disabled`` when absent."""

    AUTO = "auto"
    DISABLED = "disabled"


DEFAULT_TRUNCATION = ResponseTruncation.DISABLED


class ImageDetail(str, Enum):
    HIGH = "high"
    LOW = "low"
    AUTO = "auto"


class MessageStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"


class EasyInputMessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    DEVELOPER = "developer"


class InputMessageRole(str, Enum):
    USER = "user"
    SYSTEM = "system"
    DEVELOPER = "developer"


class Environment(str, Enum):
    """Computer environments the computer-use tool can drive."""

    MAC = "mac"
    WINDOWS = "windows"
    UBUNTU = "ubuntu"
    BROWSER = "browser"


class SearchContextSize(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class HostedToolType(str, Enum):
    """Built-in tool kinds that can be forced through ``tool_choice``."""

    FILE_SEARCH = "file_search"
    COMPUTER_USE_PREVIEW = "computer_use_preview"
    WEB_SEARCH_PREVIEW = "web_search_preview"
    WEB_SEARCH_PREVIEW_2025_03_11 = "web_search_preview_2025_03_11"


class ToolChoiceOptions(str, Enum):
    """``none`` disables tools, ``auto`` lets the model pick, ``required`` forces a call."""

    NONE = "none"
    AUTO = "auto"
    REQUIRED = "required"


class ResponseStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    IN_PROGRESS = "in_progress"
    INCOMPLETE = "incomplete"
    QUEUED = "queued"
    CANCELLED = "cancelled"


# ---------------------------------------------------------------------------
# Input content
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UrlSource:
    """Content addressed by a URL (or a base64 data URL)."""

    url: str


@dataclass(frozen=True, slots=True)
class FileIdSource:
    """Content addressed by an uploaded file id."""

    file_id: str


@dataclass(frozen=True, slots=True)
class InlineFileSource:
    """File content carried inline in the request."""

    file_data: str
    filename: str | None = None


class InputText(WireModel):
    type: Literal["input_text"] = "input_text"
    text: str


class InputImage(WireModel):
    """Image input; ``image_url`` and ``file_id`` are mutually exclusive."""

    type: Literal["input_image"] = "input_image"
    image_url: str | None = None
    file_id: str | None = None
    detail: ImageDetail = ImageDetail.AUTO

    @model_validator(mode="after")
    def _check_source(self) -> InputImage:
        if self.image_url is not None and self.file_id is not None:
            raise ValueError("image_url and file_id are mutually exclusive")
        return self

    @classmethod
    def from_source(cls, source: UrlSource | FileIdSource, detail: ImageDetail = ImageDetail.AUTO) -> InputImage:
        if isinstance(source, UrlSource):
            return cls(image_url=source.url, detail=detail)
        return cls(file_id=source.file_id, detail=detail)

    @property
    def source(self) -> UrlSource | FileIdSource | None:
        if self.image_url is not None:
            return UrlSource(self.image_url)
        if self.file_id is not None:
            return FileIdSource(self.file_id)
        return None


class InputFile(WireModel):
    """File input; ``file_id`` and inline ``file_data`` are mutually exclusive."""

    type: Literal["input_file"] = "input_file"
    file_id: str | None = None
    filename: str | None = None
    file_data: str | None = None

    @model_validator(mode="after")
    def _check_source(self) -> InputFile:
        if self.file_id is not None and self.file_data is not None:
            raise ValueError("file_id and file_data are mutually exclusive")
        return self

    @classmethod
    def from_source(cls, source: FileIdSource | InlineFileSource) -> InputFile:
        if isinstance(source, FileIdSource):
            return cls(file_id=source.file_id)
        return cls(filename=source.filename, file_data=source.file_data)

    @property
    def source(self) -> FileIdSource | InlineFileSource | None:
        if self.file_id is not None:
            return FileIdSource(self.file_id)
        if self.file_data is not None:
            return InlineFileSource(file_data=self.file_data, filename=self.filename)
        return None


InputContent: TypeAlias = Annotated[InputText | InputImage | InputFile, Field(discriminator="type")]

InputMessageContent: TypeAlias = Annotated[
    str | tuple[InputContent, ...],
    Field(union_mode="left_to_right"),
]


# ---------------------------------------------------------------------------
# Input items
# ---------------------------------------------------------------------------


class EasyInputMessage(WireModel):
    """Message shorthand; unknown keys are rejected so richer items fall through."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["message"] = "message"
    role: EasyInputMessageRole
    content: InputMessageContent


class InputMessage(WireModel):
    type: Literal["message"] = "message"
    role: InputMessageRole
    status: MessageStatus
    content: tuple[InputContent, ...]


class FunctionToolCall(WireModel):
    """A function call emitted by the model, or replayed as input."""

    type: Literal["function_call"] = "function_call"
    call_id: str
    name: str
    arguments: str
    id: str | None = None
    status: MessageStatus | None = None


class FunctionCallOutput(WireModel):
    """The result of a function call passed back to the model."""

    type: Literal["function_call_output"] = "function_call_output"
    call_id: str
    output: str
    id: str | None = None
    status: MessageStatus | None = None


Item: TypeAlias = Annotated[
    InputMessage | FunctionToolCall | FunctionCallOutput,
    Field(discriminator="type"),
]


class ItemReference(WireModel):
    type: Literal["item_reference"] = "item_reference"
    id: str


InputItem: TypeAlias = Annotated[
    Union[EasyInputMessage, Item, ItemReference],
    Field(union_mode="left_to_right"),
]

Input: TypeAlias = Annotated[
    str | tuple[InputItem, ...],
    Field(union_mode="left_to_right"),
]


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


class ComparisonFilter(WireModel):
    type: Literal["eq", "ne", "gt", "gte", "lt", "lte"]
    key: str
    value: str | bool | int | float


class CompoundFilter(WireModel):
    type: Literal["and", "or"]
    filters: tuple[VectorStoreSearchFilter, ...]


VectorStoreSearchFilter: TypeAlias = Annotated[ComparisonFilter | CompoundFilter, Field(discriminator="type")]

CompoundFilter.model_rebuild()


class RankingOptions(WireModel):
    ranker: str | None = None
    score_threshold: float | None = Field(default=None, ge=0, le=1)


class FileSearchTool(WireModel):
    """Searches uploaded files through the given vector stores."""

    type: Literal["file_search"] = "file_search"
    vector_store_ids: tuple[str, ...]
    max_num_results: int | None = Field(default=None, ge=1, le=50)
    filters: VectorStoreSearchFilter | None = None
    ranking_options: RankingOptions | None = None


class FunctionTool(WireModel):
    """JSON function definition advertised to the model."""

    type: Literal["function"] = "function"
    name: str
    description: str | None = None
    parameters: dict[str, Any] | None = None
    strict: bool | None = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tool name cannot be empty")
        return value


class ComputerTool(WireModel):
    """Controls a virtual computer."""

    type: Literal["computer_use_preview"] = "computer_use_preview"
    display_width: int = Field(ge=0)
    display_height: int = Field(ge=0)
    environment: Environment


class WebSearchToolUserLocation(WireModel):
    type: Literal["approximate"] = "approximate"
    country: str | None = None
    region: str | None = None
    city: str | None = None
    timezone: str | None = None


class WebSearchTool(WireModel):
    """Web search; ``type`` selects the undated or the dated preview."""

    type: Literal["web_search_preview", "web_search_preview_2025_03_11"] = "web_search_preview"
    user_location: WebSearchToolUserLocation | None = None
    search_context_size: SearchContextSize | None = None


Tool: TypeAlias = Annotated[
    FileSearchTool | FunctionTool | ComputerTool | WebSearchTool,
    Field(discriminator="type"),
]


class ToolChoiceTypes(WireModel):
    type: HostedToolType


class ToolChoiceFunction(WireModel):
    type: Literal["function"] = "function"
    name: str


ToolChoice: TypeAlias = Annotated[
    ToolChoiceOptions | ToolChoiceTypes | ToolChoiceFunction,
    Field(union_mode="left_to_right"),
]


# ---------------------------------------------------------------------------
# Reasoning and text configuration
# ---------------------------------------------------------------------------


class Reasoning(WireModel):
    """Reasoning configuration for reasoning-capable models."""

    effort: ReasoningEffort | None = None
    summary: ReasoningSummary | None = None


class ResponseFormatText(WireModel):
    type: Literal["text"] = "text"


class ResponseFormatJsonObject(WireModel):
    type: Literal["json_object"] = "json_object"


class ResponseFormatJsonSchema(WireModel):
    """Structured output constrained by a JSON schema."""

    type: Literal["json_schema"] = "json_schema"
    name: str
    schema_: dict[str, Any] = Field(alias="schema")
    description: str | None = None
    strict: bool | None = None


ResponseFormat: TypeAlias = Annotated[
    ResponseFormatText | ResponseFormatJsonObject | ResponseFormatJsonSchema,
    Field(discriminator="type"),
]


class TextResponseFormat(WireModel):
    format: ResponseFormat | None = None
    verbosity: Verbosity | None = None


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class CreateResponseRequest(WireModel):
    """Outbound payload for ``POST /responses``.

    ``temperature`` and ``top_p`` are alternative sampling controls; setting
    both is accepted here and left to the service to judge.
    """

    model_config = ConfigDict(extra="forbid")

    model: str
    input: Input
    temperature: float | None = Field(default=None, ge=0, le=2)
    top_p: float | None = Field(default=None, ge=0, le=1)
    instructions: str | None = None
    previous_response_id: str | None = None
    max_output_tokens: int | None = Field(default=None, ge=0)
    reasoning: Reasoning | None = None
    text: TextResponseFormat | None = None
    tools: tuple[Tool, ...] | None = None
    tool_choice: ToolChoice | None = None
    truncation: ResponseTruncation | None = None
    user: str | None = None
    metadata: dict[str, str] | None = None
    parallel_tool_calls: bool | None = None
    store: bool | None = None
    include: tuple[str, ...] | None = None
    stream: bool | None = None

    @field_validator("model")
    @classmethod
    def _validate_model(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("model cannot be empty")
        return value.strip()

    @property
    def effective_truncation(self) -> ResponseTruncation:
        return self.truncation or DEFAULT_TRUNCATION


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class OutputText(WireModel):
    type: Literal["output_text"] = "output_text"
    text: str
    annotations: tuple[dict[str, Any], ...] = ()


class Refusal(WireModel):
    type: Literal["refusal"] = "refusal"
    refusal: str


OutputContent: TypeAlias = Annotated[OutputText | Refusal, Field(discriminator="type")]


class OutputMessage(WireModel):
    type: Literal["message"] = "message"
    id: str
    role: Literal["assistant"] = "assistant"
    status: MessageStatus | None = None
    content: tuple[OutputContent, ...]


class FileSearchToolCall(WireModel):
    type: Literal["file_search_call"] = "file_search_call"
    id: str
    status: str
    queries: tuple[str, ...] = ()
    results: tuple[dict[str, Any], ...] | None = None


class WebSearchToolCall(WireModel):
    type: Literal["web_search_call"] = "web_search_call"
    id: str
    status: str


class ComputerToolCall(WireModel):
    type: Literal["computer_call"] = "computer_call"
    id: str
    call_id: str
    action: dict[str, Any]
    pending_safety_checks: tuple[dict[str, Any], ...] = ()
    status: str


class ReasoningSummaryText(WireModel):
    type: Literal["summary_text"] = "summary_text"
    text: str


class ReasoningItem(WireModel):
    type: Literal["reasoning"] = "reasoning"
    id: str
    summary: tuple[ReasoningSummaryText, ...] = ()
    status: str | None = None
    encrypted_content: str | None = None


OutputItem: TypeAlias = Annotated[
    OutputMessage | FunctionToolCall | FileSearchToolCall | WebSearchToolCall | ComputerToolCall | ReasoningItem,
    Field(discriminator="type"),
]


class ResponseError(WireModel):
    code: str
    message: str


class IncompleteDetails(WireModel):
    reason: str | None = None


class InputTokensDetails(WireModel):
    cached_tokens: int = 0


class OutputTokensDetails(WireModel):
    reasoning_tokens: int = 0


class ResponseUsage(WireModel):
    input_tokens: int
    output_tokens: int
    total_tokens: int
    input_tokens_details: InputTokensDetails | None = None
    output_tokens_details: OutputTokensDetails | None = None


class Response(WireModel):
    """Inbound response object.

    Only ``id`` is guaranteed; callers echo it back as ``previous_response_id``
    to continue a conversation. Unmodeled top-level keys are kept as extras.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    object: Literal["response"] = "response"
    created_at: int | None = None
    status: ResponseStatus | None = None
    model: str | None = None
    output: tuple[OutputItem, ...] = ()
    error: ResponseError | None = None
    incomplete_details: IncompleteDetails | None = None
    instructions: str | None = None
    max_output_tokens: int | None = None
    previous_response_id: str | None = None
    reasoning: Reasoning | None = None
    temperature: float | None = None
    top_p: float | None = None
    text: TextResponseFormat | None = None
    tools: tuple[Tool, ...] | None = None
    tool_choice: ToolChoice | None = None
    truncation: ResponseTruncation | None = None
    usage: ResponseUsage | None = None
    user: str | None = None
    metadata: dict[str, str] | None = None
    parallel_tool_calls: bool | None = None

    @property
    def output_text(self) -> str:
        """Concatenated text of every ``output_text`` part in assistant messages."""

        parts: list[str] = []
        for item in self.output:
            if isinstance(item, OutputMessage):
                parts.extend(part.text for part in item.content if isinstance(part, OutputText))
        return "".join(parts)

    @property
    def function_calls(self) -> tuple[FunctionToolCall, ...]:
        return tuple(item for item in self.output if isinstance(item, FunctionToolCall))


__all__ = [
    "ComparisonFilter",
    "CompoundFilter",
    "ComputerTool",
    "ComputerToolCall",
    "CreateResponseRequest",
    "DEFAULT_TRUNCATION",
    "EasyInputMessage",
    "EasyInputMessageRole",
    "Environment",
    "FileIdSource",
    "FileSearchTool",
    "FileSearchToolCall",
    "FunctionCallOutput",
    "FunctionTool",
    "FunctionToolCall",
    "HostedToolType",
    "ImageDetail",
    "IncompleteDetails",
    "InlineFileSource",
    "Input",
    "InputContent",
    "InputFile",
    "InputImage",
    "InputItem",
    "InputMessage",
    "InputMessageContent",
    "InputMessageRole",
    "InputText",
    "InputTokensDetails",
    "Item",
    "ItemReference",
    "MessageStatus",
    "OutputContent",
    "OutputItem",
    "OutputMessage",
    "OutputText",
    "OutputTokensDetails",
    "RankingOptions",
    "Reasoning",
    "ReasoningEffort",
    "ReasoningItem",
    "ReasoningSummary",
    "ReasoningSummaryText",
    "Refusal",
    "Response",
    "ResponseError",
    "ResponseFormat",
    "ResponseFormatJsonObject",
    "ResponseFormatJsonSchema",
    "ResponseFormatText",
    "ResponseStatus",
    "ResponseTruncation",
    "ResponseUsage",
    "SearchContextSize",
    "TextResponseFormat",
    "Tool",
    "ToolChoice",
    "ToolChoiceFunction",
    "ToolChoiceOptions",
    "ToolChoiceTypes",
    "UrlSource",
    "VectorStoreSearchFilter",
    "WebSearchTool",
    "WebSearchToolCall",
    "WebSearchToolUserLocation",
    "WireModel",
    "Verbosity",
]
