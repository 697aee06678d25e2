"""Responses API client package."""

from __future__ import annotations

from .builders import (  # noqa: F401
    ComputerToolArgs,
    CreateResponseArgs,
    EasyInputMessageArgs,
    FileSearchToolArgs,
    FunctionToolArgs,
    InputMessageArgs,
    OutputMessageArgs,
    ToolChoiceFunctionArgs,
    WebSearchToolArgs,
    WebSearchToolUserLocationArgs,
)
from .client import ResponsesClient  # noqa: F401
from .codec import decode, encode  # noqa: F401
from .errors import (  # noqa: F401
    ApiAuthError,
    ApiClientError,
    ApiError,
    ApiRateLimitError,
    ApiServerError,
    ApiTimeoutError,
    InvalidArgument,
    MissingRequiredField,
    SchemaMismatch,
    TransportError,
)
from .transport import (  # noqa: F401
    HttpResponsesTransport,
    MockResponsesTransport,
    OpenAISDKResponsesTransport,
    ResponsesTransport,
)
from .types import (  # noqa: F401
    ComputerTool,
    CreateResponseRequest,
    EasyInputMessage,
    EasyInputMessageRole,
    Environment,
    FileSearchTool,
    FunctionCallOutput,
    FunctionTool,
    FunctionToolCall,
    HostedToolType,
    ImageDetail,
    Input,
    InputContent,
    InputFile,
    InputImage,
    InputItem,
    InputMessage,
    InputMessageRole,
    InputText,
    Item,
    ItemReference,
    MessageStatus,
    OutputMessage,
    OutputText,
    Reasoning,
    ReasoningEffort,
    Response,
    ResponseFormatJsonSchema,
    ResponseTruncation,
    TextResponseFormat,
    Tool,
    ToolChoice,
    ToolChoiceFunction,
    ToolChoiceOptions,
    ToolChoiceTypes,
    Verbosity,
    WebSearchTool,
    WebSearchToolUserLocation,
)
