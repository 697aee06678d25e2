import pytest
from pydantic import BaseModel

from plinth.responses.builders import (
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
from plinth.responses.codec import encode
from plinth.responses.errors import InvalidArgument, MissingRequiredField
from plinth.responses.types import (
    ComputerTool,
    CreateResponseRequest,
    EasyInputMessageRole,
    Environment,
    InputMessageRole,
    InputText,
    MessageStatus,
    OutputText,
    ResponseTruncation,
    ToolChoiceOptions,
)


def test_build_with_required_fields_only() -> None:
    request = CreateResponseArgs().model("gpt-4.1").input("hello").build()

    assert isinstance(request, CreateResponseRequest)
    assert encode(request) == {"model": "gpt-4.1", "input": "hello"}


def test_build_without_model_fails() -> None:
    with pytest.raises(MissingRequiredField) as excinfo:
        CreateResponseArgs().input("hello").build()

    assert excinfo.value.field_name == "model"


def test_build_reports_first_missing_field() -> None:
    with pytest.raises(MissingRequiredField) as excinfo:
        CreateResponseArgs().build()

    assert excinfo.value.field_name == "model"


def test_setters_return_new_builders() -> None:
    base = CreateResponseArgs().model("gpt-4.1")
    first = base.input("one")
    second = base.input("two")

    assert first.build().input == "one"
    assert second.build().input == "two"
    with pytest.raises(MissingRequiredField) as excinfo:
        base.build()
    assert excinfo.value.field_name == "input"


def test_build_all_fields() -> None:
    message = EasyInputMessageArgs().role(EasyInputMessageRole.USER).content([InputText(text="hi")]).build()
    request = (
        CreateResponseArgs()
        .model("gpt-4.1")
        .input([message])
        .temperature(0.5)
        .instructions("short answers")
        .previous_response_id("resp_0")
        .max_output_tokens(64)
        .tools([FunctionToolArgs().name("lookup").build()])
        .tool_choice(ToolChoiceOptions.AUTO)
        .truncation(ResponseTruncation.AUTO)
        .user("user-1")
        .metadata({"k": "v"})
        .parallel_tool_calls(False)
        .store(True)
        .include(["file_search_call.results"])
        .build()
    )

    payload = encode(request)
    assert payload["input"] == [{"type": "message", "role": "user", "content": [{"type": "input_text", "text": "hi"}]}]
    assert payload["tools"] == [{"type": "function", "name": "lookup"}]
    assert payload["tool_choice"] == "auto"
    assert payload["parallel_tool_calls"] is False
    assert payload["include"] == ["file_search_call.results"]


def test_out_of_range_value_is_invalid_argument() -> None:
    with pytest.raises(InvalidArgument) as excinfo:
        CreateResponseArgs().model("m").input("hi").temperature(3).build()

    assert "temperature" in str(excinfo.value)


def test_file_search_requires_vector_store_ids() -> None:
    with pytest.raises(MissingRequiredField) as excinfo:
        FileSearchToolArgs().max_num_results(5).build()
    assert excinfo.value.field_name == "vector_store_ids"

    tool = FileSearchToolArgs().vector_store_ids(["vs_1"]).max_num_results(5).build()
    assert encode(tool) == {"type": "file_search", "vector_store_ids": ["vs_1"], "max_num_results": 5}


@pytest.mark.parametrize(
    "builder,missing",
    [
        (ComputerToolArgs(), "display_width"),
        (ComputerToolArgs().display_width(1024), "display_height"),
        (ComputerToolArgs().display_width(1024).display_height(768), "environment"),
    ],
)
def test_computer_tool_required_fields(builder: ComputerToolArgs, missing: str) -> None:
    with pytest.raises(MissingRequiredField) as excinfo:
        builder.build()

    assert excinfo.value.field_name == missing


def test_computer_tool_builds() -> None:
    tool = ComputerToolArgs().display_width(1024).display_height(768).environment(Environment.UBUNTU).build()

    assert tool == ComputerTool(display_width=1024, display_height=768, environment="ubuntu")
    assert encode(tool)["type"] == "computer_use_preview"


def test_web_search_defaults() -> None:
    location = WebSearchToolUserLocationArgs().city("Porto").build()
    tool = WebSearchToolArgs().user_location(location).build()
    dated = WebSearchToolArgs().type("web_search_preview_2025_03_11").build()

    assert encode(tool) == {
        "type": "web_search_preview",
        "user_location": {"type": "approximate", "city": "Porto"},
    }
    assert encode(dated) == {"type": "web_search_preview_2025_03_11"}


def test_web_search_rejects_unknown_type() -> None:
    with pytest.raises(InvalidArgument):
        WebSearchToolArgs().type("web_search").build()


def test_tool_choice_function_defaults_type() -> None:
    choice = ToolChoiceFunctionArgs().name("lookup").build()

    assert encode(choice) == {"type": "function", "name": "lookup"}
    with pytest.raises(MissingRequiredField):
        ToolChoiceFunctionArgs().build()


def test_function_tool_parameters_from_model() -> None:
    class LookupArgs(BaseModel):
        query: str
        limit: int = 5

    tool = FunctionToolArgs().name("lookup").description("Look things up").parameters_from_model(LookupArgs).build()

    assert tool.strict is True
    assert tool.parameters is not None
    assert tool.parameters["additionalProperties"] is False
    assert set(tool.parameters["properties"]) == {"query", "limit"}
    assert tool.parameters["required"] == ["query"]


def test_input_message_requires_status() -> None:
    builder = InputMessageArgs().role(InputMessageRole.SYSTEM).content([InputText(text="rules")])

    with pytest.raises(MissingRequiredField) as excinfo:
        builder.build()
    assert excinfo.value.field_name == "status"

    message = builder.status(MessageStatus.COMPLETED).build()
    assert encode(message)["status"] == "completed"


def test_output_message_defaults() -> None:
    message = OutputMessageArgs().id("msg_1").content([OutputText(text="hi")]).build()

    assert message.role == "assistant"
    assert encode(message) == {
        "type": "message",
        "id": "msg_1",
        "role": "assistant",
        "content": [{"type": "output_text", "text": "hi", "annotations": []}],
    }


def test_builder_repr_lists_fields() -> None:
    assert repr(CreateResponseArgs().model("m")) == "CreateResponseArgs(model='m')"
