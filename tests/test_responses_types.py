import pydantic
import pytest

from plinth.responses.codec import decode, encode
from plinth.responses.errors import SchemaMismatch
from plinth.responses.types import (
    CreateResponseRequest,
    FileIdSource,
    FunctionTool,
    ImageDetail,
    InlineFileSource,
    InputContent,
    InputFile,
    InputImage,
    OutputMessage,
    OutputText,
    Refusal,
    Response,
    ResponseTruncation,
    UrlSource,
    WebSearchToolUserLocation,
)


def test_input_image_defaults_detail_to_auto() -> None:
    image = InputImage(image_url="https://example.com/a.png")

    assert image.detail is ImageDetail.AUTO
    assert encode(image) == {"type": "input_image", "image_url": "https://example.com/a.png", "detail": "auto"}


def test_input_image_sources_are_exclusive() -> None:
    with pytest.raises(pydantic.ValidationError):
        InputImage(image_url="https://example.com/a.png", file_id="file_1")

    with pytest.raises(SchemaMismatch):
        decode(InputContent, {"type": "input_image", "image_url": "u", "file_id": "f"})


def test_input_image_source_view() -> None:
    by_file = InputImage.from_source(FileIdSource("file_1"), detail=ImageDetail.HIGH)
    by_url = InputImage.from_source(UrlSource("data:image/png;base64,AAAA"))

    assert by_file.source == FileIdSource("file_1")
    assert encode(by_file) == {"type": "input_image", "file_id": "file_1", "detail": "high"}
    assert by_url.source == UrlSource("data:image/png;base64,AAAA")
    assert InputImage().source is None


def test_input_file_sources() -> None:
    inline = InputFile.from_source(InlineFileSource(file_data="JVBERi0=", filename="doc.pdf"))

    assert encode(inline) == {"type": "input_file", "filename": "doc.pdf", "file_data": "JVBERi0="}
    assert inline.source == InlineFileSource(file_data="JVBERi0=", filename="doc.pdf")
    assert InputFile(file_id="file_9").source == FileIdSource("file_9")

    with pytest.raises(pydantic.ValidationError):
        InputFile(file_id="file_9", file_data="JVBERi0=")


def test_user_location_type_defaults_to_approximate() -> None:
    location = decode(WebSearchToolUserLocation, {"country": "US"})

    assert location.type == "approximate"
    assert encode(location) == {"type": "approximate", "country": "US"}


def test_function_tool_requires_name() -> None:
    with pytest.raises(pydantic.ValidationError):
        FunctionTool(name="  ")


def test_request_validation() -> None:
    with pytest.raises(pydantic.ValidationError):
        CreateResponseRequest(model=" ", input="hi")

    with pytest.raises(pydantic.ValidationError):
        CreateResponseRequest(model="m", input="hi", top_p=1.5)

    with pytest.raises(pydantic.ValidationError):
        CreateResponseRequest(model="m", input="hi", unknown_knob=True)


def test_request_allows_both_sampling_controls() -> None:
    request = CreateResponseRequest(model="m", input="hi", temperature=0.7, top_p=0.9)

    assert encode(request)["temperature"] == 0.7
    assert encode(request)["top_p"] == 0.9


def test_truncation_defaults_to_disabled_without_wire_field() -> None:
    request = CreateResponseRequest(model="m", input="hi")

    assert request.effective_truncation is ResponseTruncation.DISABLED
    assert "truncation" not in encode(request)


def test_request_is_immutable() -> None:
    request = CreateResponseRequest(model="m", input=[{"role": "user", "content": "hi"}])

    with pytest.raises(pydantic.ValidationError):
        request.model = "other"  # type: ignore[misc]
    assert isinstance(request.input, tuple)


def test_output_text_skips_refusals_and_other_items() -> None:
    response = Response(
        id="resp_1",
        output=[
            OutputMessage(id="msg_1", content=[OutputText(text="a"), Refusal(refusal="no")]),
            OutputMessage(id="msg_2", content=[OutputText(text="b")]),
        ],
    )

    assert response.output_text == "ab"
    assert response.function_calls == ()


def test_minimal_response_decodes() -> None:
    response = decode(Response, {"id": "resp_123", "output": []})

    assert response.id == "resp_123"
    assert response.output == ()
    assert response.object == "response"
