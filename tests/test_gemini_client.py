import asyncio
import base64
import json
from types import SimpleNamespace

import httpx
import pytest
from google.genai import errors as genai_errors

from product_seo.services.errors import ParseError, TransportError
from product_seo.services.pipeline.gemini_client import GeminiContentClient
from product_seo.services.pipeline.image_loader import ImageAsset
from product_seo.services.pipeline.schema import build_product_schema


class DummyModels:
    def __init__(self, text=None, error=None) -> None:
        self.text = text
        self.error = error
        self.calls = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


def _client(models: DummyModels) -> GeminiContentClient:
    return GeminiContentClient(
        api_key="test-key",
        model="gemini-2.5-flash",
        temperature=0.4,
        client=SimpleNamespace(aio=SimpleNamespace(models=models)),
    )


def test_generate_sends_prompt_and_schema(sample_content):
    models = DummyModels(text=json.dumps(sample_content))
    schema = build_product_schema(has_image=False)

    content = asyncio.run(_client(models).generate("PROMPT", schema))

    assert content.slug == sample_content["slug"]
    assert len(models.calls) == 1
    call = models.calls[0]
    assert call["model"] == "gemini-2.5-flash"
    assert [part.text for part in call["contents"]] == ["PROMPT"]
    assert call["config"].response_mime_type == "application/json"
    assert call["config"].temperature == 0.4
    assert call["config"].response_schema is not None


def test_generate_puts_image_part_before_prompt(sample_content, png_base64):
    sample_content["altImageText"] = "قوطی کافی میت"
    models = DummyModels(text=json.dumps(sample_content))
    image = ImageAsset(data=base64.b64decode(png_base64), mime_type="image/png", name="a.png")

    content = asyncio.run(
        _client(models).generate("PROMPT", build_product_schema(has_image=True), image=image)
    )

    parts = models.calls[0]["contents"]
    assert parts[0].inline_data.mime_type == "image/png"
    assert parts[0].inline_data.data == image.data
    assert parts[1].text == "PROMPT"
    assert content.alt_image_text == "قوطی کافی میت"


def test_generate_wraps_network_failures():
    models = DummyModels(error=httpx.ConnectError("connection refused"))
    with pytest.raises(TransportError) as exc_info:
        asyncio.run(_client(models).generate("PROMPT", build_product_schema(False)))
    assert "connection refused" in exc_info.value.message
    assert exc_info.value.to_contract_dict()["message"].startswith("Internal Server Error: ")


def test_generate_raises_parse_error_on_prose():
    models = DummyModels(text="Sure! Here is your JSON:")
    with pytest.raises(ParseError) as exc_info:
        asyncio.run(_client(models).generate("PROMPT", build_product_schema(False)))
    assert exc_info.value.raw_text == "Sure! Here is your JSON:"


def test_generate_wraps_api_errors():
    error = genai_errors.ServerError(
        503,
        {"error": {"code": 503, "message": "The model is overloaded.", "status": "UNAVAILABLE"}},
    )
    models = DummyModels(error=error)
    with pytest.raises(TransportError) as exc_info:
        asyncio.run(_client(models).generate("PROMPT", build_product_schema(False)))
    assert "503" in exc_info.value.message
    assert "The model is overloaded." in exc_info.value.message
    assert exc_info.value.http_status == 500
