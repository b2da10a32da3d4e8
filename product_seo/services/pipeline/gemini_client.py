from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError

from ...config import Settings
from ...contracts_models import ProductContent
from ..errors import ParseError, SchemaViolationError, TransportError
from .image_loader import ImageAsset
from .normalize import coerce_lists, missing_required_fields, normalize_slug

logger = logging.getLogger("product-seo-ai")
LLM_DEBUG_MAX_CHARS = 2000


def _truncate_text(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars]


def parse_generation_output(raw: str | None, schema: dict[str, Any]) -> ProductContent:
    if not raw or not raw.strip():
        raise ParseError("The model returned an empty response.", raw_text=raw)
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParseError(f"The model response is not valid JSON ({exc.msg}).", raw_text=raw) from exc
    if not isinstance(parsed, dict):
        raise ParseError("The model response must be a JSON object.", raw_text=raw)

    normalized = coerce_lists(parsed, schema)
    missing = missing_required_fields(normalized, schema)
    if missing:
        raise SchemaViolationError(
            f"The model response is missing required fields: {', '.join(missing)}.",
            missing_fields=missing,
        )

    if isinstance(normalized.get("slug"), str):
        normalized["slug"] = normalize_slug(normalized["slug"])
        if not normalized["slug"]:
            raise SchemaViolationError(
                "The model returned a slug without any Latin characters.",
                missing_fields=["slug"],
            )

    try:
        return ProductContent.model_validate(normalized)
    except ValidationError as exc:
        fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
        raise SchemaViolationError(
            f"The model response has invalid fields: {', '.join(fields)}.",
            missing_fields=fields,
        ) from exc


class GeminiContentClient:
    """Thin wrapper around the google-genai SDK. Build it once per process."""

    def __init__(
        self,
        api_key: str,
        model: str,
        timeout_sec: float = 60.0,
        temperature: float | None = None,
        debug: bool = False,
        debug_max_chars: int = LLM_DEBUG_MAX_CHARS,
        client: Any = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.debug = debug
        self.debug_max_chars = debug_max_chars
        self._client = client or genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout_sec * 1000)),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiContentClient":
        return cls(
            api_key=settings.API_KEY,
            model=settings.GEMINI_MODEL,
            timeout_sec=settings.REQUEST_TIMEOUT_SEC,
            temperature=settings.LLM_TEMPERATURE,
            debug=settings.DEBUG_AI,
            debug_max_chars=settings.DEBUG_AI_MAX_CHARS,
        )

    def build_contents(self, prompt: str, image: ImageAsset | None) -> list[types.Part]:
        parts: list[types.Part] = []
        if image is not None:
            parts.append(types.Part.from_bytes(data=image.data, mime_type=image.mime_type))
        parts.append(types.Part.from_text(text=prompt))
        return parts

    def build_config(self, schema: dict[str, Any]) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=schema,
            temperature=self.temperature,
        )

    async def generate(
        self,
        prompt: str,
        schema: dict[str, Any],
        image: ImageAsset | None = None,
    ) -> ProductContent:
        if self.debug:
            logger.info(
                "Gemini prompt (truncated): %s",
                _truncate_text(prompt, self.debug_max_chars),
            )
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=self.build_contents(prompt, image),
                config=self.build_config(schema),
            )
        except genai_errors.APIError as exc:
            raise TransportError(f"Gemini API error {exc.code}: {exc.message}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Could not reach the Gemini API: {exc}") from exc

        raw = response.text
        if self.debug:
            logger.info(
                "Gemini raw output (truncated): %s",
                _truncate_text(raw or "", self.debug_max_chars),
            )
        try:
            return parse_generation_output(raw, schema)
        except ParseError as exc:
            logger.warning(
                "Gemini output could not be parsed: %s raw=%s",
                exc.message,
                _truncate_text(exc.raw_text or "", self.debug_max_chars),
            )
            raise
        except SchemaViolationError as exc:
            logger.warning(
                "Gemini output violated the schema: missing=%s raw=%s",
                exc.missing_fields,
                _truncate_text(raw or "", self.debug_max_chars),
            )
            raise
