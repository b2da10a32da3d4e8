from __future__ import annotations

import logging
import time
from typing import Any, Protocol

from ..contracts_models import GenerateContentRequest, ProductContent
from .pipeline.image_loader import ImageAsset, load_image
from .pipeline.prompts import ProductCategory, build_prompt
from .pipeline.schema import build_product_schema

logger = logging.getLogger("product-seo-ai")


class ContentGenerator(Protocol):
    async def generate(
        self,
        prompt: str,
        schema: dict[str, Any],
        image: ImageAsset | None = None,
    ) -> ProductContent: ...


async def generate_product_content(
    payload: GenerateContentRequest,
    client: ContentGenerator,
) -> ProductContent:
    start = time.perf_counter()
    image = load_image(payload.product_image)
    has_image = image is not None
    category = ProductCategory.from_flag(payload.is_nuts_or_dried_fruit)

    schema = build_product_schema(has_image)
    prompt = build_prompt(
        payload.product_name,
        brief_description=payload.brief_description or "",
        has_image=has_image,
        category=category,
    )
    prompt_ms = (time.perf_counter() - start) * 1000

    llm_start = time.perf_counter()
    content = await client.generate(prompt, schema, image=image)
    llm_ms = (time.perf_counter() - llm_start) * 1000

    logger.info(
        "generated content category=%s image=%s slug=%s prompt_ms=%.1f llm_ms=%.1f total_ms=%.1f",
        category.value,
        has_image,
        content.slug,
        prompt_ms,
        llm_ms,
        (time.perf_counter() - start) * 1000,
    )
    return content
