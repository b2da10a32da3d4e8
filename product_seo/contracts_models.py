from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PRODUCT_NAME_REQUIRED = "Product name is required and must be a string."


class ProductImage(BaseModel):
    model_config = ConfigDict(validate_by_name=True, frozen=True)

    base64: str = Field(..., min_length=1)
    mime_type: str = Field(..., alias="mimeType")
    name: Optional[str] = None

    @field_validator("mime_type")
    @classmethod
    def _require_image_mime(cls, value: str) -> str:
        value = value.strip().lower()
        if not value.startswith("image/"):
            raise ValueError("mimeType must be an image/* type.")
        return value


class GenerateContentRequest(BaseModel):
    model_config = ConfigDict(validate_by_name=True, frozen=True)

    product_name: str = Field(..., alias="productName")
    product_image: Optional[ProductImage] = Field(default=None, alias="productImage")
    brief_description: Optional[str] = Field(default="", alias="briefDescription")
    is_nuts_or_dried_fruit: bool = Field(default=False, alias="isNutsOrDriedFruit")

    @field_validator("product_name", mode="before")
    @classmethod
    def _require_product_name(cls, value: object) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(PRODUCT_NAME_REQUIRED)
        return value.strip()

    @field_validator("brief_description", mode="before")
    @classmethod
    def _blank_description(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value


class AdvancedSeoAnalysis(BaseModel):
    model_config = ConfigDict(validate_by_name=True)

    keyphrase_synonyms: List[str] = Field(default_factory=list, alias="keyphraseSynonyms")
    lsi_keywords: List[str] = Field(default_factory=list, alias="lsiKeywords")
    long_tail_keywords: List[str] = Field(default_factory=list, alias="longTailKeywords")
    semantic_entities: List[str] = Field(default_factory=list, alias="semanticEntities")
    search_intent: str = Field(..., alias="searchIntent")
    internal_linking_suggestions: List[str] = Field(
        default_factory=list, alias="internalLinkingSuggestions"
    )


class ProductContent(BaseModel):
    model_config = ConfigDict(validate_by_name=True)

    corrected_product_name: str = Field(..., alias="correctedProductName")
    english_product_name: str = Field(..., alias="englishProductName")
    full_description: str = Field(..., alias="fullDescription")
    short_description: str = Field(..., alias="shortDescription")
    seo_title: str = Field(..., alias="seoTitle")
    slug: str
    focus_keyword: str = Field(..., alias="focusKeyword")
    meta_description: str = Field(..., alias="metaDescription")
    alt_image_text: Optional[str] = Field(default=None, alias="altImageText")
    advanced_seo_analysis: AdvancedSeoAnalysis = Field(..., alias="advancedSeoAnalysis")


class ErrorResponse(BaseModel):
    code: str
    message: str
