from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

STRING = "STRING"
ARRAY = "ARRAY"
OBJECT = "OBJECT"


@dataclass(frozen=True)
class OutputField:
    """One field of the JSON object the model must return.

    ``rule`` is the Persian constraint shown to the model, both in the schema
    descriptor and in the prompt's field list. ``image_only`` fields are only
    requested when a product image accompanies the request.
    """

    name: str
    type: str
    rule: str
    image_only: bool = False
    children: tuple["OutputField", ...] = field(default_factory=tuple)


ADVANCED_SEO_FIELDS: tuple[OutputField, ...] = (
    OutputField(
        "keyphraseSynonyms",
        ARRAY,
        "آرایه‌ای از حداقل ۳ عبارت کلیدی مترادف یا مرتبط.",
    ),
    OutputField(
        "lsiKeywords",
        ARRAY,
        "آرایه‌ای از کلیدواژه‌های معنایی مرتبط (LSI).",
    ),
    OutputField(
        "longTailKeywords",
        ARRAY,
        "آرایه‌ای از ۲ تا ۳ عبارت کلیدی دم‌بلند و دقیق‌تر.",
    ),
    OutputField(
        "semanticEntities",
        ARRAY,
        "موجودیت‌های معنایی کلیدی مانند برند، دسته‌بندی محصول و ویژگی‌های اصلی.",
    ),
    OutputField(
        "searchIntent",
        STRING,
        "هدف جستجوی کاربر (مثلاً: خرید، مقایسه، اطلاعاتی).",
    ),
    OutputField(
        "internalLinkingSuggestions",
        ARRAY,
        "کلمات یا عبارات پیشنهادی برای لینک‌دهی داخلی به صفحات مرتبط.",
    ),
)

PRODUCT_FIELDS: tuple[OutputField, ...] = (
    OutputField(
        "correctedProductName",
        STRING,
        "نام فارسی صحیح و کامل محصول. اگر نام ورودی کاربر صحیح بود، همان نام را برگردان.",
    ),
    OutputField(
        "englishProductName",
        STRING,
        "نام انگلیسی دقیق و کامل محصول.",
    ),
    OutputField(
        "fullDescription",
        STRING,
        "توضیحات کامل محصول با فرمت HTML که با یک پاراگراف مقدمه جذاب شامل نام محصول به صورت "
        "<strong> شروع می‌شود و بخش‌های آن با تیترهای مشخص از هم جدا شده‌اند.",
    ),
    OutputField(
        "shortDescription",
        STRING,
        "یک جمله کوتاه، خلاصه و جذاب برای توضیحات کوتاه محصول (بین ۲۰ تا ۳۰ کلمه).",
    ),
    OutputField(
        "seoTitle",
        STRING,
        "عنوان سئو جذاب و بهینه (حداکثر ۶۰ کاراکتر) شامل کلیدواژه کانونی و کلماتی مانند 'خرید' یا 'قیمت'.",
    ),
    OutputField(
        "slug",
        STRING,
        "نامک (slug) سئو شده برای URL، فقط با حروف کوچک لاتین، اعداد و خط تیره (-) بین کلمات؛ "
        "بدون فاصله و بدون حروف فارسی.",
    ),
    OutputField(
        "focusKeyword",
        STRING,
        "کلیدواژه کانونی اصلی محصول (به فارسی).",
    ),
    OutputField(
        "metaDescription",
        STRING,
        "توضیحات متا جذاب برای گوگل (بین ۱۲۰ تا ۱۵۵ کاراکتر) شامل کلیدواژه کانونی، یک مزیت کلیدی "
        "و یک فراخوان به اقدام (CTA).",
    ),
    OutputField(
        "altImageText",
        STRING,
        "متن جایگزین (alt) توصیفی و بهینه برای تصویر محصول (حداکثر ۱۰ کلمه) شامل کلیدواژه کانونی.",
        image_only=True,
    ),
    OutputField(
        "advancedSeoAnalysis",
        OBJECT,
        "تحلیل پیشرفته سئو برای این محصول.",
        children=ADVANCED_SEO_FIELDS,
    ),
)


def active_fields(
    fields: tuple[OutputField, ...], has_image: bool
) -> tuple[OutputField, ...]:
    return tuple(f for f in fields if has_image or not f.image_only)


def _field_schema(output_field: OutputField, has_image: bool) -> dict[str, Any]:
    if output_field.type == ARRAY:
        return {
            "type": ARRAY,
            "items": {"type": STRING},
            "description": output_field.rule,
        }
    if output_field.type == OBJECT:
        return _object_schema(output_field.children, has_image)
    return {"type": STRING, "description": output_field.rule}


def _object_schema(fields: tuple[OutputField, ...], has_image: bool) -> dict[str, Any]:
    selected = active_fields(fields, has_image)
    return {
        "type": OBJECT,
        "properties": {f.name: _field_schema(f, has_image) for f in selected},
        "required": [f.name for f in selected],
    }


def build_product_schema(has_image: bool) -> dict[str, Any]:
    """Response schema descriptor in the shape the Gemini API accepts."""
    return _object_schema(PRODUCT_FIELDS, has_image)
