import base64
import copy
from io import BytesIO

import pytest
from PIL import Image

SAMPLE_CONTENT = {
    "correctedProductName": "کافی میت نستله",
    "englishProductName": "Nestle Coffee-mate Original",
    "fullDescription": (
        "<p>با <strong>کافی میت نستله</strong> قهوه‌ای خامه‌ای و لطیف داشته باشید.</p>"
        "<hr /><p><strong>✅ ویژگی‌های اصلی:</strong></p><ul><li>بدون لاکتوز</li></ul>"
    ),
    "shortDescription": "کافی میت نستله طعمی خامه‌ای و نرم به قهوه روزانه شما می‌بخشد.",
    "seoTitle": "خرید کافی میت نستله اصل | قیمت روز",
    "slug": "nestle-coffee-mate-original",
    "focusKeyword": "کافی میت نستله",
    "metaDescription": "خرید کافی میت نستله با طعم خامه‌ای؛ همراه ایده‌آل قهوه شما. همین حالا سفارش دهید.",
    "advancedSeoAnalysis": {
        "keyphraseSynonyms": ["کافی میت", "کرمر قهوه", "شیر قهوه نستله"],
        "lsiKeywords": ["کرمر پودری", "قهوه فوری"],
        "longTailKeywords": ["خرید کافی میت نستله ۴۰۰ گرمی"],
        "semanticEntities": ["نستله", "کرمر قهوه"],
        "searchIntent": "خرید",
        "internalLinkingSuggestions": ["قهوه فوری", "شکلات"],
    },
}


@pytest.fixture
def sample_content() -> dict:
    return copy.deepcopy(SAMPLE_CONTENT)


@pytest.fixture
def png_base64() -> str:
    buffer = BytesIO()
    Image.new("RGB", (2, 2), color="white").save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")
