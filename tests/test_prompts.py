from product_seo.services.pipeline.prompts import (
    JSON_ONLY_RULE,
    NAME_STEP_WITH_IMAGE,
    NAME_STEP_WITHOUT_IMAGE,
    ProductCategory,
    build_prompt,
    get_description_template,
)


def test_prompt_without_image_uses_name_inference_step():
    prompt = build_prompt("کافی میت نستله")
    assert NAME_STEP_WITHOUT_IMAGE in prompt
    assert NAME_STEP_WITH_IMAGE not in prompt
    assert "تصویر" not in prompt
    assert "image" not in prompt.lower()


def test_prompt_with_image_uses_image_analysis_step():
    prompt = build_prompt("کافی میت", has_image=True)
    assert NAME_STEP_WITH_IMAGE in prompt
    assert NAME_STEP_WITHOUT_IMAGE not in prompt
    assert "'altImageText'" in prompt


def test_brief_description_line_is_omitted_when_blank():
    assert "توضیحات اولیه" not in build_prompt("پسته", brief_description="")
    assert "توضیحات اولیه" not in build_prompt("پسته", brief_description="   ")
    prompt = build_prompt("پسته", brief_description=" پسته اکبری ۵۰۰ گرمی ")
    assert '- توضیحات اولیه: "پسته اکبری ۵۰۰ گرمی"' in prompt


def test_category_selects_different_description_template():
    standard = build_prompt("پسته", category=ProductCategory.STANDARD)
    nuts = build_prompt("پسته", category=ProductCategory.NUTS_DRIED_FRUIT)

    assert standard != nuts
    assert get_description_template(ProductCategory.NUTS_DRIED_FRUIT).body in nuts
    assert get_description_template(ProductCategory.STANDARD).body not in nuts
    assert "<h4>🌍 خاستگاه و ویژگی‌ها:</h4>" in nuts
    assert "<h4>🌍 خاستگاه و ویژگی‌ها:</h4>" not in standard
    assert "<p><strong>✅ ویژگی‌های اصلی:</strong></p>" in standard


def test_category_from_flag():
    assert ProductCategory.from_flag(True) is ProductCategory.NUTS_DRIED_FRUIT
    assert ProductCategory.from_flag(False) is ProductCategory.STANDARD


def test_prompt_demands_json_only_and_lists_fields():
    prompt = build_prompt("کافی میت نستله")
    assert prompt.rstrip().endswith(JSON_ONLY_RULE)
    for name in ("correctedProductName", "slug", "metaDescription", "searchIntent"):
        assert f"'{name}'" in prompt
    assert "لاتین" in prompt


def test_prompt_is_deterministic():
    args = ("بادام", "بادام درختی", True, ProductCategory.NUTS_DRIED_FRUIT)
    assert build_prompt(*args) == build_prompt(*args)
