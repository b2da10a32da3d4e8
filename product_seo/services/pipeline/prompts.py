from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .schema import ARRAY, OBJECT, PRODUCT_FIELDS, OutputField, active_fields


class ProductCategory(str, Enum):
    STANDARD = "standard"
    NUTS_DRIED_FRUIT = "nuts_dried_fruit"

    @classmethod
    def from_flag(cls, is_nuts_or_dried_fruit: bool) -> "ProductCategory":
        return cls.NUTS_DRIED_FRUIT if is_nuts_or_dried_fruit else cls.STANDARD


@dataclass(frozen=True)
class DescriptionTemplate:
    category: ProductCategory
    body: str


COPYWRITER_PERSONA = """تو یک متخصص ارشد سئو (SEO) و تولید محتوا برای فروشگاه‌های اینترنتی در ایران هستی.
وظیفه تو تولید محتوای کامل و بهینه برای صفحه محصول وردپرس، مطابق با سخت‌گیرانه‌ترین اصول افزونه Yoast SEO است.
تمام خروجی‌ها باید به زبان فارسی روان، جذاب و کاملاً یونیک (غیرکپی) باشد، مگر جایی که صراحتاً زبان دیگری خواسته شده است."""

NAME_STEP_WITH_IMAGE = (
    "۱. **تشخیص نام محصول:** تصویر ارائه‌شده را به دقت بررسی کن و از روی بسته‌بندی، برند و "
    "نوشته‌های روی آن نام دقیق فارسی و انگلیسی محصول را تشخیص بده. اگر نام ورودی کاربر ناقص یا "
    "نادرست است، آن را بر اساس تصویر اصلاح کن؛ اگر صحیح است، همان را نگه دار. از جزئیات "
    "قابل مشاهده در تصویر (وزن، حجم، نوع بسته‌بندی) در محتوا استفاده کن."
)

NAME_STEP_WITHOUT_IMAGE = (
    "۱. **تشخیص نام محصول:** بر اساس نام ورودی کاربر و دانش عمومی خود، نام کامل و دقیق فارسی "
    "و انگلیسی محصول را حدس بزن. اگر نام ورودی صحیح و کامل است، همان را نگه دار."
)

CONTENT_STEP = (
    "۲. **تولید توضیحات کامل:** فیلد 'fullDescription' را دقیقاً مطابق قالب بخش "
    "«قالب توضیحات کامل» در ادامه بنویس."
)

SEO_STEP = (
    "۳. **تولید فیلدهای سئو:** سایر فیلدها را مطابق فهرست «فیلدهای خروجی» تولید کن و مطمئن شو "
    "کلیدواژه کانونی در عنوان سئو، توضیحات متا و پاراگراف اول توضیحات تکرار شده است."
)

JSON_ONLY_RULE = """# قالب پاسخ
پاسخ تو باید **فقط و فقط** یک آبجکت JSON معتبر و مطابق با اسکیمای اعلام‌شده باشد.
هیچ متن، توضیح، مقدمه یا بلاک markdown (مانند ```) خارج از آبجکت JSON برنگردان.
تمام فیلدهای فهرست‌شده الزامی هستند و نباید null یا حذف شوند؛ فیلدهای آرایه‌ای همیشه باید آرایه باشند."""

NUTS_DESCRIPTION_TEMPLATE = DescriptionTemplate(
    category=ProductCategory.NUTS_DRIED_FRUIT,
    body="""برای فیلد 'fullDescription'، یک متن کامل و تخصصی با فرمت HTML تولید کن که ساختار زیر را **به طور دقیق و کامل** برای محصولات دسته آجیل و خشکبار رعایت کند:

1.  **پاراگراف مقدمه:** یک پاراگراف جذاب (۲ تا ۳ جمله) که طراوت، طعم، ظاهر یا ویژگی منحصربه‌فرد محصول را توصیف می‌کند. نام محصول باید با تگ <strong> در این پاراگراف بیاید.

2.  **بخش‌های تخصصی:** شامل بخش‌های زیر باشد که هر کدام با یک تیتر `<h4>` و یک ایموجی مرتبط شروع می‌شود. **فقط بخش‌هایی را ایجاد کن که برای محصول مورد نظر منطقی و مرتبط باشند.**
    -   `<h4>🌍 خاستگاه و ویژگی‌ها:</h4>` (به منطقه کشت مانند رفسنجان یا دامغان، نوع محصول (خام، شور، بوداده) و اندازه یا گرید آن اشاره کن.)
    -   `<h4>💪 ارزش غذایی و خواص:</h4>` (مواد مغذی کلیدی مانند پروتئین، فیبر، ویتامین‌ها و آنتی‌اکسیدان‌ها را لیست کن و به فواید سلامتی مانند سلامت قلب و گوارش اشاره کن.)
    -   `<h4>✨ ویژگی‌های منحصربه‌فرد:</h4>` (دلایلی که این محصول را متمایز می‌کند: ارگانیک بودن، بدون افزودنی، سایز اعلا، بسته‌بندی خاص یا گواهی‌نامه‌ها.)
    -   `<h4>🍽️ پیشنهاد مصرف:</h4>` (**اختیاری و فقط در صورت لزوم**: به عنوان میان‌وعده، در سالاد، دسر و...)
    -   `<h4>📦 روش نگهداری:</h4>` (در جای خشک و خنک، دور از نور، و پس از باز شدن در ظرف دربسته یا یخچال.)
    -   `<h4>📋 مشخصات محصول:</h4>` (لیستی شامل برند، وزن خالص، نوع (خام/شور) و نوع بسته‌بندی.)
    -   `<h4>🟢 نکات مهم:</h4>` (**اختیاری و فقط در صورت لزوم**: هشدارهای آلرژی، نکات برای افراد با فشار خون بالا در صورت شور بودن، و مناسب بودن برای کودکان.)

3.  **جداکننده:** بین هر دو بخش **باید** از یک تگ `<hr />` استفاده کنی.

4.  **لیست‌ها:** برای تمام لیست‌ها از تگ‌های `<ul>` و `<li>` استفاده کن.

5.  **قواعد Yoast SEO:** استفاده طبیعی از کلیدواژه، خوانایی بالا، پاراگراف‌های کوتاه و جملات روان.

6.  **لحن:** دوستانه، حرفه‌ای و متقاعدکننده، با حس کیفیت و اعتماد.""",
)

STANDARD_DESCRIPTION_TEMPLATE = DescriptionTemplate(
    category=ProductCategory.STANDARD,
    body="""برای فیلد 'fullDescription'، یک متن کامل با فرمت HTML تولید کن که تمام ساختار و قوانین زیر را **به طور دقیق و کامل** رعایت کند:

## قوانین کلی محتوا (Yoast SEO)
- **طول متن:** کل توضیحات باید بین ۲۵۰ تا ۳۵۰ کلمه باشد.
- **پاراگراف‌ها:** یک پاراگراف مقدمه جذاب با طول ۳۰ تا ۴۰ کلمه بنویس. سایر پاراگراف‌ها باید بین ۴۰ تا ۶۰ کلمه باشند.
- **خوانایی:** جملات کوتاه (حداکثر ۲۰ کلمه). حداقل در ۲۵٪ جملات از کلمات انتقالی استفاده کن و صدای مجهول را به کمتر از ۱۰٪ محدود کن.
- **کلیدواژه کانونی:** در ۵۰ کلمه ابتدایی بیاید و به طور طبیعی ۳ تا ۴ بار در کل متن تکرار شود.
- **لینک‌سازی داخلی:** یک عبارت کلیدی مناسب را با تگ `<a href="#">` به یک محصول یا دسته‌بندی مرتبط لینک بده.

## ساختار و فرمت متن
- **بخش‌های تطبیقی:** بخش‌ها را **بر اساس نوع محصول** انتخاب کن. هر بخش با یک تیتر bold همراه با ایموجی شروع شود (مثال: `<p><strong>✅ ویژگی‌های اصلی:</strong></p>`). از تگ‌های h1 تا h6 استفاده نکن و بخش‌های نامرتبط را حذف کن.
    - **غذا و نوشیدنی:** پیشنهاد مصرف | ترکیبات | روش نگهداری
    - **لوازم الکترونیکی:** مشخصات فنی | ویژگی‌ها | راهنمای استفاده | گارانتی
    - **اسباب‌بازی:** رده سنی | نکات ایمنی | ارزش آموزشی | جنس و مراقبت
    - **پوشاک و اکسسوری:** جنس و نگهداری | راهنمای سایز | نکات استایل
    - **لوازم آرایشی:** ترکیبات | طریقه مصرف | مزایا | هشدارها
- **جداکننده:** بعد از هر بخش **باید** از تگ `<hr />` استفاده کنی. از جداکننده متنی "---" استفاده نکن.
- **لیست‌ها:** برای ویژگی‌ها و مشخصات از تگ‌های `<ul>` و `<li>` استفاده کن.
- **لحن:** دوستانه، حرفه‌ای و متقاعدکننده، با حس کیفیت و اعتماد.

## نمونه فرمت کلی (برای کرم دور چشم)
<p>با <strong>کرم دور چشم کلینیک آل ابوت آیز ریچ</strong>، رطوبت عمقی پوست حساس اطراف چشم را تامین کرده و ظاهر پف و تیرگی را کاهش دهید.</p>
<hr />
<p><strong>✅ ویژگی‌های اصلی:</strong></p>
<ul>
    <li>فرمولاسیون غنی برای آبرسانی</li>
    <li>کاهش پف و تیرگی</li>
    <li>فاقد عطر</li>
</ul>
<hr />
<p><strong>📌 طریقه مصرف:</strong></p>
<p>صبح و شب مقدار کمی کرم را با ضربات ملایم جذب کنید.</p>
<hr />
<p><strong>📦 مشخصات محصول:</strong></p>
<ul>
    <li>برند: کلینیک</li>
    <li>حجم: ۱۵ میلی‌لیتر</li>
</ul>
<hr />
<p><strong>🟢 نکات مهم:</strong></p>
<p>در صورت بروز حساسیت مصرف را قطع کنید.</p>""",
)

DESCRIPTION_TEMPLATES: dict[ProductCategory, DescriptionTemplate] = {
    ProductCategory.STANDARD: STANDARD_DESCRIPTION_TEMPLATE,
    ProductCategory.NUTS_DRIED_FRUIT: NUTS_DESCRIPTION_TEMPLATE,
}


def get_description_template(category: ProductCategory) -> DescriptionTemplate:
    return DESCRIPTION_TEMPLATES[category]


def _field_lines(fields: tuple[OutputField, ...], has_image: bool, indent: str = "") -> list[str]:
    lines: list[str] = []
    for output_field in active_fields(fields, has_image):
        if output_field.type == OBJECT:
            lines.append(f"{indent}- '{output_field.name}' (آبجکت): {output_field.rule}")
            lines.extend(_field_lines(output_field.children, has_image, indent + "    "))
            continue
        kind = "آرایه‌ای از رشته‌ها" if output_field.type == ARRAY else "رشته"
        lines.append(f"{indent}- '{output_field.name}' ({kind}): {output_field.rule}")
    return lines


def build_prompt(
    product_name: str,
    brief_description: str = "",
    has_image: bool = False,
    category: ProductCategory = ProductCategory.STANDARD,
) -> str:
    inputs = [f'- نام محصول: "{product_name.strip()}"']
    if brief_description and brief_description.strip():
        inputs.append(f'- توضیحات اولیه: "{brief_description.strip()}"')

    name_step = NAME_STEP_WITH_IMAGE if has_image else NAME_STEP_WITHOUT_IMAGE
    template = get_description_template(category)

    sections = [
        COPYWRITER_PERSONA,
        "# اطلاعات ورودی\n" + "\n".join(inputs),
        "# مراحل انجام کار\n" + "\n".join([name_step, CONTENT_STEP, SEO_STEP]),
        "# قالب توضیحات کامل\n" + template.body,
        "# فیلدهای خروجی\n" + "\n".join(_field_lines(PRODUCT_FIELDS, has_image)),
        JSON_ONLY_RULE,
    ]
    return "\n\n".join(sections)
