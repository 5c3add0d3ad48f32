import logging
from typing import Dict

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "ar"

CATALOG: Dict[str, Dict[str, str]] = {
    "ar": {
        "required_fields": "يرجى ملء جميع الحقول المطلوبة",
        "config_missing": (
            "متغيرات البيئة الخاصة بالخدمة غير موجودة. "
            "يرجى ضبط SUPABASE_URL و SUPABASE_ANON_KEY."
        ),
        "save_failed": "فشل في حفظ البيانات: {detail}",
        "saved_email_failed": (
            "تم حفظ البيانات بنجاح، لكن فشل في إرسال البريد الإلكتروني. سنتواصل معك قريباً."
        ),
        "saved_email_sent": "تم حفظ البيانات بنجاح وتم إرسال بريد إلكتروني للتأكيد",
        "unexpected": "حدث خطأ غير متوقع: {detail}",
    },
    "en": {
        "required_fields": "Please fill in all required fields",
        "config_missing": (
            "Service environment variables are missing. "
            "Please set SUPABASE_URL and SUPABASE_ANON_KEY."
        ),
        "save_failed": "Failed to save data: {detail}",
        "saved_email_failed": (
            "Your data was saved successfully, but the email could not be sent. "
            "We will contact you soon."
        ),
        "saved_email_sent": "Your data was saved and a confirmation email has been sent",
        "unexpected": "An unexpected error occurred: {detail}",
    },
}


class Messages:
    def __init__(self, locale: str = DEFAULT_LOCALE):
        if locale not in CATALOG:
            logger.warning("Unknown locale %r, falling back to %r", locale, DEFAULT_LOCALE)
            locale = DEFAULT_LOCALE
        self.locale = locale
        self._table = CATALOG[locale]

    def get(self, key: str, **kwargs: str) -> str:
        text = self._table[key]
        return text.format(**kwargs) if kwargs else text
