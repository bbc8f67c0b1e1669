from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from .product_config import CONTENT_BASE_LANGUAGE


class Language(str, Enum):
    FA = "fa"
    EN = "en"


DEFAULT_LANGUAGE = Language.FA
LANG_QUERY_PARAM = "lang"


def coerce_language(value: Any) -> Language:
    """Map anything to a supported language; unknown values select the default."""
    if isinstance(value, Language):
        return value
    if str(value or "").strip().lower() == Language.EN.value:
        return Language.EN
    return DEFAULT_LANGUAGE


def direction(language: str | Language) -> str:
    return "rtl" if coerce_language(language) == Language.FA else "ltr"


def resolve(record: Optional[Mapping[str, Any]], field: str, language: str | Language) -> Any:
    """
    Pick the language-suffixed variant of `field` or fall back to the base field.

    Base fields hold the content base language; `<field>_<lang>` holds the override
    for any other language. Resolution is per field: a record with partial overrides
    renders mixed-language, which is accepted.
    """
    if not record:
        return None
    lang = coerce_language(language).value
    if lang != CONTENT_BASE_LANGUAGE:
        override = record.get(f"{field}_{lang}")
        if override is not None:
            return override
    return record.get(field)


def language_from_url(url: str, referrer: Optional[str] = None) -> Language:
    """
    Initial language from the page URL (`?lang=en`); anything else is the default.

    The resume page also honours a referrer that carried `lang=en`.
    """
    query = parse_qs(urlsplit(url or "").query)
    if (query.get(LANG_QUERY_PARAM) or [""])[0] == Language.EN.value:
        return Language.EN
    if isinstance(referrer, str) and f"{LANG_QUERY_PARAM}=en" in referrer:
        return Language.EN
    return DEFAULT_LANGUAGE


def url_with_language(url: str, language: str | Language) -> str:
    """Rewrite the `lang` query parameter: set for English, removed for the default."""
    parts = urlsplit(url or "")
    pairs = [(k, v) for k, v in parse_qs(parts.query, keep_blank_values=True).items() if k != LANG_QUERY_PARAM]
    query_items = [(k, item) for k, values in pairs for item in values]
    if coerce_language(language) == Language.EN:
        query_items.append((LANG_QUERY_PARAM, Language.EN.value))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query_items), parts.fragment))
