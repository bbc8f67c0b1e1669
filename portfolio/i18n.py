"""Internationalization (i18n) utilities for the portfolio site.

Static UI labels and typed-animation phrases come from the per-language
translation documents (lang-en.json / lang-fa.json). Keys are dotted paths
into the nested document, e.g. ``hero.viewWork``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .localize import Language, coerce_language


def _walk(document: Optional[Dict[str, Any]], path: str) -> Any:
    value: Any = document
    for key in path.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


@dataclass
class Translations:
    """Both translation documents; a missing document behaves as empty."""

    en: Dict[str, Any] = field(default_factory=dict)
    fa: Dict[str, Any] = field(default_factory=dict)

    def document(self, language: str | Language) -> Dict[str, Any]:
        return self.en if coerce_language(language) == Language.EN else self.fa

    def lookup(self, language: str | Language, path: str) -> Optional[str]:
        value = _walk(self.document(language), path)
        if value is None or isinstance(value, (dict, list)):
            return None
        return str(value)

    def get_translation(self, language: str | Language, path: str, default: Optional[str] = None) -> str:
        """Get a label for a dotted key.

        Args:
            language: Language code (fa, en). Unknown codes use the default language.
            path: Dotted key, e.g. "project.github".
            default: Returned when the key is missing. Defaults to the key itself.

        Returns:
            Translated string, the default, or the key path.
        """
        value = self.lookup(language, path)
        if value is None:
            return path if default is None else default
        return value

    def get_translation_list(self, language: str | Language, path: str) -> List[str]:
        """Get a list-valued entry (e.g. typingPhrases); anything else yields []."""
        value = _walk(self.document(language), path)
        if not isinstance(value, list):
            return []
        return [str(v) for v in value]

