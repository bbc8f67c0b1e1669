from portfolio.i18n import Translations


def _translations():
    return Translations(
        en={"hero": {"viewWork": "View my work"}, "typingPhrases": ["a", "b"], "footer": "© {year}"},
        fa={"hero": {"viewWork": "مشاهده نمونه‌کارها"}, "typingPhrases": ["ج"]},
    )


def test_lookup_dotted_path():
    t = _translations()
    assert t.lookup("en", "hero.viewWork") == "View my work"
    assert t.lookup("fa", "hero.viewWork") == "مشاهده نمونه‌کارها"


def test_lookup_missing_or_non_scalar_is_none():
    t = _translations()
    assert t.lookup("fa", "footer") is None
    assert t.lookup("en", "hero") is None
    assert t.lookup("en", "typingPhrases") is None
    assert t.lookup("en", "hero.viewWork.deeper") is None


def test_get_translation_defaults():
    t = _translations()
    assert t.get_translation("fa", "footer", "fallback") == "fallback"
    assert t.get_translation("fa", "nav.about") == "nav.about"


def test_get_translation_list():
    t = _translations()
    assert t.get_translation_list("en", "typingPhrases") == ["a", "b"]
    assert t.get_translation_list("fa", "typingPhrases") == ["ج"]
    assert t.get_translation_list("en", "hero") == []


def test_empty_documents():
    t = Translations()
    assert t.lookup("en", "hero.viewWork") is None
    assert t.get_translation_list("fa", "typingPhrases") == []
