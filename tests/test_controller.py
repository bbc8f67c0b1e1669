from datetime import date

import pytest

from portfolio.controller import (
    ACTIVE_CLASS,
    APP_CONTENT_ID,
    INACTIVE_CLASS,
    SWITCHING_CLASS,
    LanguageSwitchController,
    SwitchState,
    TypingEffect,
)
from portfolio.localize import Language
from portfolio.page import PageDocument, load_skeleton
from portfolio.render import RenderContext
from portfolio.scheduler import ManualScheduler

FADE = 280
FRAME = 16


def _setup(content, url="index.html"):
    doc = PageDocument(load_skeleton(), url=url)
    sched = ManualScheduler()
    typing = TypingEffect(doc, sched, speed_ms=80, pause_ms=2000, next_phrase_ms=400)
    ctrl = LanguageSwitchController(
        doc, RenderContext(content=content), sched, fade_ms=FADE, frame_ms=FRAME, typing=typing
    )
    ctrl.initialize()
    return doc, sched, ctrl, typing


def _label(doc, key):
    return doc.soup.select_one(f'[data-i18n="{key}"]').get_text()


def test_initial_render_defaults_to_persian(content):
    doc, _, ctrl, _ = _setup(content)
    assert ctrl.language == Language.FA
    assert (doc.lang, doc.dir) == ("fa", "rtl")
    assert doc.text("hero-name") == "سارا احمدی"
    assert _label(doc, "nav.about") == "درباره"
    assert doc.url == "index.html"
    assert str(date.today().year) in doc.text("footer-text")
    assert "hidden" not in doc.classes("hero-status")


def test_initial_render_from_url(content):
    doc, _, ctrl, _ = _setup(content, url="index.html?lang=en")
    assert ctrl.language == Language.EN
    assert (doc.lang, doc.dir) == ("en", "ltr")
    assert doc.text("hero-name") == "Sara Ahmadi"
    assert doc.text("hero-view-work") == "View my work"
    assert doc.element("resume-download")["href"] == "resume.html?lang=en"


def test_switch_fades_then_swaps(content):
    doc, sched, ctrl, _ = _setup(content)
    assert ctrl.switch_to("en") is True
    assert ctrl.state == SwitchState.SWITCHING
    assert SWITCHING_CLASS in doc.classes(APP_CONTENT_ID)
    assert doc.lang == "fa"
    assert ACTIVE_CLASS in doc.classes("lang-switch-en")

    sched.advance(FADE)
    assert doc.lang == "en"
    assert doc.url == "index.html?lang=en"
    assert _label(doc, "nav.about") == "About"
    assert SWITCHING_CLASS in doc.classes(APP_CONTENT_ID)

    sched.advance(FRAME)
    assert SWITCHING_CLASS not in doc.classes(APP_CONTENT_ID)
    assert ctrl.state == SwitchState.IDLE


def test_switch_back_removes_lang_param(content):
    doc, sched, ctrl, _ = _setup(content, url="index.html?lang=en")
    ctrl.switch_to("fa")
    sched.advance(FADE + FRAME)
    assert doc.url == "index.html"
    assert doc.dir == "rtl"
    assert len(doc.history) == 1


def test_requests_during_switch_are_ignored(content):
    doc, sched, ctrl, _ = _setup(content)
    assert ctrl.switch_to("en") is True
    assert ctrl.switch_to("fa") is False
    sched.advance(FADE // 2)
    assert ctrl.switch_to("fa") is False
    sched.advance(1000)
    assert ctrl.language == Language.EN
    assert doc.lang == "en"
    assert not ctrl.switching


def test_same_language_is_ignored(content):
    doc, sched, ctrl, _ = _setup(content)
    assert ctrl.switch_to("fa") is False
    assert SWITCHING_CLASS not in doc.classes(APP_CONTENT_ID)
    assert ctrl.state == SwitchState.IDLE


@pytest.mark.parametrize("control", ["lang-switch-en", "lang-switch-en-mobile"])
def test_click_switch_controls(content, control):
    doc, sched, ctrl, _ = _setup(content)
    assert ctrl.click(control) is True
    sched.advance(FADE + FRAME)
    assert ctrl.language == Language.EN
    assert ctrl.click("not-a-control") is False


def test_switcher_active_classes(content):
    doc, sched, ctrl, _ = _setup(content)
    for element_id in ("lang-switch-fa", "lang-switch-fa-mobile"):
        assert ACTIVE_CLASS in doc.classes(element_id)
        assert INACTIVE_CLASS not in doc.classes(element_id)
    for element_id in ("lang-switch-en", "lang-switch-en-mobile"):
        assert INACTIVE_CLASS in doc.classes(element_id)
        assert ACTIVE_CLASS not in doc.classes(element_id)


def test_typing_restarts_in_new_language(content):
    doc, sched, ctrl, typing = _setup(content)
    sched.advance(80 * 3)
    assert "وب‌اپلیکیشن می‌سازم.".startswith(typing.text)
    assert typing.text

    ctrl.switch_to("en")
    sched.advance(FADE + FRAME)
    sched.advance(80 * 4)
    assert "I build web apps.".startswith(typing.text)
    assert doc.text("hero-tagline") == typing.text
    # only the one typing step is queued
    assert sched.pending == 1


def test_typing_cycle():
    doc = PageDocument(load_skeleton())
    sched = ManualScheduler()
    typing = TypingEffect(doc, sched, speed_ms=10, pause_ms=100, next_phrase_ms=40)
    typing.start(["ab", "c"])
    assert typing.text == ""
    sched.advance(10)
    assert typing.text == "a"
    sched.advance(10)
    assert typing.text == "ab"
    sched.advance(10)
    assert typing.text == "ab"
    sched.advance(100)
    assert typing.text == "a"
    sched.advance(5)
    assert typing.text == ""
    sched.advance(5 + 40 + 10)
    assert typing.text == "c"
    assert doc.text("hero-tagline") == "c"


def test_typing_stop_and_missing_mount():
    sched = ManualScheduler()
    typing = TypingEffect(PageDocument(load_skeleton()), sched)
    typing.start(["hello"])
    assert typing.running
    typing.stop()
    assert not typing.running
    assert sched.pending == 0

    bare = TypingEffect(PageDocument("<html><body></body></html>"), sched)
    bare.start(["hello"])
    assert not bare.running
    assert sched.pending == 0


def _store(profile, projects=None):
    from portfolio.content_store import ContentStore, parse_projects

    return ContentStore(profile=profile, projects=parse_projects(projects))


def test_switch_clears_status_only_set_in_previous_language():
    doc, sched, ctrl, _ = _setup(_store({"personal": {"name": "Sara", "availability_fa": "آماده همکاری"}}))
    assert "آماده همکاری" in doc.text("hero-status")
    assert "hidden" not in doc.classes("hero-status")

    ctrl.switch_to("en")
    sched.advance(FADE + FRAME)
    assert doc.text("hero-status") == ""
    assert "hidden" in doc.classes("hero-status")


def test_switch_clears_skills_empty_in_new_language():
    profile = {"skills": {"Backend": ["Python"]}, "skills_fa": {}}
    doc, sched, ctrl, _ = _setup(_store(profile), url="index.html?lang=en")
    assert "Python" in doc.text("skills-container")
    assert "hidden" not in doc.classes("skills")

    ctrl.switch_to("fa")
    sched.advance(FADE + FRAME)
    assert doc.text("skills-container") == ""
    assert "hidden" in doc.classes("skills")

    ctrl.switch_to("en")
    sched.advance(FADE + FRAME)
    assert "Python" in doc.text("skills-container")
    assert "hidden" not in doc.classes("skills")


def test_empty_sections_hide_their_headings():
    doc, _, _, _ = _setup(_store({"about": "x"}, projects=[]))
    for section in ("skills", "experience", "projects", "certifications-block", "languages-block"):
        assert "hidden" in doc.classes(section), section
    assert doc.inner_html("education-list") == ""


def test_sample_content_shows_every_section(content):
    doc, _, _, _ = _setup(content)
    for section in ("skills", "experience", "projects", "certifications-block", "languages-block"):
        assert "hidden" not in doc.classes(section), section
    assert "hidden" not in doc.classes("projects-other-container")
