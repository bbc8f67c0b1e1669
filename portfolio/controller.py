from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from .localize import Language, coerce_language, direction, language_from_url, url_with_language
from .page import PageDocument
from .product_config import (
    PORTFOLIO_FRAME_INTERVAL_MS,
    PORTFOLIO_LANG_SWITCH_FADE_MS,
    PORTFOLIO_TYPING_PAUSE_MS,
    PORTFOLIO_TYPING_SPEED_MS,
    TYPING_NEXT_PHRASE_MS,
)
from .render import RenderContext, render_page
from .scheduler import Handle, Scheduler


APP_CONTENT_ID = "app-content"
SWITCHING_CLASS = "lang-switching"
ACTIVE_CLASS = "text-accent"
INACTIVE_CLASS = "text-gray-400"

SWITCH_CONTROLS = (
    ("lang-switch-fa", Language.FA),
    ("lang-switch-en", Language.EN),
    ("lang-switch-fa-mobile", Language.FA),
    ("lang-switch-en-mobile", Language.EN),
)


class SwitchState(str, Enum):
    IDLE = "IDLE"
    SWITCHING = "SWITCHING"


class TypingEffect:
    """
    Types each phrase one character per step, pauses, deletes it at double speed,
    then moves on to the next phrase, forever.

    Only one step is ever scheduled: (re)starting cancels the pending step first,
    so a language switch never leaves two typers fighting over the element.
    """

    def __init__(
        self,
        document: PageDocument,
        scheduler: Scheduler,
        element_id: str = "hero-tagline",
        *,
        speed_ms: int = PORTFOLIO_TYPING_SPEED_MS,
        pause_ms: int = PORTFOLIO_TYPING_PAUSE_MS,
        next_phrase_ms: int = TYPING_NEXT_PHRASE_MS,
    ):
        self.document = document
        self.scheduler = scheduler
        self.element_id = element_id
        self.speed_ms = speed_ms
        self.pause_ms = pause_ms
        self.next_phrase_ms = next_phrase_ms
        self._handle: Optional[Handle] = None
        self._phrases: List[str] = []
        self._index = 0
        self._pos = 0
        self._text = ""

    @property
    def running(self) -> bool:
        return self._handle is not None and not self._handle.cancelled

    @property
    def text(self) -> str:
        return self._text

    def start(self, phrases: List[str]) -> None:
        self.stop()
        if not phrases or not self.document.has_mount(self.element_id):
            return
        self._phrases = list(phrases)
        self._index = 0
        self._type_next()

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _set(self, text: str) -> None:
        self._text = text
        self.document.set_text(self.element_id, text)

    def _schedule(self, delay_ms: float, callback) -> None:
        self._handle = self.scheduler.call_later(delay_ms, callback)

    def _type_next(self) -> None:
        self._pos = 0
        self._set("")
        self._type_char()

    def _type_char(self) -> None:
        phrase = self._phrases[self._index % len(self._phrases)]
        if self._pos <= len(phrase):
            self._set(phrase[: self._pos])
            self._pos += 1
            self._schedule(self.speed_ms, self._type_char)
        else:
            self._schedule(self.pause_ms, self._delete_char)

    def _delete_char(self) -> None:
        if self._text:
            self._set(self._text[:-1])
            self._schedule(self.speed_ms / 2, self._delete_char)
        else:
            self._index += 1
            self._schedule(self.next_phrase_ms, self._type_next)


class LanguageSwitchController:
    """
    Owns the active language of a page and moves it between fa (rtl) and en (ltr).

    Interactive switches fade: mark the content as switching, wait `fade_ms`,
    swap everything, then clear the mark on the next frame. While a switch is in
    flight further requests are ignored (first request wins), as are requests
    for the language already shown.
    """

    def __init__(
        self,
        document: PageDocument,
        context: RenderContext,
        scheduler: Scheduler,
        *,
        fade_ms: int = PORTFOLIO_LANG_SWITCH_FADE_MS,
        frame_ms: int = PORTFOLIO_FRAME_INTERVAL_MS,
        typing: Optional[TypingEffect] = None,
    ):
        self.document = document
        self.context = context
        self.scheduler = scheduler
        self.fade_ms = fade_ms
        self.frame_ms = frame_ms
        self.typing = typing
        self.state = SwitchState.IDLE
        self._pending: Optional[Handle] = None

    @property
    def language(self) -> Language:
        return self.context.language

    @property
    def switching(self) -> bool:
        return self.state == SwitchState.SWITCHING

    def initialize(self, referrer: Optional[str] = None) -> Language:
        """First render: language comes from the page URL, no transition."""
        lang = language_from_url(self.document.url, referrer)
        self.apply_language(lang)
        return lang

    def apply_language(self, language: str | Language) -> None:
        lang = coerce_language(language)
        self.context = self.context.with_language(lang)

        self.document.set_lang(lang.value, direction(lang))
        self.document.replace_url(url_with_language(self.document.url, lang))
        translations = self.context.content.translations
        self.document.apply_labels(lambda key: translations.lookup(lang, key))
        updated = self.document.apply_view(render_page(self.context))
        logging.info("Rendered page in %s (%s mount points)", lang.value, len(updated))

        if self.typing is not None:
            self.typing.start(self.context.content.translations.get_translation_list(lang, "typingPhrases"))
        self.update_switcher_active(lang)

    def update_switcher_active(self, language: str | Language) -> None:
        lang = coerce_language(language)
        for element_id, control_lang in SWITCH_CONTROLS:
            self.document.toggle_class(element_id, ACTIVE_CLASS, control_lang == lang)
            self.document.toggle_class(element_id, INACTIVE_CLASS, control_lang != lang)

    def switch_to(self, language: str | Language) -> bool:
        """Request an interactive switch. Returns False when the request is ignored."""
        lang = coerce_language(language)
        if self.switching:
            logging.info("Language switch to %s ignored: switch already in progress", lang.value)
            return False
        if lang == self.language:
            return False

        self.state = SwitchState.SWITCHING
        self.document.toggle_class(APP_CONTENT_ID, SWITCHING_CLASS, True)
        self.update_switcher_active(lang)
        self._pending = self.scheduler.call_later(self.fade_ms, lambda: self._swap(lang))
        return True

    def click(self, element_id: str) -> bool:
        """Handle a click on one of the switch controls."""
        for control_id, control_lang in SWITCH_CONTROLS:
            if control_id == element_id:
                return self.switch_to(control_lang)
        return False

    def _swap(self, lang: Language) -> None:
        self.apply_language(lang)
        self._pending = self.scheduler.call_later(self.frame_ms, self._finish)

    def _finish(self) -> None:
        self.document.toggle_class(APP_CONTENT_ID, SWITCHING_CLASS, False)
        self.state = SwitchState.IDLE
        self._pending = None
