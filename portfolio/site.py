"""Page startup: load content, render the initial language, wire the switch, start the background."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .background import BackgroundAnimation, PillowSurface
from .content_store import ContentStore, load_content
from .controller import LanguageSwitchController, TypingEffect
from .page import PageDocument, load_skeleton
from .product_config import PORTFOLIO_CANVAS_HEIGHT, PORTFOLIO_CANVAS_WIDTH, PORTFOLIO_ENABLE_BACKGROUND
from .render import RenderContext
from .scheduler import ManualScheduler, Scheduler


CANVAS_ID = "wave-grid-canvas"


@dataclass
class PortfolioSite:
    document: PageDocument
    content: ContentStore
    controller: LanguageSwitchController
    typing: TypingEffect
    background: Optional[BackgroundAnimation] = None

    def close(self) -> None:
        """Tear down everything that reschedules itself."""
        self.typing.stop()
        if self.background is not None:
            self.background.stop()


def open_site(
    data_base: Optional[str] = None,
    *,
    url: str = "index.html",
    skeleton: Optional[str] = None,
    scheduler: Optional[Scheduler] = None,
    content: Optional[ContentStore] = None,
    with_background: bool = PORTFOLIO_ENABLE_BACKGROUND,
) -> PortfolioSite:
    scheduler = scheduler or ManualScheduler()
    if content is None:
        content = load_content(data_base)
    if content.profile is None:
        logging.warning("Profile document unavailable; rendering a sparse page")

    document = PageDocument(skeleton if skeleton is not None else load_skeleton("index.html"), url=url)
    typing = TypingEffect(document, scheduler)
    controller = LanguageSwitchController(document, RenderContext(content=content), scheduler, typing=typing)
    controller.initialize()

    background = None
    if with_background and document.has_mount(CANVAS_ID):
        width, height = PORTFOLIO_CANVAS_WIDTH, PORTFOLIO_CANVAS_HEIGHT
        background = BackgroundAnimation(PillowSurface(width, height), scheduler, width, height)
        background.start()

    return PortfolioSite(
        document=document,
        content=content,
        controller=controller,
        typing=typing,
        background=background,
    )
