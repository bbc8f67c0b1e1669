"""Page document: a fixed HTML skeleton with named mount points.

Rendered fragments are injected into elements by id. A mount point that the
skeleton does not carry is skipped silently, so one renderer serves any
skeleton variant.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional

from bs4 import BeautifulSoup, Tag

from .render import PageView, Slot


SKELETON_DIR = Path(__file__).resolve().parent / "templates" / "site"


def load_skeleton(name: str = "index.html") -> str:
    return (SKELETON_DIR / name).read_text(encoding="utf-8")


class PageDocument:
    def __init__(self, html: str, url: str = "index.html"):
        self.soup = BeautifulSoup(html, "html.parser")
        self.history: List[str] = [url]

    @classmethod
    def from_file(cls, path: str | Path, url: Optional[str] = None) -> "PageDocument":
        p = Path(path)
        return cls(p.read_text(encoding="utf-8"), url=url or p.name)

    # -- document-level state ------------------------------------------------

    @property
    def _root(self) -> Optional[Tag]:
        return self.soup.find("html")

    @property
    def lang(self) -> str:
        root = self._root
        return str(root.get("lang") or "") if root is not None else ""

    @property
    def dir(self) -> str:
        root = self._root
        return str(root.get("dir") or "") if root is not None else ""

    def set_lang(self, lang: str, direction: str) -> None:
        root = self._root
        if root is None:
            return
        root["lang"] = lang
        root["dir"] = direction

    @property
    def url(self) -> str:
        return self.history[-1]

    def replace_url(self, url: str) -> None:
        """Rewrite the current history entry without adding a new one."""
        self.history[-1] = url

    @property
    def title(self) -> str:
        tag = self.soup.find("title")
        return tag.get_text() if tag is not None else ""

    def set_title(self, title: str) -> None:
        tag = self.soup.find("title")
        if tag is not None:
            tag.string = title

    # -- mount points --------------------------------------------------------

    def element(self, element_id: str) -> Optional[Tag]:
        return self.soup.find(id=element_id)

    def has_mount(self, element_id: str) -> bool:
        return self.element(element_id) is not None

    def set_html(self, element_id: str, fragment: str) -> bool:
        el = self.element(element_id)
        if el is None:
            return False
        el.clear()
        for node in list(BeautifulSoup(fragment, "html.parser").contents):
            el.append(node.extract())
        return True

    def set_text(self, element_id: str, text: str) -> bool:
        el = self.element(element_id)
        if el is None:
            return False
        el.string = text
        return True

    def text(self, element_id: str) -> Optional[str]:
        el = self.element(element_id)
        return el.get_text() if el is not None else None

    def inner_html(self, element_id: str) -> Optional[str]:
        el = self.element(element_id)
        return el.decode_contents() if el is not None else None

    def set_attr(self, element_id: str, name: str, value: str) -> bool:
        el = self.element(element_id)
        if el is None:
            return False
        el[name] = value
        return True

    def classes(self, element_id: str) -> List[str]:
        el = self.element(element_id)
        if el is None:
            return []
        return list(el.get("class") or [])

    def toggle_class(self, element_id: str, cls: str, on: bool) -> bool:
        el = self.element(element_id)
        if el is None:
            return False
        current = list(el.get("class") or [])
        if on and cls not in current:
            current.append(cls)
        elif not on and cls in current:
            current.remove(cls)
        el["class"] = current
        return True

    def apply_slot(self, element_id: str, slot: Slot) -> bool:
        if not self.has_mount(element_id):
            return False
        if slot.html is not None:
            self.set_html(element_id, slot.html)
        elif slot.text is not None:
            self.set_text(element_id, slot.text)
        for name, value in slot.attrs.items():
            self.set_attr(element_id, name, value)
        for cls in slot.add_classes:
            self.toggle_class(element_id, cls, True)
        for cls in slot.remove_classes:
            self.toggle_class(element_id, cls, False)
        return True

    def apply_view(self, view: PageView) -> List[str]:
        """Apply every filled slot; returns the mount ids that were present and updated."""
        return [element_id for element_id, slot in view.slots() if self.apply_slot(element_id, slot)]

    def apply_labels(self, translate: Callable[[str], Optional[str]]) -> int:
        """
        Replace text of [data-i18n] elements and placeholders of [data-i18n-placeholder] ones.

        Keys the translation lacks (translate returns None) keep the skeleton's own text.
        """
        count = 0
        for el in self.soup.select("[data-i18n]"):
            key = el.get("data-i18n")
            value = translate(key) if key else None
            if value is not None:
                el.string = value
                count += 1
        for el in self.soup.select("[data-i18n-placeholder]"):
            key = el.get("data-i18n-placeholder")
            value = translate(key) if key else None
            if value is not None:
                el["placeholder"] = value
                count += 1
        return count

    def serialize(self) -> str:
        return str(self.soup)
