"""Printable resume page.

Same content and language rules as the main page, laid out as one document
under a small toolbar (back to site, print/save). Labels are built in rather
than read from the translation documents so the page renders even when
those fail to load. Printing is the browser's own dialog.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .content_store import ContentStore
from .localize import Language, direction, language_from_url
from .page import PageDocument
from .product_config import RESUME_PHOTO
from .render import (
    RenderContext,
    certification_entries,
    education_entries,
    experience_entries,
    language_entries,
    project_entry,
    render_template,
    skill_groups,
)


LABELS: Dict[Language, Dict[str, str]] = {
    Language.FA: {
        "back": "بازگشت به سایت",
        "print": "ذخیره به صورت PDF",
        "printHint": "برای حذف آدرس از PDF، در پنجرهٔ چاپ گزینه «Headers and footers» را غیرفعال کنید.",
        "about": "درباره من",
        "skills": "مهارت‌ها",
        "experience": "سوابق کاری",
        "projects": "پروژه‌ها",
        "otherProjects": "سایر پروژه‌ها",
        "education": "تحصیلات",
        "certifications": "گواهینامه‌ها",
        "languages": "زبان‌ها",
        "github": "گیت‌هاب",
        "demo": "دمو",
        "title": "رزومه",
        "loading": "در حال بارگذاری…",
        "loadFailed": "امکان بارگذاری رزومه وجود نداشت.",
    },
    Language.EN: {
        "back": "Back to site",
        "print": "Save as PDF",
        "printHint": 'To remove the URL from the PDF, turn off "Headers and footers" in the print dialog.',
        "about": "About",
        "skills": "Skills",
        "experience": "Experience",
        "projects": "Projects",
        "otherProjects": "Other projects",
        "education": "Education",
        "certifications": "Certifications",
        "languages": "Languages",
        "github": "GitHub",
        "demo": "Demo",
        "title": "Resume",
        "loading": "Loading…",
        "loadFailed": "Could not load resume.",
    },
}

# Socials already shown on the contact line.
CONTACT_LINE_LABELS = ("Email", "Phone")

BODY_ID = "resume-body"


def _message(text: str) -> str:
    return render_template("message.html", text=text)


def loading_markup(language: Language) -> str:
    return _message(LABELS[language]["loading"])


def failure_markup(language: Language) -> str:
    return _message(LABELS[language]["loadFailed"])


def _header(ctx: RenderContext) -> Dict[str, Any]:
    p = ctx.profile.get("personal") or {}
    phone = p.get("phone")
    return {
        "name": ctx.resolve(p, "name") or p.get("shortName"),
        "title": ctx.resolve(p, "title"),
        "email": p.get("email"),
        "phone": phone,
        "phone_raw": "".join(str(p.get("phoneRaw") or phone or "").split()),
        "location": ctx.resolve(p, "location"),
    }


def page_title(ctx: RenderContext) -> str:
    name = _header(ctx)["name"]
    label = LABELS[ctx.language]["title"]
    return f"{label} | {name}" if name else label


def render_resume_body(ctx: RenderContext) -> str:
    """Whole resume as one fragment; the failure message when the profile is missing."""
    if ctx.content.profile is None:
        return failure_markup(ctx.language)

    labels = LABELS[ctx.language]
    socials = [
        s for s in ctx.content.socials or []
        if s.has_url and s.label not in CONTACT_LINE_LABELS
    ]
    projects = ctx.content.projects
    featured: List[Dict[str, Any]] = [project_entry(ctx, p) for p in (projects.featured if projects else [])]
    other: List[Dict[str, Any]] = [project_entry(ctx, p) for p in (projects.other if projects else [])]

    return render_template(
        "resume.html",
        labels=labels,
        project_labels={"github": labels["github"], "demo": labels["demo"]},
        photo=RESUME_PHOTO,
        header=_header(ctx),
        socials=socials,
        about=ctx.resolve(ctx.profile, "about"),
        skills=skill_groups(ctx),
        jobs=experience_entries(ctx),
        featured=featured,
        other=other,
        education=education_entries(ctx),
        certifications=certification_entries(ctx),
        languages=language_entries(ctx),
    )


def apply_toolbar(document: PageDocument, language: Language) -> None:
    labels = LABELS[language]
    document.set_attr("toolbar-back", "href", "index.html?lang=en" if language == Language.EN else "index.html")
    document.set_text("toolbar-back-text", labels["back"])
    document.set_text("toolbar-print-text", labels["print"])
    back = document.element("toolbar-back")
    icon = back.find("i") if back is not None else None
    if icon is not None:
        icon["class"] = ["fas", "fa-arrow-left" if language == Language.EN else "fa-arrow-right"]
    if document.set_text("resume-print-hint", labels["printHint"]):
        document.set_attr("resume-print-hint", "aria-hidden", "false")


def render_resume_page(
    document: PageDocument,
    content: Optional[ContentStore],
    referrer: Optional[str] = None,
) -> Language:
    """
    Fill a resume skeleton. `content` None means loading has not finished yet,
    in which case the body shows the loading message.
    """
    language = language_from_url(document.url, referrer)
    document.set_lang(language.value, direction(language))
    apply_toolbar(document, language)

    if content is None:
        document.set_title(LABELS[language]["title"])
        document.set_html(BODY_ID, loading_markup(language))
        return language

    ctx = RenderContext(content=content, language=language)
    document.set_title(page_title(ctx))
    document.set_html(BODY_ID, render_resume_body(ctx))
    return language
