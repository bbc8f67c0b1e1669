from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from .content_store import ContentStore, ProjectsDocument, SocialLink
from .localize import DEFAULT_LANGUAGE, Language, coerce_language, resolve
from .product_config import PROJECT_PLACEHOLDER_IMAGE


TEMPLATES_DIR = Path(__file__).resolve().parent / "templates" / "html"

BRAND_ICONS = ("github", "linkedin", "twitter", "instagram", "telegram", "whatsapp")

# English defaults for labels the translation documents may lack.
FALLBACK_LABELS: Dict[str, str] = {
    "hero.viewWork": "View my work",
    "hero.contactMe": "Contact me",
    "project.github": "GitHub",
    "project.demo": "Demo",
    "project.linksPlaceholder": "Links coming soon",
    "sections.educationTitle": "Education",
    "footer": "© {year}. All rights reserved.",
}
DEFAULT_TITLE = "Full Stack Developer"
DEFAULT_ABOUT = "Full Stack Developer. Backend & frontend development."


class RenderError(Exception):
    pass


def icon_class(icon: Any) -> str:
    """Font Awesome classes for a socials.json icon name."""
    name = str(icon or "").strip()
    prefix = "fa-brands" if name in BRAND_ICONS else "fa-solid"
    return f"{prefix} fa-{name}"


def _finalize(value: Any) -> Any:
    # Missing fields render as nothing, never as "None".
    return "" if value is None else value


def _load_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        finalize=_finalize,
    )
    env.filters["icon_class"] = icon_class
    return env


_env: Optional[Environment] = None


def render_template(template_name: str, **context: Any) -> str:
    global _env
    if _env is None:
        _env = _load_env()
    try:
        template = _env.get_template(template_name)
    except TemplateNotFound as exc:
        raise RenderError(f"Template not found: {TEMPLATES_DIR / template_name}") from exc
    return template.render(**context).strip()


@dataclass
class RenderContext:
    """Everything a section renderer needs: the loaded content and the active language."""

    content: ContentStore
    language: Language = DEFAULT_LANGUAGE
    year: int = field(default_factory=lambda: date.today().year)

    def __post_init__(self) -> None:
        self.language = coerce_language(self.language)

    @property
    def profile(self) -> Dict[str, Any]:
        return self.content.profile or {}

    @property
    def is_fa(self) -> bool:
        return self.language == Language.FA

    def resolve(self, record: Optional[Dict[str, Any]], field_name: str) -> Any:
        return resolve(record, field_name, self.language)

    def t(self, key: str) -> str:
        return self.content.translations.get_translation(self.language, key, FALLBACK_LABELS.get(key))

    def with_language(self, language: str | Language) -> "RenderContext":
        return replace(self, language=coerce_language(language))


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _records(value: Any) -> List[Dict[str, Any]]:
    return [item for item in _as_list(value) if isinstance(item, dict)]


def _skill_entry(skill: Any) -> Optional[Dict[str, str]]:
    if skill is None:
        return None
    if isinstance(skill, str):
        return {"name": skill, "level": ""}
    if isinstance(skill, dict):
        return {"name": skill.get("name") or "", "level": skill.get("level") or ""}
    return None


def skill_groups(ctx: RenderContext) -> List[Tuple[str, List[Dict[str, str]]]]:
    skills = ctx.resolve(ctx.profile, "skills")
    if not isinstance(skills, dict):
        return []
    groups = []
    for category, items in skills.items():
        if not isinstance(items, list):
            continue
        entries = [e for e in (_skill_entry(s) for s in items) if e is not None]
        groups.append((category, entries))
    return groups


def experience_entries(ctx: RenderContext) -> List[Dict[str, Any]]:
    return [
        {
            "role": ctx.resolve(job, "role"),
            "company": ctx.resolve(job, "company"),
            "period": ctx.resolve(job, "period"),
            "points": _as_list(ctx.resolve(job, "points")),
        }
        for job in _records(ctx.profile.get("experience"))
    ]


def project_entry(ctx: RenderContext, project: Dict[str, Any]) -> Dict[str, Any]:
    links = project.get("links") or {}
    image = str(project.get("image") or "").strip()
    return {
        "title": ctx.resolve(project, "title"),
        "description": ctx.resolve(project, "description") or "",
        "technologies": _as_list(project.get("technologies")),
        "image": image or PROJECT_PLACEHOLDER_IMAGE,
        "github": str(links.get("github") or "").strip(),
        "demo": str(links.get("demo") or "").strip(),
    }


def education_entries(ctx: RenderContext) -> List[Dict[str, Any]]:
    return [
        {
            "degree": ctx.resolve(ed, "degree"),
            "institution": ctx.resolve(ed, "institution"),
            "period": ctx.resolve(ed, "period"),
        }
        for ed in _records(ctx.profile.get("education"))
    ]


def certification_entries(ctx: RenderContext) -> List[Dict[str, Any]]:
    return [
        {
            "name": ctx.resolve(c, "name"),
            "issuer": ctx.resolve(c, "issuer"),
            "date": ctx.resolve(c, "date"),
            "url": str(c.get("url") or "").strip(),
        }
        for c in _records(ctx.profile.get("certifications"))
    ]


def language_entries(ctx: RenderContext) -> List[Dict[str, Any]]:
    return [
        {
            "name": ctx.resolve(entry, "name"),
            "level": ctx.resolve(entry, "level"),
            "details": ctx.resolve(entry, "details"),
        }
        for entry in _records(ctx.profile.get("languages"))
    ]


def _socials(ctx: RenderContext, *, hero: bool = False, contact: bool = False) -> List[SocialLink]:
    out = []
    for s in ctx.content.socials or []:
        if not s.has_url:
            continue
        if hero and not s.show_in_hero:
            continue
        if contact and not s.show_in_contact:
            continue
        out.append(s)
    return out


# ---------------------------------------------------------------------------
# Section fragments. Each returns None when its data is absent or empty.
# ---------------------------------------------------------------------------

def render_hero_status(ctx: RenderContext) -> Optional[str]:
    availability = ctx.resolve(ctx.profile.get("personal"), "availability")
    if not availability:
        return None
    return render_template("hero_status.html", availability=availability)


def render_hero_socials(ctx: RenderContext) -> Optional[str]:
    if ctx.content.socials is None:
        return None
    return render_template("hero_socials.html", socials=_socials(ctx, hero=True))


def render_skills(ctx: RenderContext) -> Optional[str]:
    groups = skill_groups(ctx)
    if not groups:
        return None
    return render_template("skills.html", skills=groups)


def render_experience(ctx: RenderContext) -> Optional[str]:
    jobs = experience_entries(ctx)
    if not jobs:
        return None
    return render_template("experience.html", jobs=jobs)


def render_projects(ctx: RenderContext, projects: List[Dict[str, Any]]) -> Optional[str]:
    if not projects:
        return None
    labels = {
        "github": ctx.t("project.github"),
        "demo": ctx.t("project.demo"),
        "placeholder": ctx.t("project.linksPlaceholder"),
    }
    entries = [project_entry(ctx, p) for p in projects]
    return render_template("projects.html", projects=entries, labels=labels)


def render_other_projects(ctx: RenderContext, projects: List[Dict[str, Any]]) -> Optional[str]:
    if not projects:
        return None
    entries = [project_entry(ctx, p) for p in projects]
    return render_template("projects_other.html", projects=entries)


def render_education(ctx: RenderContext) -> Optional[str]:
    items = education_entries(ctx)
    if not items:
        return None
    return render_template("education.html", heading=ctx.t("sections.educationTitle"), items=items)


def render_certifications(ctx: RenderContext) -> Optional[str]:
    items = certification_entries(ctx)
    if not items:
        return None
    return render_template("certifications.html", items=items)


def render_languages(ctx: RenderContext) -> Optional[str]:
    items = language_entries(ctx)
    if not items:
        return None
    return render_template("languages.html", items=items)


def render_contact_links(ctx: RenderContext) -> Optional[str]:
    if ctx.content.socials is None:
        return None
    return render_template("contact_links.html", socials=_socials(ctx, contact=True))


def resume_href(language: str | Language) -> str:
    return "resume.html?lang=en" if coerce_language(language) == Language.EN else "resume.html"


def footer_text(ctx: RenderContext) -> str:
    return ctx.t("footer").replace("{year}", str(ctx.year))


# ---------------------------------------------------------------------------
# Page view: optional output slots keyed by mount point.
# ---------------------------------------------------------------------------

@dataclass
class Slot:
    """What to do with one mount point. Unset parts leave the element alone."""

    html: Optional[str] = None
    text: Optional[str] = None
    attrs: Dict[str, str] = field(default_factory=dict)
    add_classes: Tuple[str, ...] = ()
    remove_classes: Tuple[str, ...] = ()


def _mount(element_id: str):
    return field(default=None, metadata={"mount": element_id})


@dataclass
class PageView:
    hero_status: Optional[Slot] = _mount("hero-status")
    hero_name: Optional[Slot] = _mount("hero-name")
    hero_title: Optional[Slot] = _mount("hero-title")
    hero_view_work: Optional[Slot] = _mount("hero-view-work")
    hero_contact_me: Optional[Slot] = _mount("hero-contact-me")
    hero_socials: Optional[Slot] = _mount("hero-socials")
    about: Optional[Slot] = _mount("about-text")
    skills_section: Optional[Slot] = _mount("skills")
    skills: Optional[Slot] = _mount("skills-container")
    experience_section: Optional[Slot] = _mount("experience")
    experience: Optional[Slot] = _mount("experience-container")
    projects_section: Optional[Slot] = _mount("projects")
    projects: Optional[Slot] = _mount("projects-grid")
    projects_other_container: Optional[Slot] = _mount("projects-other-container")
    projects_other: Optional[Slot] = _mount("projects-other")
    education: Optional[Slot] = _mount("education-list")
    certifications_block: Optional[Slot] = _mount("certifications-block")
    certifications: Optional[Slot] = _mount("certifications-list")
    languages_block: Optional[Slot] = _mount("languages-block")
    languages: Optional[Slot] = _mount("languages-list")
    contact_links: Optional[Slot] = _mount("contact-links")
    resume_download: Optional[Slot] = _mount("resume-download")
    footer: Optional[Slot] = _mount("footer-text")

    def slots(self) -> Iterator[Tuple[str, Slot]]:
        for f in fields(self):
            slot = getattr(self, f.name)
            if slot is not None:
                yield f.metadata["mount"], slot


HIDDEN_CLASS = "hidden"


def _html_slot(fragment: Optional[str]) -> Optional[Slot]:
    return Slot(html=fragment) if fragment is not None else None


def _section_slot(fragment: Optional[str]) -> Slot:
    """Fill and show a mount, or empty and hide it so no earlier render survives."""
    if fragment is None:
        return Slot(html="", add_classes=(HIDDEN_CLASS,))
    return Slot(html=fragment, remove_classes=(HIDDEN_CLASS,))


def _visibility(visible: bool) -> Slot:
    if visible:
        return Slot(remove_classes=(HIDDEN_CLASS,))
    return Slot(add_classes=(HIDDEN_CLASS,))


def render_page(ctx: RenderContext) -> PageView:
    """Render every section of the main page for the context's language.

    Sections without data for this language come back as clearing slots, so
    switching language never leaves the previous language's fragment behind.
    """
    view = PageView()

    if ctx.content.profile is not None:
        personal = ctx.profile.get("personal")
        if isinstance(personal, dict):
            view.hero_status = _section_slot(render_hero_status(ctx))
            name = ctx.resolve(personal, "name") or personal.get("shortName")
            view.hero_name = Slot(text=name or "")
            view.hero_title = Slot(text=ctx.resolve(personal, "title") or DEFAULT_TITLE)
            view.hero_view_work = Slot(text=ctx.t("hero.viewWork"))
            view.hero_contact_me = Slot(text=ctx.t("hero.contactMe"))

        view.about = Slot(text=ctx.resolve(ctx.profile, "about") or DEFAULT_ABOUT)
        view.contact_links = _html_slot(render_contact_links(ctx))
        view.resume_download = Slot(attrs={"href": resume_href(ctx.language)})

    view.skills = _section_slot(render_skills(ctx))
    view.skills_section = _visibility(view.skills.html != "")
    view.experience = _section_slot(render_experience(ctx))
    view.experience_section = _visibility(view.experience.html != "")
    view.education = _section_slot(render_education(ctx))
    view.certifications = _section_slot(render_certifications(ctx))
    view.certifications_block = _visibility(view.certifications.html != "")
    view.languages = _section_slot(render_languages(ctx))
    view.languages_block = _visibility(view.languages.html != "")

    view.hero_socials = _html_slot(render_hero_socials(ctx))

    projects = ctx.content.projects or ProjectsDocument()
    view.projects = _section_slot(render_projects(ctx, projects.featured))
    other = render_other_projects(ctx, projects.other)
    view.projects_other = _section_slot(other)
    view.projects_other_container = _visibility(other is not None)
    view.projects_section = _visibility(bool(projects.featured or projects.other))

    view.footer = Slot(text=footer_text(ctx))
    return view
