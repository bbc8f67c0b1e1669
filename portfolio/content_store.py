"""Content Store: the JSON documents that drive the site, loaded once per session.

Documents are read from a data base that is either a local directory or an
http(s) URL prefix. All five documents are fetched concurrently and joined;
any failure (missing file, HTTP error, bad JSON) leaves that document as
``None`` so dependent sections fall back or disappear.
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .i18n import Translations
from .product_config import (
    LANG_EN_FILE,
    LANG_FA_FILE,
    PORTFOLIO_DATA_BASE,
    PORTFOLIO_FETCH_TIMEOUT_SEC,
    PORTFOLIO_FETCH_WORKERS,
    PROFILE_FILE,
    PROJECTS_FILE,
    SOCIALS_FILE,
)


class ContentLoadError(Exception):
    pass


class SocialLink(BaseModel):
    """One entry of socials.json."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    label: str = ""
    url: str = ""
    icon: str = ""
    show_in_hero: bool = Field(False, alias="showInHero")
    show_in_contact: bool = Field(False, alias="showInContact")

    @field_validator("label", "url", "icon", mode="before")
    @classmethod
    def _coerce_str(cls, v):
        if v is None:
            return ""
        return str(v).strip()

    @property
    def has_url(self) -> bool:
        return bool(self.url)


class ProjectLinks(BaseModel):
    model_config = ConfigDict(extra="ignore")

    github: str = ""
    demo: str = ""

    @field_validator("github", "demo", mode="before")
    @classmethod
    def _strip(cls, v):
        if v is None:
            return ""
        return str(v).strip()


class Project(BaseModel):
    """A project card. Language overrides (title_fa, description_fa, ...) ride along as extras."""

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    description: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)
    image: Optional[str] = None
    links: ProjectLinks = Field(default_factory=ProjectLinks)

    @field_validator("title", "description", "image", mode="before")
    @classmethod
    def _coerce_scalar(cls, v):
        # numbers and booleans render as text
        if isinstance(v, (int, float)):
            return str(v)
        return v

    @field_validator("technologies", mode="before")
    @classmethod
    def _coerce_list(cls, v):
        if v is None:
            return []
        if isinstance(v, (str, int, float)):
            return [str(v)]
        if isinstance(v, list):
            return [str(t) if isinstance(t, (int, float)) else t for t in v if t is not None]
        return v

    @field_validator("links", mode="before")
    @classmethod
    def _coerce_links(cls, v):
        return v if isinstance(v, dict) else {}


@dataclass
class ProjectsDocument:
    featured: List[Dict[str, Any]] = field(default_factory=list)
    other: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class ContentStore:
    profile: Optional[Dict[str, Any]] = None
    projects: Optional[ProjectsDocument] = None
    socials: Optional[List[SocialLink]] = None
    translations: Translations = field(default_factory=Translations)


def _validate_projects(items: Any, tier: str) -> List[Dict[str, Any]]:
    if not isinstance(items, list):
        return []
    out: List[Dict[str, Any]] = []
    for idx, item in enumerate(items):
        try:
            out.append(Project.model_validate(item).model_dump())
        except ValidationError as e:
            logging.warning("Dropping invalid %s project #%s: %s", tier, idx, e)
    return out


def parse_projects(raw: Any) -> Optional[ProjectsDocument]:
    """A flat list means "all featured"; an object carries featured/other tiers."""
    if raw is None:
        return None
    if isinstance(raw, list):
        return ProjectsDocument(featured=_validate_projects(raw, "featured"))
    if isinstance(raw, dict):
        return ProjectsDocument(
            featured=_validate_projects(raw.get("featured"), "featured"),
            other=_validate_projects(raw.get("other"), "other"),
        )
    logging.warning("Ignoring projects document of unexpected type %s", type(raw).__name__)
    return None


def parse_socials(raw: Any) -> Optional[List[SocialLink]]:
    if raw is None:
        return None
    if not isinstance(raw, list):
        logging.warning("Ignoring socials document of unexpected type %s", type(raw).__name__)
        return None
    out: List[SocialLink] = []
    for idx, item in enumerate(raw):
        try:
            out.append(SocialLink.model_validate(item))
        except ValidationError as e:
            logging.warning("Dropping invalid social link #%s: %s", idx, e)
    return out


def _is_url(base: str) -> bool:
    return base.startswith("http://") or base.startswith("https://")


def fetch_json(base: str, name: str, *, timeout: float = PORTFOLIO_FETCH_TIMEOUT_SEC) -> Any:
    """Read one JSON document; raise ContentLoadError on any failure."""
    if _is_url(base):
        url = f"{base.rstrip('/')}/{name}"
        try:
            resp = requests.get(url, timeout=timeout)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            raise ContentLoadError(f"{url}: {e}") from e

    path = Path(base) / name
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ContentLoadError(f"{path}: {e}") from e


def fetch_document(base: str, name: str) -> Any:
    """Like fetch_json, but a failed document is logged and returned as None."""
    try:
        return fetch_json(base, name)
    except ContentLoadError as e:
        logging.warning("Failed to load %s", e)
        return None


def load_content(base: Optional[str] = None) -> ContentStore:
    """Fetch all documents concurrently and build the store once every fetch has settled."""
    base = str(base or PORTFOLIO_DATA_BASE)
    names = [PROFILE_FILE, PROJECTS_FILE, SOCIALS_FILE, LANG_EN_FILE, LANG_FA_FILE]

    with ThreadPoolExecutor(max_workers=PORTFOLIO_FETCH_WORKERS) as pool:
        futures = {name: pool.submit(fetch_document, base, name) for name in names}
        docs = {name: fut.result() for name, fut in futures.items()}

    profile = docs[PROFILE_FILE]
    if profile is not None and not isinstance(profile, dict):
        logging.warning("Ignoring profile document of unexpected type %s", type(profile).__name__)
        profile = None

    lang_en = docs[LANG_EN_FILE]
    lang_fa = docs[LANG_FA_FILE]
    store = ContentStore(
        profile=profile,
        projects=parse_projects(docs[PROJECTS_FILE]),
        socials=parse_socials(docs[SOCIALS_FILE]),
        translations=Translations(
            en=lang_en if isinstance(lang_en, dict) else {},
            fa=lang_fa if isinstance(lang_fa, dict) else {},
        ),
    )
    loaded = [name for name, doc in docs.items() if doc is not None]
    logging.info("Content loaded from %s: %s/%s documents", base, len(loaded), len(names))
    return store
