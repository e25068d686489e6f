"""Publish-time validation of article metadata (title, section, content type, ...).

Input arrives straight from the publish form, so every field is typed ``Any`` and
checked here instead of being rejected during deserialization.
"""

import re
from enum import StrEnum
from typing import Any

from pydantic import Field

from copydesk.constants import MAX_SUBTITLE_CHARS, MAX_TITLE_CHARS
from copydesk.content.models import WireModel


class Section(StrEnum):
    POLITICS = "politics"
    CRIME = "crime"
    COURT = "court"
    OPINION = "opinion"
    WORLD_AFFAIRS = "world-affairs"


class ContentType(StrEnum):
    NEWS = "news"
    ANALYSIS = "analysis"
    OPINION = "opinion"


VALID_SECTIONS = tuple(Section)
VALID_CONTENT_TYPES = tuple(ContentType)


class ArticleInput(WireModel):
    """Raw publish form fields."""

    title: Any = None
    subtitle: Any = None
    section: Any = None
    content_type: Any = None
    body: Any = None
    tags: Any = None
    featured: Any = None
    sources: Any = None


class FieldError(WireModel):
    field: str
    message: str


class ArticleValidationResult(WireModel):
    is_valid: bool
    errors: list[FieldError] = Field(default_factory=list)


class ValidatedArticle(WireModel):
    title: str
    subtitle: str
    section: Section
    content_type: ContentType
    body: str
    tags: list[str]
    featured: bool
    sources: list[str]
    slug: str


def sanitize_string(value: Any) -> str:
    """Trim and normalize line endings; anything that is not a string becomes empty."""
    if not isinstance(value, str):
        return ""
    return value.strip().replace("\r\n", "\n").replace("\r", "\n")


def sanitize_string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in (sanitize_string(v) for v in value if isinstance(v, str)) if item]


def generate_slug(title: str) -> str:
    slug = title.lower().strip()
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"[^a-z0-9-]", "", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_article_input(article: ArticleInput) -> ArticleValidationResult:
    errors: list[FieldError] = []

    if not is_non_empty_string(article.title):
        errors.append(FieldError(field="title", message="Title is required and must be a non-empty string"))
    elif len(article.title) > MAX_TITLE_CHARS:
        errors.append(FieldError(field="title", message=f"Title must be {MAX_TITLE_CHARS} characters or less"))

    if not is_non_empty_string(article.subtitle):
        errors.append(FieldError(field="subtitle", message="Subtitle is required and must be a non-empty string"))
    elif len(article.subtitle) > MAX_SUBTITLE_CHARS:
        errors.append(
            FieldError(field="subtitle", message=f"Subtitle must be {MAX_SUBTITLE_CHARS} characters or less")
        )

    if article.section not in VALID_SECTIONS:
        errors.append(FieldError(field="section", message=f"Section must be one of: {', '.join(VALID_SECTIONS)}"))

    if article.content_type not in VALID_CONTENT_TYPES:
        errors.append(
            FieldError(
                field="contentType",
                message=f"Content type must be one of: {', '.join(VALID_CONTENT_TYPES)}",
            )
        )

    # Opinion pieces only run in the opinion section
    if article.content_type == ContentType.OPINION and article.section != Section.OPINION:
        errors.append(
            FieldError(field="contentType", message="Opinion articles can only be published in the Opinion section")
        )

    if not is_non_empty_string(article.body):
        errors.append(FieldError(field="body", message="Body content is required and cannot be empty"))

    if not isinstance(article.featured, bool):
        errors.append(FieldError(field="featured", message="Featured must be a boolean value"))

    if article.tags is not None and not isinstance(article.tags, list):
        errors.append(FieldError(field="tags", message="Tags must be an array of strings"))
    if article.sources is not None and not isinstance(article.sources, list):
        errors.append(FieldError(field="sources", message="Sources must be an array of strings"))

    return ArticleValidationResult(is_valid=not errors, errors=errors)


def to_validated_article(article: ArticleInput) -> ValidatedArticle:
    """Sanitize input that already passed validate_article_input."""
    title = sanitize_string(article.title)
    return ValidatedArticle(
        title=title,
        subtitle=sanitize_string(article.subtitle),
        section=Section(article.section),
        content_type=ContentType(article.content_type),
        body=sanitize_string(article.body),
        tags=sanitize_string_list(article.tags),
        featured=article.featured is True,
        sources=sanitize_string_list(article.sources),
        slug=generate_slug(title),
    )
