from fastapi import APIRouter
from loguru import logger
from pydantic import Field

from copydesk.content import parse
from copydesk.content.models import ParseError, WireModel
from copydesk.gateway.deps import SettingsDep, ensure_body_size
from copydesk.validation import (
    ArticleInput,
    FieldError,
    MediaValidationResult,
    to_validated_article,
    validate_article_input,
    validate_media_blocks,
)

router = APIRouter(prefix="/v1/articles", tags=["Articles"])


class PublishCheckResponse(WireModel):
    """Everything that stands between a draft and publication.

    Args:
        ready: True when there are no article errors, no parse errors and no media errors.
        slug: URL slug derived from the title (None while the metadata is invalid).
        article_errors: Metadata problems, keyed by form field.
        parse_errors: Structural problems in the body text.
        media: Block validation result (None when there is no body to parse).
    """

    ready: bool
    slug: str | None = None
    article_errors: list[FieldError] = Field(default_factory=list)
    parse_errors: list[ParseError] = Field(default_factory=list)
    media: MediaValidationResult | None = None


@router.post("/publish-check", response_model=PublishCheckResponse)
async def publish_check(article: ArticleInput, settings: SettingsDep) -> PublishCheckResponse:
    article_result = validate_article_input(article)
    slug = to_validated_article(article).slug if article_result.is_valid else None

    parse_errors: list[ParseError] = []
    media: MediaValidationResult | None = None
    if isinstance(article.body, str) and article.body.strip():
        parsed = parse(ensure_body_size(article.body, settings))
        parse_errors = parsed.errors
        media = validate_media_blocks(parsed.blocks)

    ready = article_result.is_valid and not parse_errors and media is not None and media.is_valid
    logger.info(
        f"Publish check slug={slug}: ready={ready} article_errors={len(article_result.errors)} "
        f"parse_errors={len(parse_errors)} media_errors={len(media.errors) if media else 0}"
    )
    return PublishCheckResponse(
        ready=ready,
        slug=slug,
        article_errors=article_result.errors,
        parse_errors=parse_errors,
        media=media,
    )
