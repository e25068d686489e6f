"""Publish-time validation of block structure, media and article metadata."""

from copydesk.validation.article import (
    ArticleInput,
    ArticleValidationResult,
    ContentType,
    FieldError,
    Section,
    ValidatedArticle,
    generate_slug,
    to_validated_article,
    validate_article_input,
)
from copydesk.validation.media import (
    InsertCheck,
    MediaValidationError,
    MediaValidationErrorType,
    MediaValidationResult,
    MediaValidationWarning,
    MediaValidationWarningType,
    can_insert_media_at,
    is_valid_block_order,
    validate_image_file,
    validate_media_blocks,
)
from copydesk.validation.policy import PLACEMENT_POLICY, RELAXED_PLACEMENT, STRICT_PLACEMENT, MediaPlacementPolicy

__all__ = [
    # Media
    "validate_media_blocks",
    "is_valid_block_order",
    "can_insert_media_at",
    "validate_image_file",
    "InsertCheck",
    "MediaValidationError",
    "MediaValidationErrorType",
    "MediaValidationResult",
    "MediaValidationWarning",
    "MediaValidationWarningType",
    # Policy
    "MediaPlacementPolicy",
    "PLACEMENT_POLICY",
    "STRICT_PLACEMENT",
    "RELAXED_PLACEMENT",
    # Article
    "ArticleInput",
    "ArticleValidationResult",
    "FieldError",
    "ValidatedArticle",
    "Section",
    "ContentType",
    "generate_slug",
    "validate_article_input",
    "to_validated_article",
]
