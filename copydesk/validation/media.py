"""Media and structure validation for content blocks.

Rules:
- at least one block, and at least one text block
- max 3 images (error), max 1 video (warning only)
- images need alt text, positive dimensions and a source URL
- videos need a supported provider, an ID, an embed URL and a poster
- under the strict placement policy media may not open or close the article and
  two media blocks may not touch

Validation never raises for bad content: every problem is reported in the result,
and all checks run so the editor can show every issue at once.
"""

from enum import StrEnum, auto
from typing import Literal, Sequence

from loguru import logger
from pydantic import Field

from copydesk.constants import ALLOWED_IMAGE_FORMATS, MAX_IMAGE_SIZE_BYTES, MAX_IMAGES, MAX_VIDEOS
from copydesk.content.models import (
    ContentBlock,
    ImageBlock,
    VideoBlock,
    WireModel,
    is_image_block,
    is_media_block,
    is_text_block,
    is_video_block,
)
from copydesk.media.video_providers import ALLOWED_VIDEO_PROVIDERS
from copydesk.validation.policy import PLACEMENT_POLICY, MediaPlacementPolicy


class MediaValidationErrorType(StrEnum):
    EMPTY_BLOCKS = auto()
    MEDIA_ONLY_ARTICLE = auto()
    IMAGE_LIMIT_EXCEEDED = auto()
    MISSING_ALT_TEXT = auto()
    EMPTY_ALT_TEXT = auto()
    MISSING_DIMENSIONS = auto()
    INVALID_DIMENSIONS = auto()
    INVALID_IMAGE_URL = auto()
    INVALID_VIDEO_PROVIDER = auto()
    INVALID_VIDEO_URL = auto()
    MISSING_POSTER_URL = auto()
    ARTICLE_STARTS_WITH_MEDIA = auto()
    ARTICLE_ENDS_WITH_MEDIA = auto()
    CONSECUTIVE_MEDIA_BLOCKS = auto()
    NO_TEXT_CONTEXT_BEFORE = auto()
    NO_TEXT_CONTEXT_AFTER = auto()
    DUPLICATE_BLOCK_ID = auto()
    INVALID_IMAGE_FORMAT = auto()
    IMAGE_TOO_LARGE = auto()


class MediaValidationWarningType(StrEnum):
    VIDEO_SOFT_LIMIT = auto()
    MISSING_CAPTION = auto()
    MISSING_CREDIT = auto()


ORDER_ERROR_TYPES = frozenset(
    {
        MediaValidationErrorType.ARTICLE_STARTS_WITH_MEDIA,
        MediaValidationErrorType.ARTICLE_ENDS_WITH_MEDIA,
        MediaValidationErrorType.CONSECUTIVE_MEDIA_BLOCKS,
        MediaValidationErrorType.NO_TEXT_CONTEXT_BEFORE,
        MediaValidationErrorType.NO_TEXT_CONTEXT_AFTER,
    }
)


class MediaValidationError(WireModel):
    type: MediaValidationErrorType
    message: str
    block_id: str | None = None
    block_index: int | None = None


class MediaValidationWarning(WireModel):
    type: MediaValidationWarningType
    message: str
    block_id: str | None = None
    block_index: int | None = None


class MediaValidationResult(WireModel):
    is_valid: bool
    errors: list[MediaValidationError] = Field(default_factory=list)
    warnings: list[MediaValidationWarning] = Field(default_factory=list)


class InsertCheck(WireModel):
    valid: bool
    reason: str | None = None
    error_type: MediaValidationErrorType | None = None


class _Collector:
    """Accumulates issues for one validation run."""

    def __init__(self) -> None:
        self.errors: list[MediaValidationError] = []
        self.warnings: list[MediaValidationWarning] = []

    def error(
        self,
        type_: MediaValidationErrorType,
        message: str,
        block: ContentBlock | None = None,
        index: int | None = None,
    ) -> None:
        self.errors.append(
            MediaValidationError(
                type=type_,
                message=message,
                block_id=block.id if block is not None else None,
                block_index=index,
            )
        )

    def warn(
        self,
        type_: MediaValidationWarningType,
        message: str,
        block: ContentBlock | None = None,
        index: int | None = None,
    ) -> None:
        self.warnings.append(
            MediaValidationWarning(
                type=type_,
                message=message,
                block_id=block.id if block is not None else None,
                block_index=index,
            )
        )

    def result(self) -> MediaValidationResult:
        return MediaValidationResult(is_valid=not self.errors, errors=self.errors, warnings=self.warnings)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


# === MAIN VALIDATION ===


def validate_media_blocks(
    blocks: Sequence[ContentBlock],
    policy: MediaPlacementPolicy = PLACEMENT_POLICY,
) -> MediaValidationResult:
    """Validate a candidate block list before publishing."""
    issues = _Collector()

    if not blocks:
        issues.error(MediaValidationErrorType.EMPTY_BLOCKS, "Article must contain at least one content block")
        return issues.result()

    if not any(is_text_block(block) for block in blocks):
        issues.error(
            MediaValidationErrorType.MEDIA_ONLY_ARTICLE,
            "Article cannot contain only media. Text content is required.",
        )

    image_count = sum(1 for block in blocks if is_image_block(block))
    if image_count > MAX_IMAGES:
        issues.error(
            MediaValidationErrorType.IMAGE_LIMIT_EXCEEDED,
            f"Maximum {MAX_IMAGES} images allowed per article. Found: {image_count}",
        )

    video_count = sum(1 for block in blocks if is_video_block(block))
    if video_count > MAX_VIDEOS:
        issues.warn(
            MediaValidationWarningType.VIDEO_SOFT_LIMIT,
            f"Recommended maximum is {MAX_VIDEOS} video per article. Found: {video_count}. "
            "This may impact page performance.",
        )

    for index, block in enumerate(blocks):
        if is_image_block(block):
            _validate_image_block(block, index, issues)
        elif is_video_block(block):
            _validate_video_block(block, index, issues)

    _validate_placement(blocks, policy, issues)
    _validate_unique_ids(blocks, issues)

    result = issues.result()
    logger.debug(
        f"Validated {len(blocks)} blocks ({image_count} images, {video_count} videos): "
        f"{len(result.errors)} errors, {len(result.warnings)} warnings"
    )
    return result


def _validate_image_block(block: ImageBlock, index: int, issues: _Collector) -> None:
    if block.alt is None:
        issues.error(
            MediaValidationErrorType.MISSING_ALT_TEXT, "Image requires alt text for accessibility", block, index
        )
    elif not block.alt.strip():
        issues.error(MediaValidationErrorType.EMPTY_ALT_TEXT, "Image alt text cannot be empty", block, index)

    if not block.width or not block.height:
        issues.error(
            MediaValidationErrorType.MISSING_DIMENSIONS,
            "Image requires explicit width and height dimensions",
            block,
            index,
        )
    elif block.width < 0 or block.height < 0:
        issues.error(
            MediaValidationErrorType.INVALID_DIMENSIONS, "Image dimensions must be positive numbers", block, index
        )

    if _blank(block.src):
        issues.error(MediaValidationErrorType.INVALID_IMAGE_URL, "Image source URL is required", block, index)

    if _blank(block.caption):
        issues.warn(
            MediaValidationWarningType.MISSING_CAPTION,
            "Consider adding a caption to provide editorial context",
            block,
            index,
        )
    if _blank(block.credit):
        issues.warn(MediaValidationWarningType.MISSING_CREDIT, "Consider adding a photo credit", block, index)


def _validate_video_block(block: VideoBlock, index: int, issues: _Collector) -> None:
    if block.provider not in ALLOWED_VIDEO_PROVIDERS:
        issues.error(
            MediaValidationErrorType.INVALID_VIDEO_PROVIDER,
            f"Video provider must be one of: {', '.join(ALLOWED_VIDEO_PROVIDERS)}",
            block,
            index,
        )
    if _blank(block.video_id):
        issues.error(MediaValidationErrorType.INVALID_VIDEO_URL, "Video ID is required", block, index)
    if _blank(block.embed_url):
        issues.error(MediaValidationErrorType.INVALID_VIDEO_URL, "Video embed URL is required", block, index)
    if _blank(block.poster_url):
        issues.error(
            MediaValidationErrorType.MISSING_POSTER_URL, "Video requires a poster/thumbnail image", block, index
        )

    if _blank(block.caption):
        issues.warn(
            MediaValidationWarningType.MISSING_CAPTION,
            "Consider adding a caption to describe the video content",
            block,
            index,
        )


def _validate_placement(blocks: Sequence[ContentBlock], policy: MediaPlacementPolicy, issues: _Collector) -> None:
    if policy.require_text_boundaries:
        first, last = blocks[0], blocks[-1]
        if is_media_block(first):
            issues.error(
                MediaValidationErrorType.ARTICLE_STARTS_WITH_MEDIA,
                "Article cannot start with a media block. Add text before it.",
                first,
                0,
            )
        if is_media_block(last):
            issues.error(
                MediaValidationErrorType.ARTICLE_ENDS_WITH_MEDIA,
                "Article cannot end with a media block. Add text after it.",
                last,
                len(blocks) - 1,
            )

    if policy.forbid_consecutive_media:
        for index in range(1, len(blocks)):
            if is_media_block(blocks[index]) and is_media_block(blocks[index - 1]):
                issues.error(
                    MediaValidationErrorType.CONSECUTIVE_MEDIA_BLOCKS,
                    "Media blocks must be separated by text",
                    blocks[index],
                    index,
                )


def _validate_unique_ids(blocks: Sequence[ContentBlock], issues: _Collector) -> None:
    seen: set[str] = set()
    for index, block in enumerate(blocks):
        if block.id in seen:
            issues.error(MediaValidationErrorType.DUPLICATE_BLOCK_ID, f"Duplicate block id {block.id!r}", block, index)
        seen.add(block.id)


# === EDITOR GUARDS ===


def is_valid_block_order(
    blocks: Sequence[ContentBlock],
    policy: MediaPlacementPolicy = PLACEMENT_POLICY,
) -> MediaValidationResult:
    """Ordering-only check for drag and drop. Warnings are not surfaced."""
    result = validate_media_blocks(blocks, policy)
    order_errors = [error for error in result.errors if error.type in ORDER_ERROR_TYPES]
    return MediaValidationResult(is_valid=not order_errors, errors=order_errors, warnings=[])


def can_insert_media_at(
    blocks: Sequence[ContentBlock],
    position: int,
    media_type: Literal["image", "video"],
    policy: MediaPlacementPolicy = PLACEMENT_POLICY,
) -> InsertCheck:
    """Whether a new media block may be inserted at ``position`` (0..len(blocks))."""
    if position < 0 or position > len(blocks):
        return InsertCheck(valid=False, reason=f"Position {position} is outside the article")

    if media_type == "image":
        image_count = sum(1 for block in blocks if is_image_block(block))
        if image_count >= MAX_IMAGES:
            return InsertCheck(
                valid=False,
                reason=f"Maximum {MAX_IMAGES} images allowed",
                error_type=MediaValidationErrorType.IMAGE_LIMIT_EXCEEDED,
            )

    if policy.require_text_boundaries:
        if position == 0:
            return InsertCheck(
                valid=False,
                reason="Media cannot be the first block",
                error_type=MediaValidationErrorType.ARTICLE_STARTS_WITH_MEDIA,
            )
        if position == len(blocks):
            return InsertCheck(
                valid=False,
                reason="Media cannot be the last block",
                error_type=MediaValidationErrorType.ARTICLE_ENDS_WITH_MEDIA,
            )

    if policy.forbid_consecutive_media:
        if position > 0 and not is_text_block(blocks[position - 1]):
            return InsertCheck(
                valid=False,
                reason="Media needs a text block directly before it",
                error_type=MediaValidationErrorType.NO_TEXT_CONTEXT_BEFORE,
            )
        if position < len(blocks) and not is_text_block(blocks[position]):
            return InsertCheck(
                valid=False,
                reason="Media needs a text block directly after it",
                error_type=MediaValidationErrorType.NO_TEXT_CONTEXT_AFTER,
            )

    return InsertCheck(valid=True)


# === UPLOAD PRE-CHECK ===


def validate_image_file(size: int, mime_type: str, filename: str | None = None) -> MediaValidationResult:
    """Check an image upload's declared size and type before it is processed."""
    issues = _Collector()
    label = f"{filename!r} " if filename else ""

    if size > MAX_IMAGE_SIZE_BYTES:
        size_mb = size / (1024 * 1024)
        max_mb = MAX_IMAGE_SIZE_BYTES // (1024 * 1024)
        issues.error(
            MediaValidationErrorType.IMAGE_TOO_LARGE,
            f"Image file {label}is {size_mb:.2f}MB. Maximum allowed is {max_mb}MB.",
        )

    if mime_type not in ALLOWED_IMAGE_FORMATS:
        issues.error(
            MediaValidationErrorType.INVALID_IMAGE_FORMAT,
            f'Image format "{mime_type}" is not supported. Allowed: JPEG, PNG, WebP, AVIF',
        )

    return issues.result()
