"""Data models for article body content.

The core abstraction is the content block: one typed unit of the article body.
Text blocks (paragraph, subheading, quote) carry prose; media blocks (image, video)
are URL references with the metadata needed to lay them out. Blocks form a
discriminated union on ``type``.

Media fields are deliberately lenient (``alt``, ``width``, ``poster_url`` may be
missing) so that block lists submitted by the editor reach the validator, which
reports what is wrong instead of failing deserialization.
"""

from enum import StrEnum, auto
from typing import Annotated, Literal, Sequence, TypeGuard

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from copydesk.constants import MAX_IMAGES, MAX_VIDEOS
from copydesk.content.ids import BlockIdGenerator, default_generator


class ContentBlockType(StrEnum):
    PARAGRAPH = auto()
    SUBHEADING = auto()
    QUOTE = auto()
    IMAGE = auto()
    VIDEO = auto()


TEXT_BLOCK_TYPES = frozenset({ContentBlockType.PARAGRAPH, ContentBlockType.SUBHEADING, ContentBlockType.QUOTE})
MEDIA_BLOCK_TYPES = frozenset({ContentBlockType.IMAGE, ContentBlockType.VIDEO})


class AspectRatio(StrEnum):
    WIDESCREEN = "16:9"
    STANDARD = "4:3"
    CLASSIC = "3:2"
    SQUARE = "1:1"
    PORTRAIT = "2:3"
    VERTICAL = "9:16"
    ORIGINAL = "original"


class WireModel(BaseModel):
    """Base for everything that crosses the JSON boundary (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# === TEXT BLOCKS ===


class ParagraphBlock(WireModel):
    type: Literal["paragraph"] = "paragraph"
    id: str
    order: int = 0
    content: str


class SubheadingBlock(WireModel):
    type: Literal["subheading"] = "subheading"
    id: str
    order: int = 0
    content: str


class QuoteBlock(WireModel):
    type: Literal["quote"] = "quote"
    id: str
    order: int = 0
    content: str
    attribution: str | None = None


# === MEDIA BLOCKS ===


class ImageBlock(WireModel):
    type: Literal["image"] = "image"
    id: str
    order: int = 0
    src: str = ""
    alt: str | None = None  # Required for publishing, checked by the validator
    caption: str | None = None
    credit: str | None = None
    width: int | None = None
    height: int | None = None
    aspect_ratio: AspectRatio = AspectRatio.ORIGINAL
    srcset: str | None = None


class VideoBlock(WireModel):
    type: Literal["video"] = "video"
    id: str
    order: int = 0
    provider: str = ""  # One of VideoProvider; kept as str so bad values reach the validator
    video_id: str = ""
    embed_url: str = ""
    poster_url: str = ""  # Facade image, required for publishing
    caption: str | None = None
    duration: int | None = None  # seconds
    title: str | None = None


TextBlock = ParagraphBlock | SubheadingBlock | QuoteBlock
MediaBlock = ImageBlock | VideoBlock

ContentBlock = Annotated[
    ParagraphBlock | SubheadingBlock | QuoteBlock | ImageBlock | VideoBlock,
    Field(discriminator="type"),
]


# === PARSE RESULT ===


class ParseErrorKind(StrEnum):
    UNCLOSED_FENCE = auto()
    INVALID_FENCE = auto()
    INVALID_PROPERTY = auto()
    MISSING_PROPERTY = auto()
    INVALID_DIMENSIONS = auto()
    INVALID_PROVIDER = auto()


class ParseError(WireModel):
    """A structural problem in the body text. Line numbers are 1-based."""

    line: int
    message: str
    kind: ParseErrorKind
    content: str | None = None


class ParseResult(WireModel):
    blocks: list[ContentBlock] = Field(default_factory=list)
    success: bool = True
    errors: list[ParseError] = Field(default_factory=list)
    is_legacy: bool = False


class MediaSummary(WireModel):
    image_count: int
    video_count: int
    has_video: bool


# === TYPE GUARDS ===


def is_text_block(block: ContentBlock) -> TypeGuard[TextBlock]:
    return block.type in TEXT_BLOCK_TYPES


def is_media_block(block: ContentBlock) -> TypeGuard[MediaBlock]:
    return block.type in MEDIA_BLOCK_TYPES


def is_image_block(block: ContentBlock) -> TypeGuard[ImageBlock]:
    return block.type == ContentBlockType.IMAGE


def is_video_block(block: ContentBlock) -> TypeGuard[VideoBlock]:
    return block.type == ContentBlockType.VIDEO


def is_paragraph_block(block: ContentBlock) -> TypeGuard[ParagraphBlock]:
    return block.type == ContentBlockType.PARAGRAPH


def is_subheading_block(block: ContentBlock) -> TypeGuard[SubheadingBlock]:
    return block.type == ContentBlockType.SUBHEADING


def is_quote_block(block: ContentBlock) -> TypeGuard[QuoteBlock]:
    return block.type == ContentBlockType.QUOTE


# === LIST UTILITIES ===


def reorder_blocks(blocks: Sequence[ContentBlock]) -> list[ContentBlock]:
    """Return copies of the blocks with ``order`` rewritten to match list position."""
    return [block.model_copy(update={"order": index}) for index, block in enumerate(blocks)]


def calculate_media_summary(blocks: Sequence[ContentBlock]) -> MediaSummary:
    image_count = sum(1 for block in blocks if is_image_block(block))
    video_count = sum(1 for block in blocks if is_video_block(block))
    return MediaSummary(image_count=image_count, video_count=video_count, has_video=video_count > 0)


def can_add_image(blocks: Sequence[ContentBlock]) -> bool:
    return calculate_media_summary(blocks).image_count < MAX_IMAGES


def should_warn_about_video(blocks: Sequence[ContentBlock]) -> bool:
    """True when one more video would go over the soft limit."""
    return calculate_media_summary(blocks).video_count >= MAX_VIDEOS


def remaining_image_slots(blocks: Sequence[ContentBlock]) -> int:
    return max(0, MAX_IMAGES - calculate_media_summary(blocks).image_count)


# === BLOCK CONSTRUCTION ===


def _ids(ids: BlockIdGenerator | None) -> BlockIdGenerator:
    return ids if ids is not None else default_generator


def create_paragraph_block(content: str, order: int = 0, *, ids: BlockIdGenerator | None = None) -> ParagraphBlock:
    return ParagraphBlock(id=_ids(ids).next_id(ContentBlockType.PARAGRAPH), order=order, content=content)


def create_subheading_block(content: str, order: int = 0, *, ids: BlockIdGenerator | None = None) -> SubheadingBlock:
    return SubheadingBlock(id=_ids(ids).next_id(ContentBlockType.SUBHEADING), order=order, content=content)


def create_quote_block(
    content: str,
    order: int = 0,
    attribution: str | None = None,
    *,
    ids: BlockIdGenerator | None = None,
) -> QuoteBlock:
    return QuoteBlock(
        id=_ids(ids).next_id(ContentBlockType.QUOTE),
        order=order,
        content=content,
        attribution=attribution,
    )


def create_image_block(order: int = 0, *, ids: BlockIdGenerator | None = None, **fields) -> ImageBlock:
    """Create an image block; ``fields`` are ImageBlock attributes (src, alt, width, ...)."""
    return ImageBlock(id=_ids(ids).next_id(ContentBlockType.IMAGE), order=order, **fields)


def create_video_block(order: int = 0, *, ids: BlockIdGenerator | None = None, **fields) -> VideoBlock:
    """Create a video block; ``fields`` are VideoBlock attributes (provider, video_id, ...)."""
    return VideoBlock(id=_ids(ids).next_id(ContentBlockType.VIDEO), order=order, **fields)
