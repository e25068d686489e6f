"""Article body parsing and serialization to structured content blocks."""

from copydesk.content.ids import BlockIdGenerator
from copydesk.content.models import (
    AspectRatio,
    ContentBlock,
    ContentBlockType,
    ImageBlock,
    MediaSummary,
    ParagraphBlock,
    ParseError,
    ParseErrorKind,
    ParseResult,
    QuoteBlock,
    SubheadingBlock,
    VideoBlock,
    calculate_media_summary,
    create_image_block,
    create_paragraph_block,
    create_quote_block,
    create_subheading_block,
    create_video_block,
    is_image_block,
    is_media_block,
    is_text_block,
    is_video_block,
    reorder_blocks,
)
from copydesk.content.parser import is_block_based_content, is_legacy_content, parse
from copydesk.content.serializer import serialize

__all__ = [
    # Parser
    "parse",
    "is_block_based_content",
    "is_legacy_content",
    # Serializer
    "serialize",
    # IDs
    "BlockIdGenerator",
    # Models
    "ContentBlock",
    "ContentBlockType",
    "ParagraphBlock",
    "SubheadingBlock",
    "QuoteBlock",
    "ImageBlock",
    "VideoBlock",
    "AspectRatio",
    "ParseError",
    "ParseErrorKind",
    "ParseResult",
    "MediaSummary",
    # Helpers
    "is_text_block",
    "is_media_block",
    "is_image_block",
    "is_video_block",
    "reorder_blocks",
    "calculate_media_summary",
    "create_paragraph_block",
    "create_subheading_block",
    "create_quote_block",
    "create_image_block",
    "create_video_block",
]
