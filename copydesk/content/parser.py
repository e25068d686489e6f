"""Parse article body text into content blocks.

Two modes:
- legacy: plain text without media fences. Best effort, never reports errors.
- block: text containing at least one ``:::image`` / ``:::video`` fence. Strict,
  collects every structural problem as a ParseError instead of stopping at the
  first one.

Block syntax::

    ## Subheading

    > "Quoted text" — Attribution

    :::quote
    Longer quote
    attribution: Someone
    :::

    :::image
    src: /media/images/photo.webp
    alt: Description here
    width: 1200
    height: 800
    :::

    :::video
    provider: youtube
    videoId: dQw4w9WgXcQ
    :::
"""

import re

from loguru import logger

from copydesk.content.ids import BlockIdGenerator, default_generator
from copydesk.content.models import (
    AspectRatio,
    ContentBlock,
    ContentBlockType,
    ImageBlock,
    ParagraphBlock,
    ParseError,
    ParseErrorKind,
    ParseResult,
    QuoteBlock,
    SubheadingBlock,
    VideoBlock,
    reorder_blocks,
)
from copydesk.content.scanner import (
    FenceScanner,
    LineKind,
    RawFence,
    classify_line,
    heading_text,
    quote_text,
    split_attribution,
)
from copydesk.media.video_providers import ALLOWED_VIDEO_PROVIDERS, generate_embed_url, generate_poster_url

_BLOCK_CONTENT_RE = re.compile(r"^:::(?:image|video)\s*$", re.MULTILINE)
_DIGITS_RE = re.compile(r"[0-9]+")

ASPECT_RATIO_TOLERANCE = 0.1
_STANDARD_RATIOS = [
    (16 / 9, AspectRatio.WIDESCREEN),
    (4 / 3, AspectRatio.STANDARD),
    (3 / 2, AspectRatio.CLASSIC),
    (1.0, AspectRatio.SQUARE),
    (2 / 3, AspectRatio.PORTRAIT),
    (9 / 16, AspectRatio.VERTICAL),
]


def is_block_based_content(body: str) -> bool:
    """True when the body contains at least one media fence opener."""
    return bool(_BLOCK_CONTENT_RE.search(body))


def is_legacy_content(body: str) -> bool:
    return not is_block_based_content(body)


def parse(body: str, *, id_generator: BlockIdGenerator | None = None) -> ParseResult:
    """Parse body text into blocks.

    Args:
        body: Raw article body.
        id_generator: Source of block IDs. The module-wide default generator is used when omitted.

    Returns:
        ParseResult with the blocks that parsed cleanly. Fences that failed are
        left out entirely; ``success`` is False whenever ``errors`` is non-empty.
    """
    if not body or not body.strip():
        return ParseResult(blocks=[], success=True, errors=[], is_legacy=False)

    ids = id_generator if id_generator is not None else default_generator

    if is_legacy_content(body):
        blocks = _parse_legacy(body, ids)
        logger.debug(f"Parsed legacy body into {len(blocks)} blocks")
        return ParseResult(blocks=reorder_blocks(blocks), success=True, errors=[], is_legacy=True)

    scanner = FenceScanner.from_text(body)
    blocks = _parse_block_content(scanner, ids)
    if scanner.errors:
        logger.debug(f"Parsed block body into {len(blocks)} blocks with {len(scanner.errors)} errors")
    else:
        logger.debug(f"Parsed block body into {len(blocks)} blocks")

    return ParseResult(
        blocks=reorder_blocks(blocks),
        success=not scanner.errors,
        errors=scanner.errors,
        is_legacy=False,
    )


# === LEGACY MODE ===


def _parse_legacy(body: str, ids: BlockIdGenerator) -> list[ContentBlock]:
    blocks: list[ContentBlock] = []
    paragraph: list[str] = []

    def flush_paragraph() -> None:
        content = "\n".join(paragraph).strip()
        if content:
            blocks.append(ParagraphBlock(id=ids.next_id(ContentBlockType.PARAGRAPH), content=content))
        paragraph.clear()

    for line in body.split("\n"):
        match classify_line(line):
            case LineKind.HEADING:
                flush_paragraph()
                blocks.append(SubheadingBlock(id=ids.next_id(ContentBlockType.SUBHEADING), content=heading_text(line)))
            case LineKind.QUOTE:
                flush_paragraph()
                blocks.append(_inline_quote(line, ids))
            case LineKind.BLANK:
                flush_paragraph()
            case _:
                # Fence markers have no meaning in legacy text
                paragraph.append(line)

    flush_paragraph()
    return blocks


def _inline_quote(line: str, ids: BlockIdGenerator) -> QuoteBlock:
    content, attribution = split_attribution(quote_text(line))
    return QuoteBlock(id=ids.next_id(ContentBlockType.QUOTE), content=content, attribution=attribution)


# === BLOCK MODE ===


def _parse_block_content(scanner: FenceScanner, ids: BlockIdGenerator) -> list[ContentBlock]:
    blocks: list[ContentBlock] = []

    while True:
        scanner.skip_blank()
        if scanner.done:
            break

        match scanner.current_kind():
            case LineKind.MEDIA_FENCE:
                fence = scanner.read_property_fence()
                if fence is None:
                    continue
                block = _lift_fence(fence, ids, scanner.errors)
                if block is not None:
                    blocks.append(block)
            case LineKind.QUOTE_FENCE:
                quote = scanner.read_quote_fence()
                if quote is not None:
                    blocks.append(
                        QuoteBlock(
                            id=ids.next_id(ContentBlockType.QUOTE),
                            content=quote.content,
                            attribution=quote.attribution,
                        )
                    )
            case LineKind.STRAY_FENCE:
                line_number = scanner.line_number
                line = scanner.advance().strip()
                scanner.error(line_number, ParseErrorKind.INVALID_FENCE, "Invalid fence opening", content=line)
            case LineKind.HEADING:
                line = scanner.advance()
                blocks.append(SubheadingBlock(id=ids.next_id(ContentBlockType.SUBHEADING), content=heading_text(line)))
            case LineKind.QUOTE:
                blocks.append(_inline_quote(scanner.advance(), ids))
            case _:
                content = scanner.read_paragraph()
                blocks.append(ParagraphBlock(id=ids.next_id(ContentBlockType.PARAGRAPH), content=content))

    return blocks


# === FENCE LIFTING ===
# The only place where untyped property maps are turned into blocks.


def _lift_fence(fence: RawFence, ids: BlockIdGenerator, errors: list[ParseError]) -> ContentBlock | None:
    if fence.kind == "image":
        return image_from_fence(fence, ids, errors)
    return video_from_fence(fence, ids, errors)


def image_from_fence(fence: RawFence, ids: BlockIdGenerator, errors: list[ParseError]) -> ImageBlock | None:
    props = fence.properties
    problems: list[ParseError] = []

    for key in ("src", "alt"):
        if not props.get(key):
            problems.append(
                ParseError(
                    line=fence.start_line,
                    kind=ParseErrorKind.MISSING_PROPERTY,
                    message=f'Image block missing required "{key}" property',
                )
            )

    width = _positive_int(props.get("width"))
    height = _positive_int(props.get("height"))
    if width is None or height is None:
        problems.append(
            ParseError(
                line=fence.start_line,
                kind=ParseErrorKind.INVALID_DIMENSIONS,
                message='Image block requires valid "width" and "height" properties',
            )
        )

    if problems or width is None or height is None:
        errors.extend(problems)
        return None

    return ImageBlock(
        id=ids.next_id(ContentBlockType.IMAGE),
        src=props["src"],
        alt=props["alt"],
        caption=props.get("caption") or None,
        credit=props.get("credit") or None,
        width=width,
        height=height,
        aspect_ratio=calculate_aspect_ratio(width, height),
        srcset=props.get("srcset") or None,
    )


def video_from_fence(fence: RawFence, ids: BlockIdGenerator, errors: list[ParseError]) -> VideoBlock | None:
    props = fence.properties
    problems: list[ParseError] = []

    provider = props.get("provider", "")
    if not provider:
        problems.append(
            ParseError(
                line=fence.start_line,
                kind=ParseErrorKind.MISSING_PROPERTY,
                message='Video block missing required "provider" property',
            )
        )
    elif provider not in ALLOWED_VIDEO_PROVIDERS:
        problems.append(
            ParseError(
                line=fence.start_line,
                kind=ParseErrorKind.INVALID_PROVIDER,
                message=f"Invalid video provider: {provider}. Must be: {', '.join(ALLOWED_VIDEO_PROVIDERS)}",
                content=provider,
            )
        )

    video_id = props.get("videoId", "")
    if not video_id:
        problems.append(
            ParseError(
                line=fence.start_line,
                kind=ParseErrorKind.MISSING_PROPERTY,
                message='Video block missing required "videoId" property',
            )
        )

    duration: int | None = None
    if raw_duration := props.get("duration"):
        try:
            duration = _whole_number(raw_duration)
        except ValueError:
            problems.append(
                ParseError(
                    line=fence.start_line,
                    kind=ParseErrorKind.INVALID_PROPERTY,
                    message='Video "duration" must be a whole number of seconds',
                    content=raw_duration,
                )
            )

    if problems:
        errors.extend(problems)
        return None

    # Poster stays empty for vimeo/cdn when not given; the validator flags it
    return VideoBlock(
        id=ids.next_id(ContentBlockType.VIDEO),
        provider=provider,
        video_id=video_id,
        embed_url=props.get("embedUrl") or generate_embed_url(provider, video_id),
        poster_url=props.get("posterUrl") or generate_poster_url(provider, video_id),
        caption=props.get("caption") or None,
        duration=duration,
        title=props.get("title") or None,
    )


def calculate_aspect_ratio(width: int, height: int) -> AspectRatio:
    """Nearest standard aspect ratio within tolerance, else ORIGINAL."""
    ratio = width / height
    distance, nearest = min((abs(ratio - standard), aspect) for standard, aspect in _STANDARD_RATIOS)
    if distance < ASPECT_RATIO_TOLERANCE:
        return nearest
    return AspectRatio.ORIGINAL


def _whole_number(value: str) -> int:
    """Parse a run of ASCII digits; int() alone is more permissive."""
    if not _DIGITS_RE.fullmatch(value):
        raise ValueError(f"Not a whole number: {value!r}")
    return int(value)


def _positive_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        number = _whole_number(value)
    except ValueError:
        return None
    return number if number > 0 else None
