"""Serialize content blocks back to canonical body text.

The output is canonical, not byte-preserving: parsing it again yields the same
blocks (modulo IDs), but original whitespace and quote style are not kept.
"""

from typing import Sequence

from copydesk.content.models import (
    ContentBlock,
    ImageBlock,
    ParagraphBlock,
    QuoteBlock,
    SubheadingBlock,
    VideoBlock,
    is_media_block,
)
from copydesk.content.scanner import ATTRIBUTION_RE, FENCE_MARKER, QUOTE_FENCE, split_attribution


def serialize(blocks: Sequence[ContentBlock]) -> str:
    # Without a media fence the output re-parses in legacy mode, where :::quote is plain text
    legacy_body = not any(is_media_block(block) for block in blocks)
    lines: list[str] = []
    for block in blocks:
        lines.extend(serialize_block(block, legacy_body=legacy_body))
        lines.append("")
    return "\n".join(lines).strip()


def serialize_block(block: ContentBlock, *, legacy_body: bool = False) -> list[str]:
    """Lines for a single block, without the trailing separator.

    ``legacy_body`` prefers the one-line `> "text" — attribution` quote form, which
    both parser modes read back.
    """
    match block:
        case ParagraphBlock():
            return [block.content]
        case SubheadingBlock():
            return [f"## {block.content}"]
        case QuoteBlock():
            return _quote_lines(block, legacy_body)
        case ImageBlock():
            return _fence_lines(
                "image",
                [
                    ("src", block.src),
                    ("alt", block.alt),
                    ("width", block.width),
                    ("height", block.height),
                    ("caption", block.caption),
                    ("credit", block.credit),
                    ("srcset", block.srcset),
                ],
            )
        case VideoBlock():
            return _fence_lines(
                "video",
                [
                    ("provider", block.provider),
                    ("videoId", block.video_id),
                    ("embedUrl", block.embed_url),
                    ("posterUrl", block.poster_url),
                    ("caption", block.caption),
                    ("duration", block.duration),
                    ("title", block.title),
                ],
            )
        case _:
            raise TypeError(f"Cannot serialize {type(block).__name__}")


def _quote_lines(block: QuoteBlock, legacy_body: bool = False) -> list[str]:
    # A one-line "> ..." quote only survives re-parsing when it is a single line
    # that does not itself look like `"text" — attribution`
    inline = not block.attribution and "\n" not in block.content and not ATTRIBUTION_RE.match(block.content)
    if inline:
        return [f"> {block.content}"]

    if legacy_body and block.attribution and "\n" not in block.content:
        line = f'"{block.content}" — {block.attribution}'
        if split_attribution(line.strip()) == (block.content, block.attribution):
            return [f"> {line}"]

    lines = [QUOTE_FENCE, *block.content.split("\n")]
    if block.attribution:
        lines.append(f"attribution: {block.attribution}")
    lines.append(FENCE_MARKER)
    return lines


def _fence_lines(kind: str, properties: list[tuple[str, str | int | None]]) -> list[str]:
    lines = [f"{FENCE_MARKER}{kind}"]
    lines.extend(f"{key}: {value}" for key, value in properties if value is not None and value != "")
    lines.append(FENCE_MARKER)
    return lines
