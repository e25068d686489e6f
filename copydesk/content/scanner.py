"""Line-oriented scanner for the fenced block syntax.

Recognizes blank lines, ``##``/``###`` headings, ``>`` quote lines, ``:::quote``
fences and ``:::image``/``:::video`` property fences. Fence bodies are returned as
raw, untyped structures (RawFence, RawQuote); lifting them into typed blocks is
the parser's job.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Literal

from copydesk.content.models import ParseError, ParseErrorKind

MEDIA_FENCE_RE = re.compile(r"^:::(image|video)\s*$")
HEADING_RE = re.compile(r"^#{2,3}\s+")
QUOTE_PREFIX_RE = re.compile(r"^>\s*")
PROPERTY_RE = re.compile(r"^(\w+):\s*(.*)$")
# "Quoted text" — Attribution (straight or curly quotes; em dash, en dash or hyphen)
ATTRIBUTION_RE = re.compile(r"^[\"“”](.+)[\"“”](?:\s*[—–-]\s*(.+))?$")

FENCE_MARKER = ":::"
QUOTE_FENCE = ":::quote"
ATTRIBUTION_KEY = "attribution:"


class LineKind(StrEnum):
    BLANK = auto()
    MEDIA_FENCE = auto()
    QUOTE_FENCE = auto()
    STRAY_FENCE = auto()
    HEADING = auto()
    QUOTE = auto()
    TEXT = auto()


_PARAGRAPH_STOPS = frozenset(
    {LineKind.BLANK, LineKind.MEDIA_FENCE, LineKind.QUOTE_FENCE, LineKind.STRAY_FENCE, LineKind.HEADING}
)


def classify_line(line: str) -> LineKind:
    stripped = line.strip()
    if not stripped:
        return LineKind.BLANK
    if MEDIA_FENCE_RE.match(stripped):
        return LineKind.MEDIA_FENCE
    if stripped == QUOTE_FENCE:
        return LineKind.QUOTE_FENCE
    if stripped.startswith(FENCE_MARKER):
        return LineKind.STRAY_FENCE
    if HEADING_RE.match(stripped):
        return LineKind.HEADING
    if QUOTE_PREFIX_RE.match(stripped):
        return LineKind.QUOTE
    return LineKind.TEXT


def heading_text(line: str) -> str:
    return HEADING_RE.sub("", line.strip(), count=1)


def quote_text(line: str) -> str:
    return QUOTE_PREFIX_RE.sub("", line.strip(), count=1)


def split_attribution(text: str) -> tuple[str, str | None]:
    """Split ``"Quote" — Attribution`` into its parts.

    Text that does not follow the pattern is returned whole, without attribution.
    """
    match = ATTRIBUTION_RE.match(text)
    if not match:
        return text, None
    return match.group(1), match.group(2)


@dataclass
class RawFence:
    """Property bag of an ``:::image`` / ``:::video`` fence, before typing."""

    kind: Literal["image", "video"]
    properties: dict[str, str]
    start_line: int
    end_line: int


@dataclass
class RawQuote:
    content: str
    attribution: str | None
    start_line: int
    end_line: int


@dataclass
class FenceScanner:
    """Cursor over the lines of a body. Line numbers reported are 1-based."""

    lines: list[str]
    pos: int = 0
    errors: list[ParseError] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> "FenceScanner":
        return cls(lines=text.split("\n"))

    @property
    def done(self) -> bool:
        return self.pos >= len(self.lines)

    @property
    def line_number(self) -> int:
        return self.pos + 1

    def current(self) -> str:
        return self.lines[self.pos]

    def current_kind(self) -> LineKind:
        return classify_line(self.lines[self.pos])

    def advance(self) -> str:
        line = self.lines[self.pos]
        self.pos += 1
        return line

    def skip_blank(self) -> None:
        while not self.done and self.current_kind() == LineKind.BLANK:
            self.pos += 1

    def error(self, line: int, kind: ParseErrorKind, message: str, content: str | None = None) -> None:
        self.errors.append(ParseError(line=line, kind=kind, message=message, content=content))

    def read_property_fence(self) -> RawFence | None:
        """Read an image/video fence starting at the cursor.

        Returns None when the fence is never closed; the rest of the input is
        consumed in that case.
        """
        start_line = self.line_number
        opener = self.advance().strip()
        match = MEDIA_FENCE_RE.match(opener)
        assert match, f"read_property_fence called on {opener!r}"
        kind: Literal["image", "video"] = "image" if match.group(1) == "image" else "video"
        properties: dict[str, str] = {}

        while not self.done:
            line_number = self.line_number
            line = self.advance().strip()
            if line == FENCE_MARKER:
                return RawFence(kind=kind, properties=properties, start_line=start_line, end_line=line_number)
            if prop := PROPERTY_RE.match(line):
                properties[prop.group(1)] = prop.group(2).strip()
            elif line:
                self.error(
                    line_number,
                    ParseErrorKind.INVALID_PROPERTY,
                    f"Invalid property format in {kind} block",
                    content=line,
                )

        self.error(start_line, ParseErrorKind.UNCLOSED_FENCE, f"Unclosed {kind} fence block")
        return None

    def read_quote_fence(self) -> RawQuote | None:
        """Read a ``:::quote`` fence; an ``attribution:`` line is pulled out of the content."""
        start_line = self.line_number
        self.advance()
        content_lines: list[str] = []
        attribution: str | None = None

        while not self.done:
            line_number = self.line_number
            line = self.advance().strip()
            if line == FENCE_MARKER:
                return RawQuote(
                    content="\n".join(content_lines).strip(),
                    attribution=attribution,
                    start_line=start_line,
                    end_line=line_number,
                )
            if line.startswith(ATTRIBUTION_KEY):
                attribution = line[len(ATTRIBUTION_KEY) :].strip() or None
            else:
                content_lines.append(line)

        self.error(start_line, ParseErrorKind.UNCLOSED_FENCE, "Unclosed quote fence block")
        return None

    def read_paragraph(self) -> str:
        """Collect paragraph lines until a blank line, a fence line or a heading.

        The line under the cursor always belongs to the paragraph; following lines
        are checked before being consumed so a fence or heading is left in place.
        """
        paragraph_lines = [self.advance()]
        while not self.done:
            kind = self.current_kind()
            if kind in _PARAGRAPH_STOPS:
                break
            paragraph_lines.append(self.advance())
        return "\n".join(paragraph_lines).strip()
