"""Tests for media and structure validation of block lists."""

import pytest

from copydesk.content import ImageBlock, ParagraphBlock, QuoteBlock, SubheadingBlock, VideoBlock
from copydesk.validation import (
    RELAXED_PLACEMENT,
    MediaValidationErrorType,
    MediaValidationWarningType,
    can_insert_media_at,
    is_valid_block_order,
    validate_image_file,
    validate_media_blocks,
)

E = MediaValidationErrorType
W = MediaValidationWarningType

_counter = 0


def _next_id(prefix: str) -> str:
    global _counter
    _counter += 1
    return f"{prefix}-{_counter}"


def text(content: str = "Some text") -> ParagraphBlock:
    return ParagraphBlock(id=_next_id("par"), content=content)


def image(**overrides) -> ImageBlock:
    fields = dict(
        id=_next_id("ima"),
        src="/media/a.webp",
        alt="Alt text",
        width=1200,
        height=800,
        caption="Caption",
        credit="Agency",
    )
    fields.update(overrides)
    return ImageBlock(**fields)


def video(**overrides) -> VideoBlock:
    fields = dict(
        id=_next_id("vid"),
        provider="youtube",
        video_id="dQw4w9WgXcQ",
        embed_url="https://www.youtube.com/embed/dQw4w9WgXcQ",
        poster_url="https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg",
        caption="Caption",
    )
    fields.update(overrides)
    return VideoBlock(**fields)


def error_types(result) -> list[MediaValidationErrorType]:
    return [error.type for error in result.errors]


def warning_types(result) -> list[MediaValidationWarningType]:
    return [warning.type for warning in result.warnings]


# === STRUCTURE ===


class TestStructure:
    def test_valid_article(self):
        result = validate_media_blocks([text(), image(), text(), video(), text()])
        assert result.is_valid is True
        assert result.errors == []
        assert result.warnings == []

    def test_empty_list(self):
        result = validate_media_blocks([])
        assert error_types(result) == [E.EMPTY_BLOCKS]
        assert result.is_valid is False

    def test_media_only(self):
        result = validate_media_blocks([image()], policy=RELAXED_PLACEMENT)
        assert error_types(result) == [E.MEDIA_ONLY_ARTICLE]

    def test_text_only_is_valid(self):
        blocks = [text(), SubheadingBlock(id="s", content="Heading"), QuoteBlock(id="q", content="Quote")]
        assert validate_media_blocks(blocks).is_valid is True

    def test_duplicate_ids(self):
        first = text()
        second = ParagraphBlock(id=first.id, content="Copy")
        result = validate_media_blocks([first, second])
        assert error_types(result) == [E.DUPLICATE_BLOCK_ID]
        assert result.errors[0].block_index == 1

    def test_is_valid_mirrors_errors(self):
        cases = [[], [text()], [image()], [text(), image(alt=None), text()], [text(), video(), text(), video(), text()]]
        for blocks in cases:
            result = validate_media_blocks(blocks)
            assert result.is_valid == (not result.errors)


# === LIMITS ===


class TestLimits:
    def test_fourth_image_only_adds_ceiling_error(self):
        blocks = [text()]
        for _ in range(3):
            blocks += [image(caption=None), text()]
        at_ceiling = validate_media_blocks(blocks)
        over_ceiling = validate_media_blocks([*blocks, image(), text()])

        assert at_ceiling.is_valid is True
        assert error_types(over_ceiling) == [E.IMAGE_LIMIT_EXCEEDED]
        assert over_ceiling.is_valid is False
        assert over_ceiling.warnings == at_ceiling.warnings
        assert warning_types(at_ceiling) == [W.MISSING_CAPTION] * 3

    def test_three_images_allowed(self):
        blocks = [text()]
        for _ in range(3):
            blocks += [image(), text()]
        assert validate_media_blocks(blocks).is_valid is True

    def test_two_videos_only_warn(self):
        result = validate_media_blocks([text(), video(), text(), video(), text()])
        assert result.is_valid is True
        assert warning_types(result) == [W.VIDEO_SOFT_LIMIT]


# === IMAGE FIELDS ===


class TestImageFields:
    def test_missing_alt(self):
        blocks = [text(), image(alt=None), text()]
        result = validate_media_blocks(blocks)
        assert error_types(result) == [E.MISSING_ALT_TEXT]
        assert result.errors[0].block_id == blocks[1].id
        assert result.errors[0].block_index == 1

    @pytest.mark.parametrize("alt", ["", "   "])
    def test_blank_alt(self, alt):
        result = validate_media_blocks([text(), image(alt=alt), text()])
        assert error_types(result) == [E.EMPTY_ALT_TEXT]

    @pytest.mark.parametrize("width,height", [(None, 800), (1200, None), (0, 800)])
    def test_missing_dimensions(self, width, height):
        result = validate_media_blocks([text(), image(width=width, height=height), text()])
        assert error_types(result) == [E.MISSING_DIMENSIONS]

    def test_negative_dimensions(self):
        result = validate_media_blocks([text(), image(width=-1, height=800), text()])
        assert error_types(result) == [E.INVALID_DIMENSIONS]

    def test_missing_src(self):
        result = validate_media_blocks([text(), image(src=""), text()])
        assert error_types(result) == [E.INVALID_IMAGE_URL]

    def test_caption_and_credit_warnings(self):
        result = validate_media_blocks([text(), image(caption=None, credit=" "), text()])
        assert result.is_valid is True
        assert warning_types(result) == [W.MISSING_CAPTION, W.MISSING_CREDIT]


# === VIDEO FIELDS ===


class TestVideoFields:
    def test_unknown_provider(self):
        result = validate_media_blocks([text(), video(provider="dailymotion"), text()])
        assert error_types(result) == [E.INVALID_VIDEO_PROVIDER]

    def test_missing_id_and_embed(self):
        result = validate_media_blocks([text(), video(video_id="", embed_url=""), text()])
        assert error_types(result) == [E.INVALID_VIDEO_URL, E.INVALID_VIDEO_URL]

    def test_missing_poster(self):
        result = validate_media_blocks([text(), video(poster_url=""), text()])
        assert error_types(result) == [E.MISSING_POSTER_URL]

    def test_missing_caption_warns(self):
        result = validate_media_blocks([text(), video(caption=None), text()])
        assert result.is_valid is True
        assert warning_types(result) == [W.MISSING_CAPTION]


# === PLACEMENT ===


class TestPlacement:
    def test_starts_with_media(self):
        result = validate_media_blocks([image(), text()])
        assert error_types(result) == [E.ARTICLE_STARTS_WITH_MEDIA]
        assert result.errors[0].block_index == 0

    def test_ends_with_media(self):
        blocks = [text(), video()]
        result = validate_media_blocks(blocks)
        assert error_types(result) == [E.ARTICLE_ENDS_WITH_MEDIA]
        assert result.errors[0].block_index == 1

    def test_consecutive_media(self):
        blocks = [text(), image(), video(), text()]
        result = validate_media_blocks(blocks)
        assert error_types(result) == [E.CONSECUTIVE_MEDIA_BLOCKS]
        assert result.errors[0].block_id == blocks[2].id

    def test_relaxed_policy_ignores_placement(self):
        result = validate_media_blocks([image(), video(), text(), image()], policy=RELAXED_PLACEMENT)
        assert result.is_valid is True

    def test_all_problems_reported_together(self):
        result = validate_media_blocks([image(alt=None), image(), text(), video(poster_url="")])
        assert set(error_types(result)) == {
            E.MISSING_ALT_TEXT,
            E.MISSING_POSTER_URL,
            E.ARTICLE_STARTS_WITH_MEDIA,
            E.ARTICLE_ENDS_WITH_MEDIA,
            E.CONSECUTIVE_MEDIA_BLOCKS,
        }


# === EDITOR GUARDS ===


class TestBlockOrder:
    def test_valid_order(self):
        assert is_valid_block_order([text(), image(), text()]).is_valid is True

    def test_field_errors_are_not_order_errors(self):
        result = is_valid_block_order([text(), image(alt=None), text()])
        assert result.is_valid is True
        assert result.errors == []

    def test_warnings_dropped(self):
        result = is_valid_block_order([text(), image(caption=None), text()])
        assert result.warnings == []

    def test_drag_to_top(self):
        result = is_valid_block_order([image(), text(), text()])
        assert error_types(result) == [E.ARTICLE_STARTS_WITH_MEDIA]


class TestInsertGuard:
    def test_between_text_blocks(self):
        assert can_insert_media_at([text(), text()], 1, "image").valid is True

    @pytest.mark.parametrize("position", [-1, 3])
    def test_out_of_range(self, position):
        check = can_insert_media_at([text(), text()], position, "video")
        assert check.valid is False
        assert check.error_type is None

    def test_first_position(self):
        check = can_insert_media_at([text(), text()], 0, "image")
        assert check.valid is False
        assert check.error_type == E.ARTICLE_STARTS_WITH_MEDIA

    def test_last_position(self):
        check = can_insert_media_at([text(), text()], 2, "video")
        assert check.error_type == E.ARTICLE_ENDS_WITH_MEDIA

    def test_next_to_media(self):
        blocks = [text(), image(), text(), text()]
        assert can_insert_media_at(blocks, 2, "video").error_type == E.NO_TEXT_CONTEXT_BEFORE
        assert can_insert_media_at(blocks, 1, "video").error_type == E.NO_TEXT_CONTEXT_AFTER

    def test_image_ceiling(self):
        blocks = [text(), image(), text(), image(), text(), image(), text()]
        check = can_insert_media_at(blocks, 2, "image")
        assert check.valid is False
        assert check.error_type == E.IMAGE_LIMIT_EXCEEDED
        assert can_insert_media_at(blocks, 2, "video").valid is False

    def test_relaxed_policy_allows_edges(self):
        assert can_insert_media_at([text()], 0, "image", RELAXED_PLACEMENT).valid is True
        assert can_insert_media_at([], 0, "video", RELAXED_PLACEMENT).valid is True


# === UPLOAD PRE-CHECK ===


class TestImageFile:
    def test_accepted(self):
        assert validate_image_file(1024, "image/webp", "photo.webp").is_valid is True

    def test_too_large(self):
        result = validate_image_file(6 * 1024 * 1024, "image/jpeg", "huge.jpg")
        assert error_types(result) == [E.IMAGE_TOO_LARGE]
        assert "6.00MB" in result.errors[0].message

    def test_unsupported_format(self):
        result = validate_image_file(1024, "image/gif")
        assert error_types(result) == [E.INVALID_IMAGE_FORMAT]

    def test_both_problems(self):
        result = validate_image_file(10 * 1024 * 1024, "image/bmp")
        assert set(error_types(result)) == {E.IMAGE_TOO_LARGE, E.INVALID_IMAGE_FORMAT}
