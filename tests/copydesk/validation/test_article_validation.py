"""Tests for article metadata validation and sanitizing."""

import pytest

from copydesk.validation import (
    ArticleInput,
    ContentType,
    Section,
    generate_slug,
    to_validated_article,
    validate_article_input,
)


def article(**overrides) -> ArticleInput:
    fields = dict(
        title="Council approves budget",
        subtitle="The vote was closer than expected",
        section="politics",
        content_type="news",
        body="First paragraph.",
        tags=["budget", "council"],
        featured=False,
        sources=["https://example.com/minutes"],
    )
    fields.update(overrides)
    return ArticleInput(**fields)


def error_fields(article_input: ArticleInput) -> list[str]:
    return [error.field for error in validate_article_input(article_input).errors]


class TestValidateArticleInput:
    def test_valid(self):
        result = validate_article_input(article())
        assert result.is_valid is True
        assert result.errors == []

    @pytest.mark.parametrize("title", [None, "", "   ", 42])
    def test_title_required(self, title):
        assert error_fields(article(title=title)) == ["title"]

    def test_title_length(self):
        assert error_fields(article(title="x" * 201)) == ["title"]
        assert error_fields(article(title="x" * 200)) == []

    def test_subtitle_length(self):
        assert error_fields(article(subtitle="x" * 501)) == ["subtitle"]

    def test_unknown_section(self):
        assert error_fields(article(section="sports")) == ["section"]

    def test_unknown_content_type(self):
        assert error_fields(article(content_type="feature")) == ["contentType"]

    def test_opinion_outside_opinion_section(self):
        assert error_fields(article(content_type="opinion", section="politics")) == ["contentType"]
        assert error_fields(article(content_type="opinion", section="opinion")) == []

    def test_featured_must_be_bool(self):
        assert error_fields(article(featured="yes")) == ["featured"]
        assert error_fields(article(featured=None)) == ["featured"]

    def test_lists_must_be_lists(self):
        assert error_fields(article(tags="a,b", sources={"url": "x"})) == ["tags", "sources"]
        assert error_fields(article(tags=None, sources=None)) == []

    def test_empty_body(self):
        assert error_fields(article(body="  ")) == ["body"]

    def test_all_errors_reported(self):
        assert len(validate_article_input(ArticleInput()).errors) == 6

    def test_camel_case_input(self):
        parsed = ArticleInput.model_validate({"contentType": "analysis"})
        assert parsed.content_type == "analysis"


class TestToValidatedArticle:
    def test_sanitizes(self):
        validated = to_validated_article(
            article(
                title="  Council approves budget ",
                body="Line one\r\nLine two\r",
                tags=[" budget ", "", 3, "council"],
                sources=None,
            )
        )
        assert validated.title == "Council approves budget"
        assert validated.body == "Line one\nLine two"
        assert validated.tags == ["budget", "council"]
        assert validated.sources == []
        assert validated.section == Section.POLITICS
        assert validated.content_type == ContentType.NEWS
        assert validated.slug == "council-approves-budget"


class TestGenerateSlug:
    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Hello World", "hello-world"),
            ("  Spaces   everywhere  ", "spaces-everywhere"),
            ("What's next? (Part 2)", "whats-next-part-2"),
            ("snake_case_title", "snake-case-title"),
            ("--Dashes--", "dashes"),
        ],
    )
    def test_slug(self, title, expected):
        assert generate_slug(title) == expected
