"""
Blog API Backend — Schema and Validation Unit Tests
====================================================

What:  Tests for field validation, author defaulting and id-format checks.
How:   Pure functions; no database or HTTP involved.
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy import Text

from blog_api.exceptions import InvalidIdError, ValidationError
from blog_api.models.blog import Blog, is_valid_blog_id, new_blog_id
from blog_api.schemas.blog import (
    BlogEnvelope,
    BlogInput,
    BlogOut,
    parse_blog_id,
    validate_blog_fields,
)


class TestValidateBlogFields:
    """Ordered presence checks and normalization."""

    def test_valid_fields(self):
        fields = validate_blog_fields(BlogInput(title="T", body="B", author="Grace"))
        assert fields.title == "T"
        assert fields.body == "B"
        assert fields.author == "Grace"

    def test_missing_author_defaults_to_anonymous(self):
        fields = validate_blog_fields(BlogInput(title="T", body="B"))
        assert fields.author == "Anonymous"

    def test_blank_author_defaults_to_anonymous(self):
        fields = validate_blog_fields(BlogInput(title="T", body="B", author="   "))
        assert fields.author == "Anonymous"

    def test_title_and_author_are_trimmed_body_is_not(self):
        fields = validate_blog_fields(
            BlogInput(title="  Spaced  ", body="  keep me  ", author=" Bob ")
        )
        assert fields.title == "Spaced"
        assert fields.body == "  keep me  "
        assert fields.author == "Bob"

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_missing_title_rejected(self, title):
        with pytest.raises(ValidationError, match="Title is required field") as exc_info:
            validate_blog_fields(BlogInput(title=title, body="B"))
        assert exc_info.value.category == "Validation failed"
        assert exc_info.value.field == "title"

    @pytest.mark.parametrize("body", [None, ""])
    def test_missing_body_rejected(self, body):
        with pytest.raises(ValidationError, match="Body is required field"):
            validate_blog_fields(BlogInput(title="T", body=body))

    def test_title_checked_before_body(self):
        with pytest.raises(ValidationError, match="Title"):
            validate_blog_fields(BlogInput())

    def test_unknown_fields_ignored(self):
        payload = BlogInput.model_validate({"title": "T", "body": "B", "likes": 3})
        assert validate_blog_fields(payload).title == "T"

    def test_numbers_coerced_to_strings(self):
        payload = BlogInput.model_validate({"title": 123, "body": 4.5, "author": 7})
        fields = validate_blog_fields(payload)
        assert (fields.title, fields.body, fields.author) == ("123", "4.5", "7")

    def test_text_columns_have_no_length_limit(self):
        for column in ("title", "body", "author"):
            column_type = Blog.__table__.c[column].type
            assert isinstance(column_type, Text)
            assert column_type.length is None


class TestBlogIds:
    """Identifier format: 24 hex characters."""

    def test_generated_ids_are_valid_and_unique(self):
        ids = {new_blog_id() for _ in range(200)}
        assert len(ids) == 200
        assert all(len(i) == 24 and is_valid_blog_id(i) for i in ids)

    @pytest.mark.parametrize(
        "value",
        ["", "123", "not-an-id", "g" * 24, "a" * 23, "a" * 25, "507f1f77bcf86cd79943901z"],
    )
    def test_malformed_ids_rejected(self, value):
        with pytest.raises(InvalidIdError) as exc_info:
            parse_blog_id(value)
        assert exc_info.value.status_code == 400
        assert exc_info.value.category == "Invalid ID"

    def test_uppercase_id_normalized(self):
        assert parse_blog_id("507F1F77BCF86CD799439011") == "507f1f77bcf86cd799439011"


class TestBlogOut:
    """Wire shape of a stored post."""

    def test_serializes_with_client_field_names(self):
        now = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        blog = BlogOut(
            id="507f1f77bcf86cd799439011",
            title="T",
            body="B",
            author="Anonymous",
            created_at=now,
            updated_at=now,
        )
        dumped = blog.model_dump(mode="json", by_alias=True)
        assert dumped["_id"] == "507f1f77bcf86cd799439011"
        assert set(dumped) == {"_id", "title", "body", "author", "createdAt", "updatedAt"}

    def test_naive_timestamps_treated_as_utc(self):
        naive = datetime(2024, 1, 15, 12, 0)
        blog = BlogOut(
            id="507f1f77bcf86cd799439011",
            title="T",
            body="B",
            author="A",
            created_at=naive,
            updated_at=naive,
        )
        assert blog.created_at.tzinfo is not None
        assert blog.created_at == naive.replace(tzinfo=timezone.utc)

    def test_envelope_omits_unset_keys(self):
        envelope = BlogEnvelope(message="ok")
        assert envelope.model_dump(exclude_none=True) == {"success": True, "message": "ok"}
