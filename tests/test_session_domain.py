"""Tests for session validation and visibility rules."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from wellness_sessions.domain.errors import ValidationFailed
from wellness_sessions.domain.sessions import (
    SessionStatus,
    WellnessSession,
    can_edit,
    can_view,
    parse_tags,
    validate_fields,
)


def _session(status: SessionStatus) -> WellnessSession:
    now = datetime(2024, 1, 1, tzinfo=UTC)
    return WellnessSession(
        id=uuid4(),
        user_id=uuid4(),
        title="Evening Stretch",
        tags=[],
        json_file_url="",
        status=status,
        created_at=now,
        updated_at=now,
    )


def test_parse_tags_splits_trims_and_drops_empty_pieces() -> None:
    assert parse_tags(" Yoga, morning ,,  ,Breath ") == ["yoga", "morning", "breath"]


def test_parse_tags_accepts_lists_and_missing_values() -> None:
    assert parse_tags(["  Calm", "", "FOCUS "]) == ["calm", "focus"]
    assert parse_tags(None) == []
    assert parse_tags("") == []


def test_validate_fields_normalizes_values() -> None:
    fields = validate_fields(
        "  Morning Yoga  ", "yoga, morning", " https://x.com/a.json "
    )

    assert fields.title == "Morning Yoga"
    assert fields.tags == ["yoga", "morning"]
    assert fields.json_file_url == "https://x.com/a.json"


def test_validate_fields_defaults_content_url_to_empty() -> None:
    assert validate_fields("Title", None, None).json_file_url == ""
    assert validate_fields("Title", None, "").json_file_url == ""


@pytest.mark.parametrize("title", [None, "", "   "])
def test_validate_fields_rejects_blank_title(title: str | None) -> None:
    with pytest.raises(ValidationFailed) as excinfo:
        validate_fields(title, "", "")

    assert excinfo.value.errors == {"title": "Title is required"}


def test_validate_fields_rejects_long_title() -> None:
    with pytest.raises(ValidationFailed) as excinfo:
        validate_fields("x" * 201, "", "")

    assert "title" in excinfo.value.errors


def test_validate_fields_accepts_title_at_max_length() -> None:
    assert validate_fields("x" * 200, "", "").title == "x" * 200


@pytest.mark.parametrize("url", ["ftp://x", "x.com/a.json", "http://", "https:/x"])
def test_validate_fields_rejects_non_http_urls(url: str) -> None:
    with pytest.raises(ValidationFailed) as excinfo:
        validate_fields("Title", "", url)

    assert excinfo.value.errors == {"json_file_url": "Must be a valid HTTP/HTTPS URL"}


def test_validate_fields_reports_every_bad_field() -> None:
    with pytest.raises(ValidationFailed) as excinfo:
        validate_fields(" ", "", "ftp://x")

    assert set(excinfo.value.errors) == {"title", "json_file_url"}


def test_drafts_are_visible_only_to_their_owner() -> None:
    draft = _session(SessionStatus.DRAFT)

    assert can_view(draft, draft.user_id)
    assert not can_view(draft, uuid4())
    assert not can_view(draft, None)


def test_published_sessions_are_visible_to_anyone_but_editable_by_owner() -> None:
    published = _session(SessionStatus.PUBLISHED)

    assert can_view(published, None)
    assert can_view(published, uuid4())
    assert can_edit(published, published.user_id)
    assert not can_edit(published, uuid4())
    assert not can_edit(published, None)
