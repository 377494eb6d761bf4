"""Unit tests for core models."""

from datetime import datetime, timedelta, timezone

import pytest

from decodedesk.core.models import (
    CrossTranslationResult,
    GenerationResult,
    QuotaRecord,
    QuotaStatus,
    TranslationResult,
    parse_timestamp,
    week_start,
)
from decodedesk.translation.modes import TranslationMode


def test_week_start_monday_midnight():
    sunday_night = datetime(2024, 3, 10, 23, 30, tzinfo=timezone.utc)
    assert week_start(sunday_night) == datetime(2024, 3, 4, tzinfo=timezone.utc)


def test_parse_timestamp_z_suffix():
    parsed = parse_timestamp("2024-03-06T12:00:00Z")
    assert parsed == datetime(2024, 3, 6, 12, tzinfo=timezone.utc)


def test_parse_timestamp_naive_is_local():
    parsed = parse_timestamp("2024-03-06T12:00:00")
    assert parsed.tzinfo is not None


def test_parse_timestamp_rejects_non_string():
    with pytest.raises(ValueError):
        parse_timestamp(12345)


def test_quota_record_json_shape():
    anchor = datetime(2024, 3, 6, 12, tzinfo=timezone.utc)
    record = QuotaRecord(guest_used=2, user_used=1, week_start_date=week_start(anchor),
                         first_translation_date=anchor)

    data = record.to_dict()
    assert data == {
        "guestUsed": 2,
        "userUsed": 1,
        "weekStartDate": "2024-03-04T00:00:00+00:00",
        "firstTranslationDate": "2024-03-06T12:00:00+00:00"
    }
    assert QuotaRecord.from_dict(data) == record


def test_quota_record_without_anchor_omits_key():
    record = QuotaRecord.fresh(datetime(2024, 3, 6, tzinfo=timezone.utc))
    assert "firstTranslationDate" not in record.to_dict()
    assert record.total_used == 0


@pytest.mark.parametrize("data", [
    {"guestUsed": True, "userUsed": 0},
    {"guestUsed": 1.5, "userUsed": 0},
    {"guestUsed": 0, "userUsed": -2},
    "guestUsed",
])
def test_quota_record_rejects_bad_data(data):
    with pytest.raises(ValueError):
        QuotaRecord.from_dict(data)


def test_quota_record_missing_counters_default_to_zero():
    record = QuotaRecord.from_dict({"weekStartDate": "2024-03-04T00:00:00Z"})
    assert record.total_used == 0
    assert record.first_translation_date is None


def test_quota_status_to_dict():
    status = QuotaStatus(allowed=True, remaining=3, total=5, is_weekly_limit=True, days_until_reset=2)
    assert status.to_dict()["days_until_reset"] == 2


def test_result_serialization():
    assert TranslationResult("a", "b").to_dict() == {
        "original": "a", "translation": "b", "mode": "decode", "used_fallback": False
    }
    generated = GenerationResult("w", "m", "e", mode=TranslationMode.GENERATE_GENZ, used_fallback=True)
    assert generated.to_dict()["mode"] == "generate-genz"
    assert generated.to_dict()["used_fallback"] is True
    cross = CrossTranslationResult("o", "t", "m")
    assert cross.to_dict()["mode"] == "corporate-to-genz"
