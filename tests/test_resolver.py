"""Tests for the intent resolver's prompt building and strict-JSON parsing."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from gcal_query.ai.resolver import IntentResolver, parse_date_range, parse_time
from gcal_query.client.base import StructuredReply
from gcal_query.errors import ResolutionError

from .conftest import NOW, FakeGenerator

LA = ZoneInfo("America/Los_Angeles")


class TestParseDateRange:
  def test_offsets_are_kept(self):
    rng = parse_date_range(
      '{"startDate": "2026-10-20T00:00:00-07:00", "endDate": "2026-10-20T23:59:59-07:00"}', LA
    )
    assert rng.start == datetime(2026, 10, 20, 7, 0, tzinfo=UTC)
    assert rng.end == datetime(2026, 10, 21, 6, 59, 59, tzinfo=UTC)
    assert rng.start <= rng.end

  def test_zulu_suffix(self):
    rng = parse_date_range(
      '{"startDate": "2024-03-15T00:00:00Z", "endDate": "2024-03-17T23:59:59Z"}', LA
    )
    assert rng.start.utcoffset() == timedelta(0)
    assert rng.end - rng.start == timedelta(days=2, hours=23, minutes=59, seconds=59)

  def test_naive_timestamps_use_configured_zone(self):
    rng = parse_date_range('{"startDate": "2026-10-20T00:00:00", "endDate": "2026-10-20"}', LA)
    assert rng.start.utcoffset() == timedelta(hours=-7)
    assert rng.start.hour == 0
    assert rng.start == rng.end

  def test_equal_bounds_allowed(self):
    rng = parse_date_range(
      '{"startDate": "2026-10-20T09:00:00Z", "endDate": "2026-10-20T09:00:00Z"}', LA
    )
    assert rng.start == rng.end

  @pytest.mark.parametrize(
    "text",
    [
      "not json",
      'Here you go: {"startDate": "2026-10-20", "endDate": "2026-10-21"}',
      "",
      "null",
      "{}",
      "[]",
      '["2026-10-20", "2026-10-21"]',
      '{"startDate": "2026-10-20T00:00:00Z"}',
      '{"endDate": "2026-10-20T00:00:00Z"}',
      '{"startDate": 20261020, "endDate": "2026-10-21"}',
      '{"startDate": "tomorrow", "endDate": "2026-10-21"}',
    ],
  )
  def test_invalid_output_raises(self, text):
    with pytest.raises(ResolutionError):
      parse_date_range(text, LA)

  def test_reversed_range_raises(self):
    with pytest.raises(ResolutionError):
      parse_date_range(
        '{"startDate": "2026-10-22T00:00:00Z", "endDate": "2026-10-20T00:00:00Z"}', LA
      )


class TestParseTime:
  def test_plain_json(self):
    t = parse_time('{"time": "14:30"}')
    assert (t.hours, t.minutes) == (14, 30)
    assert str(t) == "14:30"

  def test_json_embedded_in_prose(self):
    t = parse_time('Sure! The converted time is {"time": "09:05"}. Let me know.')
    assert (t.hours, t.minutes) == (9, 5)

  def test_fenced_multiline_json(self):
    t = parse_time('```json\n{\n  "time": "18:45"\n}\n```')
    assert (t.hours, t.minutes) == (18, 45)

  def test_stray_braces_after_the_object(self):
    t = parse_time('{"time": "07:15"} (I assumed the morning, not {evening}.)')
    assert (t.hours, t.minutes) == (7, 15)

  def test_skips_unparseable_braces_before_the_object(self):
    t = parse_time('Format {HH:MM} requested, so: {"time": "11:00"}')
    assert (t.hours, t.minutes) == (11, 0)

  def test_no_braces_at_all(self):
    with pytest.raises(ResolutionError, match="No JSON found in time response"):
      parse_time("It is half past two.")

  def test_no_decodable_object(self):
    with pytest.raises(ResolutionError, match="Failed to process time response"):
      parse_time("{not json} and {also not}")

  def test_out_of_range_is_returned_unchecked(self):
    t = parse_time('{"time": "25:61"}')
    assert (t.hours, t.minutes) == (25, 61)
    assert not t.in_range

  @pytest.mark.parametrize(
    "text",
    [
      "14:30",
      "",
      "{not json}",
      '{"clock": "14:30"}',
      '{"time": ""}',
      '{"time": 1430}',
      '{"time": "2pm"}',
      '{"time": "half:past"}',
    ],
  )
  def test_invalid_output_raises(self, text):
    with pytest.raises(ResolutionError):
      parse_time(text)


class TestIntentResolver:
  async def test_date_range_prompt_is_anchored_to_today(self, settings):
    generator = FakeGenerator(
      '{"startDate": "2026-10-20T00:00:00-07:00", "endDate": "2026-10-20T23:59:59-07:00"}'
    )
    resolver = IntentResolver(generator, settings)

    rng = await resolver.resolve_date_range("meetings tomorrow", NOW)

    assert rng.start.date().isoformat() == "2026-10-20"
    model, messages = generator.calls[0]
    assert model == settings.resolver_model
    assert [m["role"] for m in messages] == ["system", "user"]
    user = messages[1]["content"]
    assert '"meetings tomorrow"' in user
    assert "Monday" in user
    assert "2026-10-19T10:00:00-07:00" in user
    assert "America/Los_Angeles" in user

  async def test_structured_reply_with_string_response(self, settings):
    body = '{"startDate": "2026-10-20T00:00:00Z", "endDate": "2026-10-21T00:00:00Z"}'
    generator = FakeGenerator(StructuredReply(response=body, raw={"response": body}))
    rng = await IntentResolver(generator, settings).resolve_date_range("tomorrow", NOW)
    assert rng.end - rng.start == timedelta(days=1)

  async def test_structured_reply_with_parsed_object(self, settings):
    payload = {"startDate": "2026-10-20T00:00:00Z", "endDate": "2026-10-21T00:00:00Z"}
    generator = FakeGenerator(StructuredReply(response=payload, raw={"response": payload}))
    rng = await IntentResolver(generator, settings).resolve_date_range("tomorrow", NOW)
    assert rng.start == datetime(2026, 10, 20, tzinfo=UTC)

  async def test_resolve_time_uses_one_model_call(self, settings):
    generator = FakeGenerator('<think>2pm is 14:00</think> {"time": "14:00"}')
    t = await IntentResolver(generator, settings).resolve_time("2pm")
    assert str(t) == "14:00"
    assert len(generator.calls) == 1
    assert '"2pm"' in generator.calls[0][1][1]["content"]

  async def test_resolve_time_failure_is_not_retried(self, settings):
    generator = FakeGenerator("I cannot help with that", '{"time": "14:00"}')
    with pytest.raises(ResolutionError):
      await IntentResolver(generator, settings).resolve_time("2pm")
    assert len(generator.calls) == 1
