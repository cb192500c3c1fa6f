"""Tests for date/time normalization and the block table."""

from datetime import date, datetime, time, timezone

import pytest

from clinic.utils.time import (
    DEFAULT_TIME_BLOCKS,
    block_end_instant,
    clinic_timezone,
    find_block,
    parse_date,
    parse_time,
)


class TestParseDate:
    def test_iso_date(self):
        assert parse_date("2030-01-20") == date(2030, 1, 20)

    def test_us_date(self):
        assert parse_date("1/5/2030") == date(2030, 1, 5)
        assert parse_date("12/31/2030") == date(2030, 12, 31)

    @pytest.mark.parametrize("value", [None, "", "2030/01/20", "20-01-2030", "2030-02-30", "13/01/2030"])
    def test_rejects_other_inputs(self, value):
        assert parse_date(value) is None


class TestParseTime:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("10:00", time(10, 0)),
            ("13:00:00", time(13, 0)),
            ("8:00 AM", time(8, 0)),
            ("2:00 PM", time(14, 0)),
            ("12:00 PM", time(12, 0)),
            ("12:30 am", time(0, 30)),
            ("3:00pm", time(15, 0)),
        ],
    )
    def test_normalizes_to_24_hour(self, value, expected):
        assert parse_time(value) == expected

    @pytest.mark.parametrize("value", [None, "", "10", "25:00", "9:00", "noon", "13:00 PM"])
    def test_rejects_other_inputs(self, value):
        assert parse_time(value) is None


class TestBlocks:
    def test_default_blocks_are_two_hours_with_lunch_gap(self):
        assert [block.label for block in DEFAULT_TIME_BLOCKS] == ["08:00", "10:00", "13:00", "15:00"]
        assert DEFAULT_TIME_BLOCKS[1].end == time(12, 0)
        assert DEFAULT_TIME_BLOCKS[2].start == time(13, 0)

    def test_find_block_matches_exact_start_only(self):
        assert find_block(DEFAULT_TIME_BLOCKS, time(10, 0)) is DEFAULT_TIME_BLOCKS[1]
        assert find_block(DEFAULT_TIME_BLOCKS, time(14, 0)) is None
        assert find_block(DEFAULT_TIME_BLOCKS, time(10, 0, 30)) is None

    def test_block_end_uses_fixed_offset(self):
        end = block_end_instant(date(2030, 1, 15), DEFAULT_TIME_BLOCKS[0], clinic_timezone(8))
        assert end == datetime(2030, 1, 15, 2, 0, tzinfo=timezone.utc)
