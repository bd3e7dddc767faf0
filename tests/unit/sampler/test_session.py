"""Unit tests for the session color list and export text."""

from datetime import datetime

import pytest

from colorsampler.sampler.errors import EmptyListError
from colorsampler.sampler.export import format_sample, format_samples
from colorsampler.sampler.session import ColorSession
from colorsampler.sampler.types import ColorSample

GREEN = ColorSample.from_rgb(52, 199, 89)
PURPLE = ColorSample.from_rgb(128, 0, 224)


class TestColorSession:

    def test_starts_empty_and_idle(self):
        session = ColorSession()
        assert len(session) == 0
        assert session.busy is False
        assert session.last is None

    def test_save_prepends(self):
        session = ColorSession()
        session.save(GREEN)
        session.save(PURPLE)
        assert session.samples == [PURPLE, GREEN]

    def test_ids_are_unique(self):
        session = ColorSession()
        ids = {session.save(GREEN).id for _ in range(5)}
        assert len(ids) == 5

    def test_timestamp_recorded(self):
        stamp = datetime(2024, 5, 1, 12, 30)
        entry = ColorSession().save(GREEN, timestamp=stamp)
        assert entry.timestamp == stamp
        assert entry.hex == "#34C759"

    def test_get_and_remove(self):
        session = ColorSession()
        keep = session.save(GREEN)
        drop = session.save(PURPLE)

        assert session.get(drop.id) is drop
        assert session.remove(drop.id) is True
        assert session.get(drop.id) is None
        assert session.entries == [keep]

    def test_remove_unknown_id(self):
        session = ColorSession()
        session.save(GREEN)
        assert session.remove(999) is False
        assert len(session) == 1

    def test_clear(self):
        session = ColorSession()
        session.save(GREEN)
        session.save(PURPLE)
        session.clear()
        assert session.entries == []

    def test_entries_is_a_copy(self):
        session = ColorSession()
        session.save(GREEN)
        session.entries.clear()
        assert len(session) == 1


class TestExportText:

    def test_single_both(self):
        assert format_sample(GREEN) == "#34C759\nRGB: 52, 199, 89"

    def test_single_hex_only(self):
        assert format_sample(GREEN, include_rgb=False) == "#34C759"

    def test_single_rgb_only(self):
        assert format_sample(GREEN, include_hex=False) == "RGB: 52, 199, 89"

    def test_single_neither(self):
        assert format_sample(GREEN, include_hex=False, include_rgb=False) == ""

    def test_list_both_separated_by_blank_line(self):
        text = format_samples([PURPLE, GREEN])
        assert text == "#8000E0\nRGB: 128, 0, 224\n\n#34C759\nRGB: 52, 199, 89"

    def test_list_hex_only(self):
        assert format_samples([PURPLE, GREEN], include_rgb=False) == "#8000E0\n#34C759"

    def test_list_rgb_only(self):
        assert format_samples([PURPLE, GREEN], include_hex=False) == "RGB: 128, 0, 224\nRGB: 52, 199, 89"

    def test_empty_list(self):
        with pytest.raises(EmptyListError):
            format_samples([])
