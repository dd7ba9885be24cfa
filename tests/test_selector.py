"""Tests for object-type selector resolution."""

from __future__ import annotations

import pytest

from fcp_rytm.errors import (
    InvalidIndexRange,
    InvalidSelector,
    QuerySelectorIndexMissingOrInvalid,
    QuerySelectorMissing,
)
from fcp_rytm.parser.selector import resolve, resolve_values, takes_index
from fcp_rytm.parser.value import Float, Int, Symbol


class TestResolve:
    @pytest.mark.parametrize(
        "kind,low,high",
        [
            ("pattern", 0, 127),
            ("kit", 0, 127),
            ("sound", 0, 127),
            ("sound_wb", 0, 11),
            ("global", 0, 3),
        ],
    )
    def test_bounds(self, kind, low, high):
        assert resolve(kind, low).index == low
        assert resolve(kind, high).index == high
        with pytest.raises(InvalidIndexRange):
            resolve(kind, low - 1)
        with pytest.raises(InvalidIndexRange):
            resolve(kind, high + 1)

    def test_range_message(self):
        with pytest.raises(InvalidIndexRange) as exc:
            resolve("global", 4)
        assert "Index 4 must be between 0 and 3" in str(exc.value)

    @pytest.mark.parametrize("kind", ["pattern_wb", "kit_wb", "global_wb", "settings"])
    def test_unindexed(self, kind):
        selector = resolve(kind)
        assert selector.index is None
        assert not takes_index(kind)

    def test_unknown_kind(self):
        with pytest.raises(InvalidSelector):
            resolve("song", 0)

    def test_index_required(self):
        with pytest.raises(QuerySelectorIndexMissingOrInvalid):
            resolve("kit")

    def test_family(self):
        assert resolve("sound_wb", 3).family == "sound"
        assert resolve("kit_wb").family == "kit"

    def test_work_buffer_flag(self):
        assert resolve("pattern_wb").is_work_buffer
        assert not resolve("pattern", 0).is_work_buffer

    def test_reply_index(self):
        assert resolve("pattern", 7).reply_index == 7
        assert resolve("pattern_wb").reply_index == 0

    def test_str(self):
        assert str(resolve("kit", 3)) == "kit 3"
        assert str(resolve("sound_wb", 2)) == "sound work buffer 2"


class TestResolveValues:
    def test_indexed(self):
        selector, consumed = resolve_values([Symbol("kit"), Int(5), Symbol("name")])
        assert (selector.kind, selector.index, consumed) == ("kit", 5, 2)

    def test_unindexed(self):
        selector, consumed = resolve_values([Symbol("settings"), Symbol("projectbpm")])
        assert (selector.kind, consumed) == ("settings", 1)

    def test_empty(self):
        with pytest.raises(QuerySelectorMissing):
            resolve_values([])

    def test_non_symbol_head(self):
        with pytest.raises(InvalidSelector):
            resolve_values([Int(1)])

    def test_missing_index(self):
        with pytest.raises(QuerySelectorIndexMissingOrInvalid):
            resolve_values([Symbol("pattern")])

    def test_float_index(self):
        with pytest.raises(QuerySelectorIndexMissingOrInvalid):
            resolve_values([Symbol("pattern"), Float(1.0)])

    def test_out_of_range(self):
        with pytest.raises(InvalidIndexRange):
            resolve_values([Symbol("pattern"), Int(128)])
