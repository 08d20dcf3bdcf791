#
# Attrscan - Search Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import warnings
from collections import namedtuple
from dataclasses import dataclass
from enum import Enum

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from attrscan.markers import search_ignore
from attrscan.search import filter_items, search


# Local Classes & Methods ----------------------------------------------------------------------------------------------

class Color(Enum):
    RED = "red"


@dataclass
class Record:
    title: str | None = None
    count: int | None = None
    color: Color | None = None


Point = namedtuple("Point", "x y")


class Probe:
    """Records which properties were read."""

    def __init__(self) -> None:
        self.reads = []

    @property
    def first(self) -> str:
        self.reads.append("first")
        return "needle"

    @property
    def second(self) -> str:
        self.reads.append("second")
        return "haystack"


class Faulty:
    @property
    def broken(self) -> str:
        raise RuntimeError("getter failed")

    @property
    def fine(self) -> str:
        return "found me"


class BadStr:
    def __str__(self) -> str:
        raise ValueError("no text")


class HoldsBadStr:
    def __init__(self) -> None:
        self.value = BadStr()
        self.label = "label"


class WithIgnoredProperty:
    def __init__(self) -> None:
        self.name = "visible"

    @search_ignore
    @property
    def secret(self) -> str:
        return "classified"


# Tests ----------------------------------------------------------------------------------------------------------------

class TestSearchScenario:
    def test_case_insensitive_name_match(self, widget_a):
        assert search(widget_a, "widget")
        assert search(widget_a, "WIDGET")

    def test_excluded_tag_never_matches(self, widget_a):
        assert widget_a.tag == "x"
        assert not search(widget_a, "x")

    def test_all_null_empty_filter_is_false(self, widget_null):
        assert not search(widget_null, "")

    def test_empty_filter_true_with_a_value(self, widget_a):
        assert search(widget_a, "")

    def test_only_excluded_value_empty_filter_is_false(self, widget_cls):
        assert not search(widget_cls(name=None, tag="x"), "")

    def test_nested_value_text(self, widget_a):
        """Nested values are matched through their text form."""
        assert search(widget_a, "part")


class TestSearch:
    @pytest.mark.parametrize(
        "filter_text, expected",
        [
            pytest.param("report", True, id="str-value"),
            pytest.param("42", True, id="int-value"),
            pytest.param("color.red", True, id="enum-text"),
            pytest.param("missing", False, id="no-match"),
        ],
    )
    def test_value_text_forms(self, filter_text, expected):
        record = Record(title="Annual Report", count=42, color=Color.RED)
        assert search(record, filter_text) is expected

    def test_namedtuple_fields_searched(self):
        assert search(Point("north", 7), "NORTH")
        assert search(Point("north", 7), "7")
        assert not search(Point("north", 7), "count")

    def test_none_values_skipped(self):
        assert not search(Record(), "none")

    def test_exclusion_flips_result(self):
        record = Record(title="alpha")
        assert search(record, "alpha")
        assert not search(record, "alpha", exclude={"title"})

    def test_marker_flips_result(self):
        obj = WithIgnoredProperty()
        assert obj.secret == "classified"
        assert not search(obj, "classified")
        assert search(obj, "visible")

    def test_short_circuit_on_first_match(self):
        probe = Probe()
        assert search(probe, "needle")
        assert probe.reads == ["first"]

    def test_reads_all_when_no_match(self):
        probe = Probe()
        assert not search(probe, "absent")
        assert probe.reads == ["first", "second"]

    def test_getter_errors_swallowed(self):
        assert search(Faulty(), "found")
        assert not search(Faulty(), "getter")

    def test_str_errors_swallowed(self):
        assert search(HoldsBadStr(), "label")
        assert not search(HoldsBadStr(), "text")

    def test_warn_mode_emits_runtime_warning(self):
        with pytest.warns(RuntimeWarning, match="Failed to search attribute 'broken'"):
            assert search(Faulty(), "found", on_error="warn")

    def test_skip_mode_is_silent(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert not search(Faulty(), "absent")

    @pytest.mark.parametrize(
        "item",
        [
            pytest.param(None, id="none"),
            pytest.param(42, id="int"),
            pytest.param("needle", id="str"),
            pytest.param(["needle"], id="list"),
        ],
    )
    def test_items_without_attrs_never_match(self, item):
        assert not search(item, "needle")
        assert not search(item, "")

    @pytest.mark.parametrize(
        "filter_text",
        [
            pytest.param(None, id="none"),
            pytest.param(42, id="int"),
            pytest.param(b"bytes", id="bytes"),
        ],
    )
    def test_non_str_filter_raises(self, filter_text):
        with pytest.raises(TypeError, match="filter_text must be a str"):
            search(Record(title="a"), filter_text)

    def test_invalid_on_error_raises(self):
        with pytest.raises(ValueError, match="on_error must be"):
            search(Record(title="a"), "a", on_error="raise")

    def test_read_only(self, widget_a, widget_cls, part_cls):
        search(widget_a, "zzz")
        assert widget_a == widget_cls(name="Widget", tag="x", child=part_cls(name="Part"))


class TestFilterItems:
    @pytest.fixture
    def records(self):
        return [
            Record(title="Bolt M6"),
            Record(title="Nut M6"),
            None,
            Record(title="bolt M8"),
        ]

    def test_filters_in_order(self, records):
        assert filter_items(records, "BOLT") == [records[0], records[3]]

    @pytest.mark.parametrize(
        "filter_text",
        [
            pytest.param(None, id="none"),
            pytest.param("", id="empty"),
            pytest.param("   ", id="whitespace"),
        ],
    )
    def test_blank_filter_keeps_all(self, records, filter_text):
        result = filter_items(records, filter_text)
        assert result == records
        assert result is not records

    def test_exclude_forwarded(self, records):
        assert filter_items(records, "m6", exclude={"title"}) == []

    def test_accepts_any_iterable(self, records):
        assert filter_items(iter(records), "nut") == [records[1]]
