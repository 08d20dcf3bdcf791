#
# Attrscan - Formatters Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from attrscan.formatters import fmt_type, fmt_value


# Local Classes & Methods ----------------------------------------------------------------------------------------------

class BrokenRepr:
    def __repr__(self) -> str:
        raise RuntimeError("no repr")


# Tests ----------------------------------------------------------------------------------------------------------------

class TestFmtType:
    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(42, "<type: int>", id="instance"),
            pytest.param(int, "<type: int>", id="class"),
            pytest.param(ValueError("x"), "<type: ValueError>", id="exception"),
        ],
    )
    def test_basic(self, obj, expected):
        assert fmt_type(obj) == expected

    def test_show_module_for_user_types(self):
        assert fmt_type(BrokenRepr(), show_module=True) == f"<type: {__name__}.BrokenRepr>"

    def test_show_module_skips_builtins(self):
        assert fmt_type([], show_module=True) == "<type: list>"


class TestFmtValue:
    def test_basic(self):
        assert fmt_value(42) == "<int: 42>"
        assert fmt_value("abc") == "<str: 'abc'>"

    def test_truncates_quoted_repr_outside_quotes(self):
        assert fmt_value("hello world", max_repr=8) == "<str: 'hel'...>"

    def test_escapes_inner_angle_bracket(self):
        assert fmt_value("a>b") == "<str: 'a\\>b'>"

    def test_broken_repr_reported(self):
        out = fmt_value(BrokenRepr())
        assert out.startswith("<BrokenRepr: ")
        assert "repr failed: RuntimeError" in out
