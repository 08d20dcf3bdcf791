#
# Attrscan - Capabilities Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import collections
import collections.abc as abc
from dataclasses import dataclass
from typing import Protocol

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from attrscan.capabilities import Copyable, Searchable, is_copyable, is_list_like, is_type_of


# Local Classes & Methods ----------------------------------------------------------------------------------------------

class ThirdPartyModel:
    def __init__(self, name: str = "") -> None:
        self.name = name


Copyable.register(ThirdPartyModel)


class NotCopyable:
    def __init__(self) -> None:
        self.name = "n"


class NonRuntimeProtocol(Protocol):
    def run(self) -> None: ...


@dataclass
class Contact(Searchable):
    __search_ignore__ = ("phone",)

    name: str = ""
    phone: str = ""


@dataclass
class Address(Copyable):
    city: str = ""
    zip_code: str = ""


# Tests ----------------------------------------------------------------------------------------------------------------

class TestIsTypeOf:
    @pytest.mark.parametrize(
        "value, capability, expected",
        [
            pytest.param([1, 2], abc.MutableSequence, True, id="list-mutable-sequence"),
            pytest.param((1, 2), abc.MutableSequence, False, id="tuple-not-mutable"),
            pytest.param({"a": 1}, abc.Mapping, True, id="dict-mapping"),
            pytest.param(None, abc.Mapping, False, id="none"),
            pytest.param(list, abc.MutableSequence, False, id="class-object"),
            pytest.param(Address(), Copyable, True, id="copyable"),
            pytest.param(Address(), NonRuntimeProtocol, False, id="non-runtime-protocol"),
        ],
    )
    def test_capability_checks(self, value, capability, expected):
        assert is_type_of(value, capability) is expected


class TestIsListLike:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param([], True, id="list"),
            pytest.param(collections.UserList([1]), True, id="user-list"),
            pytest.param((1,), False, id="tuple"),
            pytest.param("abc", False, id="str"),
            pytest.param(b"abc", False, id="bytes"),
            pytest.param(bytearray(b"abc"), False, id="bytearray"),
            pytest.param({"a": 1}, False, id="dict"),
            pytest.param({1, 2}, False, id="set"),
            pytest.param(None, False, id="none"),
            pytest.param(list, False, id="list-class"),
        ],
    )
    def test_list_like(self, value, expected):
        assert is_list_like(value) is expected


class TestIsCopyable:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(Address(), True, id="subclass"),
            pytest.param(ThirdPartyModel(), True, id="registered"),
            pytest.param(NotCopyable(), False, id="plain-object"),
            pytest.param("text", False, id="str"),
            pytest.param(None, False, id="none"),
            pytest.param(Address, False, id="class-object"),
        ],
    )
    def test_copyable(self, value, expected):
        assert is_copyable(value) is expected


class TestCopyable:
    def test_copy_from_returns_self(self):
        target = Address()
        result = target.copy_from(Address("Oslo", "0150"))
        assert result is target
        assert target == Address("Oslo", "0150")

    def test_copy_from_duck_typed_source(self):
        target = Address(zip_code="0150")
        target.copy_from(ThirdPartyModel("ignored"))
        assert target == Address(zip_code="0150")

    def test_methods_not_enumerated(self):
        from attrscan.abc import enumerate_attrs

        assert [a.name for a in enumerate_attrs(Address())] == ["city", "zip_code"]


class TestSearchable:
    def test_matches(self):
        contact = Contact(name="Ada Lovelace", phone="555-0100")
        assert contact.matches("lovelace")
        assert not contact.matches("555")

    def test_matches_exclude(self):
        contact = Contact(name="Ada Lovelace")
        assert not contact.matches("ada", exclude={"name"})
