#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Annotated

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from attrscan.capabilities import Copyable, Searchable
from attrscan.markers import SearchIgnore


# Sample Classes -------------------------------------------------------------------------------------------------------

@dataclass
class Part(Copyable, Searchable):
    name: str | None = ""


@dataclass
class Widget(Copyable, Searchable):
    name: str | None = ""
    tag: Annotated[str | None, SearchIgnore()] = None
    child: Part | None = None


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def widget_a() -> Widget:
    """Widget named 'Widget' with a search-ignored tag 'x' and a child Part named 'Part'."""
    return Widget(name="Widget", tag="x", child=Part(name="Part"))


@pytest.fixture
def widget_null() -> Widget:
    """Widget with every attribute set to None."""
    return Widget(name=None, tag=None, child=None)


@pytest.fixture
def part_cls() -> type[Part]:
    return Part


@pytest.fixture
def widget_cls() -> type[Widget]:
    return Widget
