import pytest

from fakes import probed_registry


@pytest.fixture
def registry():
    return probed_registry()
