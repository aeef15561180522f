import pytest

from tests.factories.i18n import make_registry, make_resources


@pytest.fixture
def registry():
    """Registry with the built-in supported locales."""
    return make_registry()


@pytest.fixture
def sample_resources():
    """In-memory translation trees for en, es and ar."""
    return make_resources()
