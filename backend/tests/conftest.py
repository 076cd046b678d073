import pytest

from app.main import app


@pytest.fixture(autouse=True)
def reset_overrides():
    """Drop any dependency overrides a test installed on the app."""
    yield
    app.dependency_overrides.clear()
