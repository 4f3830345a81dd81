import pytest

from minigrad.core.tape import use_tape


@pytest.fixture(autouse=True)
def tape():
    """Record every test on its own tape so graphs never leak between tests."""
    with use_tape() as fresh:
        yield fresh
