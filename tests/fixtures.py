# type: ignore
from io import BytesIO

import pytest


@pytest.fixture
def with_output():
    yield BytesIO()
