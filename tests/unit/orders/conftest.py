from uuid import uuid4

import pytest


@pytest.fixture()
def unknown_id():
    """An id that no catalog snapshot contains."""
    return uuid4()
