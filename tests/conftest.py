from datetime import date, datetime

import pytest


@pytest.fixture
def today() -> date:
    return date(2025, 3, 15)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 15, 9, 0, 0)
