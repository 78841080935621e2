"""Shared fixtures for tests."""

from __future__ import annotations

import pytest

from gmail_dedup.models import MessageRecord
from tests.helpers import make_records


@pytest.fixture
def scenario_a() -> list[MessageRecord]:
    """Identities a,b,a,c,a with sizes 10,20,10,20,10."""
    return make_records(["a", "b", "a", "c", "a"], [10, 20, 10, 20, 10])


@pytest.fixture
def scenario_b() -> list[MessageRecord]:
    """Same identity twice with different sizes."""
    return make_records(["a", "a"], [10, 99])


@pytest.fixture
def scenario_c() -> list[MessageRecord]:
    """A record without identity followed by a normal one."""
    return make_records([None, "b"], [5, 5])
