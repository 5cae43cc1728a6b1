"""
Shared fixtures for the analytics tests.
"""

import pytest

from tests.factories import make_product


@pytest.fixture
def catalog():
    return [
        make_product("1", quantity=20, price="3.00", cost="1.00", category="Beverages"),
        make_product("2", quantity=5, price="2.00", cost="2.50", category="Snacks"),
        make_product("3", quantity=0, price="4.00", cost="1.00", category="Beverages"),
    ]
