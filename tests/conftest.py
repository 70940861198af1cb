import matplotlib

matplotlib.use('Agg')

import pytest

from chains import EXAMPLE_CHAINS, parse_or_raise


@pytest.fixture
def two_state():
    return parse_or_raise(EXAMPLE_CHAINS['two-state'])


@pytest.fixture
def cycle():
    return parse_or_raise(EXAMPLE_CHAINS['cycle'])


@pytest.fixture
def absorbing():
    return parse_or_raise(EXAMPLE_CHAINS['absorbing'])


@pytest.fixture
def all_examples():
    return {name: parse_or_raise(text) for name, text in EXAMPLE_CHAINS.items()}
