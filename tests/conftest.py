import pytest
import numpy as np


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: large-sample statistical checks")


@pytest.fixture
def rng():
    return np.random.default_rng(42)

@pytest.fixture
def size():
    return 8.0

@pytest.fixture
def prob():
    return 0.3

@pytest.fixture
def support_grid(size):
    # strictly inside (0, size + 1)
    return np.linspace(0.25, size + 0.75, 15)
