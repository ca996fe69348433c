import numpy as np
import pytest

from ndview import View


@pytest.fixture
def iota25():
    return list(range(25))


@pytest.fixture
def view55():
    return View([5, 5])


@pytest.fixture
def matrix55():
    # element (i, j) of a 5x5 column-major buffer holds i + 5 * j
    return np.arange(25).reshape(5, 5, order='F')
