import numpy as np
import pytest

from ndview.error import InvalidShape, InvalidColon, SizeMismatch
from ndview.utils import (check_size, check_colon, check_size_equals,
                          is_integer, sanitize_index_list, strides_for_shape)


def test_check_size_scalar():
    assert check_size(5) == [5, 1]
    assert check_size(0) == [0, 1]


def test_check_size_trims_trailing_singletons():
    assert check_size([4, 2, 1, 1]) == [4, 2]
    assert check_size([1, 1, 1]) == [1, 1]
    assert check_size([1, 1, 3]) == [1, 1, 3]
    assert check_size([4, 1, 1], trim=False) == [4, 1, 1]


def test_check_size_accepts_numpy():
    assert check_size(np.array([2, 3])) == [2, 3]
    assert check_size((np.int32(2), 3)) == [2, 3]


@pytest.mark.parametrize('size', [[], [-1, 2], [2.5, 1], [True, 2], 'ab',
                                  None, [[2, 3]]])
def test_check_size_invalid(size):
    with pytest.raises(InvalidShape):
        check_size(size)


def test_check_colon_forms():
    assert check_colon(3) == (3, 1, 3)
    assert check_colon([3]) == (3, 1, 3)
    assert check_colon([4, 1]) == (4, -1, 1)
    assert check_colon([1, 2, 7]) == (1, 2, 7)


def test_check_colon_negative_positions():
    assert check_colon(-1, 5) == (4, 1, 4)
    assert check_colon([-1, -1, 0], 5) == (4, -1, 0)
    assert check_colon([0, -2], 5) == (0, 1, 3)


@pytest.mark.parametrize(('colon', 'length'), [
    ([], 5),
    ([1, 2, 3, 4], 5),
    ([0, 5], 5),
    ([-6, 0], 5),
    ([0, -1, 3], 5),
    ([2, 0, 2], 5),
    ([0, 1.5], 5),
    (-1, None),
    (0, 0),
])
def test_check_colon_invalid(colon, length):
    with pytest.raises(InvalidColon):
        check_colon(colon, length)


def test_check_size_equals():
    assert check_size_equals(5, [5, 1]) == [5, 1]
    assert check_size_equals([2, 3, 1, 1], [2, 3]) == [2, 3]
    with pytest.raises(SizeMismatch):
        check_size_equals([2, 3], [3, 2])
    with pytest.raises(SizeMismatch):
        check_size_equals([2, 3], [2, 3, 4])


def test_check_size_equals_explicit_trailing_dims():
    with pytest.raises(SizeMismatch):
        check_size_equals([2, 3, 1], [2, 3], ignore_trailing_dims=False)
    assert check_size_equals([2, 3], [2, 3], ignore_trailing_dims=False) == [2, 3]


def test_is_integer_bounds():
    assert is_integer(0, 0, 0)
    assert not is_integer(1, 0, 0)
    assert not is_integer(np.bool_(True))
    assert is_integer(np.uint8(7), 0, 7)


def test_sanitize_index_list():
    assert sanitize_index_list(range(3)) == [0, 1, 2]
    assert sanitize_index_list([False, False]) == []


def test_strides_for_shape():
    assert strides_for_shape([2, 3, 4]) == [1, 2, 6]
    assert strides_for_shape([0, 3, 2]) == [1, 0, 0]
