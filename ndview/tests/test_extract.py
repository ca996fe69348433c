import array

import numpy as np
import pytest

from ndview import View, extract_from, extract_to, extract, offsets_array
from ndview.error import LengthMismatch, ShapeMismatch, AliasingError
from ndview.extract import allocate, same_buffer, walk


def test_extract_from_indices():
    v = View([3, 1]).select_indices_dimension(0, [2, 0, 1])
    assert extract_from(v, [10, 20, 30]) == [30, 10, 20]


def test_extract_from_column(iota25):
    v = View([5, 5]).select([], 2)
    assert extract_from(v, iota25) == [10, 11, 12, 13, 14]
    v.restore().select(2, [])
    assert extract_from(v, iota25) == [2, 7, 12, 17, 22]


def test_extract_from_numpy(matrix55):
    src = matrix55.ravel(order='F')
    v = View([5, 5]).select([-1, -2, 0], [[3, 1]])
    out = extract_from(v, src)
    assert isinstance(out, np.ndarray)
    assert out.dtype == src.dtype
    expected = matrix55[4::-2, [3, 1]].ravel(order='F')
    assert np.array_equal(out, expected)


def test_extract_from_numpy_rot90(matrix55):
    v = View([5, 5]).rot90()
    out = extract_from(v, matrix55.ravel(order='F'))
    assert np.array_equal(out, np.rot90(matrix55).ravel(order='F'))


def test_extract_from_bytearray():
    v = View([2, 3]).flip_dimension(1)
    out = extract_from(v, bytearray(b'abcdef'))
    assert isinstance(out, bytearray)
    assert out == bytearray(b'efcdab')


def test_extract_from_array():
    src = array.array('d', [0.5, 1.5, 2.5, 3.5])
    v = View([2, 2]).swap_dimensions(0, 1)
    out = extract_from(v, src)
    assert out.typecode == 'd'
    assert out.tolist() == [0.5, 2.5, 1.5, 3.5]


def test_extract_from_given_output():
    dst = [0] * 3
    out = extract_from(View([3, 2]).select([], 1), list('abcdef'), dst)
    assert out is dst
    assert dst == ['d', 'e', 'f']


def test_extract_from_empty_view():
    v = View([3, 3]).select_boolean_dimension(0, [False] * 3)
    assert extract_from(v, list(range(9))) == []
    assert extract_from(v, np.arange(9)).shape == (0,)


def test_extract_from_errors():
    v = View([2, 2])
    with pytest.raises(LengthMismatch):
        extract_from(v, [1, 2, 3])
    with pytest.raises(LengthMismatch):
        extract_from(v, [1, 2, 3, 4], [0] * 3)
    data = [1, 2, 3, 4]
    with pytest.raises(AliasingError):
        extract_from(v, data, data)
    buf = np.arange(8)
    with pytest.raises(AliasingError):
        extract_from(v, buf[:4], buf[2:6])


def test_extract_to():
    v = View([3, 3]).select_dimension(1, [2, 0])
    dst = [0] * 9
    out = extract_to(v, dst, list(range(1, 10)))
    assert out is dst
    assert dst == [7, 8, 9, 4, 5, 6, 1, 2, 3]


def test_extract_to_scalar_and_single_value():
    v = View([2, 2]).select([[1]], [])
    assert extract_to(v, [0] * 4, 9) == [0, 9, 0, 9]
    assert extract_to(v, [0] * 4, [5]) == [0, 5, 0, 5]
    dst = np.zeros(4, dtype=int)
    extract_to(v, dst, np.int64(3))
    assert dst.tolist() == [0, 3, 0, 3]
    extract_to(v, dst, np.array(4))
    assert dst.tolist() == [0, 4, 0, 4]


def test_extract_to_numpy():
    v = View([2, 3]).circshift([0, 1])
    dst = np.zeros(6)
    extract_to(v, dst, np.arange(6.0))
    assert dst.tolist() == [2.0, 3.0, 4.0, 5.0, 0.0, 1.0]


def test_extract_to_errors():
    v = View([2, 2]).select_dimension(0, 0)
    with pytest.raises(LengthMismatch):
        extract_to(v, [0] * 3, [1, 2])
    with pytest.raises(LengthMismatch):
        extract_to(v, [0] * 4, [1, 2, 3])
    dst = [0] * 4
    with pytest.raises(AliasingError):
        extract_to(View([2, 2]), dst, dst)


def test_extract_from_then_to_restores_data(matrix55):
    data = matrix55.ravel(order='F').tolist()
    v = View([5, 5]).select([[4, 0, 2]], [1, 2, 4]).flip_lr()
    part = extract_from(v, data)
    dst = [None] * 25
    extract_to(v, dst, part)
    for y in v:
        assert dst[y] == data[y]
    assert dst.count(None) == 25 - len(v)


@pytest.mark.parametrize('buffer', [list, np.array])
def test_extract_from_then_to_permutation(matrix55, buffer):
    data = buffer(matrix55.ravel(order='F').tolist())
    v = View([5, 5]).rot90().circshift([1, -1])
    assert sorted(v.offsets()) == list(range(25))
    part = extract_from(v, data)
    restored = extract_to(v, buffer([0] * 25), part)
    assert list(restored) == list(data)


def test_extract_between_views():
    vin = View([3, 3]).select_dimension(1, 2)
    vout = View([3, 3]).select_dimension(0, 0)
    out = extract(vin, list(range(9)), vout, [0] * 9)
    assert out == [6, 0, 0, 7, 0, 0, 8, 0, 0]


def test_extract_between_indexed_views():
    vin = View([4, 2]).select_indices_dimension(0, [3, 1])
    vout = View([2, 2]).flip_dimension(1).select_indices_dimension(0, [1, 0])
    out = extract(vin, list('abcdefgh'), vout, [None] * 4)
    # vout addresses 3, 2, 1, 0
    assert out == ['f', 'h', 'b', 'd']


def test_extract_different_shapes_same_length():
    vin = View([2, 3])
    vout = View([3, 2])
    out = extract(vin, list(range(6)), vout, [0] * 6)
    assert out == list(range(6))


def test_extract_numpy():
    src = np.arange(9)
    dst = np.zeros(9, dtype=src.dtype)
    extract(View([3, 3]).swap_dimensions(0, 1), src, View([3, 3]), dst)
    assert dst.tolist() == [0, 3, 6, 1, 4, 7, 2, 5, 8]


def test_extract_errors():
    with pytest.raises(ShapeMismatch):
        extract(View([2, 2]), [0] * 4, View([3, 1]), [0] * 3)
    with pytest.raises(LengthMismatch):
        extract(View([2, 2]), [0] * 3, View([2, 2]), [0] * 4)
    with pytest.raises(LengthMismatch):
        extract(View([2, 2]), [0] * 4, View([2, 2]), [0] * 5)
    data = [0] * 4
    with pytest.raises(AliasingError):
        extract(View([2, 2]), data, View([2, 2]).flip_ud(), data)


def test_walk_agrees_with_iteration(view55):
    view55.select([[3, 3, 0]], [-1, -2, 0])
    assert list(walk(view55)) == view55.offsets()
    assert offsets_array(view55).tolist() == view55.offsets()


def test_offsets_array_rank3():
    v = View([2, 3, 4]).permute([2, 0, 1]).circshift([1])
    assert offsets_array(v).tolist() == v.offsets()


def test_allocate():
    assert allocate([1, 2], 3) == [None] * 3
    assert allocate(np.arange(2.0), 3).dtype == np.float64
    assert allocate(b'ab', 2) == bytearray(2)
    assert allocate(array.array('i', [1]), 2).tolist() == [0, 0]


def test_same_buffer():
    a = [1, 2]
    assert same_buffer(a, a)
    assert not same_buffer(a, [1, 2])
    x = np.arange(4)
    assert same_buffer(x, x[1:])
    assert not same_buffer(x, x.copy())
