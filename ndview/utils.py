import numbers
from functools import reduce
from operator import mul

import numpy as np
from toolz import accumulate

from .error import InvalidShape, InvalidColon, SizeMismatch

__all__ = ['is_integer', 'is_boolean_list', 'sanitize_index_list', 'prod',
           'argsort', 'strides_for_shape', 'check_size', 'check_colon',
           'check_size_equals']


def is_integer(x, low=None, high=None):
    """ Whether ``x`` is an integer, optionally within ``[low, high]``

    Booleans are not integers here.

    >>> is_integer(3)
    True
    >>> is_integer(np.int64(3), 0)
    True
    >>> is_integer(-1, 0)
    False
    >>> is_integer(True)
    False
    >>> is_integer(2.0)
    False
    """
    if isinstance(x, (bool, np.bool_)) or not isinstance(x, numbers.Integral):
        return False
    if low is not None and x < low:
        return False
    if high is not None and x > high:
        return False
    return True


def is_boolean_list(x):
    """

    >>> is_boolean_list([True, False])
    True
    >>> is_boolean_list(np.array([True, False]))
    True
    >>> is_boolean_list([1, 0])
    False
    >>> is_boolean_list([])
    False
    """
    if isinstance(x, np.ndarray):
        return x.dtype == np.bool_ and x.ndim == 1 and x.size > 0
    if not isinstance(x, (list, tuple)) or not x:
        return False
    return all(isinstance(b, (bool, np.bool_)) for b in x)


def sanitize_index_list(ind):
    """ Handle lists/arrays of integers/bools as lists of positions

    >>> sanitize_index_list([2, 3, 5])
    [2, 3, 5]
    >>> sanitize_index_list((True, False, True, False))
    [0, 2]
    >>> sanitize_index_list(np.array([1, 2, 3]))
    [1, 2, 3]
    >>> sanitize_index_list(np.array([False, True, True]))
    [1, 2]
    """
    if is_boolean_list(ind):
        return [i for i, b in enumerate(ind) if b]
    if isinstance(ind, np.ndarray):
        return ind.tolist()
    return list(ind)


def prod(seq):
    """

    >>> prod([2, 3, 4])
    24
    >>> prod([])
    1
    """
    return reduce(mul, seq, 1)


def argsort(seq):
    """ Positions that sort ``seq``

    >>> argsort([2, 0, 1])
    [1, 2, 0]
    """
    return sorted(range(len(seq)), key=seq.__getitem__)


def strides_for_shape(shape):
    """ Column-major strides: axis 0 is contiguous

    >>> strides_for_shape([2, 3, 4])
    [1, 2, 6]
    >>> strides_for_shape([5, 1])
    [1, 5]
    """
    return list(accumulate(mul, [1] + list(shape[:-1])))


def check_size(size, trim=True):
    """ Validate a shape and return it as a list of at least two integers

    Trailing singleton dimensions are removed down to two dimensions unless
    ``trim`` is False.

    >>> check_size(5)
    [5, 1]
    >>> check_size([4, 2, 1])
    [4, 2]
    >>> check_size((4, 1, 1), trim=False)
    [4, 1, 1]
    >>> check_size([0, 3])
    [0, 3]
    """
    if is_integer(size):
        size = [size]
    if isinstance(size, np.ndarray):
        size = size.tolist()
    if not isinstance(size, (list, tuple)) or len(size) < 1:
        raise InvalidShape('check_size: invalid size argument %r' % (size,))
    if not all(is_integer(s, 0) for s in size):
        raise InvalidShape('check_size: size must be made of non-negative '
                           'integers, got %r' % (size,))

    size = [int(s) for s in size]
    if trim:
        while len(size) > 2 and size[-1] == 1:
            size.pop()
    if len(size) == 1:
        size.append(1)
    return size


def check_colon(c, length=None):
    """ Resolve the arguments of a colon operator into ``(first, step, last)``

    ``c`` can be ``value`` or ``[value]`` (a single position),
    ``[first, last]`` (step is +1 or -1) or ``[first, step, last]``.
    When ``length`` is given, negative values count from the end and every
    position must fall in ``[0, length)``.

    >>> check_colon(2)
    (2, 1, 2)
    >>> check_colon([1, 4])
    (1, 1, 4)
    >>> check_colon([-1, 0], 5)
    (4, -1, 0)
    >>> check_colon([0, 2, -1], 6)
    (0, 2, 5)
    """
    if isinstance(c, np.ndarray):
        c = c.tolist()
    if is_integer(c):
        c = [c]
    if not isinstance(c, (list, tuple)) or not all(map(is_integer, c)):
        raise InvalidColon('check_colon: colon operator must be made of '
                           'integers, got %r' % (c,))

    s = None
    if len(c) == 1:
        a = b = c[0]
    elif len(c) == 2:
        a, b = c
    elif len(c) == 3:
        a, s, b = c
    else:
        raise InvalidColon('check_colon: colon operator expected 1, 2, or 3 '
                           'values, got %d' % len(c))

    if length is not None:
        if not is_integer(length, 0):
            raise InvalidColon('check_colon: length must be a non-negative '
                               'integer, got %r' % (length,))
        a = a if a >= 0 else a + length
        b = b if b >= 0 else b + length
        if not (0 <= a < length and 0 <= b < length):
            raise InvalidColon('check_colon: first or last element out of '
                               'bounds for length %d' % length)
    elif a < 0 or b < 0:
        raise InvalidColon('check_colon: negative positions need a length')

    if s is None:
        s = 1 if a <= b else -1
    elif s == 0 or (b - a) * s < 0:
        raise InvalidColon('check_colon: invalid step %r from %d to %d'
                           % (s, a, b))
    return int(a), int(s), int(b)


def check_size_equals(a, b, ignore_trailing_dims=True):
    """ Check that two shapes are equal and return the shorter one

    Shapes differing only by trailing singleton dimensions are equal when
    ``ignore_trailing_dims`` is True.

    >>> check_size_equals(5, [5, 1])
    [5, 1]
    >>> check_size_equals([5, 1], [5, 1, 1])
    [5, 1]
    """
    a = check_size(a, trim=False)
    b = check_size(b, trim=False)
    short, long = sorted((a, b), key=len)
    if short != long[:len(short)]:
        raise SizeMismatch('check_size_equals: dimensions must be equal, '
                           'got %r and %r' % (a, b))
    extra = long[len(short):]
    if extra and (not ignore_trailing_dims or any(s != 1 for s in extra)):
        raise SizeMismatch('check_size_equals: dimensions differ by trailing '
                           'dimensions, got %r and %r' % (a, b))
    return short
