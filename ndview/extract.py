"""
Copies between buffers addressed by views.

* ``extract_from(view, src)``: gather the elements ``view`` addresses in
  ``src`` into a contiguous buffer,
* ``extract_to(view, dst, src)``: scatter a contiguous buffer, or a scalar,
  into ``dst`` at the offsets ``view`` addresses,
* ``extract(src_view, src, dst_view, dst)``: copy between two views.

Buffers are flat and owned by the caller; they must outlive the call and
must not be modified while it runs. The public functions validate their
arguments; the copy loops are dispatched on the buffer types. Any mutable
sequence goes through the generic loops, numpy arrays through a single
fancy-indexing operation.
"""

import array
import logging
from functools import reduce

import numpy as np

from .dispatch import dispatch
from .error import LengthMismatch, ShapeMismatch, AliasingError
from .view import View

__all__ = ['extract_from', 'extract_to', 'extract', 'walk', 'offsets_array',
           'allocate', 'same_buffer']

logger = logging.getLogger(__name__)


def walk(view):
    """ Offsets of ``view`` with axis 0 driven by hand

    Axes 1 and above are enumerated by an iterator and axis 0 by an inner
    loop, which is how the copy loops below read a view.

    >>> list(walk(View([2, 3]).flip_dimension(1)))
    [4, 5, 2, 3, 0, 1]
    """
    if not len(view):
        return
    if view.is_indexed(0):
        indices = view.indices(0)
        for base in view.iterator(1):
            for y in indices:
                yield base + y
    else:
        first, step, end = view.first(0), view.step(0), view.end(0)
        for base in view.iterator(1):
            for y in range(base + first, base + end, step):
                yield y


def offsets_array(view):
    """ Offsets of ``view`` in iteration order, as a numpy vector

    >>> offsets_array(View([2, 3]).swap_dimensions(0, 1)).tolist()
    [0, 2, 4, 1, 3, 5]
    """
    addresses = [view.addresses(axis) for axis in reversed(range(view.rank()))]
    return reduce(np.add.outer, addresses).ravel()


@dispatch(object, int)
def allocate(like, n):
    """ New buffer of ``n`` elements of the same kind as ``like`` """
    return [None] * n


@dispatch(np.ndarray, int)
def allocate(like, n):
    return np.empty(n, dtype=like.dtype)


@dispatch(array.array, int)
def allocate(like, n):
    return array.array(like.typecode, bytes(n * like.itemsize))


@dispatch((bytes, bytearray), int)
def allocate(like, n):
    return bytearray(n)


@dispatch(object, object)
def same_buffer(a, b):
    return a is b


@dispatch(np.ndarray, np.ndarray)
def same_buffer(a, b):
    return bool(np.may_share_memory(a, b))


#------------------------------------------------------------------------
# Kernels
#------------------------------------------------------------------------

@dispatch(View, object, object)
def gather(view, src, dst):
    for out, y in enumerate(walk(view)):
        dst[out] = src[y]
    return dst


@dispatch(View, np.ndarray, np.ndarray)
def gather(view, src, dst):
    dst[:] = src[offsets_array(view)]
    return dst


@dispatch(View, object, object)
def scatter(view, src, dst):
    for out, y in enumerate(walk(view)):
        dst[y] = src[out]
    return dst


@dispatch(View, np.ndarray, np.ndarray)
def scatter(view, src, dst):
    dst[offsets_array(view)] = src
    return dst


@dispatch(View, object, object)
def fill(view, value, dst):
    for y in walk(view):
        dst[y] = value
    return dst


@dispatch(View, object, np.ndarray)
def fill(view, value, dst):
    dst[offsets_array(view)] = value
    return dst


@dispatch(View, object, View, object)
def copy_view(src_view, src, dst_view, dst):
    if (src_view.is_indexed(0) and dst_view.is_indexed(0) and
            src_view.size(0) == dst_view.size(0)):
        # both axes 0 are indexed: walk their offsets side by side
        pairs = list(zip(src_view.indices(0), dst_view.indices(0)))
        for i, o in zip(src_view.iterator(1), dst_view.iterator(1)):
            for y, yo in pairs:
                dst[o + yo] = src[i + y]
    else:
        for i, o in zip(src_view.iterator(0), dst_view.iterator(0)):
            dst[o] = src[i]
    return dst


@dispatch(View, np.ndarray, View, np.ndarray)
def copy_view(src_view, src, dst_view, dst):
    dst[offsets_array(dst_view)] = src[offsets_array(src_view)]
    return dst


#------------------------------------------------------------------------
# Public API
#------------------------------------------------------------------------

def _check_length(data, expected, method, name):
    if len(data) != expected:
        raise LengthMismatch('%s: %s data of length %d, expected %d'
                             % (method, name, len(data), expected))


def _is_scalar(x):
    if isinstance(x, np.ndarray):
        return x.ndim == 0
    return not hasattr(x, '__len__')


def extract_from(view, src, dst=None):
    """ Gather the data of ``src`` addressed by ``view``

    Parameters
    ----------
    view : View
    src : sequence
        Buffer of ``view.initial_len()`` elements.
    dst : sequence, optional
        Output buffer of ``len(view)`` elements. A buffer of the same kind
        as ``src`` is created when omitted.

    Returns
    -------
    dst : sequence

    Examples
    --------
    >>> v = View([3, 3]).select_dimension(1, 2)
    >>> extract_from(v, list(range(9)))
    [6, 7, 8]
    """
    _check_length(src, view.initial_len(), 'extract_from', 'input')
    n = len(view)
    if dst is None:
        dst = allocate(src, n)
    else:
        _check_length(dst, n, 'extract_from', 'output')
        if same_buffer(src, dst):
            raise AliasingError('extract_from: cannot perform in-place '
                                'extraction')
    if n:
        gather(view, src, dst)
    logger.debug('extract_from: %d element(s) gathered with %s', n,
                 type(src).__name__)
    return dst


def extract_to(view, dst, src):
    """ Scatter ``src`` into ``dst`` at the offsets addressed by ``view``

    Parameters
    ----------
    view : View
    dst : sequence
        Buffer of ``view.initial_len()`` elements, modified in place.
    src : sequence or scalar
        ``len(view)`` elements, or a single value written everywhere.

    Returns
    -------
    dst : sequence

    Examples
    --------
    >>> v = View([3, 3]).select_dimension(0, 0)
    >>> extract_to(v, [0] * 9, [1, 2, 3])
    [1, 0, 0, 2, 0, 0, 3, 0, 0]
    >>> extract_to(v, [0] * 9, 7)
    [7, 0, 0, 7, 0, 0, 7, 0, 0]
    """
    _check_length(dst, view.initial_len(), 'extract_to', 'output')
    n = len(view)
    if isinstance(src, np.ndarray) and src.ndim == 0:
        src = src[()]
    if not _is_scalar(src) and len(src) == n:
        if same_buffer(src, dst):
            raise AliasingError('extract_to: cannot perform in-place '
                                'extraction')
        if n:
            scatter(view, src, dst)
        logger.debug('extract_to: %d element(s) scattered', n)
    elif _is_scalar(src) or len(src) == 1:
        value = src if _is_scalar(src) else src[0]
        if n:
            fill(view, value, dst)
        logger.debug('extract_to: %d element(s) filled', n)
    else:
        raise LengthMismatch('extract_to: input data of length %d, expected '
                             '%d or a scalar' % (len(src), n))
    return dst


def extract(src_view, src, dst_view, dst):
    """ Copy the data ``src_view`` addresses into the places of ``dst_view``

    Elements are paired in iteration order, so both views must address
    the same number of elements.

    Examples
    --------
    Copy the third column of a 3x3 matrix into its first row

    >>> vin = View([3, 3]).select_dimension(1, 2)
    >>> vout = View([3, 3]).select_dimension(0, 0)
    >>> extract(vin, list(range(9)), vout, list(range(9)))
    [6, 1, 2, 7, 4, 5, 8, 7, 8]
    """
    _check_length(src, src_view.initial_len(), 'extract', 'input')
    _check_length(dst, dst_view.initial_len(), 'extract', 'output')
    if same_buffer(src, dst):
        raise AliasingError('extract: cannot perform in-place extraction')
    n = len(src_view)
    if n != len(dst_view):
        raise ShapeMismatch('extract: views of %d and %d elements'
                            % (n, len(dst_view)))
    if n:
        copy_view(src_view, src, dst_view, dst)
    logger.debug('extract: %d element(s) copied', n)
    return dst
