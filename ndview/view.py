import logging
from itertools import dropwhile

import numpy as np
from toolz import concat

from .dims import Stepped, SINGLETON
from .error import (NDViewException, InvalidDimension, InvalidSelection,
                    InvalidPermutation, InvalidShift, InvalidRotation,
                    OutOfBounds, RankMismatch, SizeMismatch, IsIndexed,
                    NotIndexed)
from .iterators import (Iterator, IteratorIndices, SubIterator,
                        SubIteratorIndices)
from .utils import (check_size, check_colon, check_size_equals, is_integer,
                    is_boolean_list, sanitize_index_list, argsort, prod,
                    strides_for_shape)

__all__ = ['View']

logger = logging.getLogger(__name__)


class View(object):
    """ A N-dimensional view on a flat buffer

    A view maps ND-coordinates to offsets in a buffer it never holds. It is
    created column-major: axis 0 is contiguous and the step of axis ``k``
    is the product of the sizes of the axes before it.

    Every selection and rearrangement modifies the view in place and
    returns it, so that calls can be chained. Queries never modify it.

    Parameters
    ----------
    arg : int, sequence of int or View
        The size of the view, or a view to copy. A copy starts a new
        history: its initial state is the state of ``arg`` when copied.

    Examples
    --------
    >>> v = View([3, 2])
    >>> v.size()
    [3, 2]
    >>> list(v)
    [0, 1, 2, 3, 4, 5]

    Select the second column, reversed

    >>> list(v.select_dimension(1, 1).flip_dimension(0))
    [5, 4, 3]
    >>> list(v.restore())
    [0, 1, 2, 3, 4, 5]
    """
    __slots__ = '_dims', '_initial', '_saved'

    def __init__(self, arg):
        if isinstance(arg, View):
            dims = list(arg._dims)
        else:
            size = check_size(arg)
            dims = [Stepped(0, step, n)
                    for step, n in zip(strides_for_shape(size), size)]
        self._dims = dims
        self._initial = tuple(dims)
        self._saved = []

    def copy(self):
        return View(self)

    __copy__ = copy

    def _check_axis(self, axis, method):
        if not is_integer(axis, 0):
            raise InvalidDimension('View.%s: invalid dimension %r'
                                   % (method, axis))

    def _dim(self, axis):
        if axis < len(self._dims):
            return self._dims[axis]
        return SINGLETON

    def _pad(self, ndims):
        self._dims.extend([SINGLETON] * (ndims - len(self._dims)))

    #--------------------------------------------------------------------
    # Stack of views
    #--------------------------------------------------------------------

    def save(self):
        """ Push the current state on the stack of saved states """
        self._saved.append(tuple(self._dims))
        logger.debug('View.save: %d state(s) saved', len(self._saved))
        return self

    def restore(self):
        """ Pop the last saved state, or return to the initial state

        >>> v = View([5, 1])
        >>> list(v.flip_dimension(0).save().select_dimension(0, [0, 2, 4]))
        [4, 2, 0]
        >>> list(v.restore())
        [4, 3, 2, 1, 0]
        >>> list(v.restore())
        [0, 1, 2, 3, 4]
        """
        if self._saved:
            self._dims = list(self._saved.pop())
            logger.debug('View.restore: %d state(s) left', len(self._saved))
        else:
            self._dims = list(self._initial)
            logger.debug('View.restore: back to the initial state')
        return self

    #--------------------------------------------------------------------
    # Queries
    #--------------------------------------------------------------------

    def rank(self):
        """ Number of dimensions """
        return len(self._dims)

    ndims = rank

    def __len__(self):
        return prod(d.size for d in self._dims)

    def size(self, axis=None):
        """ Number of elements along ``axis``, or along every axis

        Axes beyond the rank are singleton dimensions.

        >>> v = View([2, 3, 4])
        >>> v.size()
        [2, 3, 4]
        >>> v.size(1), v.size(5)
        (3, 1)
        """
        if axis is None:
            return [d.size for d in self._dims]
        self._check_axis(axis, 'size')
        return self._dim(axis).size

    @property
    def shape(self):
        return tuple(self.size())

    def initial_size(self):
        return [d.size for d in self._initial]

    def initial_len(self):
        """ Number of elements of the initial view, i.e. of its buffer """
        return prod(self.initial_size())

    def is_indexed(self, axis):
        self._check_axis(axis, 'is_indexed')
        return self._dim(axis).indexed

    def indices(self, axis):
        """ Offsets selected along an indexed axis

        >>> View([2, 3]).select_indices_dimension(1, [0, 2, 1]).indices(1)
        [0, 4, 2]
        """
        self._check_axis(axis, 'indices')
        dim = self._dim(axis)
        if not dim.indexed:
            raise NotIndexed('View.indices: dimension %d is not indexed '
                             'by indices' % axis)
        return list(dim.indices)

    def steps(self, axis):
        """ Delta table walking an indexed axis

        >>> View([2, 3]).select_indices_dimension(1, [0, 2, 1]).steps(1)
        [0, 4, -2, -3]
        """
        self._check_axis(axis, 'steps')
        dim = self._dim(axis)
        if not dim.indexed:
            raise NotIndexed('View.steps: dimension %d is not indexed '
                             'by indices' % axis)
        return dim.steps()

    def first(self, axis):
        """ Offset of the first element along ``axis``

        ``-1`` for an empty indexed axis.
        """
        self._check_axis(axis, 'first')
        return self._dim(axis).first

    def step(self, axis):
        self._check_axis(axis, 'step')
        dim = self._dim(axis)
        if dim.indexed:
            raise IsIndexed('View.step: dimension %d is indexed by indices'
                            % axis)
        return dim.step

    def end(self, axis):
        """ One step past the last offset of a stepped axis, -1 if indexed

        >>> v = View([5, 2]).select_dimension(0, [2, 3])
        >>> v.first(0), v.end(0), v.first(1), v.end(1)
        (2, 4, 0, 10)
        """
        self._check_axis(axis, 'end')
        return self._dim(axis).end

    def addresses(self, axis):
        """ Offsets contributed by each position along ``axis`` """
        self._check_axis(axis, 'addresses')
        return self._dim(axis).addresses()

    def absolute_index(self, coords):
        """ Offset of an ND-coordinate

        A single coordinate is a position along axis 0, the other axes
        being at their first position.

        >>> View([3, 2]).absolute_index([1, 1])
        4
        """
        if isinstance(coords, np.ndarray):
            coords = coords.tolist()
        coords = list(coords)
        if len(coords) not in (1, self.rank()):
            raise RankMismatch('View.absolute_index: expected 1 or %d '
                               'coordinates, got %d'
                               % (self.rank(), len(coords)))
        for axis, c in enumerate(coords):
            if not is_integer(c, 0, self._dim(axis).size - 1):
                raise OutOfBounds('View.absolute_index: index %r out of '
                                  'bounds along dimension %d' % (c, axis))
        rest = self._dims[len(coords):]
        if any(d.size == 0 for d in rest):
            raise OutOfBounds('View.absolute_index: the view is empty')
        return (sum(d.address(c) for d, c in zip(self._dims, coords)) +
                sum(d.first for d in rest))

    #--------------------------------------------------------------------
    # Shape predicates
    #--------------------------------------------------------------------

    def is_row(self):
        size = self.size()
        return len(size) == 2 and size[0] == 1

    def is_column(self):
        size = self.size()
        return len(size) == 2 and size[1] == 1

    def is_vector(self):
        return self.is_row() or self.is_column()

    def is_matrix(self):
        return self.rank() == 2

    def same_shape(self, other, ignore_trailing_dims=True):
        """ Whether ``other`` (a view or a size) has the size of this view

        >>> v = View([3, 4])
        >>> v.same_shape([3, 4, 1]), v.same_shape([3, 4, 1], False)
        (True, False)
        """
        size = other.size() if isinstance(other, View) else other
        try:
            check_size_equals(self.size(), size, ignore_trailing_dims)
        except SizeMismatch:
            return False
        return True

    #--------------------------------------------------------------------
    # Selections
    #--------------------------------------------------------------------

    def select_dimension(self, axis, selection):
        """ Select a regular range of positions along ``axis``

        Parameters
        ----------
        axis : int
        selection : int or sequence
            ``value``, ``[first, last]`` or ``[first, step, last]``.
            Negative values count from the end: the last position is -1.

        Examples
        --------
        Along axis 0, one position out of two from 1 to 5

        >>> v = View([6, 4]).select_dimension(0, [1, 2, 5])
        >>> v.size(), v.absolute_index([0, 1])
        ([3, 4], 7)
        """
        self._check_axis(axis, 'select_dimension')
        dim = self._dim(axis)
        first, step, last = check_colon(selection, dim.size)
        self._pad(axis + 1)
        self._dims[axis] = dim.select(first, step, last)
        return self

    def select_indices_dimension(self, axis, indices):
        """ Select a list of positions along ``axis``

        The axis becomes indexed: it holds the offsets of the positions.

        >>> v = View([6, 4]).select_indices_dimension(0, [4, 3, 1])
        >>> list(v)[:3]
        [4, 3, 1]
        """
        self._check_axis(axis, 'select_indices_dimension')
        if isinstance(indices, np.ndarray):
            indices = indices.tolist()
        if not isinstance(indices, (list, tuple, range)):
            raise InvalidSelection('View.select_indices_dimension: indices '
                                   'must be a sequence, got %r' % (indices,))
        dim = self._dim(axis)
        for i in indices:
            if not is_integer(i):
                raise InvalidSelection('View.select_indices_dimension: '
                                       'invalid index %r' % (i,))
            if not 0 <= i < dim.size:
                raise OutOfBounds('View.select_indices_dimension: index %d '
                                  'out of bounds along dimension %d'
                                  % (i, axis))
        self._pad(axis + 1)
        self._dims[axis] = dim.take(indices)
        return self

    def select_boolean_dimension(self, axis, mask):
        """ Select the positions where ``mask`` is true along ``axis``

        >>> list(View([4, 1]).select_boolean_dimension(0, [True, False, False, True]))
        [0, 3]
        """
        self._check_axis(axis, 'select_boolean_dimension')
        if isinstance(mask, np.ndarray):
            mask = mask.tolist()
        mask = list(mask)
        if len(mask) != self._dim(axis).size:
            raise SizeMismatch('View.select_boolean_dimension: mask of '
                               'length %d along dimension %d of size %d'
                               % (len(mask), axis, self._dim(axis).size))
        if not all(isinstance(b, (bool, np.bool_)) for b in mask):
            raise InvalidSelection('View.select_boolean_dimension: mask '
                                   'must be made of booleans')
        return self.select_indices_dimension(axis, sanitize_index_list(mask))

    def select(self, *selections):
        """ Select a part of the view, one argument per dimension

        Each argument can be

        * ``[]``: every position along the dimension,
        * ``value``, ``[first, last]``, ``[first, step, last]``: see
          ``select_dimension``,
        * ``[[indices]]``: see ``select_indices_dimension``,
        * a list or array of booleans: see ``select_boolean_dimension``.

        Examples
        --------
        >>> v = View([3, 3])
        >>> list(v.select([], [0]))
        [0, 1, 2]
        >>> list(v.restore().select(0))
        [0, 3, 6]
        >>> list(v.restore().select([], [-1, 0]))
        [6, 7, 8, 3, 4, 5, 0, 1, 2]
        """
        dims = list(self._dims)
        try:
            for axis, sel in enumerate(selections):
                self._select_one(axis, sel)
        except NDViewException:
            self._dims = dims
            raise
        return self

    def _select_one(self, axis, sel):
        if isinstance(sel, np.ndarray):
            if sel.dtype == np.bool_:
                self.select_boolean_dimension(axis, sel)
            else:
                self.select_indices_dimension(axis, sel)
        elif is_integer(sel):
            self.select_dimension(axis, sel)
        elif is_boolean_list(sel):
            self.select_boolean_dimension(axis, sel)
        elif isinstance(sel, (list, tuple)):
            if not sel:
                return
            inner = sel[0]
            if isinstance(inner, (list, tuple, range, np.ndarray)):
                if len(sel) != 1:
                    raise InvalidSelection('View.select: invalid selection '
                                           '%r' % (sel,))
                if is_boolean_list(inner):
                    self.select_boolean_dimension(axis, inner)
                else:
                    self.select_indices_dimension(axis, inner)
            else:
                self.select_dimension(axis, sel)
        else:
            raise InvalidSelection('View.select: invalid selection %r'
                                   % (sel,))

    #--------------------------------------------------------------------
    # Rearrangements
    #--------------------------------------------------------------------

    def swap_dimensions(self, a, b):
        """ Swap (transpose) two dimensions

        >>> v = View([4, 3]).swap_dimensions(0, 1)
        >>> v.size(), list(v)[:4]
        ([3, 4], [0, 4, 8, 1])
        """
        self._check_axis(a, 'swap_dimensions')
        self._check_axis(b, 'swap_dimensions')
        self._pad(max(a, b) + 1)
        dims = self._dims
        dims[a], dims[b] = dims[b], dims[a]
        return self

    def _check_permutation(self, order, method):
        if isinstance(order, np.ndarray):
            order = order.tolist()
        order = list(order)
        if (len(order) < self.rank() or
                not all(map(is_integer, order)) or
                sorted(order) != list(range(len(order)))):
            raise InvalidPermutation('View.%s: %r is not a permutation of '
                                     'the %d dimensions'
                                     % (method, order, self.rank()))
        return order

    def permute(self, order):
        """ Reorder the dimensions: new dimension ``i`` is old ``order[i]``

        >>> v = View([2, 2, 2]).permute([2, 1, 0])
        >>> list(v)
        [0, 4, 2, 6, 1, 5, 3, 7]
        """
        order = self._check_permutation(order, 'permute')
        # follow each cycle of the permutation, one swap per element
        for i in range(len(order)):
            j = i
            while True:
                k = order[j]
                order[j] = j
                if k == i:
                    break
                self.swap_dimensions(j, k)
                j = k
        return self

    def ipermute(self, order):
        """ Undo ``permute(order)``

        >>> list(View([2, 2, 2]).permute([2, 0, 1]).ipermute([2, 0, 1]))
        [0, 1, 2, 3, 4, 5, 6, 7]
        """
        order = self._check_permutation(order, 'ipermute')
        return self.permute(argsort(order))

    def shift_dimension(self, n=None):
        """ Shift the dimensions

        * ``n`` omitted: leading singleton dimensions are removed, keeping
          at least two dimensions,
        * ``n > 0``: the first ``n`` dimensions move to the end,
        * ``n < 0``: ``-n`` singleton dimensions are inserted first.

        >>> View([1, 1, 3]).shift_dimension().size()
        [3, 1]
        >>> View([2, 3, 4]).shift_dimension(1).size()
        [3, 4, 2]
        >>> View([2, 3]).shift_dimension(-1).size()
        [1, 2, 3]
        """
        if n is None:
            dims = list(dropwhile(lambda d: d.size == 1, self._dims))
            # removed singletons still shift the offsets
            removed = self._dims[:len(self._dims) - len(dims)]
            offset = sum(d.first for d in removed)
            if dims:
                dims[0] = dims[0].shifted(offset)
            else:
                dims = [Stepped(offset, 1, 1)]
            dims.extend([SINGLETON] * (2 - len(dims)))
            self._dims = dims
            return self

        ndims = self.rank()
        if not is_integer(n, 1 - ndims, ndims - 1):
            raise InvalidShift('View.shift_dimension: shift must be an '
                               'integer in [%d, %d], got %r'
                               % (1 - ndims, ndims - 1, n))
        if n >= 0:
            self._dims = self._dims[n:] + self._dims[:n]
        else:
            self._dims = [SINGLETON] * -n + self._dims
        return self

    def flip_dimension(self, axis):
        """ Reverse the order of the positions along ``axis`` """
        self._check_axis(axis, 'flip_dimension')
        if self._dim(axis).size == 0:
            return self
        return self.select_dimension(axis, [-1, -1, 0])

    def flip_lr(self):
        """ Flip left to right, i.e. along dimension 1 """
        return self.flip_dimension(1)

    def flip_ud(self):
        """ Flip up to down, i.e. along dimension 0 """
        return self.flip_dimension(0)

    def rot90(self, k=1):
        """ Rotate counterclockwise by ``k`` times 90 degrees

        >>> list(View([2, 2]).rot90())
        [2, 0, 3, 1]
        """
        if not is_integer(k):
            raise InvalidRotation('View.rot90: argument must be an integer, '
                                  'got %r' % (k,))
        k %= 4
        if k == 1:
            return self.swap_dimensions(0, 1).flip_ud()
        if k == 2:
            return self.flip_ud().flip_lr()
        if k == 3:
            return self.swap_dimensions(0, 1).flip_lr()
        return self

    def circshift(self, shifts, axis=None):
        """ Circularly shift positions along one or several dimensions

        ``circshift([k0, k1, ...])`` shifts dimension ``i`` by ``ki``;
        ``circshift(k, axis)`` shifts a single dimension. Positive shifts
        move elements towards the end.

        >>> list(View([5, 1]).circshift([2]))
        [3, 4, 0, 1, 2]
        >>> list(View([5, 1]).circshift(-1, 0))
        [1, 2, 3, 4, 0]
        """
        if axis is None:
            if isinstance(shifts, np.ndarray):
                shifts = shifts.tolist()
            if (not isinstance(shifts, (list, tuple)) or
                    len(shifts) > self.rank() or
                    not all(map(is_integer, shifts))):
                raise InvalidShift('View.circshift: expected at most %d '
                                   'integer shifts, got %r'
                                   % (self.rank(), shifts))
            pairs = list(enumerate(shifts))
        else:
            self._check_axis(axis, 'circshift')
            if not is_integer(shifts):
                raise InvalidShift('View.circshift: shift must be an '
                                   'integer, got %r' % (shifts,))
            pairs = [(axis, shifts)]

        for axis, k in pairs:
            n = self._dim(axis).size
            if n == 0:
                continue
            k %= n
            self.select_indices_dimension(
                axis, list(concat([range(n - k, n), range(n - k)])))
        return self

    #--------------------------------------------------------------------
    # Iteration
    #--------------------------------------------------------------------

    def iterator(self, axis=0):
        """ Iterator over the offsets of dimensions ``axis`` and above """
        self._check_axis(axis, 'iterator')
        if self._dim(axis).indexed:
            return IteratorIndices(self, axis)
        return Iterator(self, axis)

    def sub_iterator(self, axis):
        """ Iterator over a single dimension, started from a base offset """
        self._check_axis(axis, 'sub_iterator')
        dim = self._dim(axis)
        if dim.indexed:
            return SubIteratorIndices(dim.indices, dim.steps())
        return SubIterator(dim.first, dim.step, dim.size)

    def offsets(self):
        """ Every offset addressed by the view, in iteration order """
        return list(self.iterator(0))

    def __iter__(self):
        return iter(self.iterator(0))

    def __eq__(self, other):
        if not isinstance(other, View):
            return NotImplemented
        return self.same_shape(other) and self.offsets() == other.offsets()

    __hash__ = None

    #--------------------------------------------------------------------
    # Printing
    #--------------------------------------------------------------------

    def __repr__(self):
        return 'View(%s)' % self.size()

    def describe(self):
        """ One line per dimension describing how it is addressed

        >>> print(View([3, 2]).select_indices_dimension(1, [1, 0]).describe())
        0: first=0 step=1 size=3
        1: indices=[3, 0]
        """
        lines = []
        for axis, d in enumerate(self._dims):
            if d.indexed:
                lines.append('%d: indices=%s' % (axis, list(d.indices)))
            else:
                lines.append('%d: first=%d step=%d size=%d'
                             % (axis, d.first, d.step, d.size))
        return '\n'.join(lines)
