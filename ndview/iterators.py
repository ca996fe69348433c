"""
Cursors walking the offsets addressed by a view.

An iterator built on axis ``dim`` enumerates every offset obtained from
the axes ``dim`` and above, axis ``dim`` varying fastest, then ``dim + 1``,
and so on. Axes below ``dim`` contribute nothing: the caller adds their
offsets, typically with a hand-written inner loop over axis 0.

The upper axes are driven by single-axis sub-iterators that carry into
each other like the wheels of an odometer. All cursors share the same
protocol::

    i = it.begin()
    while not it.is_end():
        ...
        i = it.advance()

and are Python iterables as well.
"""

__all__ = ['END', 'SubIterator', 'SubIteratorIndices', 'Iterator',
           'IteratorIndices']

END = -1


class SubIterator(object):
    """ Walk one stepped axis from a base offset

    The walk ends after ``size`` positions, whatever the step. Axes after
    an axis of size 0 have a step of 0 and repeat the same offset.
    """
    __slots__ = 'first', 'step', 'size', 'index', 'stop', '_position'

    def __init__(self, first, step, size):
        self.first = first
        self.step = step
        self.size = size
        self.index = self.stop = None
        self._position = 0

    def begin(self, offset=0):
        self._position = 0
        self.index = offset + self.first
        self.stop = self.index + self.size * self.step
        return self.index

    def advance(self):
        self._position += 1
        self.index += self.step
        return self.index

    def is_end(self):
        return self._position >= self.size

    def end(self):
        return self.stop

    def position(self):
        return self._position


class SubIteratorIndices(object):
    """ Walk one indexed axis from a base offset

    The walk follows the delta table of the axis; its last entry lands on
    ``offset - 1``, which no valid position can reach.
    """
    __slots__ = 'first', 'steps', 'index', 'stop', '_position'

    def __init__(self, indices, steps):
        self.first = indices[0] if indices else END
        self.steps = steps
        self.index = self.stop = None
        self._position = 0

    def begin(self, offset=0):
        self._position = 0
        self.stop = offset - 1
        self.index = offset + self.first
        return self.index

    def advance(self):
        self._position += 1
        self.index += self.steps[self._position]
        return self.index

    def is_end(self):
        return self.index == self.stop

    def end(self):
        return self.stop

    def position(self):
        return self._position


class _NestedIterator(object):
    """ Carry logic shared by the iterators over axes ``dim`` and above """

    def __init__(self, view, dim):
        self.view = view
        self.dim = dim
        self.index = END
        self._subs = []
        self._base = 0

    def _begin_upper(self):
        view = self.view
        self._subs = [view.sub_iterator(k)
                      for k in range(self.dim + 1, view.rank())]
        base = 0
        for sub in reversed(self._subs):
            base = sub.begin(base)
        return base

    def _carry(self):
        """ Move the upper axes one step; return the new base offset or END """
        for k, sub in enumerate(self._subs):
            sub.advance()
            if not sub.is_end():
                base = sub.index
                for lower in reversed(self._subs[:k]):
                    base = lower.begin(base)
                return base
        return END

    def _is_empty(self):
        view = self.view
        return any(view.size(k) == 0
                   for k in range(self.dim, max(view.rank(), self.dim + 1)))

    def is_end(self):
        return self.index == END

    def end(self):
        return END

    def __iter__(self):
        index = self.begin()
        while index != END:
            yield index
            index = self.advance()


class Iterator(_NestedIterator):
    """ Iterator whose fastest axis is a stepped one """

    def begin(self):
        view, dim = self.view, self.dim
        self._first = view.first(dim)
        self._step = view.step(dim)
        self._count = view.size(dim)
        self._position = 0
        self._base = self._begin_upper()
        if self._is_empty():
            self.index = END
            return END
        self.index = self._base + self._first
        return self.index

    def advance(self):
        if self.index == END:
            return END
        self._position += 1
        if self._position == self._count:
            base = self._carry()
            if base == END:
                self.index = END
                return END
            self._base = base
            self._position = 0
            self.index = base + self._first
        else:
            self.index += self._step
        return self.index

    def position(self):
        return [self._position] + [sub.position() for sub in self._subs]


class IteratorIndices(_NestedIterator):
    """ Iterator whose fastest axis is an indexed one """

    def begin(self):
        view, dim = self.view, self.dim
        indices = view.indices(dim)
        self._first = indices[0] if indices else END
        self._steps = view.steps(dim)
        self._count = len(indices)
        self._position = 0
        self._base = self._begin_upper()
        if self._is_empty():
            self.index = END
            return END
        self.index = self._base + self._first
        return self.index

    def advance(self):
        if self.index == END:
            return END
        self._position += 1
        if self._position == self._count:
            base = self._carry()
            if base == END:
                self.index = END
                return END
            self._base = base
            self._position = 0
            self.index = base + self._first
        else:
            self.index += self._steps[self._position]
        return self.index

    def position(self):
        return [self._position] + [sub.position() for sub in self._subs]
