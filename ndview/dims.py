"""
Per-axis addressing of a view.

An axis maps a position ``i`` along it to an absolute buffer offset. The
offset of an ND-coordinate is the sum of the offsets of its entries over
all axes. An axis is either

* ``Stepped``: the affine map ``first + i * step``, or
* ``Indexed``: an explicit list of offsets, as produced by index, boolean
  or circular selections.

Descriptors are immutable; every selection returns a new one. Selecting
positions on a stepped axis gives an indexed axis, never the other way
around.
"""

from collections import namedtuple

import numpy as np

__all__ = ['Stepped', 'Indexed', 'SINGLETON', 'delta_steps']


def delta_steps(indices):
    """ Differences between consecutive offsets, used to walk an indexed axis

    The first entry is 0 and the last one jumps from the final offset to
    ``-1``, so that a walk started at ``offset`` ends on ``offset - 1``.

    >>> delta_steps([0, 4, 2])
    [0, 4, -2, -3]
    >>> delta_steps([])
    [0]
    """
    if not indices:
        return [0]
    steps = [0]
    steps.extend(b - a for a, b in zip(indices[:-1], indices[1:]))
    steps.append(-indices[-1] - 1)
    return steps


class Stepped(namedtuple('Stepped', 'first step size')):
    """ An axis addressed by ``first + i * step`` for ``i`` in ``range(size)``

    >>> d = Stepped(0, 3, 4)
    >>> d.end
    12
    >>> d.select(3, -1, 0)
    Stepped(first=9, step=-3, size=4)
    >>> d.take([2, 0])
    Indexed(indices=(6, 0))
    """
    __slots__ = ()

    indexed = False

    @property
    def end(self):
        return self.first + self.size * self.step

    def address(self, i):
        return self.first + i * self.step

    def addresses(self):
        return self.first + self.step * np.arange(self.size, dtype=np.intp)

    def select(self, first, step, last):
        size = abs(last - first) // abs(step) + 1
        return Stepped(self.first + first * self.step, self.step * step, size)

    def take(self, positions):
        return Indexed([self.first + p * self.step for p in positions])

    def shifted(self, offset):
        return self._replace(first=self.first + offset)


class Indexed(namedtuple('Indexed', 'indices')):
    """ An axis addressed by an explicit tuple of offsets

    >>> d = Indexed([0, 4, 2])
    >>> d.size, d.first, d.end
    (3, 0, -1)
    >>> d.select(2, -1, 0)
    Indexed(indices=(2, 4, 0))
    """
    __slots__ = ()

    indexed = True

    def __new__(cls, indices):
        return super(Indexed, cls).__new__(cls, tuple(int(i) for i in indices))

    @property
    def size(self):
        return len(self.indices)

    @property
    def first(self):
        return self.indices[0] if self.indices else -1

    @property
    def end(self):
        return -1

    def address(self, i):
        return self.indices[i]

    def addresses(self):
        return np.array(self.indices, dtype=np.intp)

    def select(self, first, step, last):
        size = abs(last - first) // abs(step) + 1
        return Indexed(self.indices[first + k * step] for k in range(size))

    def take(self, positions):
        return Indexed(self.indices[p] for p in positions)

    def steps(self):
        return delta_steps(list(self.indices))

    def shifted(self, offset):
        return Indexed(i + offset for i in self.indices)


SINGLETON = Stepped(0, 1, 1)
