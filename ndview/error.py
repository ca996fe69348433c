__all__ = [
    'NDViewException',
    'InvalidShape',
    'InvalidDimension',
    'InvalidColon',
    'InvalidSelection',
    'OutOfBounds',
    'SizeMismatch',
    'RankMismatch',
    'InvalidPermutation',
    'InvalidShift',
    'InvalidRotation',
    'IsIndexed',
    'NotIndexed',
    'LengthMismatch',
    'ShapeMismatch',
    'AliasingError',
]


class NDViewException(Exception):
    """Exception that all ndview exceptions derive from"""

#------------------------------------------------------------------------
# Argument errors
#------------------------------------------------------------------------

class InvalidShape(NDViewException, ValueError):
    """Raised for a shape that is empty or holds non-natural entries"""

class InvalidDimension(NDViewException, ValueError):
    """Raised when an axis is not a non-negative integer"""

class InvalidColon(NDViewException, ValueError):
    """Raised for a malformed or out of range ``[first, step, last]``"""

class InvalidSelection(NDViewException, ValueError):
    """Raised for a selection argument that cannot be interpreted"""

class InvalidPermutation(NDViewException, ValueError):
    """Raised when an axis order is not a permutation of the axes"""

class InvalidShift(NDViewException, ValueError):
    """Raised for a dimension or circular shift out of range"""

class InvalidRotation(NDViewException, TypeError):
    """Raised when a rotation count is not an integer"""

#------------------------------------------------------------------------
# Addressing errors
#------------------------------------------------------------------------

class OutOfBounds(NDViewException, IndexError):
    """
    An error for when a coordinate or an index lies outside of
    ``[0, size)`` along its axis.
    """

class RankMismatch(NDViewException, IndexError):
    """
    An error for when an ND-coordinate has neither one entry nor one
    entry per axis.
    """

class SizeMismatch(NDViewException, ValueError):
    """
    An error for when a boolean mask or a shape does not match the size
    it is checked against.
    """

class IsIndexed(NDViewException, TypeError):
    """
    An error for when a stepped-axis query is made on an indexed axis.
    """

class NotIndexed(NDViewException, TypeError):
    """
    An error for when an indexed-axis query is made on a stepped axis.
    """

#------------------------------------------------------------------------
# Buffer errors
#------------------------------------------------------------------------

class LengthMismatch(NDViewException, ValueError):
    """
    An error for when a buffer length differs from the length the view
    expects for it.
    """

class ShapeMismatch(NDViewException, ValueError):
    """
    An error for when two views addressing a copy do not hold the same
    number of elements.
    """

class AliasingError(NDViewException, ValueError):
    """
    An error for when the source and destination of a copy are the same
    buffer.
    """
