from .error import *
from .dims import Stepped, Indexed, SINGLETON
from .view import View
from .iterators import (END, Iterator, IteratorIndices, SubIterator,
                        SubIteratorIndices)
from .extract import extract_from, extract_to, extract, offsets_array
from .utils import check_size, check_colon, check_size_equals

__version__ = '0.1.0'
