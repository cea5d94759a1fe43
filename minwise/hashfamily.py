'''
The parametric hash family used by MinHash sketches.

Two base hash functions ``h1`` and ``h2`` define the family
``h_i(x) = h1(x) + i * h2(x)`` for ``i = 0, 1, ...``, computed with 64-bit
unsigned wraparound. Each member costs one multiply and one add once the
two base values are known, at the price of only approximate independence
between members.
'''

import numpy as np

from minwise.hashfunc import sha1_hash64, md5_hash64

_mask64 = (1 << 64) - 1


class HashFamily(object):
    '''An immutable pair of base hash functions.

    A hash family is shared by reference between any number of
    :class:`minwise.MinHash` sketches and is never changed after
    construction. Sketches are only comparable when they were built with
    the same family.

    Args:
        h1 (Callable): The first base hash function. It takes a `bytes`
            and returns an integer that can be encoded using 64 bits.
        h2 (Callable): The second base hash function, with the same
            contract as `h1`.

    Example:

        .. code-block:: python

            import farmhash
            from minwise import HashFamily, MinHash
            from minwise.hashfunc import sha1_hash64

            family = HashFamily(farmhash.hash64, sha1_hash64)
            m = MinHash(num_perm=256, family=family)
    '''

    __slots__ = ('h1', 'h2')

    def __init__(self, h1, h2):
        if not callable(h1) or not callable(h2):
            raise ValueError("The base hash functions must be callables.")
        object.__setattr__(self, 'h1', h1)
        object.__setattr__(self, 'h2', h2)

    def __setattr__(self, name, value):
        raise AttributeError("HashFamily is immutable")

    def __delattr__(self, name):
        raise AttributeError("HashFamily is immutable")

    def __reduce__(self):
        return (HashFamily, (self.h1, self.h2))

    def __eq__(self, other):
        return type(self) is type(other) and \
            self.h1 is other.h1 and self.h2 is other.h2

    def __hash__(self):
        return hash((id(self.h1), id(self.h2)))

    def __repr__(self):
        return "HashFamily(%s, %s)" % (
            getattr(self.h1, '__name__', repr(self.h1)),
            getattr(self.h2, '__name__', repr(self.h2)))

    def prehash(self, data):
        '''Apply both base hash functions to the data once.

        Args:
            data (bytes): The encoded element.

        Returns:
            Tuple[int, int]: The two base hash values, reduced to 64 bits.
        '''
        return int(self.h1(data)) & _mask64, int(self.h2(data)) & _mask64

    def derive(self, v1, v2, start, stop):
        '''Compute the members ``start`` to ``stop - 1`` of the family from
        pre-hashed base values.

        `v1` and `v2` are either scalars or equal-length `numpy.uint64`
        arrays; in the latter case one row is returned per element.

        Returns:
            numpy.ndarray: The derived hash values as `numpy.uint64`, with
            64-bit wraparound.
        '''
        i = np.arange(start, stop, dtype=np.uint64)
        v1 = np.asarray(v1, dtype=np.uint64)
        v2 = np.asarray(v2, dtype=np.uint64)
        if v1.ndim == 0:
            return v1 + i * v2
        return v1[:, np.newaxis] + v2[:, np.newaxis] * i[np.newaxis, :]

    def hash(self, i, data):
        '''Compute the `i`-th member of the family for one element.

        Args:
            i (int): The index of the family member.
            data (bytes): The encoded element.

        Returns:
            int: The 64-bit hash value.
        '''
        v1, v2 = self.prehash(data)
        return (v1 + i * v2) & _mask64


DEFAULT_FAMILY = HashFamily(sha1_hash64, md5_hash64)
