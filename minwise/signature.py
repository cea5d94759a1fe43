'''
Signatures and their sentinel values.

A signature is a one-dimensional `numpy.uint64` array. Slot `i` holds the
minimum of the `i`-th member of the hash family over every element seen,
or :data:`INFINITY` if no element has reached it yet.
'''

import numbers

import numpy as np

# Marks a slot that no element has touched.
INFINITY = np.uint64((1 << 64) - 1)


class SizeMismatchError(ValueError):
    '''Raised when two signatures, or two b-bit word arrays, of different
    lengths are compared or merged.'''

    def __init__(self, size_a, size_b):
        super(SizeMismatchError, self).__init__(
            "Signature size mismatch: %d != %d" % (size_a, size_b))
        self.size_a = size_a
        self.size_b = size_b


def _is_integral(v):
    if isinstance(v, (bool, np.bool_)):
        return False
    return isinstance(v, (numbers.Integral, np.integer))


def empty_signature(k):
    '''Create the signature of the empty set.

    Args:
        k (int): The number of slots.

    Returns:
        numpy.ndarray: `k` slots of :data:`INFINITY`.
    '''
    if k < 1:
        raise ValueError("The signature length must be at least 1, got %d" % k)
    return np.full(k, INFINITY, dtype=np.uint64)


def as_signature(values):
    '''Copy an array-like of unsigned 64-bit integers into a new signature.

    The result never aliases `values`.

    Raises:
        ValueError: If `values` is empty, not one-dimensional, or holds
            values outside ``[0, 2**64)``.
    '''
    if isinstance(values, np.ndarray) and values.dtype == np.uint64:
        sig = values.copy()
    else:
        items = np.asarray(values, dtype=object).ravel()
        if not all(_is_integral(v) for v in items):
            raise ValueError("A signature must hold integers")
        ints = [int(v) for v in items]
        if any(v < 0 or v > int(INFINITY) for v in ints):
            raise ValueError("Signature values must be in [0, 2**64)")
        sig = np.array(ints, dtype=np.uint64).reshape(np.shape(values))
    if sig.ndim != 1:
        raise ValueError("A signature must be one-dimensional")
    if sig.size == 0:
        raise ValueError("A signature must have at least one slot")
    return sig


def check_size(sig_a, sig_b):
    '''Raise :class:`SizeMismatchError` unless both have the same length.'''
    if len(sig_a) != len(sig_b):
        raise SizeMismatchError(len(sig_a), len(sig_b))


def is_empty(sig):
    '''Check whether a signature is the signature of the empty set.

    An all-zero signature is not considered empty here, although its
    estimated cardinality is 0.

    Note:
        A non-empty set can produce the empty signature if every hash value
        it yields is 0, which is never recorded.
    '''
    return bool(np.all(np.asarray(sig, dtype=np.uint64) == INFINITY))


def union(sig_a, sig_b):
    '''Compute the signature of the union of two sets from their
    signatures. The inputs are not modified.

    Raises:
        SizeMismatchError: If the signatures have different lengths.
    '''
    check_size(sig_a, sig_b)
    return np.minimum(np.asarray(sig_a, dtype=np.uint64),
                      np.asarray(sig_b, dtype=np.uint64))
