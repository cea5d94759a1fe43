'''
Estimators over MinHash signatures.

Every function accepts either signatures (any array-like of unsigned 64-bit
integers) or objects exposing a ``signature`` attribute, such as
:class:`minwise.MinHash`. All results are statistical estimates.

The cardinality estimator follows
`Cohen & Kaplan <http://www.cohenwang.com/edith/Papers/tcest.pdf>`_. For a
hash function uniform on ``[0, M]`` the value
``z = -ln((M - min h(A)) / M)`` is a sample from the minimum of ``|A|``
independent Exp(1) variables, which is Exp(|A|) with mean ``1 / |A|``.
The inverse of the mean of ``z`` over all slots estimates ``|A|``.
'''

import numpy as np

from minwise.signature import INFINITY, check_size, union

_max_hash = float(INFINITY)


def _sig(x):
    sig = getattr(x, 'signature', x)
    return np.asarray(sig, dtype=np.uint64)


def similarity(a, b):
    '''Estimate the `Jaccard similarity`_ of two sets from their signatures.

    Returns:
        float: The fraction of slots holding equal values, between 0.0
        and 1.0.

    Raises:
        SizeMismatchError: If the signatures have different lengths.
        ValueError: If the signatures are empty.

    .. _`Jaccard similarity`: https://en.wikipedia.org/wiki/Jaccard_index
    '''
    sig_a, sig_b = _sig(a), _sig(b)
    check_size(sig_a, sig_b)
    if len(sig_a) == 0:
        raise ValueError("Cannot compare empty signatures")
    return float(np.count_nonzero(sig_a == sig_b)) / float(len(sig_a))


def cardinality(a):
    '''Estimate the cardinality of the set represented by a signature.

    Untouched slots (:data:`INFINITY`) and zero slots are left out of the
    sum, but the estimate is still divided by the full signature length.
    Both the empty signature and the all-zero signature have cardinality 0.

    Returns:
        int: The estimated number of distinct elements.
    '''
    sig = _sig(a)
    d = INFINITY - sig
    d = d[(d != 0) & (d != INFINITY)]
    total = float(np.sum(-np.log(d.astype(np.float64) / _max_hash)))
    if total == 0.0:
        return 0
    return int(len(sig) / total)


def union_cardinality(a, b):
    '''Estimate the cardinality of the union of two sets.

    Raises:
        SizeMismatchError: If the signatures have different lengths.
    '''
    return cardinality(union(_sig(a), _sig(b)))


def intersection_cardinality(a, b):
    '''Estimate the cardinality of the intersection of two sets using
    ``|A & B| = |A| + |B| - |A | B|``, clamped to
    ``[0, min(|A|, |B|)]``.

    Raises:
        SizeMismatchError: If the signatures have different lengths.
    '''
    sig_a, sig_b = _sig(a), _sig(b)
    u = union_cardinality(sig_a, sig_b)
    c1 = cardinality(sig_a)
    c2 = cardinality(sig_b)
    est = c1 + c2 - u
    return max(0, min(est, c1, c2))


def symmetric_difference_cardinality(a, b):
    '''Estimate the cardinality of the symmetric difference of two sets.

    Raises:
        SizeMismatchError: If the signatures have different lengths.
    '''
    sig_a, sig_b = _sig(a), _sig(b)
    est = union_cardinality(sig_a, sig_b) - intersection_cardinality(sig_a, sig_b)
    return max(0, est)


def less_cardinality(a, b):
    '''Estimate the cardinality of ``A - B``. Not symmetric in `a` and `b`.

    Raises:
        SizeMismatchError: If the signatures have different lengths.
    '''
    sig_a, sig_b = _sig(a), _sig(b)
    est = cardinality(sig_a) - intersection_cardinality(sig_a, sig_b)
    return max(0, est)
