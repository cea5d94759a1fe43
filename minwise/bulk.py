from collections.abc import Iterable

from minwise.minhash import MinHash


def compute_minhashes(b, **minhash_kwargs):
    '''Helper method to compute minhashes in bulk. This helper avoids unnecessary
    overhead when initializing many minhashes by reusing initial state.

    Args:
        b (iterable): Iterable containing iterables of elements
        minhash_kwargs: Keyword arguments used to initialize MinHash object
            The configuration of this MinHash will be used for all minhashes
    '''
    return list(compute_minhashes_generator(b, **minhash_kwargs))


def compute_minhashes_generator(b, workers=None, **minhash_kwargs):
    '''Helper method to compute minhashes in bulk. This helper avoids unnecessary
    overhead when initializing many minhashes by reusing initial state. This method
    returns a generator for streaming computation.

    Args:
        b (iterable): Iterable containing iterables of elements
        workers (int, optional): Passed on to :meth:`MinHash.push_batch`
        minhash_kwargs: Keyword arguments used to initialize MinHash object
            The configuration of this MinHash will be used for all minhashes
    '''
    if not isinstance(b, Iterable):
        raise TypeError(f'Expecting iterable, given: {type(b)}')
    m = MinHash(**minhash_kwargs)
    for _b in b:
        _m = m.copy()
        _m.push_batch(_b, workers=workers)
        yield _m
